"""Render-ready map models produced by the discovery engine."""

from pydantic import BaseModel, ConfigDict, Field

from geodiscovery.models.entities import EntityKind, GeoEntity
from geodiscovery.models.geographic import Coordinates, MapBounds


class Cluster(BaseModel):
    """Cluster of entities rendered as a single marker with a count badge."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Cluster ID")
    centroid_latitude: float = Field(..., ge=-90, le=90)
    centroid_longitude: float = Field(..., ge=-180, le=180)
    count: int = Field(..., description="Number of entities in cluster")
    members: tuple[GeoEntity, ...] = Field(default=())

    @property
    def centroid(self) -> Coordinates:
        return Coordinates(
            latitude=self.centroid_latitude, longitude=self.centroid_longitude
        )


class ClusterResult(BaseModel):
    """Cluster partition for one zoom level."""

    model_config = ConfigDict(frozen=True)

    clusters: tuple[Cluster, ...] = ()
    unclustered: tuple[GeoEntity, ...] = Field(
        default=(), description="Individual entities not in clusters"
    )

    @property
    def total(self) -> int:
        """Number of entities across clusters and individual markers."""
        return sum(c.count for c in self.clusters) + len(self.unclustered)


class RouteStop(BaseModel):
    """A user-selected destination in an in-progress route."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    coordinates: Coordinates
    source_kind: EntityKind

    @classmethod
    def from_entity(cls, entity: GeoEntity) -> "RouteStop":
        """Create a stop from a located entity.

        Raises:
            ValueError: If the entity has not been geocoded
        """
        if entity.coordinates is None:
            raise ValueError(f"Entity {entity.id} has no coordinates")
        return cls(
            id=entity.id,
            display_name=entity.display_name,
            coordinates=entity.coordinates,
            source_kind=entity.kind,
        )


class NearbyEntity(BaseModel):
    """An entity paired with its distance from a reference point."""

    model_config = ConfigDict(frozen=True)

    entity: GeoEntity
    distance_miles: float = Field(..., ge=0)


class MapView(BaseModel):
    """Everything the map layer needs for one render pass."""

    entities: list[GeoEntity] = Field(default_factory=list)
    clusters: ClusterResult = Field(default_factory=ClusterResult)
    bounds: MapBounds | None = None
    zoom_level: float
