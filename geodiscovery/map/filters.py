"""Predicates applied to entities before the spatial stages."""

from collections.abc import Collection, Iterable
from typing import Optional

from pydantic import BaseModel

from geodiscovery.core.distance import distance_between
from geodiscovery.models.entities import EntityKind, GeoEntity
from geodiscovery.models.geographic import Coordinates, MapBounds
from geodiscovery.models.map import NearbyEntity

# Lifecycle status an entity must have to appear on the map
VISIBLE_STATUS: dict[EntityKind, Optional[str]] = {
    EntityKind.VENDOR: None,
    EntityKind.LISTING: "active",
    EntityKind.JOB: "open",
}


class MapVisibility(BaseModel):
    """Which entity kinds the user has toggled on."""

    vendors: bool = True
    listings: bool = True
    jobs: bool = False

    def shows(self, kind: EntityKind) -> bool:
        if kind is EntityKind.VENDOR:
            return self.vendors
        if kind is EntityKind.LISTING:
            return self.listings
        return self.jobs

    def enable(self, kinds: Iterable[EntityKind]) -> "MapVisibility":
        """Return a copy with the given kinds switched on."""
        update = {f"{kind.value}s": True for kind in kinds}
        return self.model_copy(update=update)


def has_visible_status(entity: GeoEntity) -> bool:
    """Listings must be active and jobs open; vendors always pass."""
    required = VISIBLE_STATUS[entity.kind]
    return required is None or entity.status == required


def matches_type_filter(entity: GeoEntity, selected_types: Collection[str]) -> bool:
    """Vendor category filter; an empty selection shows every category."""
    if entity.kind is not EntityKind.VENDOR or not selected_types:
        return True
    return entity.category in selected_types


def located(entities: Iterable[GeoEntity]) -> list[GeoEntity]:
    """Drop entities that have no coordinates."""
    return [entity for entity in entities if entity.coordinates is not None]


def within_radius(
    entities: Iterable[GeoEntity], center: Coordinates, radius_miles: float
) -> list[NearbyEntity]:
    """Find located entities within a radius, nearest first.

    Args:
        entities: Candidate entities
        center: Reference point
        radius_miles: Search radius in miles

    Returns:
        Entities with their distance, sorted by distance

    Raises:
        ValueError: If the radius is negative
    """
    if radius_miles < 0:
        raise ValueError("Radius must be zero or positive")

    nearby = []
    for entity in located(entities):
        distance = distance_between(center, entity.coordinates)  # type: ignore[arg-type]
        if distance <= radius_miles:
            nearby.append(NearbyEntity(entity=entity, distance_miles=distance))

    # Stable sort keeps input order among equidistant entities
    nearby.sort(key=lambda n: n.distance_miles)
    return nearby


def calculate_bounds(entities: Iterable[GeoEntity]) -> Optional[MapBounds]:
    """Calculate the bounding box of the located entities.

    Returns:
        Bounds, or None when no entity has coordinates
    """
    lats = []
    lngs = []
    for entity in located(entities):
        lats.append(entity.coordinates.latitude)  # type: ignore[union-attr]
        lngs.append(entity.coordinates.longitude)  # type: ignore[union-attr]

    if not lats:
        return None

    return MapBounds(north=max(lats), south=min(lats), east=max(lngs), west=min(lngs))
