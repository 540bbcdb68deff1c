"""Geographic models for coordinates and map bounds."""

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """A resolved latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(
        ...,
        ge=-90,
        le=90,
        description="Latitude in decimal degrees",
        examples=[33.4484],
    )
    longitude: float = Field(
        ...,
        ge=-180,
        le=180,
        description="Longitude in decimal degrees",
        examples=[-112.074],
    )

    def as_tuple(self) -> tuple[float, float]:
        """Return the pair as ``(latitude, longitude)``."""
        return self.latitude, self.longitude

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"


class MapBounds(BaseModel):
    """Geographic bounding box of a set of located entities."""

    model_config = ConfigDict(frozen=True)

    north: float = Field(..., description="Northern latitude boundary")
    south: float = Field(..., description="Southern latitude boundary")
    east: float = Field(..., description="Eastern longitude boundary")
    west: float = Field(..., description="Western longitude boundary")

    @property
    def center(self) -> Coordinates:
        """Center point of the bounding box."""
        return Coordinates(
            latitude=(self.north + self.south) / 2,
            longitude=(self.east + self.west) / 2,
        )

    @property
    def span(self) -> float:
        """Largest coordinate-degree extent, usable as a zoom span."""
        return max(self.north - self.south, self.east - self.west)
