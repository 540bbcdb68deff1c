"""Service layer that turns marketplace records into render-ready map data."""

from collections.abc import Collection, Sequence
from typing import Optional

from pydantic import BaseModel, Field

from geodiscovery.core.geocoding import GeocodingService, get_geocoding_service
from geodiscovery.core.logging import get_logger, get_request_logger
from geodiscovery.map.clustering import ClusterEngine
from geodiscovery.map.filters import (
    MapVisibility,
    calculate_bounds,
    has_visible_status,
    matches_type_filter,
)
from geodiscovery.map.search import SearchMatcher
from geodiscovery.models.entities import (
    EntityKind,
    GeoEntity,
    Job,
    Listing,
    Vendor,
)
from geodiscovery.models.geographic import Coordinates
from geodiscovery.models.map import MapView

logger = get_logger()


def parse_city_state(location: str) -> Optional[tuple[str, str]]:
    """Split a "City, State" string.

    Returns:
        (city, state), or None when there are fewer than two parts
    """
    parts = [part.strip() for part in location.split(",")]
    if len(parts) < 2:
        return None
    return parts[0], parts[1]


class GeocodedInventory(BaseModel):
    """Geocoded copies of every record loaded for the map."""

    vendors: list[Vendor] = Field(default_factory=list)
    listings: list[Listing] = Field(default_factory=list)
    jobs: list[Job] = Field(default_factory=list)

    def entities(self) -> list[GeoEntity]:
        """All records as entities, vendors first."""
        return (
            [GeoEntity.from_vendor(v) for v in self.vendors]
            + [GeoEntity.from_listing(item) for item in self.listings]
            + [GeoEntity.from_job(j) for j in self.jobs]
        )


class MapDiscoveryService:
    """Geocodes, filters, and clusters entities for the map."""

    def __init__(
        self,
        geocoder: Optional[GeocodingService] = None,
        matcher: Optional[SearchMatcher] = None,
        cluster_engine: Optional[ClusterEngine] = None,
    ):
        self.geocoder = geocoder or get_geocoding_service()
        self.matcher = matcher or SearchMatcher()
        self.cluster_engine = cluster_engine or ClusterEngine()

    async def _resolve_city_state(self, location: str) -> Optional[Coordinates]:
        parsed = parse_city_state(location)
        if parsed is None:
            return None
        city, state = parsed
        return await self.geocoder.resolve("", city, state, "")

    async def geocode_vendors(self, vendors: Sequence[Vendor]) -> list[Vendor]:
        """Geocode vendors from their street address.

        Vendors that fail to resolve are returned unchanged.
        """
        updated = []
        for vendor in vendors:
            loc = vendor.location
            coords = await self.geocoder.resolve(
                loc.address, loc.city, loc.state, loc.zip_code
            )
            if coords is None:
                logger.warning("geocode_failed", kind="vendor", id=vendor.id)
                updated.append(vendor)
                continue
            updated.append(
                vendor.model_copy(
                    update={"location": loc.model_copy(update={"coordinates": coords})}
                )
            )
        return updated

    async def geocode_listings(self, listings: Sequence[Listing]) -> list[Listing]:
        """Geocode listings from their "City, State" location."""
        updated = []
        for listing in listings:
            coords = await self._resolve_city_state(listing.location)
            if coords is None:
                logger.warning("geocode_failed", kind="listing", id=listing.id)
                updated.append(listing)
                continue
            updated.append(listing.model_copy(update={"coordinates": coords}))
        return updated

    async def geocode_jobs(self, jobs: Sequence[Job]) -> list[Job]:
        """Geocode jobs from their "City, State" location."""
        updated = []
        for job in jobs:
            coords = await self._resolve_city_state(job.location)
            if coords is None:
                logger.warning("geocode_failed", kind="job", id=job.id)
                updated.append(job)
                continue
            updated.append(job.model_copy(update={"coordinates": coords}))
        return updated

    async def geocode_all(
        self,
        vendors: Sequence[Vendor] = (),
        listings: Sequence[Listing] = (),
        jobs: Sequence[Job] = (),
    ) -> GeocodedInventory:
        """Geocode every record sequentially through the shared lane."""
        inventory = GeocodedInventory(
            vendors=await self.geocode_vendors(vendors),
            listings=await self.geocode_listings(listings),
            jobs=await self.geocode_jobs(jobs),
        )
        logger.info(
            "geocoding_complete",
            vendors=len(inventory.vendors),
            listings=len(inventory.listings),
            jobs=len(inventory.jobs),
            cached_addresses=self.geocoder.cache_size,
        )
        return inventory

    def build_entities(
        self,
        inventory: GeocodedInventory,
        query: Optional[str] = None,
        visibility: Optional[MapVisibility] = None,
        selected_types: Collection[str] = (),
    ) -> list[GeoEntity]:
        """Apply visibility, status, category, and search filters.

        Only entities with coordinates are returned.
        """
        visibility = visibility or MapVisibility()
        return [
            entity
            for entity in inventory.entities()
            if entity.is_located
            and visibility.shows(entity.kind)
            and has_visible_status(entity)
            and matches_type_filter(entity, selected_types)
            and self.matcher.matches(entity, query)
        ]

    def kinds_with_matches(
        self, inventory: GeocodedInventory, query: Optional[str]
    ) -> set[EntityKind]:
        """Entity kinds with at least one visible match for a non-empty query.

        The map switches these kinds on so search results are never hidden
        behind a disabled toggle.
        """
        if not self.matcher.normalize(query):
            return set()
        return {
            entity.kind
            for entity in inventory.entities()
            if entity.is_located
            and has_visible_status(entity)
            and self.matcher.matches(entity, query)
        }

    def render(
        self,
        inventory: GeocodedInventory,
        zoom_level: float,
        query: Optional[str] = None,
        visibility: Optional[MapVisibility] = None,
        selected_types: Collection[str] = (),
        request_id: Optional[str] = None,
    ) -> MapView:
        """Build the filtered entity set and its cluster partition.

        Args:
            inventory: Geocoded records
            zoom_level: Viewport span in coordinate degrees
            query: Free-text search query
            visibility: Kinds the user has toggled on
            selected_types: Vendor categories to show; empty shows all
            request_id: Identifier of the map refresh, bound to its log events

        Returns:
            Render-ready map view
        """
        log = get_request_logger(request_id)
        visibility = visibility or MapVisibility()
        # Vendors are only ever hidden on purpose
        matched_kinds = self.kinds_with_matches(inventory, query) - {EntityKind.VENDOR}
        if matched_kinds:
            log.debug(
                "search_enabled_kinds", kinds=sorted(kind.value for kind in matched_kinds)
            )
            visibility = visibility.enable(matched_kinds)

        entities = self.build_entities(inventory, query, visibility, selected_types)
        clusters = self.cluster_engine.cluster(entities, zoom_level)
        log.info(
            "map_rendered",
            zoom_level=zoom_level,
            entities=len(entities),
            clusters=len(clusters.clusters),
            unclustered=len(clusters.unclustered),
        )
        return MapView(
            entities=entities,
            clusters=clusters,
            bounds=calculate_bounds(entities),
            zoom_level=zoom_level,
        )
