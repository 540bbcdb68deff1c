"""Map-facing search, filtering, clustering, and routing."""

from geodiscovery.map.clustering import ClusterEngine
from geodiscovery.map.filters import MapVisibility, calculate_bounds, within_radius
from geodiscovery.map.routing import RoutePlanner, directions_url_for
from geodiscovery.map.search import MatchStrategy, SearchMatcher, filter_entities
from geodiscovery.map.services import GeocodedInventory, MapDiscoveryService

__all__ = [
    "ClusterEngine",
    "GeocodedInventory",
    "MapDiscoveryService",
    "MapVisibility",
    "MatchStrategy",
    "RoutePlanner",
    "SearchMatcher",
    "calculate_bounds",
    "directions_url_for",
    "filter_entities",
    "within_radius",
]
