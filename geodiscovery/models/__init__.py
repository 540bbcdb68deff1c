"""Data models for the geospatial discovery engine."""

from geodiscovery.models.entities import (
    VENDOR_TYPE_LABELS,
    EntityKind,
    GeoEntity,
    Job,
    Listing,
    MarketplaceRecord,
    SearchableText,
    StoneInventoryItem,
    SupplierRelationship,
    Vendor,
    VendorLocation,
    VendorType,
)
from geodiscovery.models.geographic import Coordinates, MapBounds
from geodiscovery.models.map import (
    Cluster,
    ClusterResult,
    MapView,
    NearbyEntity,
    RouteStop,
)

__all__ = [
    "Cluster",
    "ClusterResult",
    "Coordinates",
    "EntityKind",
    "GeoEntity",
    "Job",
    "Listing",
    "MapBounds",
    "MapView",
    "MarketplaceRecord",
    "NearbyEntity",
    "RouteStop",
    "SearchableText",
    "StoneInventoryItem",
    "SupplierRelationship",
    "VENDOR_TYPE_LABELS",
    "Vendor",
    "VendorLocation",
    "VendorType",
]
