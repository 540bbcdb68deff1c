"""Geocoding for the discovery engine.

This package provides:
- The caching, rate limited geocoding service
- Provider adapters over geopy geocoders
"""

from geodiscovery.core.geocoding.constants import UNRESOLVABLE, CacheMarker
from geodiscovery.core.geocoding.providers import (
    GeocodingError,
    GeocodingProvider,
    GeopyProvider,
    build_provider,
    is_rate_limit_error,
)
from geodiscovery.core.geocoding.service import (
    AddressParts,
    GeocodingService,
    get_geocoding_service,
)

__all__ = [
    "AddressParts",
    "CacheMarker",
    "GeocodingError",
    "GeocodingProvider",
    "GeocodingService",
    "GeopyProvider",
    "UNRESOLVABLE",
    "build_provider",
    "get_geocoding_service",
    "is_rate_limit_error",
]
