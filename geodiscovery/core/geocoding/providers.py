"""Geocoding provider adapters.

The discovery engine depends on a single provider operation: resolve a full
address string to zero or more coordinate results. Anything beyond the first
result's latitude/longitude is ignored.
"""

import asyncio
import logging
from functools import partial
from typing import Any, Protocol

from geopy.exc import GeocoderQuotaExceeded, GeocoderRateLimited
from geopy.geocoders import ArcGIS, Nominatim

from geodiscovery.core.config import SUPPORTED_GEOCODING_PROVIDERS, Settings
from geodiscovery.core.geocoding.constants import RATE_LIMIT_MESSAGE
from geodiscovery.models.geographic import Coordinates

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Raised when a geocoding provider cannot be constructed."""


class GeocodingProvider(Protocol):
    """Anything that can turn an address into candidate coordinates."""

    async def geocode(self, query: str) -> list[Coordinates]:
        """Resolve ``query`` to zero or more coordinate results."""
        ...


def is_rate_limit_error(error: BaseException) -> bool:
    """Return True if the error reports the provider's own rate limiting."""
    if isinstance(error, (GeocoderRateLimited, GeocoderQuotaExceeded)):
        return True
    return RATE_LIMIT_MESSAGE in str(error).lower()


class GeopyProvider:
    """Provider backed by a blocking geopy geocoder.

    The geopy call runs in the default executor so the event loop stays
    free while the HTTP request is in flight.
    """

    def __init__(self, geocoder: Any, name: str | None = None):
        self.geocoder = geocoder
        self.name = name or type(geocoder).__name__.lower()

    async def geocode(self, query: str) -> list[Coordinates]:
        loop = asyncio.get_running_loop()
        locations = await loop.run_in_executor(
            None, partial(self.geocoder.geocode, query, exactly_one=False)
        )
        if not locations:
            return []
        if not isinstance(locations, list):
            locations = [locations]
        return [
            Coordinates(latitude=loc.latitude, longitude=loc.longitude)
            for loc in locations
        ]

    def __repr__(self) -> str:
        return f"GeopyProvider(name={self.name!r})"


def build_provider(config: Settings) -> GeopyProvider:
    """Create the provider named by ``GEOCODING_PROVIDER``.

    Raises:
        GeocodingError: If the provider name is not supported
    """
    provider = config.GEOCODING_PROVIDER
    if provider == "nominatim":
        geocoder = Nominatim(
            user_agent=config.NOMINATIM_USER_AGENT, timeout=config.GEOCODING_TIMEOUT
        )
    elif provider == "arcgis":
        geocoder = ArcGIS(timeout=config.GEOCODING_TIMEOUT)
    else:
        raise GeocodingError(
            f"Unknown geocoding provider '{provider}'. "
            f"Expected one of: {', '.join(SUPPORTED_GEOCODING_PROVIDERS)}"
        )

    logger.info(f"Initialized {provider} geocoder with {config.GEOCODING_TIMEOUT}s timeout")
    return GeopyProvider(geocoder, name=provider)
