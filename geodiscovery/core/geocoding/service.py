"""Geocoding cache service for the map.

This module provides the geocoding service the map layer uses to place
vendors, listings and jobs. It:
- Deduplicates repeated lookups with a process-lifetime cache
- Remembers unresolvable addresses so they are never retried automatically
- Serializes provider calls through a single lane with a minimum delay
- Never raises provider failures to callers
"""

import asyncio
import logging
from collections.abc import Iterable
from typing import NamedTuple, Optional, Union

from geopy.extra.rate_limiter import AsyncRateLimiter

from geodiscovery.core.config import Settings, settings
from geodiscovery.core.geocoding.constants import (
    FULL_ADDRESS_FORMAT,
    UNRESOLVABLE,
    CacheMarker,
)
from geodiscovery.core.geocoding.providers import (
    GeocodingProvider,
    build_provider,
    is_rate_limit_error,
)
from geodiscovery.models.geographic import Coordinates

logger = logging.getLogger(__name__)

CacheValue = Union[Coordinates, CacheMarker]


class AddressParts(NamedTuple):
    """The four free-text fields an address is geocoded from."""

    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


class GeocodingService:
    """Geocoding cache with single-lane rate limiting."""

    def __init__(
        self,
        provider: Optional[GeocodingProvider] = None,
        min_delay_seconds: Optional[float] = None,
        config: Optional[Settings] = None,
    ):
        """Initialize the service.

        Args:
            provider: Provider to call on cache misses; built from settings if omitted
            min_delay_seconds: Minimum gap between the starts of provider calls
            config: Settings to read defaults from
        """
        self.config = config or settings
        self.provider = provider or build_provider(self.config)
        self.min_delay_seconds = (
            min_delay_seconds
            if min_delay_seconds is not None
            else self.config.geocoding_min_delay_seconds
        )

        self._cache: dict[str, CacheValue] = {}
        # The lane belongs to the event loop it was created under
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._lane: Optional[asyncio.Lock] = None
        # Provider errors are classified here, so the limiter never retries
        self._rate_limited_geocode = AsyncRateLimiter(
            self.provider.geocode,
            min_delay_seconds=self.min_delay_seconds,
            max_retries=0,
            swallow_exceptions=False,
        )
        self.external_calls = 0

        logger.info(
            f"Geocoding service initialized with {self.min_delay_seconds}s minimum delay"
        )

    def _get_lane(self) -> asyncio.Lock:
        """Return the single lane for the running event loop.

        A long-lived service may be reused under a new loop, for example a
        second ``asyncio.run``. The lane is rebuilt for that loop; the cache
        and the limiter's last call time carry over.
        """
        loop = asyncio.get_running_loop()
        if self._lane is None or loop is not self._loop:
            if self._loop is not None:
                logger.debug("Event loop changed, rebuilding geocoding lane")
            self._loop = loop
            self._lane = asyncio.Lock()
        return self._lane

    @staticmethod
    def format_address(address: str, city: str, state: str, zip_code: str) -> str:
        """Join the address fields in the fixed provider format."""
        return FULL_ADDRESS_FORMAT.format(
            address=address, city=city, state=state, zip_code=zip_code
        )

    @staticmethod
    def _get_cache_key(full_address: str) -> str:
        """Normalize a formatted address into its cache key."""
        return " ".join(full_address.lower().split())

    @staticmethod
    def _unwrap(value: CacheValue) -> Optional[Coordinates]:
        return None if value is UNRESOLVABLE else value  # type: ignore[return-value]

    @property
    def cache_size(self) -> int:
        """Number of cached addresses, resolved or not."""
        return len(self._cache)

    def is_cached(self, address: str, city: str, state: str, zip_code: str) -> bool:
        """Return True if a lookup for this address would not hit the provider."""
        key = self._get_cache_key(self.format_address(address, city, state, zip_code))
        return key in self._cache

    async def resolve(
        self, address: str, city: str, state: str, zip_code: str
    ) -> Optional[Coordinates]:
        """Resolve an address to coordinates.

        Args:
            address: Street address (may be empty)
            city: City name
            state: State code or name
            zip_code: Postal code (may be empty)

        Returns:
            Coordinates, or None if the address could not be resolved
        """
        full_address = self.format_address(address, city, state, zip_code)
        key = self._get_cache_key(full_address)

        if key in self._cache:
            logger.debug(f"Using cached result for: {full_address}")
            return self._unwrap(self._cache[key])

        async with self._get_lane():
            # Another caller may have resolved the same address while we waited
            if key in self._cache:
                logger.debug(f"Using cached result for: {full_address}")
                return self._unwrap(self._cache[key])
            return await self._resolve_uncached(full_address, key)

    async def _resolve_uncached(
        self, full_address: str, key: str
    ) -> Optional[Coordinates]:
        """Call the provider for an address. Must be called holding the lane."""
        logger.debug(f"Attempting to geocode: {full_address}")
        self.external_calls += 1

        try:
            results = await self._rate_limited_geocode(full_address)
        except Exception as e:
            if is_rate_limit_error(e):
                logger.warning(
                    f"Rate limit hit for '{full_address}', caching as unresolvable"
                )
                self._cache[key] = UNRESOLVABLE
            else:
                logger.error(f"Error geocoding address '{full_address}': {e}")
            return None

        if results:
            coords = results[0]
            self._cache[key] = coords
            logger.debug(
                f"Geocoded {full_address} -> {coords.latitude}, {coords.longitude}"
            )
            return coords

        logger.warning(f"No results for: {full_address}")
        self._cache[key] = UNRESOLVABLE
        return None

    async def resolve_many(
        self, addresses: Iterable[AddressParts]
    ) -> list[Optional[Coordinates]]:
        """Resolve addresses one after another.

        Lookups are never fanned out concurrently; each one waits for the
        previous to finish so they all share the single rate limited lane.

        Args:
            addresses: Address fields to resolve, in order

        Returns:
            Coordinates or None for each address, in input order
        """
        results: list[Optional[Coordinates]] = []
        for parts in addresses:
            results.append(await self.resolve(*parts))
        return results

    def clear(self) -> None:
        """Forget every cached lookup, including unresolvable ones."""
        self._cache.clear()
        logger.info("Geocoding cache cleared")


# Process-wide instance
_geocoding_service: Optional[GeocodingService] = None


def get_geocoding_service() -> GeocodingService:
    """Get or create the process-wide geocoding service instance.

    Returns:
        GeocodingService instance
    """
    global _geocoding_service
    if _geocoding_service is None:
        _geocoding_service = GeocodingService()
    return _geocoding_service
