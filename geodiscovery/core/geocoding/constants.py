"""Constants shared by the geocoding components."""

from enum import Enum


class CacheMarker(Enum):
    """Explicit cache value for addresses the provider could not resolve."""

    UNRESOLVABLE = "unresolvable"


UNRESOLVABLE = CacheMarker.UNRESOLVABLE

# Substring providers use in rate limit error messages
RATE_LIMIT_MESSAGE = "rate limit"

# Fixed layout of the address sent to the provider
FULL_ADDRESS_FORMAT = "{address}, {city}, {state} {zip_code}"
