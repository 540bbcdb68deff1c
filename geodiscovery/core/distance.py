"""Great-circle distance utilities."""

from math import asin, cos, radians, sin, sqrt

from geodiscovery.models.geographic import Coordinates

# Mean radius of the earth in miles
EARTH_RADIUS_MILES = 3959.0


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the great circle distance between two points in miles."""
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push a slightly above 1 for antipodal points
    c = 2 * asin(sqrt(min(1.0, a)))

    return EARTH_RADIUS_MILES * c


def distance_between(a: Coordinates, b: Coordinates) -> float:
    """Distance in miles between two coordinate pairs."""
    return haversine_miles(a.latitude, a.longitude, b.latitude, b.longitude)

