"""Multi-stop route planning for navigation hand-off.

Stops are kept in the order the user added them. No sequencing
optimization is attempted: the external navigation provider receives the
stops as ordered waypoints and may reorder them itself.
"""

from collections.abc import Sequence
from typing import Optional, Union
from urllib.parse import urlencode

from geodiscovery.core.distance import distance_between
from geodiscovery.core.logging import get_logger
from geodiscovery.models.entities import GeoEntity
from geodiscovery.models.geographic import Coordinates
from geodiscovery.models.map import RouteStop

logger = get_logger()

GOOGLE_MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/"


def directions_url_for(
    destination: Coordinates,
    origin: Optional[Coordinates] = None,
    waypoints: Sequence[Coordinates] = (),
) -> str:
    """Build a Google Maps directions deep link.

    Args:
        destination: Final stop
        origin: Optional starting point; the maps app uses the device location if omitted
        waypoints: Intermediate stops in visiting order

    Returns:
        Deep link URL
    """
    params = {"api": "1"}
    if origin is not None:
        params["origin"] = str(origin)
    params["destination"] = str(destination)
    if waypoints:
        params["waypoints"] = "|".join(str(point) for point in waypoints)
    return f"{GOOGLE_MAPS_DIRECTIONS_URL}?{urlencode(params, safe=',|')}"


class RoutePlanner:
    """Ordered, de-duplicated list of route stops."""

    def __init__(self, stops: Sequence[RouteStop] = ()):
        self._stops: list[RouteStop] = []
        for stop in stops:
            self.add_stop(stop)

    @property
    def stops(self) -> tuple[RouteStop, ...]:
        """Stops in visiting order."""
        return tuple(self._stops)

    def __len__(self) -> int:
        return len(self._stops)

    def __contains__(self, stop_id: object) -> bool:
        return any(stop.id == stop_id for stop in self._stops)

    def add_stop(self, item: Union[GeoEntity, RouteStop]) -> bool:
        """Append a stop to the end of the route.

        Adding an id that is already on the route, or an entity that has
        not been geocoded, leaves the route unchanged.

        Returns:
            True if the stop was added
        """
        if isinstance(item, GeoEntity):
            if item.coordinates is None:
                logger.warning("route_stop_not_located", stop_id=item.id)
                return False
            stop = RouteStop.from_entity(item)
        else:
            stop = item

        if stop.id in self:
            return False

        self._stops.append(stop)
        logger.debug("route_stop_added", stop_id=stop.id, stops=len(self._stops))
        return True

    def remove_stop(self, stop_id: str) -> bool:
        """Remove a stop by id.

        Returns:
            True if a stop was removed
        """
        for index, stop in enumerate(self._stops):
            if stop.id == stop_id:
                del self._stops[index]
                return True
        return False

    def clear(self) -> None:
        self._stops.clear()

    def legs(self) -> list[float]:
        """Distance in miles of each leg between consecutive stops."""
        return [
            distance_between(a.coordinates, b.coordinates)
            for a, b in zip(self._stops, self._stops[1:])
        ]

    def total_distance(self) -> float:
        """Sum of the leg distances; 0 with fewer than two stops."""
        return sum(self.legs(), 0.0)

    def polyline(self, current_location: Optional[Coordinates] = None) -> list[Coordinates]:
        """Coordinates to draw, optionally starting at the user's location."""
        points = [current_location] if current_location is not None else []
        points.extend(stop.coordinates for stop in self._stops)
        return points

    def directions_url(self, current_location: Optional[Coordinates] = None) -> Optional[str]:
        """Deep link handing the ordered stops to an external maps app.

        Returns:
            URL, or None when the route is empty
        """
        if not self._stops:
            return None

        *waypoints, destination = [stop.coordinates for stop in self._stops]
        return directions_url_for(
            destination, origin=current_location, waypoints=waypoints
        )
