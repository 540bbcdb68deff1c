"""Tests for multi-stop route planning."""

from urllib.parse import parse_qs, urlparse

import pytest

from geodiscovery.core.distance import distance_between
from geodiscovery.map.routing import (
    GOOGLE_MAPS_DIRECTIONS_URL,
    RoutePlanner,
    directions_url_for,
)
from geodiscovery.models import Coordinates, EntityKind, RouteStop


@pytest.fixture
def three_stops(make_entity):
    return [
        make_entity("phx", 33.4484, -112.074),
        make_entity("mesa", 33.4152, -111.8315),
        make_entity("tucson", 32.2226, -110.9747),
    ]


class TestRoutePlanner:
    def test_total_is_sum_of_consecutive_legs(self, three_stops):
        planner = RoutePlanner()
        for entity in three_stops:
            assert planner.add_stop(entity)

        phx, mesa, tucson = (e.coordinates for e in three_stops)
        first = distance_between(phx, mesa)
        second = distance_between(mesa, tucson)

        assert planner.legs() == pytest.approx([first, second])
        assert planner.total_distance() == pytest.approx(first + second)
        # Not the sum over every pair
        assert planner.total_distance() != pytest.approx(
            first + second + distance_between(phx, tucson)
        )

    def test_total_is_zero_with_fewer_than_two_stops(self, three_stops):
        planner = RoutePlanner()
        assert planner.total_distance() == 0

        planner.add_stop(three_stops[0])
        assert planner.total_distance() == 0
        assert planner.legs() == []

    def test_add_is_idempotent(self, three_stops):
        planner = RoutePlanner()
        for entity in three_stops:
            planner.add_stop(entity)

        assert planner.add_stop(three_stops[1]) is False
        assert [s.id for s in planner.stops] == ["phx", "mesa", "tucson"]
        assert len(planner) == 3

    def test_unlocated_entity_is_rejected(self, make_entity):
        planner = RoutePlanner()

        assert planner.add_stop(make_entity("nowhere", None, None)) is False
        assert len(planner) == 0

    def test_remove_stop_keeps_order(self, three_stops):
        planner = RoutePlanner()
        for entity in three_stops:
            planner.add_stop(entity)

        assert planner.remove_stop("mesa") is True
        assert planner.remove_stop("mesa") is False
        assert [s.id for s in planner.stops] == ["phx", "tucson"]
        assert "mesa" not in planner

    def test_clear(self, three_stops):
        planner = RoutePlanner()
        planner.add_stop(three_stops[0])

        planner.clear()

        assert len(planner) == 0
        assert planner.directions_url() is None

    def test_constructed_with_stops(self, three_stops):
        stops = [RouteStop.from_entity(e) for e in three_stops]
        planner = RoutePlanner(stops + [stops[0]])

        assert [s.id for s in planner.stops] == ["phx", "mesa", "tucson"]
        assert planner.stops[0].source_kind is EntityKind.LISTING

    def test_polyline(self, three_stops):
        planner = RoutePlanner()
        for entity in three_stops:
            planner.add_stop(entity)
        here = Coordinates(latitude=33.5, longitude=-112.1)

        assert planner.polyline() == [e.coordinates for e in three_stops]
        assert planner.polyline(here) == [here] + [e.coordinates for e in three_stops]

    def test_directions_url_orders_waypoints(self, three_stops):
        planner = RoutePlanner()
        for entity in three_stops:
            planner.add_stop(entity)
        here = Coordinates(latitude=33.5, longitude=-112.1)

        url = planner.directions_url(current_location=here)

        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        assert url.startswith(GOOGLE_MAPS_DIRECTIONS_URL)
        assert params["api"] == ["1"]
        assert params["origin"] == ["33.5,-112.1"]
        assert params["destination"] == ["32.2226,-110.9747"]
        assert params["waypoints"] == ["33.4484,-112.074|33.4152,-111.8315"]


class TestDirectionsUrl:
    def test_single_destination(self):
        url = directions_url_for(Coordinates(latitude=33.4484, longitude=-112.074))

        assert url == (
            "https://www.google.com/maps/dir/?api=1&destination=33.4484,-112.074"
        )

    def test_separators_are_not_escaped(self):
        url = directions_url_for(
            Coordinates(latitude=1, longitude=2),
            waypoints=[
                Coordinates(latitude=3, longitude=4),
                Coordinates(latitude=5, longitude=6),
            ],
        )

        assert "waypoints=3.0,4.0|5.0,6.0" in url
