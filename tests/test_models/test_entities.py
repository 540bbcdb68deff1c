"""Tests for marketplace records and their entity conversion."""

import pytest
from pydantic import ValidationError

from geodiscovery.models import (
    VENDOR_TYPE_LABELS,
    Coordinates,
    EntityKind,
    GeoEntity,
    Job,
    Listing,
    RouteStop,
    VendorType,
)


def test_every_vendor_type_has_a_label():
    assert set(VENDOR_TYPE_LABELS) == set(VendorType)


class TestFromVendor:
    def test_fields(self, tile_vendor):
        entity = GeoEntity.from_vendor(tile_vendor)

        assert entity.id == "v-2"
        assert entity.kind is EntityKind.VENDOR
        assert entity.display_name == "Arizona Tile"
        assert entity.coordinates == tile_vendor.location.coordinates
        assert entity.category == "tile-store"
        assert entity.status == "active"
        assert entity.source == tile_vendor

    def test_searchable_text(self, tile_vendor, contractor_vendor):
        text = GeoEntity.from_vendor(tile_vendor).searchable_text

        assert "Tempe, AZ" in text.direct
        assert "Tempe AZ" in text.direct
        assert text.tags == ("Porcelain", "remnants", "Cambria certified")
        assert text.inventory == ("Calacatta Gold", "Marble", "White", "Cosentino")
        assert text.category_label == "Tile Store"

        suppliers = GeoEntity.from_vendor(contractor_vendor).searchable_text.suppliers
        assert suppliers == ("MSI", "Calacatta Laza", "Carrara White")

    def test_unlocated_vendor(self, countertop_vendor):
        entity = GeoEntity.from_vendor(countertop_vendor)

        assert not entity.is_located


class TestFromListingAndJob:
    def test_listing(self, active_listing):
        entity = GeoEntity.from_listing(active_listing)

        assert entity.kind is EntityKind.LISTING
        assert entity.category == "Granite"
        assert entity.status == "active"
        assert "Phoenix, AZ" in entity.searchable_text.direct

    def test_job(self, open_job):
        entity = GeoEntity.from_job(open_job)

        assert entity.kind is EntityKind.JOB
        assert entity.category == "Countertop Installation"
        assert entity.status == "open"

    def test_from_record_dispatch(self, tile_vendor, active_listing, open_job):
        kinds = [
            GeoEntity.from_record(record).kind
            for record in (tile_vendor, active_listing, open_job)
        ]

        assert kinds == [EntityKind.VENDOR, EntityKind.LISTING, EntityKind.JOB]

    def test_from_record_rejects_unknown(self):
        with pytest.raises(TypeError, match="Unsupported record type"):
            GeoEntity.from_record("not a record")  # type: ignore[arg-type]

    def test_invalid_status(self):
        with pytest.raises(ValidationError):
            Listing(id="l", title="t", status="pending")
        with pytest.raises(ValidationError):
            Job(id="j", title="t", bid_count=-1)


class TestRouteStop:
    def test_from_entity(self, tile_vendor):
        stop = RouteStop.from_entity(GeoEntity.from_vendor(tile_vendor))

        assert stop.id == "v-2"
        assert stop.display_name == "Arizona Tile"
        assert stop.coordinates == Coordinates(latitude=33.3668, longitude=-111.9627)
        assert stop.source_kind is EntityKind.VENDOR

    def test_from_unlocated_entity(self, countertop_vendor):
        with pytest.raises(ValueError):
            RouteStop.from_entity(GeoEntity.from_vendor(countertop_vendor))
