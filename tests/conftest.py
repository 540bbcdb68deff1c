"""Test configuration."""

import time
from collections.abc import Callable
from pathlib import Path

import pytest
from pytest import Config

from geodiscovery.core.geocoding import GeocodingService
from geodiscovery.core.logging import configure_logging
from geodiscovery.models import (
    Coordinates,
    GeoEntity,
    Job,
    Listing,
    StoneInventoryItem,
    SupplierRelationship,
    Vendor,
    VendorLocation,
    VendorType,
)

fixture = pytest.fixture


class FakeProvider:
    """In-memory geocoding provider that records every call.

    ``responses`` maps a full address string to either a list of
    coordinates or an exception instance to raise.
    """

    def __init__(self, responses: dict | None = None):
        self.responses = responses or {}
        self.calls: list[str] = []
        self.call_times: list[float] = []

    async def geocode(self, query: str) -> list[Coordinates]:
        self.calls.append(query)
        self.call_times.append(time.monotonic())
        response = self.responses.get(query, [])
        if isinstance(response, Exception):
            raise response
        return list(response)


@fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@fixture
def provider_factory() -> type[FakeProvider]:
    """The fake provider class, for tests that need custom responses."""
    return FakeProvider


@fixture
def fake_provider() -> FakeProvider:
    """Provider with no known addresses."""
    return FakeProvider()


@fixture
def geocoder(fake_provider: FakeProvider) -> GeocodingService:
    """Geocoding service without a rate limit delay."""
    return GeocodingService(provider=fake_provider, min_delay_seconds=0)


@fixture
def make_entity() -> Callable[..., GeoEntity]:
    """Factory for located listing entities at given coordinates."""

    def _make(entity_id: str, latitude: float | None, longitude: float | None) -> GeoEntity:
        coords = (
            Coordinates(latitude=latitude, longitude=longitude)
            if latitude is not None and longitude is not None
            else None
        )
        return GeoEntity.from_listing(
            Listing(id=entity_id, title=f"Listing {entity_id}", coordinates=coords)
        )

    return _make


@fixture
def countertop_vendor() -> Vendor:
    """Vendor whose name and description never mention stone types."""
    return Vendor(
        id="v-1",
        name="Desert Surfaces",
        type=VendorType.COUNTERTOP_SPECIALIST,
        description="Family owned shop serving the valley since 1998",
        location=VendorLocation(
            address="1200 W Main St", city="Mesa", state="AZ", zip_code="85201"
        ),
    )


@fixture
def tile_vendor() -> Vendor:
    """Vendor with tags, inventory, and supplier relationships."""
    return Vendor(
        id="v-2",
        name="Arizona Tile",
        type=VendorType.TILE_STORE,
        description="Showroom and warehouse",
        location=VendorLocation(
            address="8829 S Priest Dr",
            city="Tempe",
            state="AZ",
            zip_code="85284",
            coordinates=Coordinates(latitude=33.3668, longitude=-111.9627),
        ),
        specialties=["Porcelain"],
        tags=["remnants", "Cambria certified"],
        stone_inventory=[
            StoneInventoryItem(
                stone_name="Calacatta Gold",
                stone_type="Marble",
                color="White",
                supplier_brand="Cosentino",
            )
        ],
    )


@fixture
def contractor_vendor() -> Vendor:
    """Installer that buys from MSI without mentioning it anywhere else."""
    return Vendor(
        id="v-3",
        name="Precision Installs",
        type=VendorType.INSTALLER,
        description="Licensed and insured",
        location=VendorLocation(
            address="55 E Camelback Rd",
            city="Phoenix",
            state="AZ",
            zip_code="85012",
            coordinates=Coordinates(latitude=33.5092, longitude=-112.0724),
        ),
        supplier_relationships=[
            SupplierRelationship(
                vendor_id="s-1",
                vendor_name="MSI",
                relationship_type="primary-supplier",
                active_inventory=["Calacatta Laza", "Carrara White"],
            )
        ],
    )


@fixture
def active_listing() -> Listing:
    return Listing(
        id="l-1",
        title="Black Galaxy remnant",
        description="Polished 3cm piece",
        location="Phoenix, AZ",
        stone_type="Granite",
        listing_type="Remnant",
        status="active",
    )


@fixture
def open_job() -> Job:
    return Job(
        id="j-1",
        title="Kitchen countertop replacement",
        description="Replace laminate with stone",
        category="Countertop Installation",
        location="Scottsdale, AZ",
        status="open",
    )


def pytest_configure(config: Config) -> None:
    """Configure pytest.

    Args:
        config: Pytest configuration object
    """
    # Configure logging for test environment
    configure_logging(testing=True)
    config.addinivalue_line("markers", "slow: mark test as timing dependent")
