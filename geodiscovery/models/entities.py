"""Marketplace records and the common located-entity shape the map works on."""

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from geodiscovery.models.geographic import Coordinates


class EntityKind(str, Enum):
    """Business type behind a located entity."""

    VENDOR = "vendor"
    LISTING = "listing"
    JOB = "job"


class VendorType(str, Enum):
    """Marketplace vendor categories."""

    STONE_SUPPLIER = "stone-supplier"
    CABINET_MAKER = "cabinet-maker"
    WOOD_SUPPLIER = "wood-supplier"
    LIGHTING_STORE = "lighting-store"
    METAL_FABRICATOR = "metal-fabricator"
    GLASS_SUPPLIER = "glass-supplier"
    TILE_STORE = "tile-store"
    LANDSCAPING_SUPPLY = "landscaping-supply"
    PLUMBING_SUPPLY = "plumbing-supply"
    APPLIANCE_STORE = "appliance-store"
    PAINT_STORE = "paint-store"
    FLOORING_STORE = "flooring-store"
    COUNTERTOP_SPECIALIST = "countertop-specialist"
    HARDWARE_STORE = "hardware-store"
    WINDOW_DOOR_SUPPLIER = "window-door-supplier"
    GENERAL_CONTRACTOR = "general-contractor"
    HOME_REMODELING = "home-remodeling"
    FABRICATOR = "fabricator"
    INSTALLER = "installer"
    DESIGNER = "designer"
    ARCHITECT = "architect"


VENDOR_TYPE_LABELS: dict[VendorType, str] = {
    VendorType.STONE_SUPPLIER: "Stone Supplier",
    VendorType.CABINET_MAKER: "Cabinet Maker",
    VendorType.WOOD_SUPPLIER: "Wood Supplier",
    VendorType.LIGHTING_STORE: "Lighting Store",
    VendorType.METAL_FABRICATOR: "Metal Fabricator",
    VendorType.GLASS_SUPPLIER: "Glass Supplier",
    VendorType.TILE_STORE: "Tile Store",
    VendorType.LANDSCAPING_SUPPLY: "Landscaping Supply",
    VendorType.PLUMBING_SUPPLY: "Plumbing Supply",
    VendorType.APPLIANCE_STORE: "Appliance Store",
    VendorType.PAINT_STORE: "Paint Store",
    VendorType.FLOORING_STORE: "Flooring Store",
    VendorType.COUNTERTOP_SPECIALIST: "Countertop Specialist",
    VendorType.HARDWARE_STORE: "Hardware Store",
    VendorType.WINDOW_DOOR_SUPPLIER: "Window & Door Supplier",
    VendorType.GENERAL_CONTRACTOR: "General Contractor",
    VendorType.HOME_REMODELING: "Home Remodeling",
    VendorType.FABRICATOR: "Fabricator",
    VendorType.INSTALLER: "Installer",
    VendorType.DESIGNER: "Designer",
    VendorType.ARCHITECT: "Architect",
}

ListingStatus = Literal["active", "archived", "sold"]
JobStatus = Literal["open", "in_progress", "completed", "cancelled"]


class VendorLocation(BaseModel):
    """Street address of a vendor."""

    address: str = Field(default="", description="Street address")
    city: str = Field(default="")
    state: str = Field(default="")
    zip_code: str = Field(default="", description="Postal code")
    coordinates: Coordinates | None = None


class StoneInventoryItem(BaseModel):
    """A stone a vendor currently stocks."""

    stone_name: str
    stone_type: str = Field(default="Other")
    color: str = Field(default="")
    supplier_brand: str | None = Field(
        default=None, description="e.g. Cosentino, Caesarstone, Cambria"
    )


class SupplierRelationship(BaseModel):
    """An upstream supplier a vendor buys from."""

    vendor_id: str
    vendor_name: str = Field(..., description="Supplier name like MSI or Cosentino")
    relationship_type: Literal["primary-supplier", "secondary-supplier", "partner"] = (
        "primary-supplier"
    )
    active_inventory: list[str] = Field(default_factory=list)


class Vendor(BaseModel):
    """A business shown on the map."""

    id: str
    name: str
    type: VendorType
    description: str = Field(default="")
    location: VendorLocation = Field(default_factory=VendorLocation)
    specialties: list[str] = Field(default_factory=list)
    tags: list[str] | None = None
    stone_inventory: list[StoneInventoryItem] | None = None
    supplier_relationships: list[SupplierRelationship] | None = None
    verified: bool = False


class Listing(BaseModel):
    """A material listing posted to the marketplace."""

    id: str
    title: str
    description: str = Field(default="")
    location: str = Field(default="", description='Free text, e.g. "Phoenix, AZ"')
    coordinates: Coordinates | None = None
    stone_type: str = Field(default="")
    listing_type: str = Field(default="Slab")
    status: ListingStatus = "active"


class Job(BaseModel):
    """A job posting from a homeowner."""

    id: str
    title: str
    description: str = Field(default="")
    category: str = Field(default="Other", description="Job category label")
    location: str = Field(default="", description='Free text, e.g. "Phoenix, AZ"')
    coordinates: Coordinates | None = None
    status: JobStatus = "open"
    bid_count: int = Field(default=0, ge=0)


MarketplaceRecord = Union[Vendor, Listing, Job]


class SearchableText(BaseModel):
    """Type-specific bundle of text fields consulted by search."""

    model_config = ConfigDict(frozen=True)

    direct: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    inventory: tuple[str, ...] = ()
    suppliers: tuple[str, ...] = ()
    category_label: str = ""


class GeoEntity(BaseModel):
    """A vendor, listing, or job reduced to what the map engine needs."""

    model_config = ConfigDict(frozen=True)

    id: str
    kind: EntityKind
    display_name: str
    coordinates: Coordinates | None = None
    category: str = Field(default="", description="Vendor type, stone type, or job category")
    status: str = "active"
    searchable_text: SearchableText = Field(default_factory=SearchableText)
    source: MarketplaceRecord | None = Field(default=None, repr=False)

    @property
    def is_located(self) -> bool:
        """Whether geocoding produced coordinates for this entity."""
        return self.coordinates is not None

    @classmethod
    def from_vendor(cls, vendor: Vendor) -> "GeoEntity":
        """Build an entity from a vendor record."""
        loc = vendor.location
        direct = (
            vendor.name,
            vendor.description,
            loc.address,
            loc.city,
            loc.state,
            loc.zip_code,
            f"{loc.city} {loc.state}",
            f"{loc.city}, {loc.state}",
        )

        inventory: list[str] = []
        for stone in vendor.stone_inventory or []:
            inventory.extend([stone.stone_name, stone.stone_type, stone.color])
            if stone.supplier_brand:
                inventory.append(stone.supplier_brand)

        suppliers: list[str] = []
        for relationship in vendor.supplier_relationships or []:
            suppliers.append(relationship.vendor_name)
            suppliers.extend(relationship.active_inventory)

        return cls(
            id=vendor.id,
            kind=EntityKind.VENDOR,
            display_name=vendor.name,
            coordinates=loc.coordinates,
            category=vendor.type.value,
            status="active",
            searchable_text=SearchableText(
                direct=direct,
                tags=tuple(vendor.specialties) + tuple(vendor.tags or ()),
                inventory=tuple(inventory),
                suppliers=tuple(suppliers),
                category_label=VENDOR_TYPE_LABELS[vendor.type],
            ),
            source=vendor,
        )

    @classmethod
    def from_listing(cls, listing: Listing) -> "GeoEntity":
        """Build an entity from a material listing."""
        return cls(
            id=listing.id,
            kind=EntityKind.LISTING,
            display_name=listing.title,
            coordinates=listing.coordinates,
            category=listing.stone_type,
            status=listing.status,
            searchable_text=SearchableText(
                direct=(
                    listing.title,
                    listing.description,
                    listing.location,
                    listing.stone_type,
                ),
                category_label=listing.stone_type,
            ),
            source=listing,
        )

    @classmethod
    def from_job(cls, job: Job) -> "GeoEntity":
        """Build an entity from a job posting."""
        return cls(
            id=job.id,
            kind=EntityKind.JOB,
            display_name=job.title,
            coordinates=job.coordinates,
            category=job.category,
            status=job.status,
            searchable_text=SearchableText(
                direct=(job.title, job.description, job.location, job.category),
                category_label=job.category,
            ),
            source=job,
        )

    @classmethod
    def from_record(cls, record: MarketplaceRecord) -> "GeoEntity":
        """Build an entity from any supported marketplace record."""
        if isinstance(record, Vendor):
            return cls.from_vendor(record)
        if isinstance(record, Listing):
            return cls.from_listing(record)
        if isinstance(record, Job):
            return cls.from_job(record)
        raise TypeError(f"Unsupported record type: {type(record).__name__}")
