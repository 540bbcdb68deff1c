"""Keyword to vendor category expansion table used by map search.

A query such as "granite" should surface a countertop specialist even when
its name and description never mention granite. The table maps domain
keywords to every vendor category that serves them.
"""

from types import MappingProxyType
from typing import Mapping

from geodiscovery.models.entities import VendorType

_COUNTERTOP = frozenset(
    {VendorType.COUNTERTOP_SPECIALIST, VendorType.FABRICATOR, VendorType.STONE_SUPPLIER}
)
_TILE = frozenset({VendorType.TILE_STORE, VendorType.INSTALLER})
_SLAB = frozenset({VendorType.STONE_SUPPLIER, VendorType.FABRICATOR})
_NATURAL_STONE = frozenset(
    {VendorType.STONE_SUPPLIER, VendorType.FABRICATOR, VendorType.COUNTERTOP_SPECIALIST}
)
_FABRICATION = frozenset({VendorType.FABRICATOR})
_REMODEL = frozenset(
    {VendorType.HOME_REMODELING, VendorType.DESIGNER, VendorType.COUNTERTOP_SPECIALIST}
)
_SUPPLIER = frozenset({VendorType.STONE_SUPPLIER})

SEARCH_KEYWORDS: Mapping[str, frozenset[VendorType]] = MappingProxyType(
    {
        # Countertops
        "countertop": _COUNTERTOP,
        "countertops": _COUNTERTOP,
        "counter": frozenset(
            {VendorType.COUNTERTOP_SPECIALIST, VendorType.FABRICATOR}
        ),
        # Tile
        "tile": _TILE,
        "tiles": _TILE,
        "tiling": _TILE,
        # Stone and slabs
        "slab": _SLAB,
        "slabs": _SLAB,
        "granite": _NATURAL_STONE,
        "marble": _NATURAL_STONE,
        "quartz": _NATURAL_STONE,
        "quartzite": _NATURAL_STONE,
        "stone": _SLAB,
        # Fabrication
        "fabrication": _FABRICATION,
        "fabricator": _FABRICATION,
        "fabricate": _FABRICATION,
        # Installation
        "install": frozenset({VendorType.INSTALLER, VendorType.COUNTERTOP_SPECIALIST}),
        "installer": frozenset({VendorType.INSTALLER}),
        "installation": frozenset(
            {VendorType.INSTALLER, VendorType.COUNTERTOP_SPECIALIST}
        ),
        # Remodeling
        "remodel": _REMODEL,
        "remodeling": _REMODEL,
        "renovation": frozenset({VendorType.HOME_REMODELING, VendorType.DESIGNER}),
        # Design
        "design": frozenset({VendorType.DESIGNER, VendorType.HOME_REMODELING}),
        "designer": frozenset({VendorType.DESIGNER}),
        # Rooms
        "kitchen": frozenset(
            {
                VendorType.COUNTERTOP_SPECIALIST,
                VendorType.FABRICATOR,
                VendorType.HOME_REMODELING,
                VendorType.DESIGNER,
            }
        ),
        "bathroom": frozenset(
            {
                VendorType.COUNTERTOP_SPECIALIST,
                VendorType.TILE_STORE,
                VendorType.HOME_REMODELING,
                VendorType.DESIGNER,
            }
        ),
        # Suppliers
        "supplier": _SUPPLIER,
        "supply": _SUPPLIER,
    }
)


def categories_for_query(
    query: str, table: Mapping[str, frozenset[VendorType]] = SEARCH_KEYWORDS
) -> frozenset[VendorType]:
    """Union the categories of every keyword contained in the query.

    Args:
        query: Free-text search query
        table: Keyword table to consult

    Returns:
        Vendor categories implied by the query (empty if none)
    """
    normalized = query.lower().strip()
    if not normalized:
        return frozenset()

    matched: set[VendorType] = set()
    for keyword, categories in table.items():
        if keyword in normalized:
            matched.update(categories)
    return frozenset(matched)
