"""Keyword-aware search matching for map entities."""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Optional

from geodiscovery.map.keywords import SEARCH_KEYWORDS, categories_for_query
from geodiscovery.models.entities import GeoEntity, VendorType


class MatchStrategy(str, Enum):
    """Search strategies in the order they are tried."""

    DIRECT = "direct"
    TAG = "tag"
    INVENTORY = "inventory"
    SUPPLIER = "supplier"
    KEYWORD = "keyword"
    CATEGORY_LABEL = "category_label"


def _any_contains(values: Iterable[str], needle: str) -> bool:
    return any(needle in value.lower() for value in values if value)


class SearchMatcher:
    """Decides whether a located entity satisfies a free-text query.

    Strategies are tried in ``MatchStrategy`` order and the first hit
    wins. Order never changes the boolean result, but ``explain`` reports
    which strategy matched.
    """

    def __init__(
        self, keywords: Mapping[str, frozenset[VendorType]] = SEARCH_KEYWORDS
    ):
        self.keywords = keywords

    @staticmethod
    def normalize(query: Optional[str]) -> str:
        """Lower-case and trim a query; None becomes empty."""
        return (query or "").lower().strip()

    def explain(self, entity: GeoEntity, query: Optional[str]) -> Optional[MatchStrategy]:
        """Return the first strategy that matches, or None.

        An empty query matches through ``DIRECT``.
        """
        needle = self.normalize(query)
        if not needle:
            return MatchStrategy.DIRECT

        text = entity.searchable_text

        if _any_contains(text.direct, needle):
            return MatchStrategy.DIRECT

        if _any_contains(text.tags, needle):
            return MatchStrategy.TAG

        if _any_contains(text.inventory, needle):
            return MatchStrategy.INVENTORY

        if _any_contains(text.suppliers, needle):
            return MatchStrategy.SUPPLIER

        relevant = {c.value for c in categories_for_query(needle, self.keywords)}
        if entity.category and entity.category in relevant:
            return MatchStrategy.KEYWORD

        if text.category_label and needle in text.category_label.lower():
            return MatchStrategy.CATEGORY_LABEL

        return None

    def matches(self, entity: GeoEntity, query: Optional[str]) -> bool:
        """Return True if the entity satisfies the query."""
        return self.explain(entity, query) is not None

    def filter(
        self, entities: Iterable[GeoEntity], query: Optional[str]
    ) -> list[GeoEntity]:
        """Return the matching entities, preserving input order."""
        return [entity for entity in entities if self.matches(entity, query)]


_default_matcher = SearchMatcher()


def filter_entities(
    entities: Iterable[GeoEntity], query: Optional[str]
) -> list[GeoEntity]:
    """Filter entities with the default keyword table."""
    return _default_matcher.filter(entities, query)
