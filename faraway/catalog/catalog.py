"""
Card Catalog - Read-only lookup of card rules by class and id.

The catalog is built once at startup and shared between the frame
producer and the polling consumer without locking; nothing mutates it
after construction.
"""

from __future__ import annotations
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from ..engine_core.cards import Card, CardKind
from ..exceptions import CatalogLoadError, UnknownCardError
from .loader import load_cards


class CardCatalog:
    """
    Region and sanctuary tables keyed by card id.

    Usage:
        catalog = CardCatalog.from_csv("card_info.csv")

        card = catalog.get_region(12)      # None if unknown
        card = catalog.region(12)          # raises UnknownCardError
    """

    def __init__(
        self,
        regions: Mapping[int, Card] | None = None,
        sanctuaries: Mapping[int, Card] | None = None,
    ):
        self._regions = MappingProxyType(dict(regions or {}))
        self._sanctuaries = MappingProxyType(dict(sanctuaries or {}))

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> CardCatalog:
        """
        Partition cards into the region and sanctuary tables.

        A repeated id within one class is a malformed table.
        """
        regions: dict[int, Card] = {}
        sanctuaries: dict[int, Card] = {}
        for card in cards:
            table = regions if card.kind is CardKind.REGION else sanctuaries
            if card.card_id in table:
                raise CatalogLoadError(f"duplicate {card.kind.value} id {card.card_id}")
            table[card.card_id] = card
        return cls(regions=regions, sanctuaries=sanctuaries)

    @classmethod
    def from_csv(cls, path: str | Path) -> CardCatalog:
        return cls.from_cards(load_cards(path))

    @property
    def regions(self) -> Mapping[int, Card]:
        return self._regions

    @property
    def sanctuaries(self) -> Mapping[int, Card]:
        return self._sanctuaries

    @property
    def region_count(self) -> int:
        return len(self._regions)

    @property
    def sanctuary_count(self) -> int:
        return len(self._sanctuaries)

    def has_region(self, card_id: int) -> bool:
        return card_id in self._regions

    def has_sanctuary(self, card_id: int) -> bool:
        return card_id in self._sanctuaries

    def get_region(self, card_id: int) -> Card | None:
        return self._regions.get(card_id)

    def get_sanctuary(self, card_id: int) -> Card | None:
        return self._sanctuaries.get(card_id)

    def region(self, card_id: int) -> Card:
        card = self._regions.get(card_id)
        if card is None:
            raise UnknownCardError(CardKind.REGION.value, card_id)
        return card

    def sanctuary(self, card_id: int) -> Card:
        card = self._sanctuaries.get(card_id)
        if card is None:
            raise UnknownCardError(CardKind.SANCTUARY.value, card_id)
        return card

    def __repr__(self):
        return f"CardCatalog(regions={self.region_count}, sanctuaries={self.sanctuary_count})"
