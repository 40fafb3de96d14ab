"""
Catalog - Card rules loaded once from the card table.

Every card is either a region or a sanctuary. The catalog answers
"what does card N of this class do" for the validator and the scorer.
"""

from .catalog import CardCatalog
from .loader import COLUMN_COUNT, iter_cards, load_cards, parse_row

__all__ = [
    "CardCatalog",
    "COLUMN_COUNT",
    "iter_cards",
    "load_cards",
    "parse_row",
]
