"""
Scoring Engine - Deterministic scoring of a validated layout.

Faraway scores the tableau in reverse placement order. A region only
sees the cards placed after it (plus every sanctuary), while sanctuaries
see the whole tableau:

1. Start from an empty CardState
2. Add every sanctuary's effect, in detected order
3. Walk the regions in reverse detected order: add the region's effect,
   then score it against the state accumulated so far
4. Score every sanctuary, in detected order, against the final state

The order is load-bearing: changing it changes region scores.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .cards import CardState
from .state import GameState, Layout

if TYPE_CHECKING:
    from ..catalog import CardCatalog


def compute_score(layout: Layout, catalog: CardCatalog) -> GameState:
    """
    Score a layout and return it as a GameState.

    The layout must already be validated against the catalog; an unknown
    id raises UnknownCardError.
    """
    state = CardState()
    region_scores: dict[int, int] = {}
    sanctuary_scores: dict[int, int] = {}
    total = 0

    sanctuaries = [catalog.sanctuary(s) for s in layout.sanctuaries]
    for card in sanctuaries:
        state.add(card)

    for region_id in reversed(layout.regions):
        card = catalog.region(region_id)
        state.add(card)
        score = card.score(state)
        region_scores[region_id] = score
        total += score

    for card in sanctuaries:
        score = card.score(state)
        sanctuary_scores[card.card_id] = score
        total += score

    return GameState(
        layout=layout,
        region_scores=region_scores,
        sanctuary_scores=sanctuary_scores,
        total=total,
    )


class ScoringEngine:
    """Binds a catalog to compute_score."""

    def __init__(self, catalog: CardCatalog):
        self.catalog = catalog

    def compute(self, layout: Layout) -> GameState:
        return compute_score(layout, self.catalog)
