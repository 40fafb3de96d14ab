"""
Tests for layout scoring.

Tests:
- Reverse placement order for regions
- Sanctuaries scored against the full tableau
- Determinism
- Unknown ids
"""

import pytest

from ..catalog import CardCatalog
from ..engine_core.cards import (
    Card,
    CardColor,
    CardEffect,
    CardKind,
    CardPoints,
    Resource,
)
from ..engine_core.scoring import ScoringEngine, compute_score
from ..engine_core.state import Layout
from ..exceptions import UnknownCardError


@pytest.fixture
def animal_catalog():
    """
    Regions 1-7 each give one animal; region 8 scores one point per
    animal. Sanctuary 1 gives a clue and scores 2 per clue plus 1 per
    animal.
    """
    regions = {
        i: Card(
            card_id=i,
            kind=CardKind.REGION,
            effect=CardEffect(colors={CardColor.GREEN: 1}, resources={Resource.ANIMAL: 1}),
        )
        for i in range(1, 8)
    }
    regions[8] = Card(
        card_id=8,
        kind=CardKind.REGION,
        effect=CardEffect(colors={CardColor.RED: 1}),
        points=CardPoints(per_resource={Resource.ANIMAL: 1}),
    )
    sanctuaries = {
        1: Card(
            card_id=1,
            kind=CardKind.SANCTUARY,
            effect=CardEffect(clues=1),
            points=CardPoints(per_clue=2, per_resource={Resource.ANIMAL: 1}),
        ),
    }
    return CardCatalog(regions=regions, sanctuaries=sanctuaries)


class TestScoringOrder:
    """Regions only see cards placed after them."""

    def test_first_placed_region_sees_everything(self, animal_catalog):
        layout = Layout(regions=(8, 1, 2, 3, 4, 5, 6, 7))
        state = compute_score(layout, animal_catalog)

        assert state.region_scores[8] == 7
        assert state.total == 7

    def test_last_placed_region_sees_only_itself(self, animal_catalog):
        layout = Layout(regions=(1, 2, 3, 4, 5, 6, 7, 8))
        state = compute_score(layout, animal_catalog)

        assert state.region_scores[8] == 0
        assert state.total == 0

    def test_sanctuary_scores_against_final_state(self, animal_catalog):
        """Sanctuaries see every region and every sanctuary."""
        layout = Layout(regions=(1, 2, 3, 4, 5, 6, 7, 8), sanctuaries=(1,))
        state = compute_score(layout, animal_catalog)

        assert state.sanctuary_scores[1] == 2 * 1 + 7
        assert state.total == 9

    def test_sanctuary_effects_reach_every_region(self):
        """Sanctuary effects are added before any region is scored."""
        regions = {
            i: Card(
                card_id=i,
                kind=CardKind.REGION,
                requirements={Resource.MINERAL: 2},
                points=CardPoints(flat=1),
            )
            for i in range(1, 9)
        }
        sanctuaries = {
            5: Card(
                card_id=5,
                kind=CardKind.SANCTUARY,
                effect=CardEffect(resources={Resource.MINERAL: 2}),
            )
        }
        catalog = CardCatalog(regions=regions, sanctuaries=sanctuaries)

        without = compute_score(Layout(regions=tuple(range(8, 0, -1))), catalog)
        with_sanctuary = compute_score(
            Layout(regions=tuple(range(8, 0, -1)), sanctuaries=(5,)), catalog
        )

        assert without.total == 0
        assert with_sanctuary.total == 8


class TestScoringResult:
    """Tests for the scored GameState."""

    def test_flat_scenario(self, flat_catalog):
        """Eight flat 3-point regions and no sanctuaries score 24."""
        state = compute_score(Layout(regions=(8, 7, 6, 5, 4, 3, 2, 1)), flat_catalog)
        assert state.total == 24
        assert set(state.region_scores.values()) == {3}

    def test_scoring_is_deterministic(self, animal_catalog):
        layout = Layout(regions=(8, 1, 2, 3, 4, 5, 6, 7), sanctuaries=(1,))
        first = compute_score(layout, animal_catalog)
        second = compute_score(Layout(regions=layout.regions, sanctuaries=(1,)), animal_catalog)

        assert first == second
        assert dict(first.region_scores) == dict(second.region_scores)
        assert dict(first.sanctuary_scores) == dict(second.sanctuary_scores)
        assert first.total == second.total

    def test_card_scores_keyed_by_label(self, animal_catalog):
        """Region and sanctuary with the same id keep separate scores."""
        layout = Layout(regions=(8, 1, 2, 3, 4, 5, 6, 7), sanctuaries=(1,))
        scores = compute_score(layout, animal_catalog).card_scores

        assert scores["R1"] == 0
        assert scores["S1"] == 9
        assert list(scores)[:2] == ["R8", "R1"]

    def test_layout_labels(self):
        layout = Layout(regions=(8, 1), sanctuaries=(3, 1))
        assert layout.labels() == ["R8", "R1", "S3", "S1"]

    def test_engine_binds_catalog(self, flat_catalog):
        engine = ScoringEngine(flat_catalog)
        assert engine.compute(Layout(regions=(8, 7, 6, 5, 4, 3, 2, 1))).total == 24

    def test_unknown_id_is_an_error(self, flat_catalog):
        """Scoring an unvalidated layout with unknown ids raises."""
        with pytest.raises(UnknownCardError) as exc_info:
            compute_score(Layout(regions=(99,)), flat_catalog)
        assert exc_info.value.card_id == 99
        assert isinstance(exc_info.value, KeyError)
