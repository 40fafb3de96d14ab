"""
Tests for card rules and tableau accumulation.

Tests:
- CardState accumulation
- CardPoints formula
- Requirement gate
"""

import pytest

from ..engine_core.cards import (
    Card,
    CardColor,
    CardEffect,
    CardKind,
    CardPoints,
    CardState,
    Resource,
)


def region(card_id=1, **kwargs):
    return Card(card_id=card_id, kind=CardKind.REGION, **kwargs)


class TestCardState:
    """Tests for CardState.add."""

    def test_add_merges_every_counter(self):
        """Adding a card adds its colors, resources, clues and nights."""
        card = region(
            effect=CardEffect(
                colors={CardColor.RED: 1},
                resources={Resource.ANIMAL: 2, Resource.FOOD: 1},
                clues=1,
                nights=1,
            )
        )
        state = CardState().add(card).add(card)

        assert state.color_count(CardColor.RED) == 2
        assert state.resource_count(Resource.ANIMAL) == 4
        assert state.resource_count(Resource.FOOD) == 2
        assert state.resource_count(Resource.MINERAL) == 0
        assert state.clues == 2
        assert state.nights == 2

    def test_add_is_commutative(self):
        """Order of additions does not change the result."""
        a = region(1, effect=CardEffect(colors={CardColor.BLUE: 1}, clues=1))
        b = region(2, effect=CardEffect(resources={Resource.MINERAL: 3}, nights=1))

        assert CardState().add(a).add(b) == CardState().add(b).add(a)

    def test_zero_counters_compare_equal_to_missing(self):
        """A counter at zero equals an absent one."""
        assert CardState(colors={CardColor.RED: 0}) == CardState()

    def test_card_effect_is_read_only(self):
        """Card definitions cannot be mutated."""
        effect = CardEffect(colors={CardColor.RED: 1})
        with pytest.raises(TypeError):
            effect.colors[CardColor.RED] = 5

    def test_copy_is_independent(self):
        """Copies do not share counters."""
        state = CardState(resources={Resource.FOOD: 1})
        copy = state.copy()
        copy.add(region(effect=CardEffect(resources={Resource.FOOD: 1})))
        assert state.resource_count(Resource.FOOD) == 1
        assert copy.resource_count(Resource.FOOD) == 2


class TestCardPoints:
    """Tests for the CardPoints formula."""

    def test_flat_nights_and_clues(self):
        points = CardPoints(flat=2, per_night=3, per_clue=4)
        state = CardState(clues=2, nights=1)
        assert points.score(state) == 2 + 3 + 8

    def test_per_color_includes_gray(self):
        points = CardPoints(per_color={CardColor.GRAY: 1, CardColor.GREEN: 2})
        state = CardState(colors={CardColor.GRAY: 3, CardColor.GREEN: 2})
        assert points.score(state) == 3 + 4

    def test_color_group_ignores_gray(self):
        """Color group counts complete red/green/blue/yellow sets only."""
        points = CardPoints(color_group=10)
        state = CardState(
            colors={
                CardColor.RED: 2,
                CardColor.GREEN: 1,
                CardColor.BLUE: 3,
                CardColor.YELLOW: 1,
                CardColor.GRAY: 0,
            }
        )
        assert points.score(state) == 10

    def test_color_group_zero_when_a_color_missing(self):
        points = CardPoints(color_group=10)
        state = CardState(colors={CardColor.RED: 2, CardColor.GREEN: 2, CardColor.BLUE: 2})
        assert points.score(state) == 0

    def test_resource_group_and_units(self):
        points = CardPoints(per_resource={Resource.FOOD: 2}, resource_group=5)
        state = CardState(
            resources={Resource.MINERAL: 2, Resource.ANIMAL: 3, Resource.FOOD: 4}
        )
        assert points.score(state) == 8 + 10


class TestCardScore:
    """Tests for the requirement gate."""

    def test_unmet_requirement_scores_zero(self):
        """Any requirement below its minimum zeroes the card."""
        card = region(
            requirements={Resource.MINERAL: 2, Resource.FOOD: 1},
            points=CardPoints(flat=7),
        )
        state = CardState(resources={Resource.MINERAL: 1, Resource.FOOD: 5})
        assert card.score(state) == 0

    def test_met_requirement_scores_in_full(self):
        card = region(
            requirements={Resource.MINERAL: 2},
            points=CardPoints(flat=7, per_resource={Resource.MINERAL: 1}),
        )
        state = CardState(resources={Resource.MINERAL: 2})
        assert card.score(state) == 9

    def test_zero_requirement_is_always_met(self):
        card = region(requirements={Resource.ANIMAL: 0}, points=CardPoints(flat=3))
        assert card.score(CardState()) == 3

    def test_label(self):
        assert region(12).label == "R12"
        assert Card(card_id=3, kind=CardKind.SANCTUARY).label == "S3"
