"""
Tests for layout validation.
"""

import pytest

from ..engine_core.state import Layout
from ..vision.validator import LayoutValidator, count_upgrade_slots
from .conftest import DESCENDING, ONE_UPGRADE


@pytest.fixture
def validator(flat_catalog):
    return LayoutValidator(flat_catalog)


class TestUpgradeSlots:
    """Tests for the upgrade slot count."""

    def test_non_increasing_has_no_slots(self):
        assert count_upgrade_slots((8, 7, 6, 5, 4, 3, 2, 1), baseline=8) == 0

    def test_baseline_counts_as_previous(self):
        """The first region is compared against the catalog size."""
        assert count_upgrade_slots((9, 1), baseline=8) == 1
        assert count_upgrade_slots((8, 1), baseline=8) == 0

    def test_every_increase_counts(self):
        assert count_upgrade_slots((1, 2, 3, 1, 5), baseline=10) == 3

    def test_equal_ids_are_not_an_increase(self):
        assert count_upgrade_slots((3, 3), baseline=3) == 0


class TestLayoutValidator:
    """Tests for each admission rule."""

    def test_valid_without_sanctuaries(self, validator):
        result = validator.validate(Layout(regions=DESCENDING))
        assert result.valid
        assert result.errors == []

    def test_valid_with_one_sanctuary(self, validator):
        assert validator.is_valid(Layout(regions=ONE_UPGRADE, sanctuaries=(1,)))

    @pytest.mark.parametrize("regions", [DESCENDING[:7], DESCENDING + (9,)])
    def test_region_count_must_be_eight(self, validator, regions):
        result = validator.validate(Layout(regions=regions))
        assert not result.valid
        assert any("regions" in e for e in result.errors)

    def test_repeated_region_rejected(self, validator):
        regions = (8, 7, 6, 5, 4, 3, 2, 2)
        assert not validator.is_valid(Layout(regions=regions))

    def test_sanctuary_count_must_match_slots(self, validator):
        assert not validator.is_valid(Layout(regions=DESCENDING, sanctuaries=(1,)))
        assert not validator.is_valid(Layout(regions=ONE_UPGRADE))

    def test_repeated_sanctuary_rejected(self, validator):
        regions = (7, 8, 5, 6, 4, 3, 2, 1)  # two upgrade slots
        assert validator.is_valid(Layout(regions=regions, sanctuaries=(1, 2)))
        assert not validator.is_valid(Layout(regions=regions, sanctuaries=(1, 1)))

    def test_unknown_ids_rejected(self, validator):
        regions = (8, 7, 6, 5, 4, 3, 2, 0)
        result = validator.validate(Layout(regions=regions))
        assert not result.valid
        assert any("unknown region" in e for e in result.errors)

        result = validator.validate(Layout(regions=ONE_UPGRADE, sanctuaries=(7,)))
        assert any("unknown sanctuary" in e for e in result.errors)
