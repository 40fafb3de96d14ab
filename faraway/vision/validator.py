"""
Layout Validator - Structural checks a layout must pass before voting.

Validates that:
1. Exactly 8 regions are present
2. Region ids are distinct
3. The number of sanctuaries matches the number of upgrade slots
4. Sanctuary ids are distinct
5. Every id exists in the catalog for its class

Upgrade slots: scanning regions in detected order, starting from the
number of region cards in the catalog, every region whose id is greater
than the one before it is an upgrade slot and carries one sanctuary.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..engine_core.state import Layout, REGION_COUNT

if TYPE_CHECKING:
    from ..catalog import CardCatalog


@dataclass
class ValidationResult:
    """Result of validating one layout."""
    valid: bool
    errors: list[str] = field(default_factory=list)


def count_upgrade_slots(regions: tuple[int, ...], baseline: int) -> int:
    slots = 0
    previous = baseline
    for region in regions:
        if region > previous:
            slots += 1
        previous = region
    return slots


def _duplicates(ids: tuple[int, ...]) -> list[int]:
    seen: set[int] = set()
    repeated: list[int] = []
    for card_id in ids:
        if card_id in seen and card_id not in repeated:
            repeated.append(card_id)
        seen.add(card_id)
    return repeated


class LayoutValidator:
    """Validates candidate layouts against the rules and the catalog."""

    def __init__(self, catalog: CardCatalog):
        self.catalog = catalog

    def validate(self, layout: Layout) -> ValidationResult:
        errors: list[str] = []

        if len(layout.regions) != REGION_COUNT:
            errors.append(
                f"expected {REGION_COUNT} regions, found {len(layout.regions)}"
            )

        repeated = _duplicates(layout.regions)
        if repeated:
            errors.append(f"repeated region ids: {repeated}")

        slots = count_upgrade_slots(layout.regions, self.catalog.region_count)
        if slots != len(layout.sanctuaries):
            errors.append(
                f"{slots} upgrade slot(s) but {len(layout.sanctuaries)} sanctuaries"
            )

        repeated = _duplicates(layout.sanctuaries)
        if repeated:
            errors.append(f"repeated sanctuary ids: {repeated}")

        unknown = [r for r in layout.regions if not self.catalog.has_region(r)]
        if unknown:
            errors.append(f"unknown region ids: {unknown}")
        unknown = [s for s in layout.sanctuaries if not self.catalog.has_sanctuary(s)]
        if unknown:
            errors.append(f"unknown sanctuary ids: {unknown}")

        return ValidationResult(valid=not errors, errors=errors)

    def is_valid(self, layout: Layout) -> bool:
        return self.validate(layout).valid
