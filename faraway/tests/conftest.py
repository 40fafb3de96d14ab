"""
Pytest fixtures for Faraway tests.
"""

import pytest

from ..catalog import CardCatalog, COLUMN_COUNT
from ..engine_core.cards import Card, CardColor, CardEffect, CardKind, CardPoints, Resource
from ..vision.detection import BoundingBox, Detection


def card_row(card_id, kind=0, **columns):
    """
    Build one 24-column card table row as strings.

    columns maps column index names to values, e.g. flat=3, clues=1.
    Unset columns are left empty (read as 0).
    """
    index = {
        "nights": 1, "color": 2, "clues": 3,
        "gives_mineral": 4, "gives_animal": 5, "gives_food": 6,
        "needs_mineral": 7, "needs_animal": 8, "needs_food": 9,
        "per_mineral": 10, "per_animal": 11, "per_food": 12,
        "per_clue": 13, "per_night": 14,
        "per_red": 15, "per_green": 16, "per_blue": 17, "per_yellow": 18,
        "color_group": 19, "flat": 20, "resource_group": 21, "per_gray": 22,
    }
    row = [""] * COLUMN_COUNT
    row[0] = str(card_id)
    row[23] = str(kind)
    for name, value in columns.items():
        row[index[name]] = str(value)
    return row


def flat_region(card_id, points=3, color=CardColor.GRAY):
    return Card(
        card_id=card_id,
        kind=CardKind.REGION,
        effect=CardEffect(colors={color: 1}),
        points=CardPoints(flat=points),
    )


def make_frame(regions, sanctuaries=()):
    """
    Detections laid out like a photographed tableau.

    Regions sit in two rows of four, sanctuaries in a row below them.
    """
    detections = []
    for index, region in enumerate(regions):
        row, col = divmod(index, 4)
        detections.append(
            Detection(
                bounding_box=BoundingBox(x=col * 120, y=row * 160, width=100, height=140),
                identifier=f"R{region}",
                confidence=0.9,
            )
        )
    for index, sanctuary in enumerate(sanctuaries):
        detections.append(
            Detection(
                bounding_box=BoundingBox(x=index * 120, y=400, width=100, height=100),
                identifier=f"S{sanctuary}",
                confidence=0.9,
            )
        )
    # Detector output order is arbitrary
    return list(reversed(detections))


@pytest.fixture
def flat_catalog() -> CardCatalog:
    """
    Eight regions worth a flat 3 points each, plus one sanctuary that
    gives two minerals and scores nothing.
    """
    sanctuary = Card(
        card_id=1,
        kind=CardKind.SANCTUARY,
        effect=CardEffect(resources={Resource.MINERAL: 2}),
    )
    return CardCatalog(
        regions={i: flat_region(i) for i in range(1, 9)},
        sanctuaries={1: sanctuary, 2: Card(card_id=2, kind=CardKind.SANCTUARY)},
    )


@pytest.fixture
def catalog_csv(tmp_path):
    """Card table on disk matching flat_catalog, plus extra scoring columns."""
    rows = [card_row(i, flat=3) for i in range(1, 9)]
    rows.append(card_row(1, kind=1, gives_mineral=2))
    rows.append(card_row(2, kind=1, per_clue=2))
    path = tmp_path / "card_info.csv"
    path.write_text("\n".join(",".join(r) for r in rows) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def frame_factory():
    return make_frame


# Layouts valid against flat_catalog (8 regions in the catalog)
DESCENDING = (8, 7, 6, 5, 4, 3, 2, 1)  # no upgrade slots, no sanctuaries
ONE_UPGRADE = (7, 8, 6, 5, 4, 3, 2, 1)  # 8 > 7 is one upgrade slot


@pytest.fixture
def descending_layout():
    return DESCENDING


@pytest.fixture
def one_upgrade_layout():
    return ONE_UPGRADE
