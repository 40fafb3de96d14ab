"""
Catalog Loader - Reads the card table into Card definitions.

The card table is a CSV file with one card per row and 24 integer
columns (0-based); empty cells count as 0:

     0  id
     1  nights
     2  color index (0 gray, 1 red, 2 green, 3 blue, 4 yellow)
     3  clues
   4-6  resources provided (mineral, animal, food)
   7-9  resources required (mineral, animal, food)
 10-12  points per resource (mineral, animal, food)
    13  points per clue
    14  points per night
 15-18  points per color (red, green, blue, yellow)
    19  color group bonus
    20  flat points
    21  resource group bonus
    22  points per gray
    23  class (0 region, 1 sanctuary)

Rows with at most one cell (blank lines) are skipped, as is a leading
header row whose first cell is "id".
"""

from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator
import csv

from ..engine_core.cards import (
    Card,
    CardColor,
    CardEffect,
    CardKind,
    CardPoints,
    Resource,
)
from ..exceptions import CatalogLoadError
from ..logging_config import get_logger

logger = get_logger(__name__)

COLUMN_COUNT = 24

COLOR_BY_INDEX = {
    0: CardColor.GRAY,
    1: CardColor.RED,
    2: CardColor.GREEN,
    3: CardColor.BLUE,
    4: CardColor.YELLOW,
}

KIND_BY_FLAG = {
    0: CardKind.REGION,
    1: CardKind.SANCTUARY,
}

# Resource column order used by every resource triple in the table
RESOURCE_COLUMNS = (Resource.MINERAL, Resource.ANIMAL, Resource.FOOD)


def parse_row(cells: list[str], line: int | None = None) -> Card:
    """
    Parse one table row into a Card.

    Raises CatalogLoadError if the row is too short, a cell is not an
    integer, or the color/class codes are out of range.
    """
    if len(cells) < COLUMN_COUNT:
        raise CatalogLoadError(
            f"expected {COLUMN_COUNT} columns, got {len(cells)}", line=line
        )

    cols: list[int] = []
    for index, cell in enumerate(cells[:COLUMN_COUNT]):
        cell = cell.strip()
        if cell == "":
            cols.append(0)
            continue
        try:
            cols.append(int(cell))
        except ValueError:
            raise CatalogLoadError(
                f"column {index} is not an integer: {cell!r}", line=line
            ) from None

    if cols[0] < 0:
        raise CatalogLoadError(f"negative card id {cols[0]}", line=line)
    color = COLOR_BY_INDEX.get(cols[2])
    if color is None:
        raise CatalogLoadError(f"unknown color index {cols[2]}", line=line)
    kind = KIND_BY_FLAG.get(cols[23])
    if kind is None:
        raise CatalogLoadError(f"unknown class flag {cols[23]}", line=line)

    effect = CardEffect(
        colors={color: 1},
        resources=dict(zip(RESOURCE_COLUMNS, cols[4:7])),
        clues=cols[3],
        nights=cols[1],
    )
    points = CardPoints(
        per_color={
            CardColor.GRAY: cols[22],
            CardColor.RED: cols[15],
            CardColor.GREEN: cols[16],
            CardColor.BLUE: cols[17],
            CardColor.YELLOW: cols[18],
        },
        color_group=cols[19],
        per_resource=dict(zip(RESOURCE_COLUMNS, cols[10:13])),
        resource_group=cols[21],
        per_clue=cols[13],
        per_night=cols[14],
        flat=cols[20],
    )
    return Card(
        card_id=cols[0],
        kind=kind,
        requirements=dict(zip(RESOURCE_COLUMNS, cols[7:10])),
        effect=effect,
        points=points,
    )


def iter_cards(lines: Iterable[str]) -> Iterator[Card]:
    """Yield a Card for every data row of a CSV stream."""
    for line_number, cells in enumerate(csv.reader(lines), start=1):
        if len(cells) <= 1:
            continue
        if line_number == 1 and cells[0].strip().lower() == "id":
            continue
        yield parse_row(cells, line=line_number)


def load_cards(path: str | Path) -> list[Card]:
    """
    Load every card from a CSV card table.

    Raises CatalogLoadError if the file is missing or any row is malformed.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            cards = list(iter_cards(f))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise CatalogLoadError(f"cannot read card table {path}: {e}") from e

    logger.info("Loaded %d cards from %s", len(cards), path)
    return cards
