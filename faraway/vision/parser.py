"""
Layout Parser - Turns one frame of detections into a candidate Layout.

Parsing is all-or-nothing: one bad label discards the whole frame, since
a tableau with a card missing would just be a different (wrong) layout.
"""

from __future__ import annotations
from functools import cmp_to_key
from typing import Any, Iterable, Mapping
import re

from ..engine_core.cards import CardKind
from ..engine_core.state import Layout
from ..exceptions import ParseError
from .detection import Detection

_ID_PATTERN = re.compile(r"[0-9]+")


def reading_order(a: Detection, b: Detection) -> int:
    """
    Compare two detections in reading order.

    A card whose bottom edge is above the other's vertical midpoint is on
    an earlier row; otherwise both are on the same row and the one more
    to the left comes first.
    """
    box_a, box_b = a.bounding_box, b.bounding_box
    if box_a.max_y < box_b.mid_y:
        return -1
    if box_b.max_y < box_a.mid_y:
        return 1
    if box_a.mid_x < box_b.mid_x:
        return -1
    if box_b.mid_x < box_a.mid_x:
        return 1
    return 0


def decode_label(identifier: str) -> tuple[CardKind, int]:
    """
    Decode a detector label into (kind, id).

    "R" selects a region; any other leading character is a sanctuary.
    """
    if len(identifier) < 2:
        raise ParseError(f"label too short: {identifier!r}", identifier=identifier)

    kind = CardKind.REGION if identifier[0] == "R" else CardKind.SANCTUARY
    digits = identifier[1:]
    if not _ID_PATTERN.fullmatch(digits):
        raise ParseError(f"label has no numeric id: {identifier!r}", identifier=identifier)
    return kind, int(digits)


class LayoutParser:
    """
    Parses detections into a Layout.

    Usage:
        parser = LayoutParser()
        layout = parser.parse(detections)   # raises ParseError
    """

    def sort(self, detections: Iterable[Detection]) -> list[Detection]:
        return sorted(detections, key=cmp_to_key(reading_order))

    def parse(self, detections: Iterable[Detection]) -> Layout:
        regions: list[int] = []
        sanctuaries: list[int] = []

        for detection in self.sort(detections):
            kind, card_id = decode_label(detection.identifier)
            if kind is CardKind.REGION:
                regions.append(card_id)
            else:
                sanctuaries.append(card_id)

        return Layout(regions=tuple(regions), sanctuaries=tuple(sanctuaries))

    def parse_mappings(self, records: Iterable[Mapping[str, Any]]) -> Layout:
        """Parse raw detector dictionaries (see faraway.vision.detection)."""
        return self.parse([Detection.from_mapping(r) for r in records])
