"""
Detections - Data structures for detector output.

A Detection is what the external card detector reports for one card in
one frame: where it is, which card it thinks it is, and how sure it is.
Coordinates are frame pixels with y growing downwards.

The detector contract for plain mappings (keys are case-insensitive):
    - identifier OR label: str, e.g. "R12" or "S3"
    - bbox OR bounding_box: [x, y, width, height]
    - confidence: float (0..1), optional
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping

from ..exceptions import ParseError


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle in frame pixel coordinates."""
    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2


@dataclass(frozen=True)
class Detection:
    """One detected card in one frame."""
    bounding_box: BoundingBox
    identifier: str
    # Carried through from the detector; filtering on it is the detector's job
    confidence: float = 1.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Detection:
        """
        Build a Detection from a detector dictionary.

        Raises ParseError if the identifier or box is missing or malformed.
        """
        if not isinstance(data, Mapping):
            raise ParseError(f"detection is not an object: {data!r}")
        lowered = {str(k).lower(): v for k, v in data.items()}

        identifier = lowered.get("identifier", lowered.get("label"))
        if not isinstance(identifier, str):
            raise ParseError(f"detection has no identifier: {dict(data)!r}")

        box = lowered.get("bbox", lowered.get("bounding_box"))
        if isinstance(box, Mapping):
            box = [box.get("x"), box.get("y"), box.get("width"), box.get("height")]
        try:
            x, y, width, height = (float(v) for v in box)
        except (TypeError, ValueError):
            raise ParseError(
                f"detection {identifier!r} has a malformed bounding box: {box!r}",
                identifier=identifier,
            ) from None

        try:
            confidence = float(lowered.get("confidence", 1.0))
        except (TypeError, ValueError):
            raise ParseError(
                f"detection {identifier!r} has a malformed confidence",
                identifier=identifier,
            ) from None

        return cls(
            bounding_box=BoundingBox(x, y, width, height),
            identifier=identifier,
            confidence=confidence,
        )
