"""
Vision Layer - From per-frame detections to one stable tableau.

Architecture:
    Detections -> LayoutParser -> LayoutValidator -> StabilizationWindow -> Consensus

The detector is NON-AUTHORITATIVE:
- It reports what it sees in each frame, mistakes included
- The validator rejects impossible tableaus
- The window only trusts a layout that dominates recent frames
"""

from .detection import BoundingBox, Detection
from .parser import LayoutParser, decode_label, reading_order
from .validator import LayoutValidator, ValidationResult, count_upgrade_slots
from .stabilizer import (
    Consensus,
    FrameOutcome,
    StabilizationWindow,
    WindowPhase,
    WindowSnapshot,
)

__all__ = [
    "BoundingBox",
    "Detection",
    "LayoutParser",
    "decode_label",
    "reading_order",
    "LayoutValidator",
    "ValidationResult",
    "count_upgrade_slots",
    "Consensus",
    "FrameOutcome",
    "StabilizationWindow",
    "WindowPhase",
    "WindowSnapshot",
]
