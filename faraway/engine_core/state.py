"""
Layout and GameState - the tableau as seen by the camera.

Design principles:
- Immutable: a layout never changes once parsed
- Structural identity: two layouts are the same layout when their region
  and sanctuary sequences are equal, in order
- Scores are attached once, when the GameState is built
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .cards import CardKind

# A complete tableau always has exactly this many regions
REGION_COUNT = 8

LayoutKey = tuple[tuple[int, ...], tuple[int, ...]]


@dataclass(frozen=True)
class Layout:
    """
    Candidate tableau parsed from one frame.

    Ids are kept in reading order (top-to-bottom, left-to-right).
    """
    regions: tuple[int, ...] = ()
    sanctuaries: tuple[int, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "regions", tuple(self.regions))
        object.__setattr__(self, "sanctuaries", tuple(self.sanctuaries))

    @property
    def key(self) -> LayoutKey:
        """Order-sensitive identity used for voting."""
        return (self.regions, self.sanctuaries)

    def labels(self) -> list[str]:
        """Card labels (R12, S3), regions first, each in reading order."""
        return [f"{CardKind.REGION.prefix}{r}" for r in self.regions] + [
            f"{CardKind.SANCTUARY.prefix}{s}" for s in self.sanctuaries
        ]


@dataclass(frozen=True, eq=False)
class GameState:
    """
    A validated, scored layout.

    Region and sanctuary scores are kept apart because the two card
    classes share the same numeric id space.
    """
    layout: Layout
    region_scores: Mapping[int, int] = field(default_factory=dict)
    sanctuary_scores: Mapping[int, int] = field(default_factory=dict)
    total: int = 0

    def __post_init__(self):
        object.__setattr__(self, "region_scores", MappingProxyType(dict(self.region_scores)))
        object.__setattr__(self, "sanctuary_scores", MappingProxyType(dict(self.sanctuary_scores)))

    @property
    def regions(self) -> tuple[int, ...]:
        return self.layout.regions

    @property
    def sanctuaries(self) -> tuple[int, ...]:
        return self.layout.sanctuaries

    @property
    def key(self) -> LayoutKey:
        return self.layout.key

    @property
    def card_scores(self) -> dict[str, int]:
        """Per-card scores keyed by label, regions first in reading order."""
        scores = [self.region_scores[r] for r in self.regions]
        scores += [self.sanctuary_scores[s] for s in self.sanctuaries]
        return dict(zip(self.layout.labels(), scores))

    def __hash__(self):
        return hash(self.key)

    def __eq__(self, other):
        if not isinstance(other, GameState):
            return NotImplemented
        return self.key == other.key
