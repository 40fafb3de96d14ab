"""
Engine Core - Card rules, tableau state and scoring.

The engine:
1. Models cards (requirements, effects, points)
2. Accumulates the tableau into a CardState
3. Scores a validated Layout into a GameState
"""

from .cards import (
    Card,
    CardColor,
    CardEffect,
    CardKind,
    CardPoints,
    CardState,
    Resource,
)
from .state import Layout, GameState, LayoutKey, REGION_COUNT
from .scoring import ScoringEngine, compute_score

__all__ = [
    "Card",
    "CardColor",
    "CardEffect",
    "CardKind",
    "CardPoints",
    "CardState",
    "Resource",
    "Layout",
    "GameState",
    "LayoutKey",
    "REGION_COUNT",
    "ScoringEngine",
    "compute_score",
]
