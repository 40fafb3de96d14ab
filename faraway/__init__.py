"""
Faraway Scorer - Camera-driven scoring for the Faraway board game.

Turns a noisy stream of per-frame card detections into one stable,
validated final tableau and scores it from the card catalog:
- Card catalog loading
- Layout parsing and validation
- Order-sensitive scoring
- Majority-vote stabilization over a sliding window
"""

__version__ = "0.1.0"
