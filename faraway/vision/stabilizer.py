"""
Stabilization Window - Majority vote over the last W valid frames.

Per-frame detections are noisy: a card is missed, two labels swap, a
hand passes over the table. The window keeps the last W validated and
scored layouts, counts how often each distinct layout occurs, and only
reports a result once one layout holds at least C of the window.

States:
    COLLECTING  fewer than W layouts held
    EVALUATING  W layouts held, none confident enough yet
    LOCKED      a confident layout was returned; frames are ignored
                until reset()

The frame producer (detector thread) and the consumer (UI poller) run
on different threads, so every public method holds the same lock.
"""

from __future__ import annotations
from collections import Counter, deque
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Mapping
import threading

from ..config import DEFAULT_CONFIDENCE_THRESHOLD, DEFAULT_WINDOW_SIZE
from ..engine_core.scoring import compute_score
from ..engine_core.state import GameState, Layout, LayoutKey
from ..exceptions import (
    ConfigError,
    NoDataError,
    NotConfidentError,
    NotEnoughDataError,
    ParseError,
)
from ..logging_config import get_logger
from .detection import Detection
from .parser import LayoutParser
from .validator import LayoutValidator

if TYPE_CHECKING:
    from ..catalog import CardCatalog
    from ..config import FarawayConfig

logger = get_logger(__name__)


class WindowPhase(Enum):
    """Lifecycle of the stabilization window."""
    COLLECTING = "collecting"
    EVALUATING = "evaluating"
    LOCKED = "locked"


class FrameOutcome(Enum):
    """What push() did with a frame."""
    ACCEPTED = "accepted"
    UNPARSEABLE = "unparseable"
    INVALID = "invalid"
    LOCKED = "locked"


@dataclass(frozen=True)
class Consensus:
    """A stable layout: the scored winner and how much of the window it holds."""
    state: GameState
    frequency: int
    confidence: float


@dataclass(frozen=True)
class WindowSnapshot:
    """Read-only view of the window counters, for diagnostics."""
    phase: WindowPhase
    size: int
    capacity: int
    distinct_layouts: int
    best_frequency: int


class StabilizationWindow:
    """
    Bounded majority-vote window over validated layouts.

    Usage:
        window = StabilizationWindow(catalog)

        # detector thread, once per frame
        window.push(detections)

        # UI timer
        try:
            consensus = window.query()
        except GameStateError as e:
            show(e.guidance)
    """

    def __init__(
        self,
        catalog: CardCatalog,
        window_size: int = DEFAULT_WINDOW_SIZE,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
        parser: LayoutParser | None = None,
        validator: LayoutValidator | None = None,
    ):
        if window_size < 1:
            raise ConfigError(f"window_size must be >= 1, got {window_size}")
        if not 0.0 < confidence_threshold <= 1.0:
            raise ConfigError(
                f"confidence_threshold must be in (0, 1], got {confidence_threshold}"
            )
        self.catalog = catalog
        self.window_size = window_size
        self.confidence_threshold = confidence_threshold
        self.parser = parser or LayoutParser()
        self.validator = validator or LayoutValidator(catalog)

        self._lock = threading.Lock()
        self._queue: deque[GameState] = deque()
        self._frequency: Counter[LayoutKey] = Counter()
        # Scored states by identity, so a layout is scored once while it is held
        self._states: dict[LayoutKey, GameState] = {}
        self._locked: Consensus | None = None

    @classmethod
    def from_config(cls, catalog: CardCatalog, config: FarawayConfig) -> StabilizationWindow:
        return cls(
            catalog,
            window_size=config.window_size,
            confidence_threshold=config.confidence_threshold,
        )

    # ------------------------ Public API ------------------------ #

    @property
    def phase(self) -> WindowPhase:
        with self._lock:
            return self._phase()

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._queue)

    def push(self, detections: Iterable[Detection]) -> FrameOutcome:
        """Fold one frame of detections into the window."""
        with self._lock:
            if self._locked is not None:
                return FrameOutcome.LOCKED
            try:
                layout = self.parser.parse(detections)
            except ParseError as e:
                logger.debug("Dropped unparseable frame: %s", e)
                return FrameOutcome.UNPARSEABLE
            return self._admit(layout)

    def push_mappings(self, records: Iterable[Mapping[str, Any]]) -> FrameOutcome:
        """Like push(), for raw detector dictionaries."""
        try:
            detections = [Detection.from_mapping(r) for r in records]
        except ParseError as e:
            logger.debug("Dropped malformed frame: %s", e)
            with self._lock:
                if self._locked is not None:
                    return FrameOutcome.LOCKED
            return FrameOutcome.UNPARSEABLE
        return self.push(detections)

    def push_layout(self, layout: Layout) -> FrameOutcome:
        """Fold an already-parsed layout into the window."""
        with self._lock:
            if self._locked is not None:
                return FrameOutcome.LOCKED
            return self._admit(layout)

    def query(self) -> Consensus:
        """
        Return the stable layout, or raise a GameStateError subclass.

        Raises:
            NoDataError: nothing valid has been seen
            NotEnoughDataError: fewer than window_size valid frames held
            NotConfidentError: the best layout holds less than the threshold
        """
        with self._lock:
            if self._locked is not None:
                return self._locked
            if not self._queue:
                raise NoDataError()
            if len(self._queue) < self.window_size:
                raise NotEnoughDataError(len(self._queue), self.window_size)

            key, frequency = self._best()
            confidence = frequency / self.window_size
            if confidence < self.confidence_threshold:
                raise NotConfidentError(confidence, self.confidence_threshold)

            self._locked = Consensus(
                state=self._states[key],
                frequency=frequency,
                confidence=confidence,
            )
            logger.info(
                "Locked layout %s with confidence %.2f (score %d)",
                key, confidence, self._locked.state.total,
            )
            return self._locked

    def reset(self) -> None:
        """Forget every frame and unlock."""
        with self._lock:
            self._queue.clear()
            self._frequency.clear()
            self._states.clear()
            self._locked = None
        logger.info("Stabilization window reset")

    def snapshot(self) -> WindowSnapshot:
        with self._lock:
            best = self._best()[1] if self._frequency else 0
            return WindowSnapshot(
                phase=self._phase(),
                size=len(self._queue),
                capacity=self.window_size,
                distinct_layouts=len(self._frequency),
                best_frequency=best,
            )

    def frequencies(self) -> dict[LayoutKey, int]:
        with self._lock:
            return dict(self._frequency)

    # ------------------------ Internals ------------------------ #

    def _phase(self) -> WindowPhase:
        if self._locked is not None:
            return WindowPhase.LOCKED
        if len(self._queue) < self.window_size:
            return WindowPhase.COLLECTING
        return WindowPhase.EVALUATING

    def _admit(self, layout: Layout) -> FrameOutcome:
        result = self.validator.validate(layout)
        if not result.valid:
            logger.debug("Dropped invalid layout %s: %s", layout.key, "; ".join(result.errors))
            return FrameOutcome.INVALID

        key = layout.key
        state = self._states.get(key)
        if state is None:
            state = compute_score(layout, self.catalog)
            self._states[key] = state

        self._queue.append(state)
        self._frequency[key] += 1

        if len(self._queue) > self.window_size:
            evicted = self._queue.popleft()
            self._frequency[evicted.key] -= 1
            if self._frequency[evicted.key] <= 0:
                del self._frequency[evicted.key]
                del self._states[evicted.key]
            logger.debug("Evicted layout %s", evicted.key)

        return FrameOutcome.ACCEPTED

    def _best(self) -> tuple[LayoutKey, int]:
        # Highest count wins; ties go to the smallest (regions, sanctuaries)
        return min(self._frequency.items(), key=lambda item: (-item[1], item[0]))
