"""
API Service - Business logic layer between the API and the engine.

The service:
1. Owns the card catalog and the single stabilization window
2. Feeds detector frames into the window
3. Turns window results into presentation responses
4. Scores hand-entered layouts

This layer is framework-agnostic (used by FastAPI and the CLI).
"""

from __future__ import annotations
from typing import Any, Iterable, Mapping

from .schemas import (
    CardKind,
    CardScoreInfo,
    CatalogResponse,
    ErrorCode,
    ErrorResponse,
    FrameOutcome,
    FrameRequest,
    FrameResponse,
    GameStateResponse,
    NotReadyResponse,
    ResetResponse,
    ScoreLayoutRequest,
    StateStatus,
    WindowPhase,
)
from ..catalog import CardCatalog
from ..config import FarawayConfig
from ..engine_core.scoring import compute_score
from ..engine_core.state import GameState, Layout
from ..exceptions import ConfigError, GameStateError, NotConfidentError
from ..vision.stabilizer import Consensus, StabilizationWindow


class ScoringService:
    """
    Main service for the camera client.

    Usage:
        service = ScoringService.from_config(FarawayConfig.from_env())

        # Detector side, once per frame
        service.submit_frame(request)

        # UI side, on a timer
        response = service.get_state()
    """

    def __init__(
        self,
        catalog: CardCatalog,
        window: StabilizationWindow | None = None,
    ):
        self.catalog = catalog
        self.window = window or StabilizationWindow(catalog)
        self.validator = self.window.validator

    @classmethod
    def from_config(cls, config: FarawayConfig) -> ScoringService:
        if config.catalog_path is None:
            raise ConfigError("FARAWAY_CATALOG_PATH is not set")
        catalog = CardCatalog.from_csv(config.catalog_path)
        return cls(catalog, StabilizationWindow.from_config(catalog, config))

    def submit_frame(self, request: FrameRequest) -> FrameResponse:
        records = [d.model_dump() for d in request.detections]
        return self.submit_detections(records)

    def submit_detections(self, records: Iterable[Mapping[str, Any]]) -> FrameResponse:
        outcome = self.window.push_mappings(records)
        snapshot = self.window.snapshot()
        return FrameResponse(
            outcome=FrameOutcome(outcome.value),
            phase=WindowPhase(snapshot.phase.value),
            collected=snapshot.size,
            required=snapshot.capacity,
        )

    def get_state(self) -> GameStateResponse | NotReadyResponse:
        """Poll the window for the stable tableau."""
        try:
            consensus = self.window.query()
        except GameStateError as e:
            return self._not_ready(e)
        return self._consensus_response(consensus)

    def reset(self) -> ResetResponse:
        self.window.reset()
        return ResetResponse(success=True, phase=WindowPhase(self.window.phase.value))

    def catalog_summary(self) -> CatalogResponse:
        return CatalogResponse(
            region_count=self.catalog.region_count,
            sanctuary_count=self.catalog.sanctuary_count,
        )

    def score_layout(self, request: ScoreLayoutRequest) -> GameStateResponse | ErrorResponse:
        """Validate and score a tableau entered by hand."""
        layout = Layout(regions=tuple(request.regions), sanctuaries=tuple(request.sanctuaries))
        result = self.validator.validate(layout)
        if not result.valid:
            return ErrorResponse(
                error="Layout is not a valid tableau",
                error_code=ErrorCode.INVALID_LAYOUT,
                details={"errors": result.errors},
            )
        return game_state_response(compute_score(layout, self.catalog))

    def _consensus_response(self, consensus: Consensus) -> GameStateResponse:
        return game_state_response(
            consensus.state,
            confidence=consensus.confidence,
            frequency=consensus.frequency,
        )

    def _not_ready(self, error: GameStateError) -> NotReadyResponse:
        snapshot = self.window.snapshot()
        return NotReadyResponse(
            status=StateStatus(error.status),
            guidance=error.guidance,
            detail=str(error),
            collected=snapshot.size,
            required=snapshot.capacity,
            confidence=error.confidence if isinstance(error, NotConfidentError) else None,
        )


def game_state_response(
    state: GameState,
    confidence: float | None = None,
    frequency: int | None = None,
) -> GameStateResponse:
    entries = [(CardKind.REGION, r, state.region_scores[r]) for r in state.regions]
    entries += [(CardKind.SANCTUARY, s, state.sanctuary_scores[s]) for s in state.sanctuaries]
    cards = [
        CardScoreInfo(label=label, kind=kind, card_id=card_id, score=score)
        for label, (kind, card_id, score) in zip(state.layout.labels(), entries)
    ]
    return GameStateResponse(
        regions=list(state.regions),
        sanctuaries=list(state.sanctuaries),
        cards=cards,
        total_score=state.total,
        confidence=confidence,
        frequency=frequency,
    )


__all__ = ["ScoringService", "game_state_response"]
