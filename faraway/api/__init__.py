"""
API Module - Camera client interface.

Exposes the scorer via REST API. The client:
1. Submits every processed frame of detections
2. Polls for the stable, scored tableau
3. Resets the window to start a new game

All state is in-memory and lives as long as the process.
"""

from .schemas import (
    # Requests
    DetectionIn,
    FrameRequest,
    ScoreLayoutRequest,
    # Responses
    CardScoreInfo,
    CatalogResponse,
    ErrorResponse,
    FrameResponse,
    GameStateResponse,
    HealthResponse,
    NotReadyResponse,
    ResetResponse,
    # Enums
    ErrorCode,
    StateStatus,
)
from .service import ScoringService
from .app import create_app

__all__ = [
    # Requests
    "DetectionIn",
    "FrameRequest",
    "ScoreLayoutRequest",
    # Responses
    "CardScoreInfo",
    "CatalogResponse",
    "ErrorResponse",
    "FrameResponse",
    "GameStateResponse",
    "HealthResponse",
    "NotReadyResponse",
    "ResetResponse",
    # Enums
    "ErrorCode",
    "StateStatus",
    # Service
    "ScoringService",
    "create_app",
]
