"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between the camera client and the scorer.

Error Codes:
- INVALID_FRAME: The frame body could not be read as detections
- INVALID_LAYOUT: A submitted layout breaks the tableau rules
- VALIDATION_ERROR: Request body failed schema validation
- INTERNAL_ERROR: Unexpected server-side failure
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class WindowPhase(str, Enum):
    """Stabilization window phases."""
    COLLECTING = "collecting"
    EVALUATING = "evaluating"
    LOCKED = "locked"


class FrameOutcome(str, Enum):
    """What happened to a submitted frame."""
    ACCEPTED = "accepted"
    UNPARSEABLE = "unparseable"
    INVALID = "invalid"
    LOCKED = "locked"


class StateStatus(str, Enum):
    """Result of polling for the stable tableau."""
    READY = "ready"
    NO_DATA = "no_data"
    NOT_ENOUGH_DATA = "not_enough_data"
    NOT_CONFIDENT = "not_confident"


class CardKind(str, Enum):
    REGION = "region"
    SANCTUARY = "sanctuary"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_FRAME = "INVALID_FRAME"
    INVALID_LAYOUT = "INVALID_LAYOUT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Requests
# =============================================================================

class DetectionIn(BaseModel):
    """One detector box for one card."""
    identifier: str = Field(..., description="Card label, e.g. R12 or S3", examples=["R12"])
    bbox: list[float] = Field(
        ..., min_length=4, max_length=4, description="x, y, width, height in frame pixels"
    )
    confidence: float = Field(1.0, ge=0.0, le=1.0)


class FrameRequest(BaseModel):
    """All detections of one processed frame."""
    detections: list[DetectionIn] = Field(default_factory=list)


class ScoreLayoutRequest(BaseModel):
    """A tableau entered by hand, in placement order."""
    regions: list[int] = Field(..., description="Region ids in placement order")
    sanctuaries: list[int] = Field(default_factory=list, description="Sanctuary ids")


# =============================================================================
# Responses
# =============================================================================

class CardScoreInfo(BaseModel):
    """Score of one card in the tableau."""
    label: str
    kind: CardKind
    card_id: int
    score: int

    model_config = {"from_attributes": True}


class GameStateResponse(BaseModel):
    """
    The stable, scored tableau.

    cards lists regions in placement order followed by sanctuaries.
    """
    status: StateStatus = StateStatus.READY
    regions: list[int]
    sanctuaries: list[int]
    cards: list[CardScoreInfo] = Field(default_factory=list)
    total_score: int
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)
    frequency: Optional[int] = None
    api_version: str = "v1"


class NotReadyResponse(BaseModel):
    """Polling result while no stable tableau exists yet."""
    status: StateStatus
    guidance: str = Field(..., description="Text to show the player")
    detail: Optional[str] = None
    collected: int = 0
    required: int = 0
    confidence: Optional[float] = None
    api_version: str = "v1"


class FrameResponse(BaseModel):
    """Response after submitting a frame."""
    outcome: FrameOutcome
    phase: WindowPhase
    collected: int
    required: int
    api_version: str = "v1"


class ResetResponse(BaseModel):
    """Response after resetting the window."""
    success: bool
    phase: WindowPhase


class CatalogResponse(BaseModel):
    """Catalog summary."""
    region_count: int
    sanctuary_count: int


class ErrorResponse(BaseModel):
    """Structured error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
