"""
FastAPI Application - REST API for the camera client.

Endpoints:
    GET    /api/v1/health     Health check
    GET    /api/v1/catalog    Catalog summary
    POST   /api/v1/frames     Submit one frame of detections
    GET    /api/v1/state      Poll for the stable, scored tableau
    POST   /api/v1/reset      Forget collected frames (Restart)
    POST   /api/v1/score      Score a hand-entered tableau

Polling Flow:
    1. The detector client POSTs every processed frame to /frames
    2. The UI polls GET /state on a short timer
       - 202 with `guidance` while the window is not ready
       - 200 with the scored tableau once a layout is stable
    3. POST /reset starts a new game

All responses are JSON with explicit Pydantic schemas.

Run with: uvicorn faraway.api.app:create_app --factory
"""

from typing import Optional
import os

from .. import __version__

# Environment configuration
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional ScoringService instance (built from FARAWAY_*
            environment variables if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Request
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from ..config import FarawayConfig
    from ..logging_config import get_logger
    from .service import ScoringService
    from .schemas import (
        # Request models
        FrameRequest,
        ScoreLayoutRequest,
        # Response models
        CatalogResponse,
        ErrorResponse,
        FrameResponse,
        GameStateResponse,
        HealthResponse,
        NotReadyResponse,
        ResetResponse,
        # Enums
        ErrorCode,
    )

    logger = get_logger(__name__)

    scoring_service = service or ScoringService.from_config(FarawayConfig.from_env())

    app = FastAPI(
        title="Faraway Scorer API",
        description="""
Camera-driven scoring for Faraway.

The detector client submits every processed frame; the scorer keeps the
last frames, votes on the tableau, and reports a score once one layout is
stable.

## Not-ready statuses

| Status | Guidance |
|--------|----------|
| `no_data` | Point the camera at the cards |
| `not_enough_data` | Make sure all cards are outlined |
| `not_confident` | Make sure all cards are clearly visible |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request body failed validation",
            status_code=422,
            details={"errors": jsonable_errors(exc.errors())},
        )

    # =========================================================================
    # Endpoints
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="faraway-scorer", version=__version__)

    @app.get("/api/v1/catalog", response_model=CatalogResponse, tags=["Catalog"])
    async def catalog() -> CatalogResponse:
        return scoring_service.catalog_summary()

    @app.post(
        "/api/v1/frames",
        response_model=FrameResponse,
        responses={422: {"model": ErrorResponse}},
        tags=["Frames"],
        summary="Submit one frame of detections",
    )
    def submit_frame(request: FrameRequest) -> FrameResponse:
        """
        Fold a frame into the stabilization window.

        Unreadable or invalid frames are dropped; `outcome` says which.
        """
        return scoring_service.submit_frame(request)

    @app.get(
        "/api/v1/state",
        response_model=GameStateResponse,
        responses={202: {"model": NotReadyResponse}},
        tags=["State"],
        summary="Poll for the stable tableau",
    )
    def get_state():
        result = scoring_service.get_state()
        if isinstance(result, NotReadyResponse):
            return JSONResponse(status_code=202, content=result.model_dump(mode="json"))
        return result

    @app.post("/api/v1/reset", response_model=ResetResponse, tags=["State"])
    def reset() -> ResetResponse:
        logger.info("Reset requested")
        return scoring_service.reset()

    @app.post(
        "/api/v1/score",
        response_model=GameStateResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["State"],
        summary="Score a hand-entered tableau",
    )
    def score_layout(request: ScoreLayoutRequest):
        result = scoring_service.score_layout(request)
        if isinstance(result, ErrorResponse):
            return make_error_response(
                result.error_code, result.error, details=result.details
            )
        return result

    return app


def jsonable_errors(errors) -> list[dict]:
    """Keep only the JSON-safe parts of pydantic error entries."""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": str(error.get("msg", "")),
            "type": str(error.get("type", "")),
        }
        for error in errors
    ]
