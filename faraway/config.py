"""
Runtime configuration.

Defaults match the stabilization behaviour of the scorer; every value can
be overridden through FARAWAY_* environment variables.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os

from .exceptions import ConfigError

DEFAULT_WINDOW_SIZE = 30
DEFAULT_CONFIDENCE_THRESHOLD = 0.7

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class FarawayConfig:
    """
    Settings for the catalog, the stabilization window and logging.
    """
    # CSV card table (see faraway.catalog.loader for the column layout)
    catalog_path: Path | None = None

    # Number of valid frames held by the stabilization window
    window_size: int = DEFAULT_WINDOW_SIZE

    # Minimum share of the window the winning layout must hold (inclusive)
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD

    log_level: str = "INFO"
    log_json: bool = False

    def __post_init__(self):
        if self.window_size < 1:
            raise ConfigError(f"window_size must be >= 1, got {self.window_size}")
        if not 0.0 < self.confidence_threshold <= 1.0:
            raise ConfigError(
                f"confidence_threshold must be in (0, 1], got {self.confidence_threshold}"
            )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> FarawayConfig:
        """Build a config from FARAWAY_* environment variables."""
        env = os.environ if environ is None else environ

        catalog_path = env.get("FARAWAY_CATALOG_PATH")
        return cls(
            catalog_path=Path(catalog_path) if catalog_path else None,
            window_size=_parse_int(env, "FARAWAY_WINDOW_SIZE", DEFAULT_WINDOW_SIZE),
            confidence_threshold=_parse_float(
                env, "FARAWAY_CONFIDENCE", DEFAULT_CONFIDENCE_THRESHOLD
            ),
            log_level=env.get("FARAWAY_LOG_LEVEL", "INFO"),
            log_json=env.get("FARAWAY_LOG_JSON", "").lower() in _TRUE_VALUES,
        )


def _parse_int(env, key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None


def _parse_float(env, key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from None
