"""Logging configuration for the Faraway scorer."""

from __future__ import annotations

import logging
import sys


def setup_logging(level: str = "INFO", format_json: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: Whether to output logs as JSON lines
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    if format_json:
        formatter = logging.Formatter(
            '{"time":"%(asctime)s","level":"%(levelname)s","name":"%(name)s","message":"%(message)s"}'
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(log_level)
    # Replace handlers from an earlier call instead of stacking them
    for existing in list(root.handlers):
        if getattr(existing, "_faraway_handler", False):
            root.removeHandler(existing)
    handler._faraway_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name (usually __name__)
    """
    return logging.getLogger(name)


__all__ = ["get_logger", "setup_logging"]
