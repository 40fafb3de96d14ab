"""Exception classes for the Faraway scorer."""

from __future__ import annotations


class FarawayError(Exception):
    """Base exception for all Faraway scorer errors."""


class ConfigError(FarawayError):
    """Raised when a configuration value is missing or out of range."""


class CatalogLoadError(FarawayError):
    """Raised when the card catalog file cannot be read or a row is malformed."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class UnknownCardError(FarawayError, KeyError):
    """
    Raised when a card id is not in the catalog.

    Layouts are validated against the catalog before scoring, so hitting
    this during scoring means the parser and catalog disagree.
    """

    def __init__(self, kind: str, card_id: int) -> None:
        self.kind = kind
        self.card_id = card_id
        super().__init__(f"Unknown {kind} card: {card_id}")

    def __str__(self) -> str:
        return self.args[0]


class ParseError(FarawayError):
    """Raised when a frame's detections cannot be turned into a layout."""

    def __init__(self, message: str, identifier: str | None = None) -> None:
        self.identifier = identifier
        super().__init__(message)


class GameStateError(FarawayError):
    """
    Base class for the "not ready" signals of the stabilization window.

    These are expected steady-state conditions. The caller maps them to
    guidance text and polls again later.
    """

    status: str = "not_ready"
    guidance: str = "Please wait"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.guidance)


class NoDataError(GameStateError):
    """No valid layout has been observed yet."""

    status = "no_data"
    guidance = "Point the camera at the cards"


class NotEnoughDataError(GameStateError):
    """Fewer valid layouts than the window size have been observed."""

    status = "not_enough_data"
    guidance = "Make sure all cards are outlined"

    def __init__(self, observed: int, required: int) -> None:
        self.observed = observed
        self.required = required
        super().__init__(f"{observed}/{required} valid frames collected")


class NotConfidentError(GameStateError):
    """The most frequent layout is below the confidence threshold."""

    status = "not_confident"
    guidance = "Make sure all cards are clearly visible"

    def __init__(self, confidence: float, threshold: float) -> None:
        self.confidence = confidence
        self.threshold = threshold
        super().__init__(f"Best layout confidence {confidence:.2f} below {threshold:.2f}")


__all__ = [
    "CatalogLoadError",
    "ConfigError",
    "FarawayError",
    "GameStateError",
    "NoDataError",
    "NotConfidentError",
    "NotEnoughDataError",
    "ParseError",
    "UnknownCardError",
]
