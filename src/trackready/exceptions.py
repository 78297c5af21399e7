"""Custom exception hierarchy for trackready."""

from __future__ import annotations


class TrackingError(Exception):
    """Base exception for all trackready errors."""


class TrackingConfigError(TrackingError):
    """Invalid or inconsistent configuration."""


class InvalidEventNameError(TrackingError):
    """``track`` was called with an empty or non-string event name."""

    def __init__(self, message: str, *, event_name: object = None) -> None:
        self.event_name = event_name
        super().__init__(message)


class InvalidParamsError(TrackingError):
    """Parameters are not a mapping with string keys."""


class InvalidListenerError(TrackingError):
    """A listener is neither callable nor implements ``on_tracking_event``.

    Raised at registration time so a broken entry never reaches the
    listener registry.
    """
