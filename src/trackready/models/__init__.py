"""Pydantic models for tracking payloads."""

from trackready.models._base import Params, TrackingBaseModel
from trackready.models.events import BufferedEvent, TrackingEvent, TrackingState

__all__ = [
    "BufferedEvent",
    "Params",
    "TrackingBaseModel",
    "TrackingEvent",
    "TrackingState",
]
