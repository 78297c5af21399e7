"""Tracking event payloads and instance state."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field, field_validator

from trackready.models._base import Params, TrackingBaseModel


class TrackingState(StrEnum):
    NOT_READY = "not_ready"
    READY = "ready"


class TrackingEvent(TrackingBaseModel):
    """The payload delivered to listeners.

    ``params`` is the merged snapshot at dispatch time: instance
    parameters overridden by the per-event parameters.
    """

    event_name: str = Field(..., description="Name passed to track()")
    timestamp: int = Field(..., description="Epoch milliseconds captured at track() time")
    params: Params = Field(default_factory=dict)

    @field_validator("event_name")
    @classmethod
    def _require_event_name(cls, value: str) -> str:
        if not value:
            raise ValueError("event_name must be non-empty")
        return value


class BufferedEvent(TrackingBaseModel):
    """An event tracked before the instance became ready."""

    event_name: str
    timestamp: int
    params: Params = Field(
        default_factory=dict,
        description="Per-event params exactly as passed to track()",
    )
    captured_params: Params = Field(
        default_factory=dict,
        description="Merged snapshot at track() time (informational only)",
    )

    def to_event(self, base_params: Params) -> TrackingEvent:
        """Render the payload against the final instance parameters."""
        merged = dict(base_params)
        merged.update(self.params)
        return TrackingEvent(event_name=self.event_name, timestamp=self.timestamp, params=merged)
