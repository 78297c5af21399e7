from __future__ import annotations

import pytest
from pydantic import ValidationError

from trackready.models import BufferedEvent, TrackingEvent, TrackingState


def test_tracking_event_to_dict_uses_camel_case() -> None:
    event = TrackingEvent(event_name="user.login", timestamp=1, params={"userId": 1})

    assert event.to_dict() == {"eventName": "user.login", "timestamp": 1, "params": {"userId": 1}}


def test_tracking_event_accepts_alias_input() -> None:
    event = TrackingEvent.model_validate({"eventName": "x", "timestamp": 2})

    assert event.event_name == "x"
    assert event.params == {}


def test_tracking_event_is_frozen() -> None:
    event = TrackingEvent(event_name="x", timestamp=1)

    with pytest.raises(ValidationError):
        event.event_name = "y"  # type: ignore[misc]


def test_tracking_event_rejects_empty_name() -> None:
    with pytest.raises(ValidationError):
        TrackingEvent(event_name="", timestamp=1)


def test_buffered_event_renders_against_base_params() -> None:
    buffered = BufferedEvent(event_name="x", timestamp=5, params={"a": "event"})

    event = buffered.to_event({"a": "base", "b": "base"})

    assert event == TrackingEvent(event_name="x", timestamp=5, params={"a": "event", "b": "base"})


def test_tracking_state_values() -> None:
    assert TrackingState("ready") is TrackingState.READY
    assert TrackingState.NOT_READY.value == "not_ready"
