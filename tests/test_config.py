from __future__ import annotations

import pytest

from trackready._constants import DEFAULT_INSTANCE_ID
from trackready.config import TrackingConfig
from trackready.exceptions import TrackingConfigError

_ENV_VARS = (
    "TRACKREADY_INSTANCE_ID",
    "TRACKREADY_READY",
    "TRACKREADY_INITIAL_PARAMS",
    "TRACKREADY_MAX_BUFFER_SIZE",
    "TRACKREADY_TRACE_ENABLED",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = TrackingConfig()

    assert config.id == DEFAULT_INSTANCE_ID
    assert config.on_tracking_event is None
    assert config.initial_params == {}
    assert config.ready is False
    assert config.max_buffer_size is None
    assert config.trace_enabled is False


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACKREADY_INSTANCE_ID", " web ")
    monkeypatch.setenv("TRACKREADY_READY", "yes")
    monkeypatch.setenv("TRACKREADY_INITIAL_PARAMS", '{"appVersion": "2.1"}')
    monkeypatch.setenv("TRACKREADY_MAX_BUFFER_SIZE", "50")
    monkeypatch.setenv("TRACKREADY_TRACE_ENABLED", "1")

    config = TrackingConfig.from_env()

    assert config.id == "web"
    assert config.ready is True
    assert config.initial_params == {"appVersion": "2.1"}
    assert config.max_buffer_size == 50
    assert config.trace_enabled is True


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACKREADY_READY", "true")
    monkeypatch.setenv("TRACKREADY_INSTANCE_ID", "env-id")

    config = TrackingConfig.from_env(ready=False, id="explicit")

    assert config.ready is False
    assert config.id == "explicit"


def test_from_env_unrecognized_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACKREADY_READY", "maybe")

    assert TrackingConfig.from_env().ready is False


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("TRACKREADY_INITIAL_PARAMS", "{not json"),
        ("TRACKREADY_INITIAL_PARAMS", "[1, 2]"),
        ("TRACKREADY_MAX_BUFFER_SIZE", "lots"),
        ("TRACKREADY_MAX_BUFFER_SIZE", "0"),
        ("TRACKREADY_INSTANCE_ID", "   "),
    ],
)
def test_from_env_invalid_values(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(TrackingConfigError):
        TrackingConfig.from_env()


@pytest.mark.parametrize("bad_id", [True, 1.5, None, ""])
def test_invalid_instance_id(bad_id: object) -> None:
    with pytest.raises(TrackingConfigError):
        TrackingConfig(id=bad_id)  # type: ignore[arg-type]


def test_initial_params_must_be_mapping() -> None:
    with pytest.raises(TrackingConfigError):
        TrackingConfig(initial_params=[("a", 1)])  # type: ignore[arg-type]
