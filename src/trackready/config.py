"""Instance configuration for trackready."""

from __future__ import annotations

import dataclasses
import json
import os
from collections.abc import Mapping
from typing import Any

from trackready._constants import DEFAULT_INSTANCE_ID, ENV_PREFIX
from trackready.exceptions import TrackingConfigError

InstanceId = str | int


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def validate_instance_id(value: Any) -> InstanceId:
    """Return *value* if it is a usable instance id, else raise."""
    # bool is an int subclass but never a meaningful key
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise TrackingConfigError(f"instance id must be a str or int, got {type(value).__name__}")
    if isinstance(value, str) and not value.strip():
        raise TrackingConfigError("instance id must be non-empty")
    return value


@dataclasses.dataclass(frozen=True)
class TrackingConfig:
    """Tracking instance configuration.

    Parameters
    ----------
    id : str or int
        Registry key. Defaults to :data:`DEFAULT_INSTANCE_ID`.
    on_tracking_event : listener or None
        Registered on the instance as soon as it is created.
    initial_params : Mapping
        Parameters merged into every payload (lowest precedence).
    ready : bool
        Start in the ``READY`` state; ``track`` then dispatches at once.
    max_buffer_size : int or None
        Bound for events buffered before readiness.  ``None`` keeps the
        buffer unbounded; when set, the oldest event is dropped on overflow.
    trace_enabled : bool
        Log every dispatched payload (redacted) at DEBUG level.
    """

    id: InstanceId = DEFAULT_INSTANCE_ID
    on_tracking_event: Any = None
    initial_params: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    ready: bool = False
    max_buffer_size: int | None = None
    trace_enabled: bool = False

    def __post_init__(self) -> None:
        validate_instance_id(self.id)
        if not isinstance(self.initial_params, Mapping):
            raise TrackingConfigError(
                f"initial_params must be a mapping, got {type(self.initial_params).__name__}"
            )
        if self.max_buffer_size is not None and (
            isinstance(self.max_buffer_size, bool)
            or not isinstance(self.max_buffer_size, int)
            or self.max_buffer_size <= 0
        ):
            raise TrackingConfigError(f"max_buffer_size must be a positive int, got {self.max_buffer_size!r}")

    @classmethod
    def from_env(cls, **overrides: Any) -> TrackingConfig:
        """Create configuration from ``TRACKREADY_*`` environment variables.

        Recognized variables: ``TRACKREADY_INSTANCE_ID``,
        ``TRACKREADY_READY``, ``TRACKREADY_INITIAL_PARAMS`` (JSON object),
        ``TRACKREADY_MAX_BUFFER_SIZE`` and ``TRACKREADY_TRACE_ENABLED``.
        Explicit keyword arguments override environment values.

        Raises
        ------
        TrackingConfigError
            If a variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        instance_id = env.get(f"{ENV_PREFIX}INSTANCE_ID")
        if instance_id is not None and "id" not in overrides:
            config_kwargs["id"] = instance_id.strip()

        if "ready" not in overrides:
            config_kwargs["ready"] = _env_bool(env.get(f"{ENV_PREFIX}READY"), False)

        raw_params = env.get(f"{ENV_PREFIX}INITIAL_PARAMS")
        if raw_params is not None and "initial_params" not in overrides:
            try:
                initial_params = json.loads(raw_params)
            except json.JSONDecodeError as exc:
                raise TrackingConfigError(f"{ENV_PREFIX}INITIAL_PARAMS is not valid JSON: {exc}") from exc
            if not isinstance(initial_params, dict):
                raise TrackingConfigError(f"{ENV_PREFIX}INITIAL_PARAMS must be a JSON object")
            config_kwargs["initial_params"] = initial_params

        max_size = env.get(f"{ENV_PREFIX}MAX_BUFFER_SIZE")
        if max_size is not None and "max_buffer_size" not in overrides:
            try:
                config_kwargs["max_buffer_size"] = int(max_size)
            except ValueError as exc:
                raise TrackingConfigError(f"{ENV_PREFIX}MAX_BUFFER_SIZE must be an integer, got {max_size!r}") from exc

        if "trace_enabled" not in overrides:
            config_kwargs["trace_enabled"] = _env_bool(env.get(f"{ENV_PREFIX}TRACE_ENABLED"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
