"""Directory of tracking instances keyed by id.

An :class:`InstanceRegistry` is an ordinary object; tests build a fresh
one each.  The module-level helpers (``create_instance``,
``get_instance``, ``register_tracking_listener``) operate on a single
process-wide default registry.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Callable
from typing import Any

from trackready._constants import DEFAULT_INSTANCE_ID, now_ms
from trackready.config import InstanceId, TrackingConfig, validate_instance_id
from trackready.exceptions import InvalidListenerError, TrackingConfigError
from trackready.instance import TrackingInstance
from trackready.listeners import Listener, describe_listener

_logger = logging.getLogger(__name__)


def _resolve_id(instance_id: InstanceId | None) -> InstanceId:
    if instance_id is None:
        return DEFAULT_INSTANCE_ID
    return validate_instance_id(instance_id)


class InstanceRegistry:
    """Maps instance ids to :class:`TrackingInstance` objects.

    The first creation for an id wins: later calls with the same id
    return the existing instance and ignore their config.
    """

    def __init__(self, *, clock: Callable[[], int] = now_ms) -> None:
        self._clock = clock
        self._instances: dict[InstanceId, TrackingInstance] = {}
        self._lock = threading.Lock()

    def get(self, instance_id: InstanceId | None = None) -> TrackingInstance | None:
        """Look up an instance without creating it."""
        return self._instances.get(_resolve_id(instance_id))

    def get_or_create(
        self,
        instance_id: InstanceId | None = None,
        config: TrackingConfig | None = None,
    ) -> TrackingInstance:
        """Return the instance for *instance_id*, creating it from *config* if needed."""
        if instance_id is None and config is not None:
            key = config.id
        else:
            key = _resolve_id(instance_id)
            if config is not None and config.id != key:
                if config.id != DEFAULT_INSTANCE_ID:
                    raise TrackingConfigError(f"instance id {key!r} does not match config id {config.id!r}")
                config = dataclasses.replace(config, id=key)

        instance = self._instances.get(key)
        if instance is not None:
            if config is not None and config is not instance.config:
                _logger.debug("Instance %r already exists; ignoring new config", key)
            return instance

        with self._lock:
            instance = self._instances.get(key)
            if instance is None:
                if config is None:
                    config = TrackingConfig(id=key)
                instance = TrackingInstance(config, clock=self._clock)
                self._instances[key] = instance
                _logger.debug("Created tracking instance %r (ready=%s)", key, instance.is_ready)
        return instance

    def create_instance(self, config: TrackingConfig | None = None, **fields: Any) -> TrackingInstance:
        """Create (or fetch) the instance described by *config*.

        Keyword *fields* build a :class:`TrackingConfig` when *config* is
        not given; passing both is an error.
        """
        if config is not None and fields:
            raise TrackingConfigError("pass either a TrackingConfig or keyword fields, not both")
        if config is None:
            config = TrackingConfig(**fields)
        return self.get_or_create(config.id, config)

    def register_global_listener(self, event_listener: Listener, instance_id: InstanceId | None = None) -> bool:
        """Attach *event_listener* to an instance without holding a reference to it.

        Without *instance_id* the default instance is used (created if
        needed).  An id that names no instance falls back to the default
        instance.  A malformed id or a non-invocable listener is logged and
        nothing is registered.
        Returns ``True`` when the listener was registered.
        """
        if instance_id is None:
            instance = self.get_or_create()
        else:
            try:
                instance = self.get(instance_id)
            except TrackingConfigError:
                _logger.error("Refusing to register listener on malformed instance id %r", instance_id)
                return False
            if instance is None:
                _logger.warning("No tracking instance %r; registering listener on the default instance", instance_id)
                instance = self.get_or_create()

        try:
            instance.register_listener(event_listener)
        except InvalidListenerError:
            _logger.error(
                "Refusing to register non-invocable listener %s on instance %r",
                describe_listener(event_listener),
                instance.id,
            )
            return False
        return True

    def ids(self) -> tuple[InstanceId, ...]:
        return tuple(self._instances)

    def clear(self) -> None:
        """Drop every instance (intended for tests)."""
        with self._lock:
            self._instances.clear()

    def __contains__(self, instance_id: object) -> bool:
        return instance_id in self._instances

    def __len__(self) -> int:
        return len(self._instances)


_default_registry = InstanceRegistry()


def get_default_registry() -> InstanceRegistry:
    return _default_registry


def create_instance(config: TrackingConfig | None = None, **fields: Any) -> TrackingInstance:
    return _default_registry.create_instance(config, **fields)


def get_instance(instance_id: InstanceId | None = None) -> TrackingInstance:
    return _default_registry.get_or_create(instance_id)


def register_tracking_listener(event_listener: Listener, instance_id: InstanceId | None = None) -> bool:
    return _default_registry.register_global_listener(event_listener, instance_id)
