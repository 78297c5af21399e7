"""Tracking instance: the ready/not-ready state machine.

Events tracked before ``ready()`` are buffered in call order.  ``ready()``
merges the ready-time params, flips the instance to ``READY`` and flushes
the buffer; every buffered event is re-rendered against the final
parameters (its own per-event params still win) and keeps the timestamp
captured when it was tracked.  After that, ``track()`` dispatches
synchronously.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from trackready._constants import now_ms
from trackready._redact import redact_params
from trackready.buffer import EventBuffer
from trackready.config import InstanceId, TrackingConfig
from trackready.exceptions import InvalidEventNameError
from trackready.listeners import Listener, ListenerRegistry
from trackready.models import BufferedEvent, Params, TrackingEvent, TrackingState
from trackready.params import ParameterStore, coerce_params

_logger = logging.getLogger(__name__)


class TrackingInstance:
    """An independently configured tracking coordinator.

    Usage::

        tracking = TrackingInstance(TrackingConfig(initial_params={"appVersion": 1}))
        tracking.register_listener(send_to_sink)
        tracking.track("invite.sent")        # buffered
        tracking.ready({"userId": 123})      # flushed with userId merged in
    """

    def __init__(
        self,
        config: TrackingConfig | None = None,
        *,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._config = config if config is not None else TrackingConfig()
        self._clock = clock
        self._params = ParameterStore(self._config.initial_params)
        self._buffer = EventBuffer(self._config.max_buffer_size)
        self._listeners = ListenerRegistry()
        self._state = TrackingState.READY if self._config.ready else TrackingState.NOT_READY
        self._flushing = False

        if self._config.on_tracking_event is not None:
            self._listeners.register(self._config.on_tracking_event)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.id!r}, state={self._state.value}, "
            f"pending={len(self._buffer)}, listeners={len(self._listeners)})"
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def id(self) -> InstanceId:
        return self._config.id

    @property
    def config(self) -> TrackingConfig:
        return self._config

    @property
    def state(self) -> TrackingState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is TrackingState.READY

    @property
    def pending_count(self) -> int:
        return len(self._buffer)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def pending_events(self) -> tuple[BufferedEvent, ...]:
        return self._buffer.snapshot()

    def get_params(self) -> Params:
        """Return the merged initial and ready params (a detached copy)."""
        return self._params.snapshot()

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def register_listener(self, listener: Listener) -> None:
        """Add *listener*; it receives every event delivered from now on.

        Raises
        ------
        InvalidListenerError
            If *listener* is not invocable.
        """
        self._listeners.register(listener)

    def track(self, event_name: str, params: Mapping[str, Any] | None = None) -> TrackingEvent | None:
        """Track *event_name*.

        Returns the dispatched payload when the instance is ready, or
        ``None`` when the event was queued.  A ``track()`` issued by a
        listener while another event is being delivered is queued and
        delivered right after it, so every listener sees the same order.
        """
        if not isinstance(event_name, str) or not event_name:
            raise InvalidEventNameError(
                f"event_name must be a non-empty string, got {event_name!r}",
                event_name=event_name,
            )
        event_params = coerce_params(params)
        timestamp = self._clock()

        if self._state is TrackingState.READY and not self._flushing:
            # Leftovers of an interrupted flush go out first.
            self._flush()
            event = TrackingEvent(
                event_name=event_name,
                timestamp=timestamp,
                params=self._params.compose(event_params),
            )
            self._flushing = True
            try:
                self._dispatch(event)
            finally:
                self._flushing = False
            self._flush()
            return event

        self._buffer.append(
            BufferedEvent(
                event_name=event_name,
                timestamp=timestamp,
                params=event_params,
                captured_params=self._params.compose(event_params),
            )
        )
        _logger.debug("Buffered %r on instance %r (pending=%d)", event_name, self.id, len(self._buffer))
        return None

    def ready(self, params: Mapping[str, Any] | None = None) -> int:
        """Merge *params* and transition to ``READY``, flushing the buffer.

        Calling ``ready`` again still merges *params* and never re-delivers
        an event; it only flushes events left queued by an interrupted
        flush.  Returns the number of buffered events flushed by this call.
        """
        self._params.merge(params)
        if self._state is TrackingState.READY:
            if self._flushing:
                return 0
            _logger.debug("Instance %r already ready; merged params", self.id)
            return self._flush()

        self._state = TrackingState.READY
        flushed = self._flush()
        _logger.debug("Instance %r ready; flushed %d buffered event(s)", self.id, flushed)
        return flushed

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _flush(self) -> int:
        # An event leaves the buffer only once its dispatch has ended, so an
        # interrupted flush keeps everything behind it queued.
        flushed = 0
        self._flushing = True
        try:
            while self._buffer:
                buffered = self._buffer.peek()
                if buffered is None:
                    break
                try:
                    self._dispatch(buffered.to_event(self._params.snapshot()))
                finally:
                    self._buffer.complete(buffered)
                flushed += 1
        finally:
            self._flushing = False
        return flushed

    def _dispatch(self, event: TrackingEvent) -> None:
        if self._config.trace_enabled:
            _logger.debug(
                "Dispatching %r ts=%d params=%s on instance %r",
                event.event_name,
                event.timestamp,
                redact_params(event.params),
                self.id,
            )
        delivered = self._listeners.dispatch(event)
        if delivered < len(self._listeners):
            _logger.debug(
                "Event %r delivered to %d of %d listener(s)",
                event.event_name,
                delivered,
                len(self._listeners),
            )
