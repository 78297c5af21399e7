"""Listener capability and per-instance listener registry."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from trackready.exceptions import InvalidListenerError
from trackready.models import TrackingEvent

_logger = logging.getLogger(__name__)

ListenerCallback = Callable[[TrackingEvent], None]


@runtime_checkable
class TrackingListener(Protocol):
    """Object-style listener; an alternative to a plain callable."""

    def on_tracking_event(self, event: TrackingEvent) -> None: ...


Listener = ListenerCallback | TrackingListener


def as_callback(listener: Any) -> ListenerCallback:
    """Resolve *listener* to a callable taking one :class:`TrackingEvent`.

    Objects exposing a callable ``on_tracking_event`` are preferred over
    ``__call__`` so a listener class can be callable for other reasons.
    """
    method = getattr(listener, "on_tracking_event", None)
    if callable(method):
        return method
    if callable(listener):
        return listener
    raise InvalidListenerError(
        f"listener must be callable or implement on_tracking_event(), got {type(listener).__name__}"
    )


def describe_listener(listener: Any) -> str:
    name = getattr(listener, "__qualname__", None) or getattr(listener, "__name__", None)
    return name if isinstance(name, str) else type(listener).__name__


@dataclass(frozen=True, slots=True)
class _Entry:
    listener: Any
    callback: ListenerCallback


class ListenerRegistry:
    """Ordered, append-only set of listeners for one instance."""

    def __init__(self) -> None:
        self._entries: list[_Entry] = []

    def register(self, listener: Listener) -> None:
        """Append *listener*. The same listener may be registered twice."""
        self._entries.append(_Entry(listener=listener, callback=as_callback(listener)))

    def dispatch(self, event: TrackingEvent) -> int:
        """Deliver *event* to every listener in registration order.

        Each listener receives its own copy of the payload.  A listener
        that raises is logged and skipped; delivery continues with the
        next one.  Returns the number of successful deliveries.
        """
        delivered = 0
        for entry in tuple(self._entries):
            try:
                entry.callback(event.model_copy(deep=True))
            except Exception:
                _logger.warning(
                    "Tracking listener %s failed for event %r",
                    describe_listener(entry.listener),
                    event.event_name,
                    exc_info=True,
                )
                continue
            delivered += 1
        return delivered

    @property
    def listeners(self) -> tuple[Any, ...]:
        return tuple(entry.listener for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)
