"""FIFO buffer for events tracked before readiness."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator

from trackready.models import BufferedEvent

_logger = logging.getLogger(__name__)


class EventBuffer:
    """Ordered, append-only queue of :class:`BufferedEvent`.

    Unbounded by default.  With ``max_size`` set, appending to a full
    buffer evicts the oldest event and logs a warning.
    """

    def __init__(self, max_size: int | None = None) -> None:
        if max_size is not None and max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self._max_size = max_size
        self._events: deque[BufferedEvent] = deque()

    @property
    def max_size(self) -> int | None:
        return self._max_size

    def append(self, event: BufferedEvent) -> None:
        if self._max_size is not None and len(self._events) >= self._max_size:
            dropped = self._events.popleft()
            _logger.warning(
                "Event buffer full (max_size=%d); dropping oldest event %r",
                self._max_size,
                dropped.event_name,
            )
        self._events.append(event)

    def peek(self) -> BufferedEvent | None:
        """Return the oldest event without removing it."""
        return self._events[0] if self._events else None

    def complete(self, event: BufferedEvent) -> None:
        """Remove *event* from the head once it has been dispatched.

        A no-op when the head is no longer *event* (an overflow evicted it
        while it was being dispatched).
        """
        if self._events and self._events[0] is event:
            self._events.popleft()

    def snapshot(self) -> tuple[BufferedEvent, ...]:
        return tuple(self._events)

    def __iter__(self) -> Iterator[BufferedEvent]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._events)

    def __bool__(self) -> bool:
        return bool(self._events)
