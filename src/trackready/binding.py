"""Scoping and injection adapters around the core.

``tracking_scope`` makes an instance the nearest enclosing one for a
block of code (nested scopes and tasks spawned inside inherit it through
``contextvars``); ``current_tracking`` resolves it.  ``with_tracking``
injects an instance into a function as a keyword argument.
"""

from __future__ import annotations

import contextlib
import contextvars
import functools
import inspect
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from trackready.config import InstanceId
from trackready.instance import TrackingInstance
from trackready.listeners import Listener
from trackready.registry import InstanceRegistry, get_default_registry

F = TypeVar("F", bound=Callable[..., Any])

_current: contextvars.ContextVar[TrackingInstance | None] = contextvars.ContextVar(
    "trackready_current_instance", default=None
)


@contextlib.contextmanager
def tracking_scope(instance: TrackingInstance) -> Iterator[TrackingInstance]:
    """Make *instance* the current instance inside the ``with`` block."""
    token = _current.set(instance)
    try:
        yield instance
    finally:
        _current.reset(token)


def current_tracking(registry: InstanceRegistry | None = None) -> TrackingInstance:
    """Return the innermost scoped instance, or the registry's default instance."""
    instance = _current.get()
    if instance is not None:
        return instance
    if registry is None:
        registry = get_default_registry()
    return registry.get_or_create()


def with_tracking(
    instance_id: InstanceId | None = None,
    *,
    listener: Listener | None = None,
    registry: InstanceRegistry | None = None,
    param: str = "tracking",
) -> Callable[[F], F]:
    """Decorator injecting a tracking instance as keyword argument *param*.

    The instance is looked up (or created) by *instance_id* when the
    decorator is applied.  *listener*, if given, is registered on it once
    at that point.  The wrapped call runs inside :func:`tracking_scope`.
    Coroutine functions are supported.
    """

    def decorator(func: F) -> F:
        target = registry if registry is not None else get_default_registry()
        instance = target.get_or_create(instance_id)
        if listener is not None:
            instance.register_listener(listener)

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                kwargs.setdefault(param, instance)
                with tracking_scope(kwargs[param]):
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            kwargs.setdefault(param, instance)
            with tracking_scope(kwargs[param]):
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
