"""Layered parameter store.

Three layers feed a payload, later layers winning on key conflict:
initial params (creation time), ready params (``ready()``), and the
per-event params passed to ``track()``.  The store keeps the first two
merged; the third is composed on demand.  Merges are shallow.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from trackready.exceptions import InvalidParamsError
from trackready.models import Params


def coerce_params(params: Mapping[str, Any] | None) -> Params:
    """Validate *params* and return a detached plain dict."""
    if params is None:
        return {}
    if not isinstance(params, Mapping):
        raise InvalidParamsError(f"params must be a mapping, got {type(params).__name__}")
    for key in params:
        if not isinstance(key, str):
            raise InvalidParamsError(f"param keys must be strings, got {key!r}")
    try:
        return copy.deepcopy(dict(params))
    except (TypeError, copy.Error) as exc:
        raise InvalidParamsError(f"param values must be deep-copyable: {exc}") from exc


class ParameterStore:
    """Accumulated key/value context for one tracking instance."""

    __slots__ = ("_data",)

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: Params = coerce_params(initial)

    def merge(self, params: Mapping[str, Any] | None) -> None:
        """Shallow-merge *params* over the current contents."""
        patch = coerce_params(params)
        if patch:
            self._data.update(patch)

    def snapshot(self) -> Params:
        return copy.deepcopy(self._data)

    def compose(self, extra: Mapping[str, Any] | None = None) -> Params:
        """Return the store contents overridden by *extra*, without mutating the store."""
        merged = self.snapshot()
        if extra:
            merged.update(copy.deepcopy(dict(extra)))
        return merged

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data
