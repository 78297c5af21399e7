"""Helpers for safe debug logging.

Tracking parameters routinely carry user identity (emails, tokens,
session ids).  ``redact_params`` masks those fields and truncates large
values before a payload is written to a DEBUG log.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "passwd",
        "secret",
        "token",
        "accesstoken",
        "refreshtoken",
        "apikey",
        "authorization",
        "cookie",
        "sessionid",
        "email",
        "phone",
    }
)


def _normalize_key(key: Any) -> str:
    return str(key).lower().replace("_", "").replace("-", "")


def redact_params(value: Any, *, max_string: int = 256, _depth: int = 0) -> Any:
    """Return a copy of *value* with sensitive keys masked."""
    if _depth > 10:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}...<truncated>"
        return value

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        return {
            str(k): "<redacted>"
            if _normalize_key(k) in _SENSITIVE_KEYS
            else redact_params(v, max_string=max_string, _depth=_depth + 1)
            for k, v in value.items()
        }

    if isinstance(value, Sequence):
        return [redact_params(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
