"""Internal constants shared across the library."""

from __future__ import annotations

import time

# Registry key used whenever an instance id is omitted.
DEFAULT_INSTANCE_ID = "default"

ENV_PREFIX = "TRACKREADY_"


def now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)
