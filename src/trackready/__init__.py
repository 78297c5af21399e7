"""trackready - buffer tracked events until the context describing them is ready."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("trackready")
except PackageNotFoundError:
    __version__ = "0+local"
from trackready._constants import DEFAULT_INSTANCE_ID
from trackready.binding import current_tracking, tracking_scope, with_tracking
from trackready.config import TrackingConfig
from trackready.exceptions import (
    InvalidEventNameError,
    InvalidListenerError,
    InvalidParamsError,
    TrackingConfigError,
    TrackingError,
)
from trackready.instance import TrackingInstance
from trackready.listeners import TrackingListener
from trackready.models import BufferedEvent, TrackingEvent, TrackingState
from trackready.registry import (
    InstanceRegistry,
    create_instance,
    get_default_registry,
    get_instance,
    register_tracking_listener,
)

__all__ = [
    "__version__",
    "BufferedEvent",
    "DEFAULT_INSTANCE_ID",
    "InstanceRegistry",
    "InvalidEventNameError",
    "InvalidListenerError",
    "InvalidParamsError",
    "TrackingConfig",
    "TrackingConfigError",
    "TrackingError",
    "TrackingEvent",
    "TrackingInstance",
    "TrackingListener",
    "TrackingState",
    "create_instance",
    "current_tracking",
    "get_default_registry",
    "get_instance",
    "register_tracking_listener",
    "tracking_scope",
    "with_tracking",
]
