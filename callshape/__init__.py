"""
callshape: shape bookkeeping and dispatch contexts for vectorized kernel calls.

    >>> from callshape import Shape, CallContext, CallMode, get_device
    >>> call_shape = Shape([4]) + Shape([16, 16])
    >>> str(call_shape)
    '[4, 16, 16]'
    >>> ctx = CallContext(get_device("cpu"), call_shape, CallMode.PRIM)
"""

import logging
logger = logging.getLogger(__name__)

__version__ = "0.1.0"

from .core.exceptions import (
    CallShapeException,
    ShapeError,
    InvalidShapeAccess,
    DynamicShapeError,
    IndexOutOfRange,
    InvalidDimensionError,
    EnumRegistrationError,
    ConfigurationError,
)
from .core.types import (
    AccessType,
    CallMode,
    register_enum,
    is_registered,
    enum_name,
    enum_from_name,
)
from .core.shape import Shape, DYNAMIC_DIM
from .core.device import Device, get_device, clear_devices
from .core.call_context import CallContext
from .config import (
    CallShapeConfig,
    LoggingConfig,
    ShapeConfig,
    DeviceConfig,
    LogLevel,
    get_config,
    set_config,
    load_config,
)
from .logging_setup import configure_logging

__all__ = [
    "__version__",
    "CallShapeException",
    "ShapeError",
    "InvalidShapeAccess",
    "DynamicShapeError",
    "IndexOutOfRange",
    "InvalidDimensionError",
    "EnumRegistrationError",
    "ConfigurationError",
    "AccessType",
    "CallMode",
    "register_enum",
    "is_registered",
    "enum_name",
    "enum_from_name",
    "Shape",
    "DYNAMIC_DIM",
    "Device",
    "get_device",
    "clear_devices",
    "CallContext",
    "CallShapeConfig",
    "LoggingConfig",
    "ShapeConfig",
    "DeviceConfig",
    "LogLevel",
    "get_config",
    "set_config",
    "load_config",
    "configure_logging",
]
