from .exceptions import (
    CallShapeException,
    ShapeError,
    InvalidShapeAccess,
    DynamicShapeError,
    IndexOutOfRange,
    InvalidDimensionError,
    EnumRegistrationError,
    ConfigurationError,
)
from .types import AccessType, CallMode, register_enum, is_registered, enum_name, enum_from_name
from .shape import Shape, DYNAMIC_DIM
from .device import Device, get_device, clear_devices
from .call_context import CallContext
