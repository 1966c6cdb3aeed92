"""
Dispatch-context descriptor: device, call shape and call mode held together.

The context performs no validation. It keeps a strong reference to the device
for as long as the context itself is alive and never mutates the device.
"""

from dataclasses import dataclass
from typing import Any

from .shape import Shape
from .types import CallMode, enum_name


@dataclass(frozen=True)
class CallContext:
    """Immutable (device, call shape, call mode) triple for one dispatch."""
    device: Any
    call_shape: Shape
    call_mode: CallMode

    def __repr__(self) -> str:
        try:
            mode = enum_name(self.call_mode)
        except (KeyError, TypeError):
            mode = repr(self.call_mode)
        return (f"CallContext(device={self.device!r}, "
                f"call_shape={self.call_shape}, call_mode={mode})")
