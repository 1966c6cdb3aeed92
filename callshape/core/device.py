"""
Shared device handles for call contexts.

A Device wraps a ``torch.device``; ``get_device`` hands out one handle per
device spec so contexts built for the same device share it.
"""

import logging
import threading
from typing import Dict, Optional, Tuple, Union

import torch

from ..config import get_config

logger = logging.getLogger(__name__)


class Device:
    """Shared handle to a compute device.

    Wraps a ``torch.device``. Handles obtained through ``get_device`` are
    shared per process, so every caller asking for ``"cuda:0"`` holds the same
    object. The handle owns no device resources; dropping the last reference
    just releases the Python object.
    """

    def __init__(self, spec: Union[str, torch.device] = "cpu"):
        self._torch_device = torch.device(spec)

    @property
    def type(self) -> str:
        return self._torch_device.type

    @property
    def index(self) -> Optional[int]:
        return self._torch_device.index

    def to_torch_device(self) -> torch.device:
        """Convert to PyTorch device object."""
        return self._torch_device

    def __repr__(self) -> str:
        return f"Device('{self._torch_device}')"

    def __str__(self) -> str:
        return str(self._torch_device)

    def __eq__(self, other) -> bool:
        if isinstance(other, Device):
            return self._torch_device == other._torch_device
        elif isinstance(other, torch.device):
            return self._torch_device == other
        return False

    def __hash__(self) -> int:
        return hash((self.type, self.index))


_devices: Dict[Tuple[str, Optional[int]], Device] = {}
_devices_lock = threading.Lock()


def get_device(spec: Union[str, torch.device, None] = None) -> Device:
    """Get or create the shared handle for ``spec`` (config default if None)."""
    if spec is None:
        spec = get_config().device.default_device
    torch_device = torch.device(spec)
    key = (torch_device.type, torch_device.index)
    with _devices_lock:
        device = _devices.get(key)
        if device is None:
            device = Device(torch_device)
            _devices[key] = device
            logger.debug(f"Created device handle {device}")
    return device


def clear_devices() -> None:
    """Drop the registry's references to all shared handles."""
    with _devices_lock:
        _devices.clear()
