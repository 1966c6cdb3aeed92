"""
Shared enums for the callshape package and the canonical-name registry.

External layers (logging, host bindings) look up enum names through
``enum_name``/``enum_from_name`` instead of relying on Python member names.
"""

import logging
import threading
from enum import Enum
from typing import Dict, Type, TypeVar

from .exceptions import EnumRegistrationError

logger = logging.getLogger(__name__)

E = TypeVar('E', bound=Enum)


class AccessType(Enum):
    """How a kernel argument is accessed."""
    NONE = 0
    READ = 1
    WRITE = 2
    READWRITE = 3


class CallMode(Enum):
    """Which pass of a differentiable computation a dispatch represents."""
    PRIM = 0  # Primal evaluation
    BWDS = 1  # Backward derivative propagation
    FWDS = 2  # Forward derivative propagation


_registry: Dict[type, Dict[Enum, str]] = {}
_registry_lock = threading.Lock()


def register_enum(enum_cls: Type[E], names: Dict[E, str]) -> None:
    """
    Register canonical string names for every member of ``enum_cls``.

    The table must cover each member exactly once. Re-registering an enum
    replaces its previous table.
    """
    members = set(enum_cls)
    keys = set(names)
    if keys != members:
        missing = sorted(m.name for m in members - keys)
        extra = sorted(str(k) for k in keys - members)
        raise EnumRegistrationError(
            f"Name table for {enum_cls.__name__} does not match its members",
            context={'missing': missing, 'extra': extra},
        )
    if len(set(names.values())) != len(names):
        raise EnumRegistrationError(
            f"Duplicate names in table for {enum_cls.__name__}"
        )

    with _registry_lock:
        _registry[enum_cls] = dict(names)
    logger.debug(f"Registered enum {enum_cls.__name__} with {len(names)} names")


def is_registered(enum_cls: type) -> bool:
    return enum_cls in _registry


def enum_name(member: Enum) -> str:
    """Canonical name of a registered enum member."""
    table = _registry.get(type(member))
    if table is None:
        raise EnumRegistrationError(
            f"Enum {type(member).__name__} is not registered"
        )
    return table[member]


def enum_from_name(enum_cls: Type[E], name: str) -> E:
    """Look up a member of ``enum_cls`` by its canonical name."""
    table = _registry.get(enum_cls)
    if table is None:
        raise EnumRegistrationError(f"Enum {enum_cls.__name__} is not registered")
    for member, member_name in table.items():
        if member_name == name:
            return member
    raise EnumRegistrationError(
        f"Unknown {enum_cls.__name__} name '{name}'",
        context={'known': list(table.values())},
    )


register_enum(AccessType, {
    AccessType.NONE: "none",
    AccessType.READ: "read",
    AccessType.WRITE: "write",
    AccessType.READWRITE: "readwrite",
})

register_enum(CallMode, {
    CallMode.PRIM: "prim",
    CallMode.BWDS: "bwds",
    CallMode.FWDS: "fwds",
})
