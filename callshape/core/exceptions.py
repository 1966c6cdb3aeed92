"""
callshape exception hierarchy.

All callshape exceptions inherit from CallShapeException for easy catching.
"""
from typing import Optional


class CallShapeException(Exception):
    """Base exception for all callshape errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self):
        base = f"{self.__class__.__name__}: {self.message}"
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base} (context: {ctx_str})"
        return base


# Shape exceptions
class ShapeError(CallShapeException):
    """Base for shape errors."""
    pass


class InvalidShapeAccess(ShapeError):
    """Content of an absent shape was accessed."""
    pass


class DynamicShapeError(ShapeError):
    """Operation needs a fully resolved shape but a dimension is dynamic."""
    pass


class IndexOutOfRange(ShapeError, IndexError):
    """Dimension index outside the shape's rank."""
    pass


class InvalidDimensionError(ShapeError, ValueError):
    """Dimension value below the dynamic sentinel."""
    pass


# Registry exceptions
class EnumRegistrationError(CallShapeException, KeyError):
    """Enum is not registered, or a name/member is unknown."""
    pass


# Configuration exceptions
class ConfigurationError(CallShapeException):
    """Invalid configuration."""
    pass
