"""
Shape value type for call-shape bookkeeping.

A Shape is either *absent* (no dimension data at all) or *present* with an
ordered, possibly empty, list of extents. An extent of ``DYNAMIC_DIM`` (-1)
marks a dimension whose size is not resolved yet.

Absent and present-but-empty are different values::

    Shape() != Shape([])

Content operations raise InvalidShapeAccess on an absent shape. Equality and
string conversion are total.
"""

import logging
import math
import operator
from typing import Iterable, Iterator, List, Optional, Tuple, Union

import torch

from ..config import get_config
from .exceptions import (
    DynamicShapeError,
    IndexOutOfRange,
    InvalidDimensionError,
    InvalidShapeAccess,
)

logger = logging.getLogger(__name__)

DYNAMIC_DIM = -1

ShapeLike = Union['Shape', Iterable[int], None]


class Shape:
    """Ordered list of dimension extents with an explicit absent state."""

    __slots__ = ('_dims',)
    __hash__ = None  # mutable through __setitem__

    def __init__(self, shape: ShapeLike = None):
        if shape is None:
            self._dims: Optional[List[int]] = None
        elif isinstance(shape, Shape):
            self._dims = None if shape._dims is None else list(shape._dims)
        elif isinstance(shape, (str, bytes)):
            raise TypeError(f"Cannot build a Shape from {type(shape).__name__}")
        else:
            dims = [operator.index(dim) for dim in shape]
            for dim in dims:
                _check_dim(dim)
            self._dims = dims

    @classmethod
    def _from_dims(cls, dims: List[int]) -> 'Shape':
        # Operands were already accepted; skip dimension validation
        shape = cls.__new__(cls)
        shape._dims = dims
        return shape

    @classmethod
    def from_tensor(cls, tensor) -> 'Shape':
        """Present shape of a tensor or array (anything exposing ``.shape``)."""
        return cls(tuple(int(d) for d in tensor.shape))

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def valid(self) -> bool:
        """True if the shape holds dimension data."""
        return self._dims is not None

    def as_vector(self) -> List[int]:
        """
        Underlying dimension list.

        The returned list is the shape's own storage; mutating it mutates the
        shape.
        """
        if self._dims is None:
            logger.debug("Content access on absent shape")
            raise InvalidShapeAccess("Shape is invalid")
        return self._dims

    def size(self) -> int:
        """Number of dimensions."""
        return len(self.as_vector())

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return self.valid()

    def __iter__(self) -> Iterator[int]:
        return iter(self.as_vector())

    def _position(self, index) -> int:
        dims = self.as_vector()
        i = operator.index(index)
        rank = len(dims)
        if not -rank <= i < rank:
            raise IndexOutOfRange(
                f"Dimension index {i} out of range for rank {rank}",
                context={'shape': self.to_string()},
            )
        return i

    def __getitem__(self, index) -> int:
        return self.as_vector()[self._position(index)]

    def __setitem__(self, index, value) -> None:
        i = self._position(index)
        value = operator.index(value)
        _check_dim(value)
        self.as_vector()[i] = value

    def to_tuple(self) -> Tuple[int, ...]:
        return tuple(self.as_vector())

    def to_torch_size(self) -> torch.Size:
        """Convert a concrete shape to ``torch.Size``."""
        if not self.concrete():
            raise DynamicShapeError(
                "Cannot convert a dynamic shape to torch.Size",
                context={'shape': self.to_string()},
            )
        return torch.Size(self.as_vector())

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def __add__(self, other: 'Shape') -> 'Shape':
        """Concatenate: this shape's dimensions followed by ``other``'s."""
        if not isinstance(other, Shape):
            return NotImplemented
        return Shape._from_dims(self.as_vector() + other.as_vector())

    def concrete(self) -> bool:
        """True if no dimension is DYNAMIC_DIM."""
        return all(dim != DYNAMIC_DIM for dim in self.as_vector())

    def element_count(self) -> int:
        """Number of elements in a contiguous array of this shape (1 for rank 0)."""
        if not self.concrete():
            logger.debug(f"Element count requested for dynamic shape {self}")
            raise DynamicShapeError(
                "Cannot count elements of a dynamic shape",
                context={'shape': self.to_string()},
            )
        return math.prod(self.as_vector())

    def calc_contiguous_strides(self) -> 'Shape':
        """
        Row-major strides of a contiguous buffer with this shape.

        The last dimension has stride 1. The outermost dimension feeds no
        stride, so it may be dynamic; a dynamic inner dimension raises
        DynamicShapeError. An absent shape gives an absent result instead of
        raising.
        """
        if not self.valid():
            return Shape()
        dims = self.as_vector()
        if DYNAMIC_DIM in dims[1:]:
            raise DynamicShapeError(
                "Cannot derive strides past a dynamic inner dimension",
                context={'shape': self.to_string()},
            )

        strides = [1] * len(dims)
        total = 1
        for i in reversed(range(len(dims))):
            strides[i] = total
            total *= dims[i]
        return Shape._from_dims(strides)

    # ------------------------------------------------------------------
    # Formatting / comparison
    # ------------------------------------------------------------------

    def to_string(self) -> str:
        if self._dims is None:
            return "[invalid]"
        return "[" + ", ".join(str(dim) for dim in self._dims) + "]"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        if self._dims is None:
            return "Shape(None)"
        return f"Shape({self._dims!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, Shape):
            return self._dims == other._dims
        if isinstance(other, (list, tuple)):
            return self._dims is not None and self._dims == list(other)
        return NotImplemented


def _check_dim(dim: int) -> None:
    if dim < DYNAMIC_DIM and get_config().shape.validate_dimensions:
        raise InvalidDimensionError(
            f"Dimension {dim} is below the dynamic sentinel {DYNAMIC_DIM}",
            context={'dim': dim},
        )
