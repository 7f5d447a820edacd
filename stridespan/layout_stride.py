"""Strided layout mapping from multidimensional indices to linear offsets."""

from __future__ import annotations

import math
import operator
from collections.abc import Iterable
from typing import Any


def _as_index_tuple(values: Iterable[Any], what: str) -> tuple[int, ...]:
    try:
        return tuple(operator.index(v) for v in values)
    except TypeError as exc:
        raise TypeError(f"{what} must be integers") from exc


class LayoutStrideMapping:
    """Maps an index tuple to ``sum(index[r] * stride[r])`` over a fixed shape."""

    __slots__ = ("_extents", "_strides")

    def __init__(self, extents: Iterable[int], strides: Iterable[int]) -> None:
        ext = _as_index_tuple(extents, "extents")
        strd = _as_index_tuple(strides, "strides")
        if len(ext) != len(strd):
            raise ValueError(
                f"rank mismatch: {len(ext)} extents but {len(strd)} strides"
            )
        if any(e < 0 for e in ext):
            raise ValueError("extents must be non-negative")
        self._extents = ext
        self._strides = strd

    # -- construction helpers ------------------------------------------------

    @classmethod
    def contiguous_right(cls, extents: Iterable[int]) -> LayoutStrideMapping:
        """Row-major strides: the last index varies fastest."""
        ext = _as_index_tuple(extents, "extents")
        strides = []
        step = 1
        for e in reversed(ext):
            strides.append(step)
            step *= e
        return cls(ext, reversed(strides))

    @classmethod
    def contiguous_left(cls, extents: Iterable[int]) -> LayoutStrideMapping:
        """Column-major strides: the first index varies fastest."""
        ext = _as_index_tuple(extents, "extents")
        strides = []
        step = 1
        for e in ext:
            strides.append(step)
            step *= e
        return cls(ext, strides)

    @classmethod
    def from_mapping(cls, other: Any) -> LayoutStrideMapping:
        """Copy the extents and strides of any unique, strided mapping."""
        if isinstance(other, LayoutStrideMapping):
            return cls(other._extents, other._strides)
        try:
            unique = other.is_always_unique()
            strided = other.is_always_strided()
            rank = other.rank()
        except AttributeError as exc:
            raise TypeError("object is not a layout mapping") from exc
        if not (unique and strided):
            raise TypeError("mapping must be always unique and always strided")
        return cls(
            (other.extent(r) for r in range(rank)),
            (other.stride(r) for r in range(rank)),
        )

    # -- observers -----------------------------------------------------------

    @property
    def extents(self) -> tuple[int, ...]:
        return self._extents

    @property
    def strides(self) -> tuple[int, ...]:
        return self._strides

    def rank(self) -> int:
        return len(self._extents)

    def extent(self, r: int) -> int:
        return self._extents[r]

    def stride(self, r: int) -> int:
        return self._strides[r]

    def required_span_size(self) -> int:
        """Smallest buffer length that every valid index maps into."""
        if any(e == 0 for e in self._extents):
            return 0
        return 1 + sum((e - 1) * s for e, s in zip(self._extents, self._strides))

    def size(self) -> int:
        """Number of index tuples in the domain."""
        return math.prod(self._extents)

    def __call__(self, *args: int) -> int:
        if len(args) != len(self._extents):
            raise TypeError(
                f"expected {len(self._extents)} indices, got {len(args)}"
            )
        idx = _as_index_tuple(args, "indices")
        return sum(i * s for i, s in zip(idx, self._strides))

    # -- properties ----------------------------------------------------------

    @classmethod
    def is_always_unique(cls) -> bool:
        return True

    @classmethod
    def is_always_exhaustive(cls) -> bool:
        return False

    @classmethod
    def is_always_strided(cls) -> bool:
        return True

    def is_unique(self) -> bool:
        return True

    def is_exhaustive(self) -> bool:
        return self.required_span_size() == self.size()

    def is_strided(self) -> bool:
        return True

    # -- comparison ----------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LayoutStrideMapping):
            return (
                self._extents == other._extents and self._strides == other._strides
            )
        try:
            strided = other.is_always_strided()  # type: ignore[attr-defined]
            rank = other.rank()  # type: ignore[attr-defined]
        except AttributeError:
            return NotImplemented
        if not strided or rank != self.rank():
            return False
        other_extents = tuple(other.extent(r) for r in range(rank))  # type: ignore[attr-defined]
        other_strides = tuple(other.stride(r) for r in range(rank))  # type: ignore[attr-defined]
        offset = other(*([0] * rank))  # type: ignore[operator]
        return (
            self._extents == other_extents
            and offset == 0
            and self._strides == other_strides
        )

    def __hash__(self) -> int:
        return hash((self._extents, self._strides))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(extents={self._extents}, "
            f"strides={self._strides})"
        )