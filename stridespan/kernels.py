"""Sub-view reductions and element-wise addition kernels over strided buffers."""

from __future__ import annotations

import operator
from collections.abc import MutableSequence, Sequence
from itertools import product
from typing import Any

from stridespan.layout_stride import LayoutStrideMapping


def _require_length(data: Sequence[Any], needed: int, name: str) -> None:
    if len(data) < needed:
        raise ValueError(
            f"{name} holds {len(data)} elements but {needed} are required"
        )


def _require_rank(mapping: LayoutStrideMapping, rank: int) -> None:
    if mapping.rank() != rank:
        raise ValueError(f"expected a rank-{rank} mapping, got rank {mapping.rank()}")


def _slice_first(
    offset: int, mapping: LayoutStrideMapping, index: int
) -> tuple[int, LayoutStrideMapping]:
    """Fix the leading index, keeping the remaining dimensions whole."""
    sub = LayoutStrideMapping(mapping.extents[1:], mapping.strides[1:])
    return offset + index * mapping.stride(0), sub


def _sum_view(data: Sequence[Any], offset: int, mapping: LayoutStrideMapping) -> Any:
    if mapping.rank() == 0:
        return data[offset]
    total: Any = 0
    for i in range(mapping.extent(0)):
        sub_offset, sub = _slice_first(offset, mapping, i)
        total += _sum_view(data, sub_offset, sub)
    return total


def sum_subspan_right(data: Sequence[Any], mapping: LayoutStrideMapping) -> Any:
    """Sum a rank-3 view by taking a 2-D slice per row, then a 1-D slice per column."""
    _require_rank(mapping, 3)
    _require_length(data, mapping.required_span_size(), "buffer")
    total: Any = 0
    for i in range(mapping.extent(0)):
        off_i, sub_i = _slice_first(0, mapping, i)
        for j in range(sub_i.extent(0)):
            off_ij, sub_ij = _slice_first(off_i, sub_i, j)
            for k in range(sub_ij.extent(0)):
                total += data[off_ij + sub_ij(k)]
    return total


def sum_subspan_nd(data: Sequence[Any], mapping: LayoutStrideMapping) -> Any:
    """Sum a view of any rank by recursively slicing off the leading dimension."""
    _require_length(data, mapping.required_span_size(), "buffer")
    if mapping.rank() == 0 and len(data) == 0:
        raise ValueError("a rank-0 view needs at least one element")
    return _sum_view(data, 0, mapping)


def tiny_matrix_add_right(
    out: MutableSequence[Any], src: Sequence[Any], x: int, y: int, z: int
) -> None:
    """Add ``src`` into ``out`` in place, both laid out row-major as ``x*y*z``."""
    try:
        dims = (operator.index(x), operator.index(y), operator.index(z))
    except TypeError as exc:
        raise TypeError("dimensions must be integers") from exc
    if any(d < 0 for d in dims):
        raise ValueError("dimensions must be non-negative")
    x, y, z = dims
    needed = x * y * z
    _require_length(out, needed, "output buffer")
    _require_length(src, needed, "source buffer")
    for i, j, k in product(range(x), range(y), range(z)):
        pos = k + j * z + i * z * y
        out[pos] += src[pos]


def tiny_matrix_add_mapping(
    out: MutableSequence[Any], src: Sequence[Any], mapping: LayoutStrideMapping
) -> None:
    """Add ``src`` into ``out`` in place at every offset a rank-3 mapping reaches."""
    _require_rank(mapping, 3)
    needed = mapping.required_span_size()
    _require_length(out, needed, "output buffer")
    _require_length(src, needed, "source buffer")
    ex, ey, ez = mapping.extents
    for i, j, k in product(range(ex), range(ey), range(ez)):
        pos = mapping(i, j, k)
        out[pos] += src[pos]