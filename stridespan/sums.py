"""Reductions over flat buffers viewed as one- and three-dimensional arrays."""

from __future__ import annotations

import operator
from collections.abc import Iterable, Sequence
from itertools import product
from typing import Any

from stridespan.layout_stride import LayoutStrideMapping


def _dims(x: int, y: int, z: int) -> tuple[int, int, int]:
    try:
        dims = (operator.index(x), operator.index(y), operator.index(z))
    except TypeError as exc:
        raise TypeError("dimensions must be integers") from exc
    if any(d < 0 for d in dims):
        raise ValueError("dimensions must be non-negative")
    return dims


def _check_buffer(data: Sequence[Any], needed: int) -> None:
    if len(data) < needed:
        raise ValueError(
            f"buffer holds {len(data)} elements but {needed} are required"
        )


def _check_mapping(data: Sequence[Any], mapping: LayoutStrideMapping) -> None:
    if mapping.rank() != 3:
        raise ValueError(f"expected a rank-3 mapping, got rank {mapping.rank()}")
    _check_buffer(data, mapping.required_span_size())


def sum_1d(data: Iterable[Any]) -> Any:
    """Sum every element of a flat buffer."""
    return sum(data)


def sum_3d_right(data: Sequence[Any], x: int, y: int, z: int) -> Any:
    """Sum an ``x*y*z`` row-major buffer, last index fastest."""
    x, y, z = _dims(x, y, z)
    _check_buffer(data, x * y * z)
    return sum(
        data[k + j * z + i * z * y]
        for i, j, k in product(range(x), range(y), range(z))
    )


def sum_3d_left(data: Sequence[Any], x: int, y: int, z: int) -> Any:
    """Sum an ``x*y*z`` column-major buffer, first index fastest."""
    x, y, z = _dims(x, y, z)
    _check_buffer(data, x * y * z)
    return sum(
        data[i + j * x + k * x * y]
        for k, j, i in product(range(z), range(y), range(x))
    )


def sum_3d_right_iter_left(data: Sequence[Any], x: int, y: int, z: int) -> Any:
    """Sum a row-major buffer while iterating with the first index fastest."""
    x, y, z = _dims(x, y, z)
    _check_buffer(data, x * y * z)
    return sum(
        data[k + j * z + i * z * y]
        for k, j, i in product(range(z), range(y), range(x))
    )


def sum_mapping_3d_right(data: Sequence[Any], mapping: LayoutStrideMapping) -> Any:
    """Sum through a rank-3 mapping, iterating with the last index fastest."""
    _check_mapping(data, mapping)
    ex, ey, ez = mapping.extents
    return sum(
        data[mapping(i, j, k)]
        for i, j, k in product(range(ex), range(ey), range(ez))
    )


def sum_mapping_3d_left(data: Sequence[Any], mapping: LayoutStrideMapping) -> Any:
    """Sum through a rank-3 mapping, iterating with the first index fastest."""
    _check_mapping(data, mapping)
    ex, ey, ez = mapping.extents
    return sum(
        data[mapping(i, j, k)]
        for k, j, i in product(range(ez), range(ey), range(ex))
    )


def bytes_processed(elements: int, item_size: int, iterations: int) -> int:
    """Bytes touched by reading ``elements`` items ``iterations`` times."""
    values = (
        operator.index(elements),
        operator.index(item_size),
        operator.index(iterations),
    )
    if any(v < 0 for v in values):
        raise ValueError("counts must be non-negative")
    elements, item_size, iterations = values
    return elements * item_size * iterations