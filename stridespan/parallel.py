"""Multi-worker reductions and element-wise additions over rank-3 strided views."""

from __future__ import annotations

import operator
from collections.abc import Callable, MutableSequence, Sequence
from concurrent.futures import ThreadPoolExecutor
from itertools import product
from typing import Any, TypeVar

from stridespan.layout_stride import LayoutStrideMapping

_T = TypeVar("_T")

_LARGE_PROBLEM = 100 * 100 * 100
_LARGE_REPEATS = 50
_SMALL_REPEATS = 1000


def _require_rank3(mapping: LayoutStrideMapping) -> tuple[int, int, int]:
    if mapping.rank() != 3:
        raise ValueError(f"expected a rank-3 mapping, got rank {mapping.rank()}")
    ex, ey, ez = mapping.extents
    return ex, ey, ez


def _require_length(data: Sequence[Any], needed: int, name: str) -> None:
    if len(data) < needed:
        raise ValueError(
            f"{name} holds {len(data)} elements but {needed} are required"
        )


def _require_workers(workers: int) -> int:
    workers = operator.index(workers)
    if workers < 1:
        raise ValueError("workers must be at least 1")
    return workers


def _static_ranges(extent: int, workers: int) -> list[range]:
    """Split ``range(extent)`` into ``workers`` contiguous, nearly equal blocks."""
    base, extra = divmod(extent, workers)
    ranges = []
    start = 0
    for w in range(workers):
        size = base + (1 if w < extra else 0)
        ranges.append(range(start, start + size))
        start += size
    return ranges


def _run_workers(workers: int, task: Callable[[int], _T]) -> list[_T]:
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(task, range(workers)))


def repeats_for(size: int) -> int:
    """Repetition count used for a problem of ``size`` elements.

    Problems larger than 100*100*100 elements are repeated 50 times,
    smaller ones 1000 times.
    """
    size = operator.index(size)
    if size < 0:
        raise ValueError("size must be non-negative")
    if size > _LARGE_PROBLEM:
        return _LARGE_REPEATS
    return _SMALL_REPEATS


def chunk_bounds(extent: int, workers: int, worker: int) -> tuple[int, int]:
    """Half-open row range ``(start, end)`` handled by ``worker``.

    Each worker gets ``extent // workers`` rows; the first
    ``extent % (extent // workers)`` workers get one extra row.
    """
    extent = operator.index(extent)
    workers = _require_workers(workers)
    worker = operator.index(worker)
    if extent < 0:
        raise ValueError("extent must be non-negative")
    if not 0 <= worker < workers:
        raise ValueError(f"worker {worker} out of range for {workers} workers")
    chunk_size = extent // workers
    if chunk_size == 0:
        raise ValueError("extent must be at least the number of workers")
    chunk_start = chunk_size * worker
    extra = extent % chunk_size
    if worker < extra:
        chunk_size += 1
        chunk_start += worker
    else:
        chunk_start += extra
    return chunk_start, chunk_start + chunk_size


def first_touch_3d(data: MutableSequence[Any], mapping: LayoutStrideMapping) -> None:
    """Set every element reachable through a rank-3 mapping to zero."""
    ex, ey, ez = _require_rank3(mapping)
    _require_length(data, mapping.required_span_size(), "buffer")
    for i, j, k in product(range(ex), range(ey), range(ez)):
        data[mapping(i, j, k)] = 0


class _RowView(Sequence[Any]):
    """A contiguous window into a mutable buffer."""

    __slots__ = ("_data", "_offset", "_length")

    def __init__(self, data: MutableSequence[Any], offset: int, length: int) -> None:
        self._data = data
        self._offset = offset
        self._length = length

    def __len__(self) -> int:
        return self._length

    def _position(self, k: int) -> int:
        k = operator.index(k)
        if k < 0:
            k += self._length
        if not 0 <= k < self._length:
            raise IndexError("row index out of range")
        return self._offset + k

    def __getitem__(self, k: Any) -> Any:
        if isinstance(k, slice):
            return [self[i] for i in range(*k.indices(self._length))]
        return self._data[self._position(k)]

    def __setitem__(self, k: int, value: Any) -> None:
        self._data[self._position(k)] = value

    def __repr__(self) -> str:
        return f"_RowView({list(self)!r})"


def make_3d_ptr_array(
    data: MutableSequence[Any], mapping: LayoutStrideMapping
) -> list[list[_RowView]]:
    """Nested row views ``rows[i][j][k]`` over a row-major rank-3 buffer."""
    ex, ey, ez = _require_rank3(mapping)
    if mapping != LayoutStrideMapping.contiguous_right(mapping.extents):
        raise ValueError("row views can only be built from a row-major mapping")
    _require_length(data, mapping.required_span_size(), "buffer")
    return [
        [_RowView(data, mapping(i, j, 0), ez) for j in range(ey)]
        for i in range(ex)
    ]


def parallel_sum_3d(
    data: Sequence[Any],
    mapping: LayoutStrideMapping,
    workers: int,
    repeats: int | None = None,
) -> list[Any]:
    """Per-worker partial sums, each worker taking every ``workers``-th row.

    Every worker recomputes its partial sum ``repeats`` times; when
    ``repeats`` is omitted it follows :func:`repeats_for`.
    """
    ex, ey, ez = _require_rank3(mapping)
    workers = _require_workers(workers)
    _require_length(data, mapping.required_span_size(), "buffer")
    if repeats is None:
        repeats = repeats_for(mapping.size())
    repeats = operator.index(repeats)
    if repeats < 1:
        raise ValueError("repeats must be at least 1")

    def task(worker: int) -> Any:
        partial: Any = 0
        for _ in range(repeats):
            partial = 0
            for i in range(worker, ex, workers):
                for j, k in product(range(ey), range(ez)):
                    partial += data[mapping(i, j, k)]
        return partial

    return _run_workers(workers, task)


def parallel_sum_3d_per_worker(
    data: Sequence[Any], mapping: LayoutStrideMapping, workers: int
) -> list[Any]:
    """Per-worker accumulators over contiguous blocks of rows."""
    ex, ey, ez = _require_rank3(mapping)
    workers = _require_workers(workers)
    _require_length(data, mapping.required_span_size(), "buffer")
    blocks = _static_ranges(ex, workers)

    def task(worker: int) -> Any:
        acc: Any = 0
        for i in blocks[worker]:
            for j, k in product(range(ey), range(ez)):
                acc += data[mapping(i, j, k)]
        return acc

    return _run_workers(workers, task)


def _check_add_operands(
    out: Sequence[Any], src: Sequence[Any], mapping: LayoutStrideMapping, workers: int
) -> tuple[tuple[int, int, int], int]:
    dims = _require_rank3(mapping)
    workers = _require_workers(workers)
    needed = mapping.required_span_size()
    _require_length(out, needed, "output buffer")
    _require_length(src, needed, "source buffer")
    return dims, workers


def _add_rows(
    out: MutableSequence[Any],
    src: Sequence[Any],
    mapping: LayoutStrideMapping,
    rows: range,
) -> None:
    _, ey, ez = mapping.extents
    for i in rows:
        for j, k in product(range(ey), range(ez)):
            pos = mapping(i, j, k)
            out[pos] += src[pos]


def parallel_tiny_matrix_add(
    out: MutableSequence[Any],
    src: Sequence[Any],
    mapping: LayoutStrideMapping,
    workers: int,
) -> None:
    """Add ``src`` into ``out`` in place, rows split evenly between workers."""
    (ex, _, _), workers = _check_add_operands(out, src, mapping, workers)
    blocks = _static_ranges(ex, workers)
    _run_workers(workers, lambda w: _add_rows(out, src, mapping, blocks[w]))


def chunked_tiny_matrix_add(
    out: MutableSequence[Any],
    src: Sequence[Any],
    mapping: LayoutStrideMapping,
    workers: int,
) -> None:
    """Add ``src`` into ``out`` in place, each worker taking its :func:`chunk_bounds`."""
    (ex, _, _), workers = _check_add_operands(out, src, mapping, workers)
    blocks = [range(*chunk_bounds(ex, workers, w)) for w in range(workers)]
    _run_workers(workers, lambda w: _add_rows(out, src, mapping, blocks[w]))


def ptr_array_tiny_matrix_add(
    out: Sequence[Sequence[Any]], src: Sequence[Sequence[Any]]
) -> None:
    """Add nested rows ``src[i][j][k]`` into ``out[i][j][k]`` in place."""
    if len(out) != len(src):
        raise ValueError("row arrays differ in their first extent")
    for out_plane, src_plane in zip(out, src):
        if len(out_plane) != len(src_plane):
            raise ValueError("row arrays differ in their second extent")
        for out_row, src_row in zip(out_plane, src_plane):
            if len(out_row) != len(src_row):
                raise ValueError("row arrays differ in their third extent")
            for k, value in enumerate(src_row):
                out_row[k] += value