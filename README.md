# stridespan

`stridespan` maps multidimensional indices onto positions in a flat sequence
(a `list`, an `array.array`, anything indexable) and provides reference
kernels that sum or add buffers through such mappings. It needs nothing
beyond the standard library.

## Strided mappings

`stridespan.layout_stride.LayoutStrideMapping` pairs a tuple of extents with
one stride for each dimension. Calling the mapping with one index per
dimension returns `sum(index[r] * stride[r])`, the offset into the flat
storage.

```python
from stridespan.layout_stride import LayoutStrideMapping

m = LayoutStrideMapping((16, 32), (1, 128))
m.rank()                  # 2
m.extent(1)               # 32
m.stride(1)               # 128
m.extents, m.strides      # ((16, 32), (1, 128))
m(2, 3)                   # 386
m.size()                  # 512 index tuples
m.required_span_size()    # 3984: storage a buffer must provide
m.is_exhaustive()         # False: the strides leave gaps

right = LayoutStrideMapping.contiguous_right((16, 32))  # strides (32, 1)
left = LayoutStrideMapping.contiguous_left((16, 32))    # strides (1, 16)
```

- Extents and strides must be integers of the same count, and extents must
  not be negative; otherwise `TypeError` or `ValueError` is raised. Calling a
  mapping with the wrong number of indices raises `TypeError`.
- `required_span_size()` is 0 when any extent is 0.
- A mapping is always unique and strided (`is_always_unique()`,
  `is_always_strided()`, `is_unique()`, `is_strided()` return `True`);
  `is_always_exhaustive()` is `False`, and `is_exhaustive()` checks whether
  the span size equals the number of elements.
- Two `LayoutStrideMapping` objects are equal when their extents and strides
  match. A comparison with another strided mapping object also requires that
  it maps the all-zero index to offset 0. Mappings are hashable.
- `LayoutStrideMapping.from_mapping(other)` copies extents and strides from
  any mapping object whose `is_always_unique()` and `is_always_strided()`
  are true and which offers `rank()`, `extent(r)` and `stride(r)`.

## Sums (`stridespan.sums`)

- `sum_1d(data)` sums a flat buffer.
- `sum_3d_right(data, x, y, z)`, `sum_3d_left(data, x, y, z)` and
  `sum_3d_right_iter_left(data, x, y, z)` sum an `x*y*z` buffer laid out
  row-major, column-major, and row-major walked with the first index fastest.
- `sum_mapping_3d_right(data, mapping)` and `sum_mapping_3d_left(data, mapping)`
  sum through a rank-3 mapping, last or first index fastest.
- `bytes_processed(elements, item_size, iterations)` returns the product of
  its three non-negative arguments.

Buffers shorter than the layout needs raise `ValueError`.

```python
from stridespan.layout_stride import LayoutStrideMapping
from stridespan.sums import sum_mapping_3d_right

data = list(range(2 * 3 * 4))
sum_mapping_3d_right(data, LayoutStrideMapping.contiguous_right((2, 3, 4)))  # 276
```

## Sub-view sums and additions (`stridespan.kernels`)

- `sum_subspan_right(data, mapping)` sums a rank-3 view by slicing off one
  row and then one column at a time.
- `sum_subspan_nd(data, mapping)` sums a view of any rank by recursively
  fixing the leading index; a rank-0 view sums its single element.
- `tiny_matrix_add_right(out, src, x, y, z)` adds `src` into `out` in place
  for a row-major `x*y*z` layout.
- `tiny_matrix_add_mapping(out, src, mapping)` adds `src` into `out` in place
  at every offset a rank-3 mapping reaches.

## Worker-partitioned kernels (`stridespan.parallel`)

Work is split by rows of the first dimension and run on a thread pool.

- `repeats_for(size)` is 50 for sizes above 100*100*100 and 1000 otherwise.
- `chunk_bounds(extent, workers, worker)` returns the half-open row range of
  one worker; `extent` must be at least `workers`.
- `first_touch_3d(data, mapping)` sets every reachable element to zero.
- `make_3d_ptr_array(data, mapping)` builds nested row views
  `rows[i][j][k]` that read and write the buffer; the mapping must be
  row-major.
- `parallel_sum_3d(data, mapping, workers, repeats=None)` returns one partial
  sum per worker, each taking every `workers`-th row and recomputing its sum
  `repeats` times (default from `repeats_for`).
- `parallel_sum_3d_per_worker(data, mapping, workers)` returns one partial sum
  per worker over contiguous blocks of rows.
- `parallel_tiny_matrix_add(out, src, mapping, workers)` and
  `chunked_tiny_matrix_add(out, src, mapping, workers)` add `src` into `out`
  in place, rows split evenly or by `chunk_bounds`.
- `ptr_array_tiny_matrix_add(out, src)` adds nested rows element by element;
  mismatched shapes raise `ValueError`.

## What it does not do

The package has no command-line program and takes no timings: the kernels
compute results, and `bytes_processed` only computes the throughput figure
from counts you supply. Its only layout type is `LayoutStrideMapping`; there
is no owning array type.