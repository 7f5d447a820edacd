import pytest

from stridespan.layout_stride import LayoutStrideMapping


class _ShiftedMapping:
    """A strided, unique mapping with a configurable base offset."""

    def __init__(self, extents, strides, offset=0):
        self._extents = tuple(extents)
        self._strides = tuple(strides)
        self._offset = offset

    @staticmethod
    def is_always_unique():
        return True

    @staticmethod
    def is_always_strided():
        return True

    def rank(self):
        return len(self._extents)

    def extent(self, r):
        return self._extents[r]

    def stride(self, r):
        return self._strides[r]

    def __call__(self, *idx):
        return self._offset + sum(i * s for i, s in zip(idx, self._strides))


class _NonUniqueMapping(_ShiftedMapping):
    @staticmethod
    def is_always_unique():
        return False


def test_explicit_strides_16_32():
    m = LayoutStrideMapping((16, 32), (1, 128))
    assert m.rank() == 2
    assert m.extent(0) == 16
    assert m.extent(1) == 32
    assert m.stride(0) == 1
    assert m.stride(1) == 128
    assert not m.is_exhaustive()


def test_contiguous_left_16_32():
    m = LayoutStrideMapping.contiguous_left((16, 32))
    assert m.strides == (1, 16)
    assert m.is_exhaustive()


def test_contiguous_right_16_32():
    m = LayoutStrideMapping.contiguous_right((16, 32))
    assert m.strides == (32, 1)
    assert m.is_exhaustive()


def test_contiguous_right_2_2():
    m = LayoutStrideMapping.contiguous_right([2, 2])
    assert (m.stride(0), m.stride(1)) == (2, 1)
    assert m.is_exhaustive()


def test_single_dynamic_zero_extent():
    m = LayoutStrideMapping.contiguous_right((0,))
    assert m.extent(0) == 0
    assert m.stride(0) == 1
    assert m.size() == 0
    assert m.required_span_size() == 0
    assert m.is_exhaustive()


def test_single_static_extent_one():
    m = LayoutStrideMapping.contiguous_right((1,))
    assert m.stride(0) == 1
    assert m.size() == 1
    assert m(0) == 0
    assert m.is_exhaustive()


def test_rank_zero():
    m = LayoutStrideMapping((), ())
    assert m.rank() == 0
    assert m.required_span_size() == 1
    assert m() == 0
    assert m.is_exhaustive()


def test_required_span_size_and_call():
    m = LayoutStrideMapping((16, 32), (1, 128))
    assert m.required_span_size() == 1 + 15 * 1 + 31 * 128
    assert m(3, 2) == 3 + 2 * 128


def test_call_visits_every_offset_once_for_contiguous():
    m = LayoutStrideMapping.contiguous_left((3, 4, 5))
    offsets = sorted(m(i, j, k) for i in range(3) for j in range(4) for k in range(5))
    assert offsets == list(range(60))


def test_call_wrong_number_of_indices():
    m = LayoutStrideMapping.contiguous_right((2, 3))
    with pytest.raises(TypeError):
        m(1)


def test_call_rejects_float_index():
    m = LayoutStrideMapping.contiguous_right((2, 3))
    with pytest.raises(TypeError):
        m(1.0, 2)


def test_rank_mismatch_raises():
    with pytest.raises(ValueError):
        LayoutStrideMapping((2, 3), (1,))


def test_negative_extent_raises():
    with pytest.raises(ValueError):
        LayoutStrideMapping((-1,), (1,))


def test_static_properties():
    assert LayoutStrideMapping.is_always_unique() is True
    assert LayoutStrideMapping.is_always_exhaustive() is False
    assert LayoutStrideMapping.is_always_strided() is True
    m = LayoutStrideMapping((4,), (2,))
    assert m.is_unique() and m.is_strided()
    assert not m.is_exhaustive()


def test_equality_between_strided_mappings():
    a = LayoutStrideMapping((16, 32), (1, 16))
    assert a == LayoutStrideMapping.contiguous_left((16, 32))
    assert a != LayoutStrideMapping.contiguous_right((16, 32))
    assert a != LayoutStrideMapping((16, 32), (1, 17))


def test_equality_with_foreign_mapping_checks_offset():
    m = LayoutStrideMapping((4, 5), (5, 1))
    assert m == _ShiftedMapping((4, 5), (5, 1))
    assert m != _ShiftedMapping((4, 5), (5, 1), offset=3)
    assert m != _ShiftedMapping((4,), (1,))


def test_from_mapping_copies_strides():
    src = _ShiftedMapping((3, 7), (7, 1))
    m = LayoutStrideMapping.from_mapping(src)
    assert m.extents == (3, 7)
    assert m.strides == (7, 1)


def test_from_mapping_round_trip():
    original = LayoutStrideMapping((16, 32), (1, 128))
    assert LayoutStrideMapping.from_mapping(original) == original


def test_from_mapping_rejects_non_unique():
    with pytest.raises(TypeError):
        LayoutStrideMapping.from_mapping(_NonUniqueMapping((2,), (0,)))


def test_from_mapping_rejects_non_mapping():
    with pytest.raises(TypeError):
        LayoutStrideMapping.from_mapping(object())


def test_hash_consistent_with_equality():
    a = LayoutStrideMapping((2, 3), (3, 1))
    b = LayoutStrideMapping.contiguous_right((2, 3))
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1