"""
Tests for NDStore and the scalar helpers it shares with the iterator.
"""

import numpy as np
import pytest

from ndgrid import DimensionMismatchError, InvalidRegionError, NDStore, clamp, wrap


class TestScalars:
    """clamp / wrap."""

    @pytest.mark.parametrize(
        "value, expected", [(-3, 0), (0, 0), (4, 4), (9, 9), (12, 9)]
    )
    def test_clamp(self, value, expected):
        assert clamp(value, 0, 9) == expected

    def test_clamp_floats(self):
        assert clamp(255.5, 0.0, 255.0) == 255.0
        assert clamp(-0.1, 0.0, 255.0) == 0.0

    @pytest.mark.parametrize(
        "low, high, value, expected",
        [
            (1, 5, 0, 5),
            (1, 5, 6, 1),
            (1, 5, 3, 3),
            (1, 5, -4, 1),
            (0, 9, -1, 9),
            (0, 9, 25, 5),
            (0, 0, 7, 0),
        ],
    )
    def test_wrap(self, low, high, value, expected):
        assert wrap(low, high, value) == expected


class TestNDStore:
    """Addressing and copying of the flat buffer."""

    def test_shape_and_strides(self):
        store = NDStore((3, 4, 5))
        assert store.ndim == 3
        assert store.size == (3, 4, 5)
        assert store.strides == (20, 5, 1)
        assert store.elements == 60
        assert len(store) == 60
        assert np.all(store.data == 0)

    def test_fill_and_dtype(self):
        store = NDStore((2, 2), dtype=np.complex128, fill=1 + 2j)
        assert store.dtype == np.complex128
        assert np.all(store.data == 1 + 2j)

    def test_lin_index_matches_numpy(self):
        array = np.arange(60).reshape(3, 4, 5)
        store = NDStore.from_array(array)
        for index in [(0, 0, 0), (1, 2, 3), (2, 3, 4)]:
            address = store.lin_index(index)
            assert address == np.ravel_multi_index(index, array.shape)
            assert store.data[address] == array[index]
            assert store.nd_index(address) == index

    def test_tuple_and_int_item_access(self):
        store = NDStore((3, 4))
        store[(1, 2)] = 7.5
        assert store[6] == 7.5
        store[11] = -1
        assert store[(2, 3)] == -1

    def test_as_array_is_a_view(self):
        store = NDStore((2, 3))
        store.as_array()[1, 1] = 4
        assert store[(1, 1)] == 4

    def test_copy_is_independent(self):
        store = NDStore.from_array(np.ones((2, 3)))
        other = store.copy()
        other[0] = 5
        assert store[0] == 1
        assert other.size == store.size

    def test_create_another(self):
        store = NDStore.from_array(np.full((2, 3), 9, dtype=np.int32))
        other = store.create_another()
        assert other.size == (2, 3)
        assert other.dtype == np.int32
        assert np.all(other.data == 0)

    def test_extract_roi(self):
        array = np.arange(60).reshape(3, 4, 5)
        sub = NDStore.from_array(array).extract([(1, 2), (0, 1)])
        np.testing.assert_array_equal(sub.as_array(), array[1:3, 0:2, :])

    def test_iterator_addresses_index_the_buffer(self):
        array = np.arange(24.0).reshape(2, 3, 4)
        store = NDStore.from_array(array)
        it = store.kernel_iterator(radius=1)
        it.go_index((1, 1, 2))
        assert store.data[it.center] == array[1, 1, 2]
        neighbors = store.data[it.neighbor_addresses()]
        expected = [array[tuple(pp)] for pp in it.neighbor_positions()]
        np.testing.assert_array_equal(neighbors, expected)

    def test_wrong_index_length(self):
        store = NDStore((3, 4))
        with pytest.raises(DimensionMismatchError):
            store.lin_index((1, 2, 3))

    @pytest.mark.parametrize("index", [(3, 0), (0, -1), (0, 4)])
    def test_index_out_of_bounds(self, index):
        with pytest.raises(IndexError):
            NDStore((3, 4)).lin_index(index)

    def test_address_out_of_bounds(self):
        with pytest.raises(IndexError):
            NDStore((3, 4)).nd_index(12)

    @pytest.mark.parametrize("size", [(), (0, 3), (2, -1)])
    def test_bad_size(self, size):
        with pytest.raises(InvalidRegionError):
            NDStore(size)

    def test_bad_extract_roi(self):
        store = NDStore((3, 4))
        with pytest.raises(InvalidRegionError):
            store.extract([(2, 1)])
        with pytest.raises(DimensionMismatchError):
            store.extract([(0, 1)] * 3)
