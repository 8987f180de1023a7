"""
ND storage - a flat buffer plus per-axis extents.

NDStore owns a contiguous numpy buffer of product(size) elements and addresses
it with the same row-major strides KernelIterator uses, so the linear
addresses an iterator produces index straight into `store.data`.
"""

from collections.abc import Sequence

import numpy as np

from .kernel_iterator import DimensionMismatchError, InvalidRegionError, KernelIterator


class NDStore:
    """N-dimensional array stored as a flat row-major buffer."""

    def __init__(self, size: Sequence[int], dtype=np.float64, fill=0):
        """
        Args:
            size: Extent of each axis
            dtype: numpy dtype of the elements (structured pixel dtypes work too)
            fill: Initial value of every element
        """
        size = tuple(int(ss) for ss in size)
        if not size or any(ss <= 0 for ss in size):
            raise InvalidRegionError(f"Array extents must be positive, got {size}")

        self._size = size
        self._data = np.empty(int(np.prod(size)), dtype=dtype)
        self._data[...] = fill

        strides = [1] * len(size)
        for dd in range(len(size) - 2, -1, -1):
            strides[dd] = strides[dd + 1] * size[dd + 1]
        self._strides = tuple(strides)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "NDStore":
        """Copy an existing numpy array into a new store of the same shape."""
        array = np.asarray(array)
        store = cls(array.shape, dtype=array.dtype)
        store._data[:] = array.ravel(order="C")
        return store

    @property
    def ndim(self) -> int:
        return len(self._size)

    @property
    def size(self) -> tuple[int, ...]:
        return self._size

    @property
    def strides(self) -> tuple[int, ...]:
        """Strides in elements, not bytes."""
        return self._strides

    @property
    def elements(self) -> int:
        return self._data.size

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def data(self) -> np.ndarray:
        """Flat view of the buffer, indexable by linear address."""
        return self._data

    def as_array(self) -> np.ndarray:
        """Shaped view of the buffer (writes go through to the store)."""
        return self._data.reshape(self._size)

    def lin_index(self, index: Sequence[int]) -> int:
        """
        Convert an ND index into a linear address.

        Raises:
            DimensionMismatchError: index has the wrong number of coordinates
            IndexError: a coordinate is outside its axis
        """
        if len(index) != self.ndim:
            raise DimensionMismatchError(
                f"Index has {len(index)} coordinates but the array has {self.ndim}"
            )
        address = 0
        for dd, (ii, ss) in enumerate(zip(index, self._size)):
            ii = int(ii)
            if not 0 <= ii < ss:
                raise IndexError(f"Index {ii} outside axis {dd} of length {ss}")
            address += ii * self._strides[dd]
        return address

    def nd_index(self, address: int) -> tuple[int, ...]:
        """Convert a linear address back into an ND index."""
        address = int(address)
        if not 0 <= address < self.elements:
            raise IndexError(f"Address {address} outside [0, {self.elements})")
        index = []
        for stride in self._strides:
            index.append(address // stride)
            address %= stride
        return tuple(index)

    def _address(self, key) -> int:
        if isinstance(key, tuple):
            return self.lin_index(key)
        return int(key)

    def __getitem__(self, key):
        return self._data[self._address(key)]

    def __setitem__(self, key, value):
        self._data[self._address(key)] = value

    def __len__(self) -> int:
        return self.elements

    def __repr__(self) -> str:
        return f"NDStore(size={self._size}, dtype={self.dtype})"

    def copy(self) -> "NDStore":
        return NDStore.from_array(self.as_array())

    def create_another(self) -> "NDStore":
        """New zero-filled store with the same size and dtype."""
        return NDStore(self._size, dtype=self.dtype)

    def extract(self, roi: Sequence[tuple[int, int]]) -> "NDStore":
        """
        Copy an inclusive ROI out into a new store.

        Args:
            roi: Per-axis (low, high) bounds. Missing axes span the whole axis.
        """
        if len(roi) > self.ndim:
            raise DimensionMismatchError(f"ROI has {len(roi)} axes but the array has {self.ndim}")
        slices = []
        for dd, ss in enumerate(self._size):
            low, high = (int(roi[dd][0]), int(roi[dd][1])) if dd < len(roi) else (0, ss - 1)
            if not 0 <= low <= high <= ss - 1:
                raise InvalidRegionError(f"ROI ({low}, {high}) on axis {dd} is outside [0, {ss - 1}]")
            slices.append(slice(low, high + 1))
        return NDStore.from_array(self.as_array()[tuple(slices)])

    def kernel_iterator(
        self,
        kernel_range: Sequence[tuple[int, int]] | None = None,
        roi: Sequence[tuple[int, int]] | None = None,
        radius: int | Sequence[int] | None = None,
    ) -> KernelIterator:
        """Create a KernelIterator whose addresses index this store's buffer."""
        return KernelIterator(self._size, kernel_range, roi, radius=radius)
