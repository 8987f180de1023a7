"""
Kernel Iterator - walk an N-D array while tracking a stencil of neighbors.

The iterator keeps a "center" cursor inside a region of interest (ROI) of a
flattened row-major array, together with a fixed set of neighbor offsets (the
kernel) around it. Every step produces the linear address of the center and of
each neighbor, with neighbors saturated at the ROI edges (replicate-edge
boundary handling). The iterator never touches array contents; callers index
their own flat buffer with the addresses it produces.

Traversal runs fastest along the axis with the longest clamp-free interior, so
most steps only shift every cached address by one stride. Whenever an axis
boundary is crossed, the whole kernel is recomputed from the new center.

Usage:
    from ndgrid.kernel_iterator import KernelIterator

    it = KernelIterator((10, 20, 30), radius=1)
    flat = image.ravel()
    for center in it:
        local = flat[it.neighbor_addresses()]
"""

import itertools
import logging
from collections.abc import Iterator, Sequence

import numpy as np

from .numeric import clamp

logger = logging.getLogger(__name__)


class InvalidKernelError(ValueError):
    """Kernel window does not include the center."""


class DimensionMismatchError(ValueError):
    """An index, kernel or ROI has the wrong number of dimensions."""


class InvalidRegionError(ValueError):
    """Array extents or ROI bounds are invalid."""


def radius_to_range(radius: int | Sequence[int], ndim: int) -> list[tuple[int, int]]:
    """
    Expand a kernel radius into per-axis (min, max) offset ranges.

    Args:
        radius: Single radius applied to every axis, or one radius per axis.
            Axes missing from a short sequence get radius 0.
        ndim: Number of array dimensions

    Returns:
        List of (-r, r) pairs
    """
    if np.isscalar(radius):
        radius = [radius] * ndim

    kernel_range = []
    for dd, rr in enumerate(radius):
        rr = int(rr)
        if rr < 0:
            raise InvalidKernelError(f"Kernel radius on axis {dd} must be >= 0, got {rr}")
        kernel_range.append((-rr, rr))
    return kernel_range


class KernelIterator:
    """
    Stateful cursor over an N-D array that tracks a kernel of neighbor offsets.

    Kernel ranges are given per axis as (min, max) pairs that must include
    zero, so ((-3, 0), (-3, 3), (0, 3)) spans (x-3, y-3, z+0) to (x+0, y+3, z+3).
    The ROI is given per axis as inclusive (low, high) pairs.
    """

    def __init__(
        self,
        size: Sequence[int] = (1,),
        kernel_range: Sequence[tuple[int, int]] | None = None,
        roi: Sequence[tuple[int, int]] | None = None,
        *,
        radius: int | Sequence[int] | None = None,
    ):
        """
        Args:
            size: Extent of each axis of the array being walked
            kernel_range: Per-axis (min, max) offsets. Missing axes are (0, 0).
            roi: Per-axis inclusive (low, high) bounds. Missing axes span the
                whole axis.
            radius: Symmetric alternative to kernel_range
        """
        if radius is not None:
            if kernel_range is not None:
                raise ValueError("Pass either kernel_range or radius, not both")
            kernel_range = radius_to_range(radius, len(size))
        self.initialize(size, kernel_range, roi)

    @classmethod
    def from_radius(
        cls,
        size: Sequence[int],
        radius: int | Sequence[int],
        roi: Sequence[tuple[int, int]] | None = None,
    ) -> "KernelIterator":
        return cls(size, roi=roi, radius=radius)

    def initialize(
        self,
        size: Sequence[int],
        kernel_range: Sequence[tuple[int, int]] | None = None,
        roi: Sequence[tuple[int, int]] | None = None,
    ) -> None:
        """
        Set every piece of internal state and move to the first ROI cell.

        Validation happens before any state is replaced, so a failed call
        leaves a previously initialized iterator untouched.

        Raises:
            InvalidRegionError: Empty or non-positive size, ROI outside the array
            InvalidKernelError: A kernel range that does not include zero
            DimensionMismatchError: kernel_range or roi longer than size
        """
        size = tuple(int(ss) for ss in size)
        if not size:
            raise InvalidRegionError("Array must have at least one dimension")
        if any(ss <= 0 for ss in size):
            raise InvalidRegionError(f"Array extents must be positive, got {size}")
        ndim = len(size)

        kernel_range = list(kernel_range) if kernel_range is not None else []
        if len(kernel_range) > ndim:
            raise DimensionMismatchError(
                f"Kernel range has {len(kernel_range)} axes but the array has {ndim}"
            )
        kmin = [0] * ndim
        kmax = [0] * ndim
        for dd, (low, high) in enumerate(kernel_range):
            low, high = int(low), int(high)
            if low > 0 or high < 0:
                raise InvalidKernelError(
                    f"Kernel window on axis {dd} does not include the center: ({low}, {high})"
                )
            kmin[dd] = low
            kmax[dd] = high

        roi = list(roi) if roi is not None else []
        if len(roi) > ndim:
            raise DimensionMismatchError(f"ROI has {len(roi)} axes but the array has {ndim}")
        bounds = []
        for dd in range(ndim):
            if dd < len(roi):
                low, high = int(roi[dd][0]), int(roi[dd][1])
                if not 0 <= low <= high <= size[dd] - 1:
                    raise InvalidRegionError(
                        f"ROI ({low}, {high}) on axis {dd} is outside [0, {size[dd] - 1}]"
                    )
            else:
                low, high = 0, size[dd] - 1
            bounds.append((low, high))

        # Longest clamp-free run; max() keeps the first axis on ties
        direction = max(range(ndim), key=lambda dd: size[dd] + kmin[dd] - kmax[dd])

        strides = [1] * ndim
        for dd in range(ndim - 2, -1, -1):
            strides[dd] = strides[dd + 1] * size[dd + 1]

        # Last axis varies fastest, matching row-major addressing
        offsets = np.array(
            list(itertools.product(*(range(lo, hi + 1) for lo, hi in zip(kmin, kmax)))),
            dtype=np.int64,
        ).reshape(-1, ndim)
        center_index = int(np.flatnonzero(~offsets.any(axis=1))[0])

        self._size = size
        self._ndim = ndim
        self._kernel_range = tuple(zip(kmin, kmax))
        self._roi = tuple(bounds)
        self._lo = np.array([lo for lo, _ in bounds], dtype=np.int64)
        self._hi = np.array([hi for _, hi in bounds], dtype=np.int64)
        self._strides = np.array(strides, dtype=np.int64)
        self._direction = direction
        self._fradius = kmax[direction]
        self._rradius = -kmin[direction]
        self._offsets = offsets
        self._center_index = center_index

        # Carry order: traversal axis first, then the others from last to first
        self._carry_order = (direction,) + tuple(
            dd for dd in reversed(range(ndim)) if dd != direction
        )

        self._pos = np.zeros((len(offsets), ndim), dtype=np.int64)
        self._linpos = np.zeros(len(offsets), dtype=np.int64)
        self._end = False

        logger.debug(
            "KernelIterator: size=%s roi=%s kernel=%s direction=%d offsets=%d",
            size,
            self._roi,
            self._kernel_range,
            direction,
            len(offsets),
        )

        self.go_begin()

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def next(self) -> int:
        """
        Advance one cell (prefix style).

        Returns:
            Linear address of the center after the step. At the end this is a
            no-op that returns the current center address.
        """
        if self._end:
            return self.center

        axis = self._direction
        cur = self._pos[self._center_index, axis]

        # Whole kernel stays inside the ROI on the traversal axis
        if cur + self._fradius < self._hi[axis] and cur - self._rradius >= self._lo[axis]:
            self._pos[:, axis] += 1
            self._linpos += self._strides[axis]
            return self.center

        center = self._pos[self._center_index].copy()
        for dd in self._carry_order:
            if center[dd] < self._hi[dd]:
                center[dd] += 1
                break
            center[dd] = self._lo[dd]
        else:
            # Carried out of the slowest axis: one past the last cell
            self._end = True
            return self.center

        self._place(center)
        return self.center

    def previous(self) -> int:
        """
        Step back one cell (prefix style).

        From the end state this lands on the last ROI cell.

        Returns:
            Linear address of the center after the step. At the beginning this
            is a no-op that returns the current center address.
        """
        if self.is_begin():
            return self.center

        if self._end:
            self._end = False
            return self.center

        axis = self._direction
        cur = self._pos[self._center_index, axis]

        if cur + self._fradius <= self._hi[axis] and cur - self._rradius > self._lo[axis]:
            self._pos[:, axis] -= 1
            self._linpos -= self._strides[axis]
            return self.center

        center = self._pos[self._center_index].copy()
        for dd in self._carry_order:
            if center[dd] > self._lo[dd]:
                center[dd] -= 1
                break
            center[dd] = self._hi[dd]
        else:
            return self.center

        self._place(center)
        return self.center

    def post_next(self) -> int:
        """Advance one cell, returning the center address from before the step."""
        ret = self.center
        self.next()
        return ret

    def post_previous(self) -> int:
        """Step back one cell, returning the center address from before the step."""
        ret = self.center
        self.previous()
        return ret

    def go_index(self, position: Sequence[int]) -> bool:
        """
        Jump to the given position, clamped into the ROI.

        Args:
            position: ND coordinate of the new center

        Returns:
            True if clamping changed any coordinate

        Raises:
            DimensionMismatchError: position has the wrong length. The
                iterator is left unchanged.
        """
        position = [int(pp) for pp in position]
        if len(position) != self._ndim:
            raise DimensionMismatchError(
                f"Index has {len(position)} coordinates but the iterator has {self._ndim}"
            )

        center = np.array(
            [clamp(pp, lo, hi) for pp, (lo, hi) in zip(position, self._roi)], dtype=np.int64
        )
        self._place(center)
        self._end = False
        return any(int(cc) != pp for cc, pp in zip(center, position))

    def go_begin(self) -> None:
        """Move to the first ROI cell and clear the end flag."""
        self._place(self._lo.copy())
        self._end = False

    def go_end(self) -> None:
        """Move to the last ROI cell and set the end flag."""
        self._place(self._hi.copy())
        self._end = True

    def _place(self, center: np.ndarray) -> None:
        """Recompute every offset coordinate and address around center."""
        self._pos = np.clip(self._offsets + center, self._lo, self._hi)
        self._linpos = self._pos @ self._strides

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_begin(self) -> bool:
        return not self._end and bool(np.array_equal(self._pos[self._center_index], self._lo))

    def is_end(self) -> bool:
        """True one step past the last cell (the last cell itself is not the end)."""
        return self._end

    def _check_offset(self, kk: int) -> int:
        kk = int(kk)
        if not 0 <= kk < len(self._offsets):
            raise IndexError(f"Kernel index {kk} outside [0, {len(self._offsets)})")
        return kk

    def neighbor_address(self, kk: int) -> int:
        """Linear address of the kk'th kernel element (offset-table order)."""
        kk = self._check_offset(kk)
        return int(self._linpos[kk])

    def neighbor_index(self, kk: int, bound: bool = True) -> tuple[int, ...]:
        """
        ND coordinate of the kk'th kernel element.

        Args:
            kk: Kernel index in [0, ksize)
            bound: Report the sampled (ROI-clamped) point. If False, report the
                theoretical position center + offset, which may lie outside the
                ROI near its edges.
        """
        kk = self._check_offset(kk)
        if bound:
            return tuple(int(vv) for vv in self._pos[kk])
        center = self._pos[self._center_index]
        return tuple(int(cc + oo) for cc, oo in zip(center, self._offsets[kk]))

    def get(self, kk: int) -> tuple[int, tuple[int, ...]]:
        """Linear address and clamped ND coordinate of the kk'th kernel element."""
        return self.neighbor_address(kk), self.neighbor_index(kk)

    def is_inside(self, kk: int) -> bool:
        """Whether the unclamped kk'th neighbor lies inside the ROI."""
        return self.neighbor_index(kk, bound=False) == self.neighbor_index(kk)

    def neighbor_addresses(self) -> np.ndarray:
        """Addresses of every kernel element, in offset-table order."""
        return self._linpos.copy()

    def neighbor_positions(self) -> np.ndarray:
        """(ksize, ndim) array of clamped kernel coordinates."""
        return self._pos.copy()

    def offset(self, kk: int) -> tuple[int, ...]:
        """Offset vector of the kk'th kernel element relative to the center."""
        kk = self._check_offset(kk)
        return tuple(int(vv) for vv in self._offsets[kk])

    def __iter__(self) -> Iterator[int]:
        """Yield the center address of every cell from here until the end."""
        while not self._end:
            yield self.center
            self.next()

    def __repr__(self) -> str:
        return (
            f"KernelIterator(size={self._size}, kernel_range={self._kernel_range}, "
            f"roi={self._roi}, position={self.position}, end={self._end})"
        )

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def center(self) -> int:
        """Linear address of the center."""
        return int(self._linpos[self._center_index])

    @property
    def position(self) -> tuple[int, ...]:
        """ND coordinate of the center."""
        return tuple(int(vv) for vv in self._pos[self._center_index])

    @property
    def center_index(self) -> int:
        """Index of the zero offset in the offset table."""
        return self._center_index

    @property
    def ksize(self) -> int:
        return len(self._offsets)

    @property
    def ndim(self) -> int:
        return self._ndim

    @property
    def size(self) -> tuple[int, ...]:
        return self._size

    @property
    def strides(self) -> tuple[int, ...]:
        return tuple(int(ss) for ss in self._strides)

    @property
    def roi(self) -> tuple[tuple[int, int], ...]:
        return self._roi

    @property
    def kernel_range(self) -> tuple[tuple[int, int], ...]:
        return self._kernel_range

    @property
    def offsets(self) -> np.ndarray:
        return self._offsets.copy()

    @property
    def direction(self) -> int:
        """Axis the iterator advances along fastest."""
        return self._direction

    @property
    def num_positions(self) -> int:
        """Number of cells in the ROI."""
        return int(np.prod(self._hi - self._lo + 1))
