"""
Stencil filters driven by KernelIterator.

Each filter visits every cell of the ROI, gathers the values under the kernel
(edges replicated), and reduces them to one output value. Cells outside the ROI
keep their input value. Over the full array these match the
scipy.ndimage filters with mode="nearest".
"""

import logging
from collections.abc import Callable, Sequence

import numpy as np

from .nd_storage import NDStore

logger = logging.getLogger(__name__)


def kernel_reduce(
    store: NDStore,
    reducer: Callable[[np.ndarray], float],
    kernel_range: Sequence[tuple[int, int]] | None = None,
    roi: Sequence[tuple[int, int]] | None = None,
    radius: int | Sequence[int] | None = None,
) -> NDStore:
    """
    Apply reducer to the kernel neighborhood of every ROI cell.

    Args:
        store: Input array
        reducer: Maps the 1-D array of neighbor values (offset-table order)
            to one output value
        kernel_range: Per-axis (min, max) kernel offsets
        roi: Per-axis inclusive bounds of the cells to filter
        radius: Symmetric alternative to kernel_range

    Returns:
        New store with the filtered values
    """
    it = store.kernel_iterator(kernel_range, roi, radius=radius)
    out = store.copy()
    src = store.data
    dst = out.data

    logger.info(
        "Filtering %s over roi=%s with %d-element kernel", store.size, it.roi, it.ksize
    )

    for center in it:
        dst[center] = reducer(src[it.neighbor_addresses()])

    return out


def mean_filter(store: NDStore, radius: int | Sequence[int], roi=None) -> NDStore:
    """Local average over a (2r+1)^D box."""
    return kernel_reduce(store, np.mean, roi=roi, radius=radius)


def median_filter(store: NDStore, radius: int | Sequence[int], roi=None) -> NDStore:
    return kernel_reduce(store, np.median, roi=roi, radius=radius)


def max_filter(store: NDStore, radius: int | Sequence[int], roi=None) -> NDStore:
    return kernel_reduce(store, np.max, roi=roi, radius=radius)


def min_filter(store: NDStore, radius: int | Sequence[int], roi=None) -> NDStore:
    return kernel_reduce(store, np.min, roi=roi, radius=radius)
