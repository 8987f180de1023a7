"""N-dimensional storage, kernel iteration and stencil filters."""

from .kernel_iterator import (
    DimensionMismatchError,
    InvalidKernelError,
    InvalidRegionError,
    KernelIterator,
    radius_to_range,
)
from .nd_storage import NDStore
from .numeric import clamp, wrap
from .pixel_types import RGB, RGB_DTYPE, RGBA, RGBA_DTYPE, to_real
from .stencil import kernel_reduce, max_filter, mean_filter, median_filter, min_filter

__all__ = [
    # Kernel iterator
    "KernelIterator",
    "InvalidKernelError",
    "DimensionMismatchError",
    "InvalidRegionError",
    "radius_to_range",
    # Storage
    "NDStore",
    # Stencil filters
    "kernel_reduce",
    "mean_filter",
    "median_filter",
    "max_filter",
    "min_filter",
    # Scalars and pixels
    "clamp",
    "wrap",
    "RGB",
    "RGBA",
    "RGB_DTYPE",
    "RGBA_DTYPE",
    "to_real",
]
