"""
Plot sink for 1-D lines and 2-D array slices.

Nothing here feeds back into computation: plots are written to disk and
forgotten. Line plots go through matplotlib (Agg backend, no display needed);
array slices are normalized to 8 bits and written with OpenCV.
"""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

import cv2
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

logger = logging.getLogger(__name__)


class Plotter:
    """Accumulates lines and functions, then writes them to one figure."""

    def __init__(self, xres: int = 1024, yres: int = 768):
        self.xres = xres
        self.yres = yres
        self.clear()

    def clear(self):
        """Remove plotted lines and reset the axis ranges."""
        self._arrays = []
        self._funcs = []
        self.x_range = None
        self.y_range = None

    def set_res(self, xres: int, yres: int):
        self.xres = xres
        self.yres = yres

    def set_x_range(self, low: float, high: float):
        """Fix the x range. Pass low > high to use the extremal values of the data."""
        self.x_range = None if low > high else (low, high)

    def set_y_range(self, low: float, high: float):
        """Fix the y range. Pass low > high to use the extremal values of the data."""
        self.y_range = None if low > high else (low, high)

    def add_array(self, y: Sequence[float], x: Sequence[float] | None = None, style: str = "-"):
        """
        Add a line.

        Args:
            y: Line values
            x: Sample positions. Defaults to 0..len(y)-1
            style: matplotlib format string
        """
        y = np.asarray(y, dtype=float)
        x = np.arange(len(y)) if x is None else np.asarray(x, dtype=float)
        if x.shape != y.shape:
            raise ValueError(f"x and y lengths differ: {x.shape} vs {y.shape}")
        self._arrays.append((x, y, style))

    def add_func(self, func: Callable[[np.ndarray], np.ndarray], style: str = "-"):
        """Add a function, sampled over the x range at write time."""
        self._funcs.append((func, style))

    def write(self, fname: str | Path, xres: int | None = None, yres: int | None = None):
        """
        Write the figure. The format follows the file extension.

        Args:
            fname: Output path
            xres: Width in pixels for this write only
            yres: Height in pixels for this write only
        """
        xres = xres or self.xres
        yres = yres or self.yres
        dpi = 100

        fig, ax = plt.subplots(figsize=(xres / dpi, yres / dpi), dpi=dpi)
        for x, y, style in self._arrays:
            ax.plot(x, y, style)

        if self._funcs:
            if self.x_range is not None:
                low, high = self.x_range
            elif self._arrays:
                low = min(x.min() for x, _, _ in self._arrays)
                high = max(x.max() for x, _, _ in self._arrays)
            else:
                low, high = -1.0, 1.0
            xs = np.linspace(low, high, xres)
            for func, style in self._funcs:
                ax.plot(xs, func(xs), style)

        if self.x_range is not None:
            ax.set_xlim(*self.x_range)
        if self.y_range is not None:
            ax.set_ylim(*self.y_range)

        fig.tight_layout()
        fig.savefig(fname)
        plt.close(fig)
        logger.debug("Wrote plot %s", fname)


def write_plot(filename: str | Path, data: Sequence[float], style: str = "-"):
    plotter = Plotter()
    plotter.add_array(data, style=style)
    plotter.write(filename)


def write_plot_re_im(filename: str | Path, values: Sequence[complex]):
    """Plot the real and imaginary parts of a complex line."""
    values = np.asarray(values, dtype=complex)
    plotter = Plotter()
    plotter.add_array(values.real)
    plotter.add_array(values.imag)
    plotter.write(filename)


def write_plot_abs_ang(filename: str | Path, values: Sequence[complex]):
    """Plot the magnitude and phase of a complex line."""
    values = np.asarray(values, dtype=complex)
    plotter = Plotter()
    plotter.add_array(np.abs(values))
    plotter.add_array(np.angle(values))
    plotter.write(filename)


def write_slice_image(
    filename: str | Path,
    array: np.ndarray,
    axes: tuple[int, int] = (0, 1),
    index: Sequence[int] | None = None,
) -> np.ndarray:
    """
    Write a 2-D slice of an N-D array as an 8-bit grayscale image.

    Args:
        filename: Output image path (format from extension)
        array: N-D array (complex values are written as magnitude)
        axes: The two axes that span the image (rows, cols)
        index: Position along every other axis. Defaults to the middle.

    Returns:
        The 8-bit image that was written
    """
    array = np.asarray(array)
    if array.ndim < 2:
        raise ValueError(f"Need at least 2 dimensions to write an image, got {array.ndim}")
    if np.iscomplexobj(array):
        array = np.abs(array)

    if index is None:
        index = [ss // 2 for ss in array.shape]
    if len(index) != array.ndim:
        raise ValueError(f"Index has {len(index)} coordinates but the array has {array.ndim}")

    selector = tuple(slice(None) if dd in axes else int(index[dd]) for dd in range(array.ndim))
    image = array[selector].astype(float)
    if axes[0] > axes[1]:
        image = image.T

    low, high = image.min(), image.max()
    if high > low:
        image = (image - low) / (high - low) * 255.0
    else:
        image = np.zeros_like(image)
    image = np.round(image).astype(np.uint8)

    cv2.imwrite(str(filename), image)
    logger.debug("Wrote slice image %s (%dx%d)", filename, *image.shape)
    return image
