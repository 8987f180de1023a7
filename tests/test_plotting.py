"""
Tests for the plot sink: files get written, shapes and errors are right.
"""

import numpy as np
import pytest

from ndgrid.plotting import (
    Plotter,
    write_plot,
    write_plot_abs_ang,
    write_plot_re_im,
    write_slice_image,
)


class TestPlotter:
    def test_write_lines_and_funcs(self, tmp_path):
        plotter = Plotter(320, 240)
        plotter.add_array([0, 1, 4, 9])
        plotter.add_array([1, 2, 3], x=[0.5, 1.5, 2.5], style="o")
        plotter.add_func(np.sin, style="--")
        plotter.set_y_range(-2, 10)
        out = tmp_path / "lines.png"
        plotter.write(out)
        assert out.exists() and out.stat().st_size > 0

    def test_func_only_uses_x_range(self, tmp_path):
        plotter = Plotter()
        plotter.set_x_range(0, np.pi)
        plotter.add_func(np.cos)
        out = tmp_path / "func.svg"
        plotter.write(out, xres=200, yres=100)
        assert out.exists()

    def test_inverted_range_means_auto(self):
        plotter = Plotter()
        plotter.set_x_range(1, 0)
        plotter.set_y_range(5, -5)
        assert plotter.x_range is None
        assert plotter.y_range is None

    def test_clear(self):
        plotter = Plotter()
        plotter.add_array([1, 2])
        plotter.set_x_range(0, 1)
        plotter.clear()
        assert plotter._arrays == []
        assert plotter.x_range is None

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            Plotter().add_array([1, 2, 3], x=[0, 1])

    def test_helpers(self, tmp_path):
        values = np.exp(1j * np.linspace(0, 4, 32))
        write_plot(tmp_path / "a.png", values.real)
        write_plot_re_im(tmp_path / "b.png", values)
        write_plot_abs_ang(tmp_path / "c.png", values)
        for name in ("a.png", "b.png", "c.png"):
            assert (tmp_path / name).exists()


class TestSliceImage:
    def test_default_middle_slice(self, tmp_path):
        array = np.arange(4 * 5 * 6, dtype=float).reshape(4, 5, 6)
        out = tmp_path / "slice.png"
        image = write_slice_image(out, array)
        assert out.exists()
        assert image.shape == (4, 5)
        assert image.dtype == np.uint8
        assert image.min() == 0
        assert image.max() == 255

    def test_axes_and_index(self, tmp_path):
        array = np.random.default_rng(0).normal(size=(4, 5, 6))
        image = write_slice_image(tmp_path / "xz.png", array, axes=(0, 2), index=(0, 2, 0))
        assert image.shape == (4, 6)
        swapped = write_slice_image(tmp_path / "zx.png", array, axes=(2, 0), index=(0, 2, 0))
        np.testing.assert_array_equal(swapped, image.T)

    def test_complex_written_as_magnitude(self, tmp_path):
        array = np.ones((3, 3), dtype=complex)
        array[0, 0] = 3j
        image = write_slice_image(tmp_path / "c.png", array)
        assert image[0, 0] == 255
        assert image[1, 1] == 0

    def test_needs_two_dimensions(self, tmp_path):
        with pytest.raises(ValueError):
            write_slice_image(tmp_path / "x.png", np.zeros(5))

    def test_index_length(self, tmp_path):
        with pytest.raises(ValueError):
            write_slice_image(tmp_path / "x.png", np.zeros((3, 3, 3)), index=(1, 1))
