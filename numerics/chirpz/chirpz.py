"""
Chirp-z transforms - sample the spectrum of a line on a scaled frequency grid.

For an input x of length N and a zoom factor alpha, the transform is

    X[i] = sum_j x[j] * exp(-2*pi*1j * alpha * j * (i - N/2) / N)

so alpha = 1 is the ordinary (centered) DFT and |alpha| < 1 zooms in on the
low frequencies with finer-than-DFT spacing.

Three ways to compute it:
- chirpz_brute: direct O(N^2) sum, the reference
- chirpz_fft: exact O(N log N) via Bluestein's chirp convolution
- chirpz_zoom: FFT followed by Lanczos interpolation of the spectrum
  (approximate, cheap, sign of alpha picks the FFT direction)

The FFT itself comes from scipy.fft.
"""

import logging
from pathlib import Path

import numpy as np
from scipy import fft as sfft

from .config import ChirpzConfig

logger = logging.getLogger(__name__)


def lanczos_kernel(x, radius: int) -> np.ndarray:
    """Lanczos window sinc(x) * sinc(x / radius), zero for |x| >= radius."""
    x = np.asarray(x, dtype=float)
    return np.where(np.abs(x) < radius, np.sinc(x) * np.sinc(x / radius), 0.0)


def _lanczos_sample(values: np.ndarray, positions: np.ndarray, radius: int) -> np.ndarray:
    """Evaluate values at fractional positions; samples outside the line count as zero."""
    n = len(values)
    centers = np.floor(positions + 0.5).astype(np.int64)
    taps = np.arange(-radius, radius + 1)
    idx = centers[:, None] + taps[None, :]
    valid = (idx >= 0) & (idx < n)
    weights = lanczos_kernel(idx - positions[:, None], radius) * valid
    return (weights * values[np.clip(idx, 0, n - 1)]).sum(axis=1)


def interp(values, out_size: int, radius: int = 3) -> np.ndarray:
    """
    Resample a line to out_size points with Lanczos interpolation.

    Args:
        values: Input line
        out_size: Number of output samples
        radius: Lanczos radius

    Returns:
        Complex array of length out_size
    """
    values = np.asarray(values, dtype=complex)
    ratio = len(values) / out_size
    return _lanczos_sample(values, ratio * np.arange(out_size), radius)


def create_chirp(
    size: int,
    orig_size: int,
    up_ratio: float,
    alpha: float,
    center: bool = False,
    fft: bool = False,
) -> np.ndarray:
    """
    Build exp(-1j * pi * alpha * x^2 / orig_size).

    Args:
        size: Length of the chirp
        orig_size: Original line length; sets the maximum frequency reached
        up_ratio: Upsampling ratio, x = index / up_ratio
        alpha: Chirp rate
        center: Measure x from the middle of the array instead of index 0
        fft: Return the (1/size normalized) FFT of the chirp instead

    Returns:
        Complex array of length size
    """
    ii = np.arange(size)
    xx = (ii - size / 2.0) / up_ratio if center else ii / up_ratio
    chirp = np.exp(-1j * np.pi * alpha * xx * xx / orig_size)
    if fft:
        chirp = sfft.fft(chirp) / size
    return chirp


def _check_line(values) -> np.ndarray:
    values = np.asarray(values, dtype=complex)
    if values.ndim != 1:
        raise ValueError(f"Expected a 1-D line, got shape {values.shape}")
    if len(values) == 0:
        raise ValueError("Cannot transform an empty line")
    return values


def _debug_plot(config: ChirpzConfig, name: str, values: np.ndarray):
    if not config.debug:
        return
    from ndgrid.plotting import write_plot_re_im

    out_dir = Path(config.debug_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    write_plot_re_im(out_dir / f"{name}.svg", values)


def chirpz_brute(values, alpha: float) -> np.ndarray:
    """
    Chirp-z transform by direct O(N^2) summation.

    Args:
        values: Input line of length N
        alpha: Fraction of the full frequency range to sample

    Returns:
        Complex array of length N
    """
    values = _check_line(values)
    n = len(values)
    jj = np.arange(n)
    ff = jj - n / 2.0
    phase = np.exp(-2j * np.pi * alpha * np.outer(ff, jj) / n)
    return phase @ values


def chirpz_fft(values, alpha: float, config: ChirpzConfig | None = None) -> np.ndarray:
    """
    Chirp-z transform in O(N log N), equal to chirpz_brute up to rounding.

    Uses 2*j*k = j^2 + k^2 - (k - j)^2 to turn the sum into a convolution with
    a chirp, which is done with zero-padded FFTs.

    Args:
        values: Input line of length N
        alpha: Fraction of the full frequency range to sample
        config: Debug-plot settings

    Returns:
        Complex array of length N
    """
    config = config or ChirpzConfig()
    values = _check_line(values)
    n = len(values)

    prechirp = create_chirp(n, n, 1.0, alpha, center=False)
    postchirp = create_chirp(n, n, 1.0, alpha, center=True)

    # Convolution kernel over lags m = -(n-1) .. (n-1)
    lags = np.arange(-(n - 1), n)
    kernel = np.exp(1j * np.pi * alpha * (lags - n / 2.0) ** 2 / n)

    padsize = sfft.next_fast_len(2 * n - 1)
    signal = np.zeros(padsize, dtype=complex)
    signal[:n] = values * prechirp
    _debug_plot(config, "fft_premult", signal[:n])

    # Negative lags wrap to the end of the buffer
    conv = np.zeros(padsize, dtype=complex)
    conv[:n] = kernel[n - 1:]
    if n > 1:
        conv[padsize - (n - 1):] = kernel[: n - 1]

    convolved = sfft.ifft(sfft.fft(signal) * sfft.fft(conv))[:n]
    _debug_plot(config, "fft_convolve", convolved)

    out = postchirp * convolved
    _debug_plot(config, "fft_out", out)
    logger.debug("chirpz_fft: n=%d alpha=%g padsize=%d", n, alpha, padsize)
    return out


def zoom(values, alpha: float, radius: int = 4) -> np.ndarray:
    """
    Interpolated zoom of a centered Fourier-space line.

    Output sample o reads the input at (o - N/2) * alpha + N/2.

    Args:
        values: Line in the Fourier domain, zero frequency in the middle
        alpha: Zoom factor, -1 <= alpha <= 1
        radius: Lanczos radius

    Returns:
        Complex array of the same length
    """
    if alpha < -1 or alpha > 1:
        raise ValueError(f"Zoom (alpha) must satisfy -1 <= alpha <= 1, got {alpha}")
    values = _check_line(values)
    n = len(values)
    positions = (np.arange(n) - n / 2.0) * alpha + n / 2.0
    return _lanczos_sample(values, positions, radius)


def chirpz_zoom(values, alpha: float, config: ChirpzConfig | None = None) -> np.ndarray:
    """
    Approximate chirp-z transform: FFT, then zoom the spectrum.

    A negative alpha uses the forward FFT, a positive one the backward FFT.
    Both are normalized by 1/N.

    Args:
        values: Input line
        alpha: Zoom factor, -1 <= alpha <= 1
        config: Interpolation radius and debug-plot settings

    Returns:
        Complex array of the same length
    """
    if alpha < -1 or alpha > 1:
        raise ValueError(f"Zoom (alpha) must satisfy -1 <= alpha <= 1, got {alpha}")
    config = config or ChirpzConfig()
    values = _check_line(values)
    n = len(values)

    spectrum = sfft.fft(values) / n if alpha < 0 else sfft.ifft(values)

    # Zero frequency to the middle
    spectrum = np.roll(spectrum, -(n // 2))
    _debug_plot(config, "zoom_spectrum", spectrum)

    out = zoom(spectrum, abs(alpha), radius=config.zoom_radius)
    _debug_plot(config, "zoom_out", out)
    return out
