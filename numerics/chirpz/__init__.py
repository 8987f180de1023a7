"""
Chirp-z transforms

Sample the spectrum of a line on a frequency grid scaled by alpha:
- chirpz_brute: direct O(N^2) reference
- chirpz_fft: exact O(N log N) chirp convolution
- chirpz_zoom: FFT + Lanczos zoom of the spectrum
"""

from .chirpz import (
    chirpz_brute,
    chirpz_fft,
    chirpz_zoom,
    create_chirp,
    interp,
    lanczos_kernel,
    zoom,
)
from .config import ChirpzConfig, get_config

__all__ = [
    "chirpz_brute",
    "chirpz_fft",
    "chirpz_zoom",
    "create_chirp",
    "interp",
    "lanczos_kernel",
    "zoom",
    "ChirpzConfig",
    "get_config",
]
