"""
Configuration for chirp-z transforms

Interpolation radius and debug-plot settings in one place.
"""

from dataclasses import dataclass


@dataclass
class ChirpzConfig:
    """Configuration for chirp-z transforms."""

    # === Interpolation ===
    zoom_radius: int = 4     # Lanczos radius for Fourier-line zoom

    # === Diagnostics ===
    debug: bool = False      # Write Re/Im plots of every stage
    debug_dir: str = "chirpz_debug"


@dataclass
class DebugConfig(ChirpzConfig):
    """Write intermediate plots while transforming."""

    debug: bool = True


@dataclass
class SharpConfig(ChirpzConfig):
    """Wider interpolation window, slower but less ringing."""

    zoom_radius: int = 6


CONFIGS = {
    "default": ChirpzConfig(),
    "debug": DebugConfig(),
    "sharp": SharpConfig(),
}


def get_config(name="default"):
    """
    Get configuration by name.

    Args:
        name: Configuration name ("default", "debug", "sharp")

    Returns:
        config: ChirpzConfig instance
    """
    if name not in CONFIGS:
        raise ValueError(f"Unknown config: {name}. Available: {list(CONFIGS.keys())}")

    return CONFIGS[name]
