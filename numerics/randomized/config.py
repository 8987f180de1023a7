"""
Configuration for randomized range finding

Sketch sizes, power iterations and stopping tolerance for the randomized
SVD / eigensolvers.
"""

from dataclasses import dataclass


@dataclass
class RangeFinderConfig:
    """Configuration for RandomizedRangeFinder and its solvers."""

    # === Sketch ===
    power_iters: int = 2          # Power iterations per sketch block
    rank: int | None = None       # Fixed rank; None = adaptive growth

    # === Adaptive growth ===
    tol: float = 0.01             # Column norm below which a new direction is noise
    min_rank: int = -1            # <= 1: start from ceil(log2(min(rows, cols)))
    max_rank: int = -1            # <= 1: up to min(rows, cols)

    # === Reproducibility ===
    seed: int | None = None


@dataclass
class FastConfig(RangeFinderConfig):
    """Single pass sketch, no power iterations."""

    power_iters: int = 0


@dataclass
class AccurateConfig(RangeFinderConfig):
    """More power iterations and a tighter tolerance for slowly decaying spectra."""

    power_iters: int = 4
    tol: float = 1e-3


CONFIGS = {
    "default": RangeFinderConfig(),
    "fast": FastConfig(),
    "accurate": AccurateConfig(),
}


def get_config(name="default"):
    """
    Get configuration by name.

    Args:
        name: Configuration name ("default", "fast", "accurate")

    Returns:
        config: RangeFinderConfig instance
    """
    if name not in CONFIGS:
        raise ValueError(f"Unknown config: {name}. Available: {list(CONFIGS.keys())}")

    return CONFIGS[name]
