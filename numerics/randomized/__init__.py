"""
Randomized linear algebra

Core components:
- RandomizedRangeFinder: Gaussian sketch + QR (+ power iterations) basis for range(A)
- RandomRangeSVD: truncated SVD via the small matrix Q^T A
- RandomRangeSelfAdjointEigenSolver: eigenpairs via Q^T A Q
"""

from .config import RangeFinderConfig, get_config
from .range_finder import (
    RandomizedRangeFinder,
    RandomRangeSelfAdjointEigenSolver,
    RandomRangeSVD,
    randomized_svd,
)

__all__ = [
    "RandomizedRangeFinder",
    "RandomRangeSVD",
    "RandomRangeSelfAdjointEigenSolver",
    "randomized_svd",
    "RangeFinderConfig",
    "get_config",
]
