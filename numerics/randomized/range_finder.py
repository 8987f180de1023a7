"""
Randomized range finding and the solvers built on it.

RandomizedRangeFinder produces an orthonormal Q whose range approximates the
range of A. From Q:
- the SVD of A follows from the small SVD of B = Q^T A
- the eigensystem of a symmetric A follows from B = Q^T A Q

With a fixed rank, one Gaussian sketch of that many columns is taken. Without
one, the basis grows in blocks: each new block is orthogonalized against the
current basis, columns with norm below tol are dropped, and growth stops after
a run of small columns or when max_rank is reached.

Matrices are assumed real.
"""

import logging
import math

import numpy as np
from scipy import linalg

from .config import RangeFinderConfig

logger = logging.getLogger(__name__)

# Consecutive below-tolerance columns that end adaptive growth
MIN_RUN = 5


def _orthonormal(Y: np.ndarray) -> np.ndarray:
    q, _ = linalg.qr(Y, mode="economic")
    return q


class RandomizedRangeFinder:
    """Orthonormal basis approximating the range of a matrix."""

    def __init__(
        self,
        power_iters: int = 0,
        rank: int | None = None,
        tol: float = 0.01,
        min_rank: int = -1,
        max_rank: int = -1,
        transpose: bool = False,
        seed: int | None = None,
    ):
        """
        Args:
            power_iters: Number of power iterations per sketch block
            rank: Fixed rank of the approximation. None grows the basis adaptively.
            tol: Norm below which an orthogonalized column is treated as noise
            min_rank: First block size for adaptive growth (<= 1 picks log2 of
                the smaller dimension, at least MIN_RUN)
            max_rank: Upper bound on the basis size (<= 1 means no bound)
            transpose: Find the range of A^T instead of A
            seed: Seed for the Gaussian sketches
        """
        self.power_iters = power_iters
        self.rank = rank
        self.tol = tol
        self.min_rank = min_rank
        self.max_rank = max_rank
        self.transpose = transpose
        self.seed = seed
        self.Q = None

    @classmethod
    def from_config(cls, config: RangeFinderConfig, **kwargs):
        """Build from a RangeFinderConfig; kwargs are passed through (e.g. transpose)."""
        return cls(
            power_iters=config.power_iters,
            rank=config.rank,
            tol=config.tol,
            min_rank=config.min_rank,
            max_rank=config.max_rank,
            seed=config.seed,
            **kwargs,
        )

    def compute(self, A):
        """
        Find the range basis of A (or A^T when transpose is set).

        Returns:
            self, with Q filled in
        """
        A = np.asarray(A, dtype=float)
        if A.ndim != 2:
            raise ValueError(f"Expected a 2-D matrix, got shape {A.shape}")
        if 0 in A.shape:
            raise ValueError(f"Cannot sketch an empty matrix of shape {A.shape}")

        self.Q = self._find_range(A.T if self.transpose else A)
        return self

    def _rank_limits(self, rows: int, cols: int) -> tuple[int, int]:
        full = min(rows, cols)
        if self.rank is not None:
            rank = int(self.rank)
            if rank < 1:
                raise ValueError(f"Rank must be >= 1, got {rank}")
            rank = min(rank, full)
            return rank, rank

        if self.min_rank <= 1:
            first = math.ceil(math.log2(full)) if full > 1 else 1
        else:
            first = self.min_rank
        first = min(full, max(MIN_RUN, first))

        max_rank = full if self.max_rank <= 1 else min(self.max_rank, full)
        return min(first, max_rank), max_rank

    def _find_range(self, A: np.ndarray) -> np.ndarray:
        rows, cols = A.shape
        block, max_rank = self._rank_limits(rows, cols)
        rng = np.random.default_rng(self.seed)

        Q = np.zeros((rows, 0))
        while Q.shape[1] < max_rank:
            block = min(block, max_rank - Q.shape[1])

            omega = rng.standard_normal((cols, block))
            Qtmp = _orthonormal(A @ omega)
            for _ in range(self.power_iters):
                Qhat = _orthonormal(A.T @ Qtmp)
                Qtmp = _orthonormal(A @ Qhat)

            if Q.shape[1] == 0:
                Q = Qtmp
            else:
                # Orthogonalize against the current basis, then against each other
                Qc = Qtmp - Q @ (Q.T @ Qtmp)
                keep = []
                run = 0
                for cc in range(Qc.shape[1]):
                    col = Qc[:, cc]
                    for kept in keep:
                        col = col - (kept @ col) * kept
                    norm = np.linalg.norm(col)
                    if norm > self.tol:
                        keep.append(col / norm)
                        run = 0
                    else:
                        run += 1
                    if run >= MIN_RUN:
                        break

                if not keep:
                    logger.debug("No new directions above tol=%g, stopping", self.tol)
                    break

                Q = np.hstack([Q, np.column_stack(keep)])
                if run >= MIN_RUN:
                    break

            logger.debug("Range basis: %d columns (max %d)", Q.shape[1], max_rank)
            block = Q.shape[1]

        return Q


class RandomRangeSVD(RandomizedRangeFinder):
    """Truncated SVD from a randomized range basis."""

    def __init__(self, *args, compute_u: bool = True, compute_v: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.compute_u = compute_u
        self.compute_v = compute_v
        self._U = None
        self._V = None
        self._s = None

    def compute(self, A):
        super().compute(A)
        A = np.asarray(A, dtype=float)

        if self.transpose:
            # B = Q^T A^T = U S V^T  ->  A = V S (Q U)^T
            B = self.Q.T @ A.T
            ub, s, vbt = linalg.svd(B, full_matrices=False)
            self._V = self.Q @ ub
            self._U = vbt.T
        else:
            # B = Q^T A = U S V^T  ->  A = (Q U) S V^T
            B = self.Q.T @ A
            ub, s, vbt = linalg.svd(B, full_matrices=False)
            self._U = self.Q @ ub
            self._V = vbt.T

        self._s = s
        return self

    @property
    def singular_values(self) -> np.ndarray:
        return self._s

    @property
    def U(self) -> np.ndarray:
        if not self.compute_u:
            raise ValueError("compute_u must be set before reading U")
        return self._U

    @property
    def V(self) -> np.ndarray:
        if not self.compute_v:
            raise ValueError("compute_v must be set before reading V")
        return self._V


class RandomRangeSelfAdjointEigenSolver(RandomizedRangeFinder):
    """Leading eigenpairs of a symmetric matrix from a randomized range basis."""

    def __init__(self, *args, compute_eigenvectors: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.compute_eigenvectors = compute_eigenvectors
        self._evals = None
        self._evecs = None

    def compute(self, A):
        A = np.asarray(A, dtype=float)
        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise ValueError(f"Expected a square matrix, got shape {A.shape}")
        super().compute(A)

        B = self.Q.T @ A @ self.Q
        evals, evecs = linalg.eigh(B)
        self._evals = evals
        self._evecs = self.Q @ evecs
        return self

    @property
    def eigenvalues(self) -> np.ndarray:
        """Eigenvalues in ascending order."""
        return self._evals

    @property
    def eigenvectors(self) -> np.ndarray:
        if not self.compute_eigenvectors:
            raise ValueError("compute_eigenvectors must be set before reading eigenvectors")
        return self._evecs


def randomized_svd(A, rank: int, power_iters: int = 2, seed: int | None = None):
    """
    Rank-k SVD of A.

    Returns:
        (U, s, Vt) with U (m, k), s (k,), Vt (k, n)
    """
    svd = RandomRangeSVD(power_iters=power_iters, rank=rank, seed=seed).compute(A)
    return svd.U, svd.singular_values, svd.V.T
