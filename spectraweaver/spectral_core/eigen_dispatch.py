#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

Eigen Dispatcher — bandwidth-driven choice between a banded symmetric
eigensolver and a general dense symmetric eigensolver.

Two solver paths share one contract, ``(laplacian) -> EigenResult``:

  1. BANDED: the Laplacian is packed into LAPACK lower band storage and
     handed to ``scipy.linalg.eig_banded`` (?sbevd-family, O(n * b^2)).
     Assembly graphs laid out along a linear path produce exactly this kind
     of narrow-band Laplacian.
  2. GENERAL: ``scipy.linalg.eigh`` on the dense matrix (O(n^3)); correct
     for any symmetric input.

The path is picked by a pure predicate on the bandwidth:
``bandwidth <= floor(n * band_ratio)`` goes BANDED, anything wider goes
GENERAL. A solver failure is reported, never retried on the other path.

Both paths return ascending eigenvalues and unit-norm eigenvectors. The sign
of each eigenvector is whatever LAPACK produced and may differ between the
two paths and between library versions.

Eigenvalues with ``|lambda| < negative_tolerance`` are clamped to exactly 0
when ``clamp_noise`` is set (the default); anything below
``-negative_tolerance`` raises NegativeEigenvalue.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import numpy as np
from scipy import linalg

from ..errors import EigendecompositionFailed, EmptySubset, NegativeEigenvalue

logger = logging.getLogger(__name__)

DEFAULT_BAND_RATIO = 1.0 / 3.0
DEFAULT_NEGATIVE_TOLERANCE = 1e-9


# ============================================================================
#                           SETTINGS & RESULT TYPES
# ============================================================================

class EigenMethod(Enum):
    """The two eigensolver paths."""
    BANDED = "banded"
    GENERAL = "general"


@dataclass
class EigenSettings:
    """Tunable knobs of the dispatcher (``eigen`` config section)."""
    method: str = "auto"  # 'auto', 'banded', 'general'
    band_ratio: float = DEFAULT_BAND_RATIO
    negative_tolerance: float = DEFAULT_NEGATIVE_TOLERANCE
    clamp_noise: bool = True

    def __post_init__(self):
        valid = ("auto",) + tuple(m.value for m in EigenMethod)
        if self.method not in valid:
            raise ValueError(f"Invalid eigen method {self.method!r}; expected one of {valid}")
        if not 0.0 <= self.band_ratio <= 1.0:
            raise ValueError(f"band_ratio must be within [0, 1], got {self.band_ratio}")
        if self.negative_tolerance < 0:
            raise ValueError("negative_tolerance must be non-negative")

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> "EigenSettings":
        """Build settings from a full config dict (reads its ``eigen`` section)."""
        section = (config or {}).get('eigen', {}) or {}
        return cls(
            method=section.get('method', 'auto'),
            band_ratio=float(section.get('band_ratio', DEFAULT_BAND_RATIO)),
            negative_tolerance=float(section.get('negative_tolerance', DEFAULT_NEGATIVE_TOLERANCE)),
            clamp_noise=bool(section.get('clamp_noise', True)),
        )


@dataclass
class EigenResult:
    """
    Eigendecomposition of one Laplacian.

    ``eigenvalues[k]`` pairs with column ``eigenvectors[:, k]``.
    """
    eigenvalues: np.ndarray
    eigenvectors: np.ndarray
    method: EigenMethod
    bandwidth: int

    @property
    def dimension(self) -> int:
        return int(self.eigenvalues.shape[0])

    def __len__(self) -> int:
        return self.dimension

    def __iter__(self) -> Iterator[Tuple[float, np.ndarray]]:
        for k in range(self.dimension):
            yield float(self.eigenvalues[k]), self.eigenvectors[:, k]

    def pairs(self) -> List[Tuple[float, np.ndarray]]:
        """Ordered ``(eigenvalue, eigenvector)`` pairs."""
        return list(self)


# ============================================================================
#                           STRUCTURE INSPECTION
# ============================================================================

def _check_square(matrix: np.ndarray) -> np.ndarray:
    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"Laplacian must be square, got shape {matrix.shape}")
    if matrix.shape[0] == 0:
        raise EmptySubset("Cannot decompose an empty matrix")
    return matrix


def bandwidth(matrix: np.ndarray) -> int:
    """
    Largest ``|i - j|`` over nonzero off-diagonal entries.

    0 for a diagonal matrix, 1 for tridiagonal, n-1 when a corner is set.
    """
    rows, cols = np.nonzero(np.asarray(matrix))
    offsets = np.abs(rows - cols)
    return int(offsets.max()) if offsets.size else 0


def band_limit(n: int, band_ratio: float = DEFAULT_BAND_RATIO) -> int:
    """Widest bandwidth still routed to the banded solver for an n x n matrix."""
    return int(math.floor(n * band_ratio))


def select_method(
    matrix: np.ndarray,
    settings: Optional[EigenSettings] = None,
) -> Tuple[EigenMethod, int]:
    """
    Decide which solver handles ``matrix``.

    Returns:
        ``(method, bandwidth)``. With ``method='auto'``,
        ``bandwidth <= band_limit(n)`` selects BANDED, otherwise GENERAL.
    """
    settings = settings or EigenSettings()
    kd = bandwidth(matrix)
    if settings.method != "auto":
        return EigenMethod(settings.method), kd

    n = np.asarray(matrix).shape[0]
    if kd <= band_limit(n, settings.band_ratio):
        return EigenMethod.BANDED, kd
    return EigenMethod.GENERAL, kd


def to_banded_format(matrix: np.ndarray, kd: int) -> np.ndarray:
    """
    Pack a symmetric matrix into LAPACK lower band storage.

    ``ab[i - j, j] = matrix[i, j]`` for ``j <= i <= min(n - 1, j + kd)``;
    row 0 holds the main diagonal, row k the k-th subdiagonal (zero padded
    at the right end).

    Example:
        >>> to_banded_format(np.array([[1., 2., 0.], [2., 3., 4.], [0., 4., 5.]]), 1)
        array([[1., 3., 5.],
               [2., 4., 0.]])
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    n = matrix.shape[0]
    if kd < 0 or (n and kd >= n):
        raise ValueError(f"kd must be in [0, {max(n - 1, 0)}], got {kd}")

    banded = np.zeros((kd + 1, n), dtype=np.float64)
    for k in range(kd + 1):
        banded[k, :n - k] = np.diagonal(matrix, offset=-k)
    return banded


# ============================================================================
#                           SOLVERS
# ============================================================================

def solve_banded(matrix: np.ndarray, kd: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Symmetric banded eigensolver.

    Raises:
        EigendecompositionFailed: If LAPACK does not converge.
    """
    matrix = _check_square(matrix)
    kd = bandwidth(matrix) if kd is None else kd
    try:
        return linalg.eig_banded(to_banded_format(matrix, kd), lower=True)
    except linalg.LinAlgError as e:
        raise EigendecompositionFailed(
            matrix.shape[0], EigenMethod.BANDED.value, reason=str(e)
        ) from e


def solve_general(matrix: np.ndarray, kd: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Dense symmetric eigensolver (reads the lower triangle).

    Raises:
        EigendecompositionFailed: If LAPACK does not converge.
    """
    matrix = _check_square(matrix)
    try:
        return linalg.eigh(matrix, lower=True)
    except linalg.LinAlgError as e:
        raise EigendecompositionFailed(
            matrix.shape[0], EigenMethod.GENERAL.value, reason=str(e)
        ) from e


_SOLVERS: Dict[EigenMethod, Callable[..., Tuple[np.ndarray, np.ndarray]]] = {
    EigenMethod.BANDED: solve_banded,
    EigenMethod.GENERAL: solve_general,
}


# ============================================================================
#                           DISPATCHER
# ============================================================================

class EigenDispatcher:
    """Decompose Laplacians with the solver their bandwidth calls for."""

    def __init__(self, settings: Optional[EigenSettings] = None):
        self.settings = settings or EigenSettings()

    def decompose(self, laplacian: np.ndarray) -> EigenResult:
        """
        Eigendecompose a Laplacian.

        Returns:
            EigenResult with ascending eigenvalues and unit eigenvectors.

        Raises:
            EmptySubset: For a 0 x 0 matrix.
            EigendecompositionFailed: On LAPACK non-convergence.
            NegativeEigenvalue: If an eigenvalue is below -negative_tolerance.
        """
        laplacian = _check_square(laplacian)
        n = laplacian.shape[0]
        method, kd = select_method(laplacian, self.settings)

        logger.info(
            f"Decomposing {n}x{n} Laplacian: bandwidth={kd}, "
            f"limit={band_limit(n, self.settings.band_ratio)}, method={method.value}"
        )
        start = time.perf_counter()
        eigenvalues, eigenvectors = _SOLVERS[method](laplacian, kd)
        logger.debug(f"{method.value} solver finished in {time.perf_counter() - start:.3f}s")

        eigenvalues, eigenvectors = self._finalize(eigenvalues, eigenvectors, method)
        return EigenResult(
            eigenvalues=eigenvalues,
            eigenvectors=eigenvectors,
            method=method,
            bandwidth=kd,
        )

    def _finalize(
        self,
        eigenvalues: np.ndarray,
        eigenvectors: np.ndarray,
        method: EigenMethod,
    ) -> Tuple[np.ndarray, np.ndarray]:
        tolerance = self.settings.negative_tolerance
        n = eigenvalues.shape[0]

        order = np.argsort(eigenvalues, kind='stable')
        eigenvalues = np.array(eigenvalues[order], dtype=np.float64)
        eigenvectors = np.array(eigenvectors[:, order], dtype=np.float64)

        if n and eigenvalues[0] < -tolerance:
            raise NegativeEigenvalue(n, method.value, float(eigenvalues[0]), tolerance)

        if self.settings.clamp_noise:
            noise = np.abs(eigenvalues) < tolerance
            if noise.any():
                logger.debug(f"Clamping {int(noise.sum())} near-zero eigenvalues to 0")
                eigenvalues[noise] = 0.0

        return eigenvalues, eigenvectors


def decompose(laplacian: np.ndarray, settings: Optional[EigenSettings] = None) -> EigenResult:
    """Module-level shortcut for ``EigenDispatcher(settings).decompose``."""
    return EigenDispatcher(settings).decompose(laplacian)

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
