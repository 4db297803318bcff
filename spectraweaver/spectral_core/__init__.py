"""
SpectraWeaver v0.1.0

Spectral core: adjacency loading, Laplacian construction, eigensolver
dispatch, and subset orchestration.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .adjacency import AdjacencyLoader, load_adjacency, normalize_subset
from .laplacian import LaplacianBuilder, build_laplacian
from .eigen_dispatch import (
    EigenDispatcher,
    EigenMethod,
    EigenResult,
    EigenSettings,
    band_limit,
    bandwidth,
    decompose,
    select_method,
    solve_banded,
    solve_general,
    to_banded_format,
)
from .submatrix import SubmatrixExtractor
from .metrics import compute_ngec

__all__ = [
    "AdjacencyLoader",
    "load_adjacency",
    "normalize_subset",
    "LaplacianBuilder",
    "build_laplacian",
    "EigenDispatcher",
    "EigenMethod",
    "EigenResult",
    "EigenSettings",
    "band_limit",
    "bandwidth",
    "decompose",
    "select_method",
    "solve_banded",
    "solve_general",
    "to_banded_format",
    "SubmatrixExtractor",
    "compute_ngec",
]
