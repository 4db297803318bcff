#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

Laplacian Builder — L = D - A for an unweighted adjacency matrix.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import numpy as np


def build_laplacian(adjacency: np.ndarray) -> np.ndarray:
    """
    Build the graph Laplacian.

    ``L[i, i] = sum_j A[i, j]`` (a self-loop counts toward the degree) and
    ``L[i, j] = -A[i, j]`` for ``i != j``.

    Degrees are row sums. A non-symmetric input is therefore treated as a
    directed graph (out-degree); the asymmetry is carried through, not fixed.

    Raises:
        ValueError: If the input is not a square 2-D array.
    """
    adjacency = np.asarray(adjacency, dtype=np.float64)
    if adjacency.ndim != 2 or adjacency.shape[0] != adjacency.shape[1]:
        raise ValueError(f"Adjacency matrix must be square, got shape {adjacency.shape}")

    laplacian = -adjacency
    np.fill_diagonal(laplacian, adjacency.sum(axis=1))
    return laplacian


class LaplacianBuilder:
    """Stateless wrapper so the builder can be swapped in the extractor."""

    def build(self, adjacency: np.ndarray) -> np.ndarray:
        return build_laplacian(adjacency)

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
