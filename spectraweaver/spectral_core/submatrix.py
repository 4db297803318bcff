#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

Submatrix Extractor — load -> Laplacian -> eigendecomposition for one node
subset (or the whole graph). Errors from each stage propagate unchanged.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

import numpy as np

from .adjacency import AdjacencyLoader
from .eigen_dispatch import EigenDispatcher, EigenResult
from .laplacian import LaplacianBuilder

logger = logging.getLogger(__name__)


class SubmatrixExtractor:
    """
    Orchestrates AdjacencyLoader, LaplacianBuilder and EigenDispatcher.

    Holds no per-call state; every ``analyze`` call builds fresh matrices.
    """

    def __init__(
        self,
        loader: Optional[AdjacencyLoader] = None,
        builder: Optional[LaplacianBuilder] = None,
        dispatcher: Optional[EigenDispatcher] = None,
    ):
        self.loader = loader or AdjacencyLoader()
        self.builder = builder or LaplacianBuilder()
        self.dispatcher = dispatcher or EigenDispatcher()

    def analyze(
        self,
        edge_list_path: str | Path,
        node_subset: Optional[Iterable[int]] = None,
    ) -> Tuple[np.ndarray, EigenResult]:
        """
        Analyze the subgraph induced by ``node_subset``.

        Args:
            edge_list_path: Binary edge list
            node_subset: Node indices (None = all nodes)

        Returns:
            ``(laplacian, eigen_result)``
        """
        adjacency = self.loader.load(edge_list_path, node_subset)
        laplacian = self.builder.build(adjacency)
        result = self.dispatcher.decompose(laplacian)
        logger.info(
            f"Spectrum of {result.dimension} nodes via {result.method.value} solver: "
            f"lambda_min={result.eigenvalues[0]:.6g}, lambda_max={result.eigenvalues[-1]:.6g}"
        )
        return laplacian, result

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
