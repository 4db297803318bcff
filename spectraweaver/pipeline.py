#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

Pipeline entry points used by the CLI and by library callers:

  convert(gfa_path)                      -> edge list path
  extract(edge_list_path, node_subset)   -> EigenResult

plus helpers for turning segment names into node indices.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from .errors import UnknownSegment
from .io_utils.edgelist_format import DEFAULT_CHUNK_RECORDS
from .io_utils.gfa_edgelist import GfaEdgeListBuilder, load_segment_map
from .spectral_core.adjacency import AdjacencyLoader
from .spectral_core.eigen_dispatch import EigenDispatcher, EigenResult, EigenSettings
from .spectral_core.submatrix import SubmatrixExtractor

logger = logging.getLogger(__name__)


def convert(
    gfa_path: str | Path,
    output_path: str | Path | None = None,
    write_segment_map: bool = True,
) -> Path:
    """Convert a GFA file to a binary edge list and return its path."""
    builder = GfaEdgeListBuilder(write_segment_map=write_segment_map)
    return builder.build(gfa_path, output_path)


def build_extractor(config: Optional[Dict[str, Any]] = None) -> SubmatrixExtractor:
    """Assemble a SubmatrixExtractor from a config dict (defaults when None)."""
    config = config or {}
    chunk_records = (config.get('loader', {}) or {}).get('chunk_records', DEFAULT_CHUNK_RECORDS)
    return SubmatrixExtractor(
        loader=AdjacencyLoader(chunk_records=int(chunk_records)),
        dispatcher=EigenDispatcher(EigenSettings.from_config(config)),
    )


def extract_with_laplacian(
    edge_list_path: str | Path,
    node_subset: Optional[Iterable[int]] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Tuple[np.ndarray, EigenResult]:
    """Like ``extract`` but also returns the Laplacian that was decomposed."""
    return build_extractor(config).analyze(edge_list_path, node_subset)


def extract(
    edge_list_path: str | Path,
    node_subset: Optional[Iterable[int]] = None,
    config: Optional[Dict[str, Any]] = None,
) -> EigenResult:
    """
    Eigendecompose the Laplacian of the subgraph induced by ``node_subset``.

    ``node_subset=None`` decomposes the full graph.
    """
    _, result = extract_with_laplacian(edge_list_path, node_subset, config)
    return result


def resolve_segment_names(names: Iterable[str], segment_map: Dict[str, int]) -> List[int]:
    """
    Map segment names to node indices, preserving order.

    Raises:
        UnknownSegment: For a name not present in ``segment_map``.
    """
    indices = []
    for name in names:
        if name not in segment_map:
            raise UnknownSegment(name)
        indices.append(segment_map[name])
    return indices


__all__ = [
    "convert",
    "extract",
    "extract_with_laplacian",
    "build_extractor",
    "load_segment_map",
    "resolve_segment_names",
]

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
