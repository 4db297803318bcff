#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

Adjacency Loader — rebuild a dense 0/1 adjacency matrix for the full graph
or for the subgraph induced by a node subset, in one streaming pass over the
binary edge list.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, Optional

import numpy as np

from ..errors import EmptySubset, SubsetIndexError
from ..io_utils.edgelist_format import (
    DEFAULT_CHUNK_RECORDS,
    iter_edge_chunks,
    read_header,
)

logger = logging.getLogger(__name__)


def normalize_subset(node_subset: Iterable[int], segment_count: int) -> list[int]:
    """
    Deduplicate a node subset, keeping first occurrences in order.

    Position in the returned list is the node's local index.

    Raises:
        EmptySubset: If no nodes are given.
        SubsetIndexError: If a node lies outside 0..segment_count-1.
    """
    ordered: list[int] = []
    seen: set[int] = set()
    for node in node_subset:
        node = int(node)
        if node < 0 or node >= segment_count:
            raise SubsetIndexError(node, segment_count)
        if node not in seen:
            seen.add(node)
            ordered.append(node)

    if not ordered:
        raise EmptySubset("Extraction requested with an empty node subset")
    return ordered


class AdjacencyLoader:
    """
    Load adjacency matrices from a binary edge list.

    Only the requested ``k x k`` block is ever allocated densely, plus one
    index-lookup vector of length segment_count.
    """

    def __init__(self, chunk_records: int = DEFAULT_CHUNK_RECORDS):
        self.chunk_records = chunk_records

    def load(
        self,
        edge_list_path: str | Path,
        node_subset: Optional[Iterable[int]] = None,
    ) -> np.ndarray:
        """
        Build the adjacency matrix.

        Args:
            edge_list_path: Binary edge list written by GfaEdgeListBuilder
            node_subset: Node indices to keep (any order, duplicates allowed);
                None loads the full graph

        Returns:
            Square float64 array with 0/1 entries. Row/column ``i`` is the
            i-th distinct node of ``node_subset`` (or node ``i`` in full mode).

        Raises:
            CorruptEdgeList: On a truncated file or out-of-range record.
            EmptySubset: If the subset (or the graph) has no nodes.
            SubsetIndexError: If a subset member is not a valid index.
        """
        edge_list_path = Path(edge_list_path)
        header = read_header(edge_list_path)

        if node_subset is None:
            if header.segment_count == 0:
                raise EmptySubset(f"Edge list {edge_list_path} contains no segments")
            nodes = None
            size = header.segment_count
            logger.info(f"Loading full adjacency ({size} nodes) from {edge_list_path}")
        else:
            nodes = normalize_subset(node_subset, header.segment_count)
            size = len(nodes)
            logger.info(
                f"Loading induced adjacency for {size} of {header.segment_count} nodes "
                f"from {edge_list_path}"
            )

        adjacency = np.zeros((size, size), dtype=np.float64)

        if nodes is None:
            for sources, targets in iter_edge_chunks(edge_list_path, self.chunk_records):
                adjacency[sources, targets] = 1.0
        else:
            # global index -> local index, -1 for nodes outside the subset
            local_index = np.full(header.segment_count, -1, dtype=np.int64)
            local_index[np.asarray(nodes, dtype=np.int64)] = np.arange(size, dtype=np.int64)

            for sources, targets in iter_edge_chunks(edge_list_path, self.chunk_records):
                local_u = local_index[sources]
                local_v = local_index[targets]
                keep = (local_u >= 0) & (local_v >= 0)
                adjacency[local_u[keep], local_v[keep]] = 1.0

        logger.debug(f"Adjacency has {int(np.count_nonzero(adjacency))} nonzero entries")
        return adjacency


def load_adjacency(
    edge_list_path: str | Path,
    node_subset: Optional[Iterable[int]] = None,
    chunk_records: int = DEFAULT_CHUNK_RECORDS,
) -> np.ndarray:
    """Convenience wrapper around ``AdjacencyLoader.load``."""
    return AdjacencyLoader(chunk_records=chunk_records).load(edge_list_path, node_subset)

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
