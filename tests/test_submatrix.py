#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

Integration tests: GFA -> edge list -> induced Laplacian -> spectrum.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import numpy as np
import pytest

from spectraweaver import convert, extract, extract_with_laplacian
from spectraweaver.errors import CorruptEdgeList, EmptySubset, SubsetIndexError, UnknownSegment
from spectraweaver.io_utils.gfa_edgelist import default_segment_map_path
from spectraweaver.pipeline import build_extractor, load_segment_map, resolve_segment_names
from spectraweaver.spectral_core.eigen_dispatch import EigenMethod
from spectraweaver.spectral_core.submatrix import SubmatrixExtractor


@pytest.fixture
def path_edges(path_gfa):
    return convert(path_gfa)


@pytest.fixture
def tangle_edges(write_gfa):
    """Two linear paths joined by a bubble, plus a repeat that links far ends."""
    names = [f"utg{i}" for i in range(14)]
    lines = [f"S\t{n}\t*\tLN:i:{1000 + i}\n" for i, n in enumerate(names)]
    for i in range(13):
        lines.append(f"L\t{names[i]}\t+\t{names[i + 1]}\t+\t0M\n")
    lines.append("L\tutg3\t+\tutg5\t-\t0M\n")   # bubble
    lines.append("L\tutg0\t-\tutg13\t+\t0M\n")  # repeat
    lines.append("L\tutg7\t+\tutg7\t-\t0M\n")   # hairpin
    return convert(write_gfa("".join(lines), "tangle.gfa"))


class TestPathGraphScenario:
    """The three-segment path S1 - S2 - S3."""

    def test_full_graph(self, path_edges):
        laplacian, result = SubmatrixExtractor().analyze(path_edges)
        np.testing.assert_array_equal(laplacian, [[1, -1, 0], [-1, 2, -1], [0, -1, 1]])
        np.testing.assert_allclose(result.eigenvalues, [0.0, 1.0, 3.0], atol=1e-9)

    def test_unconnected_pair(self, path_edges):
        segment_map = load_segment_map(default_segment_map_path(path_edges))
        subset = resolve_segment_names(["S1", "S3"], segment_map)
        laplacian, result = extract_with_laplacian(path_edges, subset)
        np.testing.assert_array_equal(laplacian, np.zeros((2, 2)))
        np.testing.assert_array_equal(result.eigenvalues, [0.0, 0.0])

    def test_connected_pair(self, path_edges):
        result = extract(path_edges, [0, 1])
        np.testing.assert_allclose(result.eigenvalues, [0.0, 2.0], atol=1e-9)


class TestExtraction:

    def test_full_subset_matches_full_graph(self, tangle_edges):
        full = extract(tangle_edges)
        subset = extract(tangle_edges, list(range(14)))
        np.testing.assert_allclose(subset.eigenvalues, full.eigenvalues, rtol=1e-6, atol=1e-9)

    def test_permuted_subset_has_same_spectrum(self, tangle_edges):
        full = extract(tangle_edges)
        permuted = extract(tangle_edges, list(reversed(range(14))) + [0, 5])
        np.testing.assert_allclose(permuted.eigenvalues, full.eigenvalues, rtol=1e-6, atol=1e-9)

    def test_methods_agree_on_real_graph(self, tangle_edges):
        banded = extract(tangle_edges, config={'eigen': {'method': 'banded'}})
        general = extract(tangle_edges, config={'eigen': {'method': 'general'}})
        assert banded.method is EigenMethod.BANDED
        assert general.method is EigenMethod.GENERAL
        np.testing.assert_allclose(banded.eigenvalues, general.eigenvalues, atol=1e-8)

    def test_contiguous_window_is_banded(self, tangle_edges):
        # utg8..utg12 is a plain path: tridiagonal Laplacian
        result = extract(tangle_edges, range(8, 13))
        assert result.method is EigenMethod.BANDED
        assert result.bandwidth == 1

    def test_repeat_makes_full_graph_general(self, tangle_edges):
        result = extract(tangle_edges)
        assert result.bandwidth == 13
        assert result.method is EigenMethod.GENERAL

    def test_spectrum_is_nonnegative_and_sorted(self, tangle_edges):
        result = extract(tangle_edges)
        assert np.all(result.eigenvalues >= -1e-9)
        assert np.all(np.diff(result.eigenvalues) >= 0)

    def test_hairpin_lifts_lowest_eigenvalue(self, tangle_edges):
        # utg7's self-loop adds to its degree with no off-diagonal partner,
        # so the connected graph's Laplacian is no longer singular
        result = extract(tangle_edges)
        assert result.eigenvalues[0] > 1e-6
        assert int(np.sum(result.eigenvalues == 0.0)) == 0

    def test_loop_free_window_has_zero_eigenvalue(self, tangle_edges):
        result = extract(tangle_edges, range(0, 7))
        assert result.eigenvalues[0] == 0.0
        assert result.eigenvalues[1] > 1e-6

    def test_self_loop_affects_degree_only(self, tangle_edges):
        laplacian, _ = extract_with_laplacian(tangle_edges, [7])
        np.testing.assert_array_equal(laplacian, [[1.0]])

    def test_chunk_size_from_config(self, tangle_edges):
        small = extract(tangle_edges, config={'loader': {'chunk_records': 3}})
        np.testing.assert_allclose(small.eigenvalues, extract(tangle_edges).eigenvalues)

    def test_extractor_from_config(self):
        extractor = build_extractor({'eigen': {'method': 'general'}, 'loader': {'chunk_records': 7}})
        assert extractor.loader.chunk_records == 7
        assert extractor.dispatcher.settings.method == "general"


class TestErrorPropagation:

    def test_empty_subset(self, path_edges):
        with pytest.raises(EmptySubset):
            extract(path_edges, [])

    def test_subset_index_error(self, path_edges):
        with pytest.raises(SubsetIndexError):
            extract(path_edges, [0, 3])

    def test_corrupt_edge_list(self, path_edges):
        with open(path_edges, 'ab') as f:
            f.write(b"\x00\x00")
        with pytest.raises(CorruptEdgeList):
            extract(path_edges)

    def test_unknown_segment_name(self, path_edges):
        segment_map = load_segment_map(default_segment_map_path(path_edges))
        with pytest.raises(UnknownSegment):
            resolve_segment_names(["S1", "SX"], segment_map)

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
