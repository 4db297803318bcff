#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

Tests for spectral metrics and spectrum export.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import json
import math

import numpy as np
import pytest

from spectraweaver.io_utils.spectrum_export import (
    build_summary,
    export_spectrum,
    write_eigenvalues_csv,
    write_matrix_csv,
)
from spectraweaver.spectral_core.eigen_dispatch import decompose
from spectraweaver.spectral_core.metrics import compute_ngec

PATH_LAPLACIAN = np.array([
    [1.0, -1.0, 0.0],
    [-1.0, 2.0, -1.0],
    [0.0, -1.0, 1.0],
])


# ---------------------------------------------------------------------------
# NGEC
# ---------------------------------------------------------------------------

class TestNGEC:

    def test_within_unit_interval(self):
        ngec = compute_ngec([1.0, 2.0, 3.0])
        assert 0.0 < ngec < 1.0

    def test_flat_spectrum_is_one(self):
        assert compute_ngec([2.0, 2.0, 2.0, 2.0]) == pytest.approx(1.0)

    def test_zero_eigenvalue_contributes_nothing(self):
        assert compute_ngec([0.0, 1.0, 1.0]) == pytest.approx(math.log(2) / math.log(3))

    def test_tiny_negative_noise_tolerated(self):
        assert compute_ngec([-1e-12, 1.0, 3.0]) == pytest.approx(compute_ngec([0.0, 1.0, 3.0]))

    def test_negative_eigenvalue_rejected(self):
        with pytest.raises(ValueError):
            compute_ngec([-0.5, 1.0, 2.0])

    def test_zero_sum_rejected(self):
        with pytest.raises(ValueError):
            compute_ngec([0.0, 0.0])

    def test_single_value_rejected(self):
        with pytest.raises(ValueError):
            compute_ngec([1.0])


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

class TestSpectrumExport:

    def test_write_matrix_csv(self, temp_output_dir):
        path = temp_output_dir / "matrix.csv"
        write_matrix_csv([[1.0, 2.0], [3.0, 4.0]], path)
        assert path.read_text().strip() == "1.0,2.0\n3.0,4.0"

    def test_negative_zero_written_as_zero(self, temp_output_dir):
        path = temp_output_dir / "zeros.csv"
        write_matrix_csv(-np.zeros((1, 2)), path)
        assert path.read_text().strip() == "0.0,0.0"

    def test_write_eigenvalues_csv(self, temp_output_dir):
        path = temp_output_dir / "values.csv"
        write_eigenvalues_csv(decompose(np.diag([3.0, 1.0])), path)
        lines = path.read_text().splitlines()
        assert lines[0] == "index,eigenvalue"
        rows = [line.split(",") for line in lines[1:]]
        assert [int(k) for k, _ in rows] == [0, 1]
        assert [float(v) for _, v in rows] == pytest.approx([1.0, 3.0])

    def test_summary(self):
        summary = build_summary(decompose(PATH_LAPLACIAN), node_labels=["S1", "S2", "S3"])
        assert summary['dimension'] == 3
        assert summary['method'] == "banded"
        assert summary['bandwidth'] == 1
        assert summary['zero_eigenvalues'] == 1
        assert summary['nodes'] == ["S1", "S2", "S3"]
        assert 0.0 < summary['ngec'] < 1.0

    def test_summary_without_ngec(self):
        summary = build_summary(decompose(np.zeros((2, 2))))
        assert summary['ngec'] is None
        assert 'nodes' not in summary

    def test_export_spectrum(self, temp_output_dir):
        result = decompose(PATH_LAPLACIAN)
        out_dir = temp_output_dir / "spectrum"
        written = export_spectrum(result, out_dir, laplacian=PATH_LAPLACIAN)

        assert set(written) == {'eigenvalues', 'eigenvectors', 'laplacian', 'summary'}
        assert all(path.exists() for path in written.values())

        vectors = np.loadtxt(written['eigenvectors'], delimiter=",")
        np.testing.assert_allclose(vectors, result.eigenvectors)

        laplacian = np.loadtxt(written['laplacian'], delimiter=",")
        np.testing.assert_array_equal(laplacian, PATH_LAPLACIAN)

        with open(written['summary']) as f:
            summary = json.load(f)
        assert summary['eigenvalues'][2] == pytest.approx(3.0)

    def test_export_without_laplacian(self, temp_output_dir):
        written = export_spectrum(decompose(PATH_LAPLACIAN), temp_output_dir)
        assert 'laplacian' not in written
        assert not (temp_output_dir / "laplacian.csv").exists()

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
