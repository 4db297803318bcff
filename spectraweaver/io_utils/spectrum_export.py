#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

Spectrum Export — eigenvalue/eigenvector/Laplacian CSVs and a JSON summary
for downstream partitioning or comparison tools.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Sequence

import numpy as np

from ..spectral_core.eigen_dispatch import EigenResult
from ..spectral_core.metrics import compute_ngec

logger = logging.getLogger(__name__)


def _format_value(value: float) -> str:
    # + 0.0 turns -0.0 into 0.0
    return repr(float(value) + 0.0)


def write_matrix_csv(array: np.ndarray | Sequence[Sequence[float]], output_path: str | Path) -> None:
    """
    Write a 2-D array as comma-separated rows.

    ``[[1, 2], [3, 4]]`` becomes ``1.0,2.0`` / ``3.0,4.0``.
    """
    array = np.atleast_2d(np.asarray(array, dtype=np.float64))
    with open(output_path, 'w') as f:
        for row in array:
            f.write(",".join(_format_value(v) for v in row) + "\n")


def write_eigenvalues_csv(result: EigenResult, output_path: str | Path) -> None:
    """Write ``index,eigenvalue`` rows in ascending order."""
    with open(output_path, 'w') as f:
        f.write("index,eigenvalue\n")
        for k, value in enumerate(result.eigenvalues):
            f.write(f"{k},{_format_value(value)}\n")


def build_summary(
    result: EigenResult,
    node_labels: Sequence[str] | None = None,
) -> dict[str, Any]:
    """JSON-friendly summary of one decomposition."""
    summary: dict[str, Any] = {
        'dimension': result.dimension,
        'method': result.method.value,
        'bandwidth': result.bandwidth,
        'eigenvalues': [float(v) for v in result.eigenvalues],
        'zero_eigenvalues': int(np.count_nonzero(result.eigenvalues == 0.0)),
    }
    try:
        summary['ngec'] = compute_ngec(result.eigenvalues)
    except ValueError as e:
        logger.debug(f"NGEC not reported: {e}")
        summary['ngec'] = None
    if node_labels is not None:
        summary['nodes'] = list(node_labels)
    return summary


def export_spectrum(
    result: EigenResult,
    output_dir: str | Path,
    laplacian: np.ndarray | None = None,
    node_labels: Sequence[str] | None = None,
) -> dict[str, Path]:
    """
    Export a decomposition to ``output_dir``.

    Files:
    - eigenvalues.csv: index,eigenvalue
    - eigenvectors.csv: column k is the eigenvector of eigenvalue k
    - laplacian.csv: only if ``laplacian`` is given
    - spectrum_summary.json: dimension, method, bandwidth, NGEC, node labels

    Returns:
        Mapping of file kind -> written path.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Exporting spectrum ({result.dimension} eigenpairs) to {output_dir}")

    written: dict[str, Path] = {}

    written['eigenvalues'] = output_dir / "eigenvalues.csv"
    write_eigenvalues_csv(result, written['eigenvalues'])

    written['eigenvectors'] = output_dir / "eigenvectors.csv"
    write_matrix_csv(result.eigenvectors, written['eigenvectors'])

    if laplacian is not None:
        written['laplacian'] = output_dir / "laplacian.csv"
        write_matrix_csv(laplacian, written['laplacian'])

    written['summary'] = output_dir / "spectrum_summary.json"
    with open(written['summary'], 'w') as f:
        json.dump(build_summary(result, node_labels), f, indent=2)

    logger.info(f"Exported {len(written)} files")
    return written

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
