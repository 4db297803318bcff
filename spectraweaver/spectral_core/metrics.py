#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

Spectral metrics computed from a Laplacian spectrum.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import math
from typing import Sequence, Union

import numpy as np

_NEGATIVE_TOLERANCE = 1e-9


def compute_ngec(eigenvalues: Union[Sequence[float], np.ndarray]) -> float:
    """
    Normalized global eigen-complexity (NGEC).

    Shannon entropy of the eigenvalue distribution ``p_k = lambda_k / sum(lambda)``
    divided by its maximum ``ln(m)``. 1.0 means a perfectly flat spectrum;
    values near 0 mean a few eigenvalues dominate.

    Raises:
        ValueError: Fewer than two eigenvalues, a zero sum, or an eigenvalue
            below -1e-9.
    """
    values = np.asarray(eigenvalues, dtype=np.float64).ravel()
    if values.size < 2:
        raise ValueError("NGEC needs at least two eigenvalues")
    if values.min() < -_NEGATIVE_TOLERANCE:
        raise ValueError(f"Eigenvalue {values.min():.3e} is negative; not a Laplacian spectrum")

    values = np.clip(values, 0.0, None)
    total = values.sum()
    if total <= 0:
        raise ValueError("Sum of eigenvalues is zero; NGEC is undefined")

    p = values[values > 0] / total
    entropy = float(-(p * np.log(p)).sum())
    return entropy / math.log(values.size)

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
