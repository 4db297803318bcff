#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

Package initialization and version metadata.

Spectral analysis of GFA assembly graphs: GFA -> binary edge list ->
induced Laplacian -> banded or dense symmetric eigendecomposition.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .version import __version__
from .errors import (
    SpectralError,
    MalformedRecord,
    UnknownSegment,
    CorruptEdgeList,
    EmptySubset,
    SubsetIndexError,
    EigendecompositionFailed,
    NegativeEigenvalue,
)
from .pipeline import convert, extract, extract_with_laplacian

__all__ = [
    "__version__",
    "convert",
    "extract",
    "extract_with_laplacian",
    "SpectralError",
    "MalformedRecord",
    "UnknownSegment",
    "CorruptEdgeList",
    "EmptySubset",
    "SubsetIndexError",
    "EigendecompositionFailed",
    "NegativeEigenvalue",
]

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
