#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

Error types raised by the conversion and spectral analysis core.

Every core component fails fast with one of these exceptions; formatting a
user-facing message is left to the CLI.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from pathlib import Path
from typing import Optional, Union


class SpectralError(Exception):
    """Base class for all SpectraWeaver errors."""
    pass


class MalformedRecord(SpectralError, ValueError):
    """Raised when a GFA segment or link line cannot be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None,
                 line: Optional[str] = None):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"GFA line {line_number}: {message}"
        super().__init__(message)


class UnknownSegment(SpectralError, KeyError):
    """Raised when a link (or a caller) names a segment that was never declared."""

    def __init__(self, name: str, line_number: Optional[int] = None):
        self.name = name
        self.line_number = line_number
        message = f"Unknown segment: {name!r}"
        if line_number is not None:
            message = f"GFA line {line_number}: link references undeclared segment {name!r}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class CorruptEdgeList(SpectralError, ValueError):
    """Raised for a truncated record, bad header, or out-of-range index in an edge list."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Corrupt edge list {self.path}: {reason}")


class EmptySubset(SpectralError, ValueError):
    """Raised when an extraction is requested with zero nodes."""
    pass


class SubsetIndexError(SpectralError, IndexError):
    """Raised when a requested node index lies outside the graph."""

    def __init__(self, index: int, segment_count: int):
        self.index = index
        self.segment_count = segment_count
        super().__init__(
            f"Node index {index} out of range for graph with {segment_count} segments"
        )


class EigendecompositionFailed(SpectralError, RuntimeError):
    """Raised when the eigensolver does not converge or returns an invalid spectrum."""

    def __init__(self, dimension: int, method: str, reason: str = "did not converge"):
        self.dimension = dimension
        self.method = method
        self.reason = reason
        super().__init__(
            f"{method} eigendecomposition of {dimension}x{dimension} matrix failed: {reason}"
        )


class NegativeEigenvalue(EigendecompositionFailed):
    """Raised when a Laplacian eigenvalue falls below the negative tolerance."""

    def __init__(self, dimension: int, method: str, value: float, tolerance: float):
        self.value = value
        self.tolerance = tolerance
        super().__init__(
            dimension, method,
            reason=f"eigenvalue {value:.3e} is below -{tolerance:g}"
        )

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
