#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

Pytest configuration and shared fixtures.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from pathlib import Path
import tempfile
import shutil


PATH_GFA = (
    "H\tVN:Z:1.0\n"
    "S\tS1\tACGT\n"
    "S\tS2\tGGCC\n"
    "S\tS3\tTTAA\n"
    "L\tS1\t+\tS2\t+\t0M\n"
    "L\tS2\t+\tS3\t-\t0M\n"
)


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="spectraweaver_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def write_gfa(temp_output_dir):
    """Return a helper that writes GFA text to a file in the temp directory."""
    def _write(content, name="graph.gfa"):
        path = temp_output_dir / name
        with open(path, 'w') as f:
            f.write(content)
        return path
    return _write


@pytest.fixture
def path_gfa(write_gfa):
    """Three-segment path graph S1 - S2 - S3."""
    return write_gfa(PATH_GFA, "path.gfa")

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
