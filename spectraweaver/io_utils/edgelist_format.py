#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

Binary Edge List — on-disk layout, writer, and chunked reader.

Layout (all little-endian):

    offset 0   uint64   segment_count
    offset 8   uint32   u_0
    offset 12  uint32   v_0
    offset 16  uint32   u_1
    ...

Each record is one directed edge (u, v). An undirected link is stored as two
records; a self-loop is stored once. The record count is implied by the file
size: (size - 8) / 8. Storing segment_count up front keeps segments that carry
no links inside the index range.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
import os
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import numpy as np

from ..errors import CorruptEdgeList

logger = logging.getLogger(__name__)


# ============================================================================
#                           LAYOUT CONSTANTS
# ============================================================================

HEADER_FORMAT = '<Q'
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)
INDEX_DTYPE = np.dtype('<u4')
RECORD_SIZE = 2 * INDEX_DTYPE.itemsize
MAX_SEGMENTS = 2 ** 32
PARTIAL_SUFFIX = '.partial'

DEFAULT_CHUNK_RECORDS = 1 << 20


@dataclass(frozen=True)
class EdgeListHeader:
    """Summary of a binary edge list recovered from its header and size."""
    segment_count: int
    record_count: int


# ============================================================================
#                               WRITER
# ============================================================================

class EdgeListWriter:
    """
    Buffered writer for the binary edge list.

    Use as a context manager; the header is written on open, records are
    flushed in blocks of ``buffer_records``. Output goes to a ``.partial``
    file next to ``path`` and only replaces ``path`` when the block exits
    cleanly, so a failed conversion leaves any earlier edge list untouched.
    """

    def __init__(self, path: str | Path, segment_count: int,
                 buffer_records: int = 65536):
        if segment_count < 0 or segment_count > MAX_SEGMENTS:
            raise ValueError(
                f"segment_count {segment_count} does not fit the 32-bit index layout"
            )
        self.path = Path(path)
        self.partial_path = self.path.with_name(self.path.name + PARTIAL_SUFFIX)
        self.segment_count = segment_count
        self.buffer_records = buffer_records
        self.records_written = 0
        self._buffer: list[int] = []
        self._handle = None

    def __enter__(self) -> "EdgeListWriter":
        self._handle = open(self.partial_path, 'wb')
        self._handle.write(struct.pack(HEADER_FORMAT, self.segment_count))
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        committed = False
        try:
            if exc_type is None:
                self.flush()
                self._handle.close()
                os.replace(self.partial_path, self.path)
                committed = True
        finally:
            if not self._handle.closed:
                self._handle.close()
            self._handle = None
            if not committed:
                logger.debug(f"Discarding partial edge list: {self.partial_path}")
                self.partial_path.unlink(missing_ok=True)

    def write_edge(self, u: int, v: int) -> None:
        """Append one directed edge record."""
        self._buffer.append(u)
        self._buffer.append(v)
        if len(self._buffer) >= 2 * self.buffer_records:
            self.flush()

    def flush(self) -> None:
        if not self._buffer:
            return
        block = np.asarray(self._buffer, dtype=INDEX_DTYPE)
        self._handle.write(block.tobytes())
        self.records_written += len(self._buffer) // 2
        self._buffer.clear()


# ============================================================================
#                               READER
# ============================================================================

def read_header(path: str | Path) -> EdgeListHeader:
    """
    Read the header of an edge list and derive its record count.

    Raises:
        FileNotFoundError: If the file does not exist.
        CorruptEdgeList: If the header is missing or the payload is not a
            whole number of records.
    """
    path = Path(path)
    file_size = path.stat().st_size

    if file_size < HEADER_SIZE:
        raise CorruptEdgeList(path, f"file is {file_size} bytes, shorter than the header")

    payload = file_size - HEADER_SIZE
    if payload % RECORD_SIZE:
        raise CorruptEdgeList(
            path, f"truncated record: {payload} payload bytes is not a multiple of {RECORD_SIZE}"
        )

    with open(path, 'rb') as f:
        (segment_count,) = struct.unpack(HEADER_FORMAT, f.read(HEADER_SIZE))

    if segment_count > MAX_SEGMENTS:
        raise CorruptEdgeList(path, f"implausible segment count {segment_count}")

    return EdgeListHeader(segment_count=segment_count, record_count=payload // RECORD_SIZE)


def iter_edge_chunks(
    path: str | Path,
    chunk_records: int = DEFAULT_CHUNK_RECORDS,
) -> Iterator[tuple[np.ndarray, np.ndarray]]:
    """
    Stream an edge list as ``(sources, targets)`` int64 arrays.

    The file is read once, front to back, ``chunk_records`` records at a time.
    Every index is checked against the header's segment_count.

    Raises:
        CorruptEdgeList: On a truncated file or an out-of-range index.
    """
    if chunk_records <= 0:
        raise ValueError(f"chunk_records must be positive, got {chunk_records}")

    path = Path(path)
    header = read_header(path)
    chunk_bytes = chunk_records * RECORD_SIZE
    records_seen = 0

    with open(path, 'rb') as f:
        f.seek(HEADER_SIZE)
        while True:
            raw = f.read(chunk_bytes)
            if not raw:
                break
            if len(raw) % RECORD_SIZE:
                raise CorruptEdgeList(path, "truncated record at end of file")

            pairs = np.frombuffer(raw, dtype=INDEX_DTYPE).reshape(-1, 2).astype(np.int64)
            if pairs.size and int(pairs.max()) >= header.segment_count:
                bad_row = int(np.argmax((pairs >= header.segment_count).any(axis=1)))
                u, v = pairs[bad_row]
                raise CorruptEdgeList(
                    path,
                    f"record {records_seen + bad_row} ({u}, {v}) references an index "
                    f"outside 0..{header.segment_count - 1}"
                )

            logger.debug(f"Read {len(pairs)} edge records from {path.name}")
            records_seen += len(pairs)
            yield pairs[:, 0], pairs[:, 1]

    if records_seen != header.record_count:
        raise CorruptEdgeList(
            path, f"expected {header.record_count} records, read {records_seen}"
        )

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
