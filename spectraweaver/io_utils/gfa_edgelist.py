#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpectraWeaver v0.1.0

GFA to Edge List — two-pass GFA reader that assigns dense segment indices
and writes every link as a pair of directed records to the binary edge list.

Only S-lines (segments) and L-lines (links) are consumed; H, P, W, C and
all other record types are ignored. Unlike a lenient viewer import, a bad
S/L line or a link to an undeclared segment is a hard stop: skipping it would
desynchronize segment indices from the links that follow.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from ..errors import MalformedRecord, UnknownSegment
from .edgelist_format import EdgeListWriter

logger = logging.getLogger(__name__)

EDGE_LIST_SUFFIX = '.edges.bin'
SEGMENT_MAP_SUFFIX = '.segments.tsv'


# ============================================================================
#                           GFA RECORDS
# ============================================================================

@dataclass
class GFALink:
    """A parsed GFA L-line (link/edge)."""
    from_name: str
    from_orient: str  # '+' or '-', kept but not interpreted
    to_name: str
    to_orient: str
    line_number: int

    @property
    def is_self_loop(self) -> bool:
        return self.from_name == self.to_name


@dataclass
class ConversionSummary:
    """What a GFA conversion produced."""
    edge_list_path: Path
    segment_count: int
    link_count: int
    record_count: int
    self_loops: int
    segment_map_path: Optional[Path] = None


def _split_gfa_line(line: str) -> list[str]:
    """Split a GFA record on tabs, falling back to whitespace for hand-written files."""
    if '\t' in line:
        return line.split('\t')
    return line.split()


def _iter_records(gfa_path: Path, record_type: str) -> Iterator[tuple[int, list[str], str]]:
    """Yield ``(line_number, fields, line)`` for every line of the given record type."""
    with open(gfa_path, 'r') as f:
        for line_no, raw_line in enumerate(f, 1):
            line = raw_line.rstrip('\r\n')
            if not line or line.startswith('#'):
                continue
            parts = _split_gfa_line(line)
            if parts and parts[0] == record_type:
                yield line_no, parts, line


# ============================================================================
#                           PARSING PASSES
# ============================================================================

def parse_segments(gfa_path: str | Path) -> dict[str, int]:
    """
    Pass 1: index every S-line in first-seen order.

    Returns:
        Mapping of segment name -> dense index (0..segment_count-1).

    Raises:
        MalformedRecord: If an S-line has no name or repeats a name.
    """
    segment_index: dict[str, int] = {}

    for line_no, parts, line in _iter_records(Path(gfa_path), 'S'):
        name = parts[1].strip() if len(parts) > 1 else ''
        if not name:
            raise MalformedRecord("segment line has no name field", line_no, line)
        if name in segment_index:
            raise MalformedRecord(f"duplicate segment name {name!r}", line_no, line)
        segment_index[name] = len(segment_index)

    return segment_index


def parse_links(gfa_path: str | Path) -> Iterator[GFALink]:
    """
    Pass 2: yield every L-line as a GFALink.

    Format: L <from> <from_orient> <to> <to_orient> [<overlap>] ...

    Raises:
        MalformedRecord: If an L-line has fewer than five fields.
    """
    for line_no, parts, line in _iter_records(Path(gfa_path), 'L'):
        if len(parts) < 5:
            raise MalformedRecord("link line needs from, orient, to, orient", line_no, line)
        from_name, to_name = parts[1].strip(), parts[3].strip()
        if not from_name or not to_name:
            raise MalformedRecord("link line needs from, orient, to, orient", line_no, line)
        yield GFALink(
            from_name=from_name,
            from_orient=parts[2].strip(),
            to_name=to_name,
            to_orient=parts[4].strip(),
            line_number=line_no,
        )


def _resolve(segment_index: dict[str, int], name: str, line_number: int) -> int:
    try:
        return segment_index[name]
    except KeyError:
        raise UnknownSegment(name, line_number) from None


# ============================================================================
#                           BUILDER
# ============================================================================

class GfaEdgeListBuilder:
    """
    Convert a GFA file into a binary edge list.

    The name -> index mapping lives only for the duration of one ``build``
    call; it is built by the segment pass and handed to the link pass.
    """

    def __init__(self, write_segment_map: bool = True):
        self.write_segment_map = write_segment_map

    def build(self, gfa_path: str | Path, output_path: str | Path | None = None) -> Path:
        """Convert ``gfa_path`` and return the edge list path."""
        return self.build_with_summary(gfa_path, output_path).edge_list_path

    def build_with_summary(
        self,
        gfa_path: str | Path,
        output_path: str | Path | None = None,
    ) -> ConversionSummary:
        """
        Convert ``gfa_path`` and return a ConversionSummary.

        Args:
            gfa_path: Input GFA v1 file
            output_path: Edge list destination (default: ``<gfa>.edges.bin``)

        Raises:
            FileNotFoundError: If gfa_path does not exist.
            MalformedRecord: On an unparsable S- or L-line.
            UnknownSegment: If a link names an undeclared segment.
        """
        gfa_path = Path(gfa_path)
        if not gfa_path.exists():
            raise FileNotFoundError(f"GFA file not found: {gfa_path}")

        edge_list_path = Path(output_path) if output_path else default_edge_list_path(gfa_path)
        logger.info(f"Converting GFA to edge list: {gfa_path} -> {edge_list_path}")

        segment_index = parse_segments(gfa_path)
        logger.info(f"Indexed {len(segment_index)} segments")

        link_count = 0
        self_loops = 0
        with EdgeListWriter(edge_list_path, len(segment_index)) as writer:
            for link in parse_links(gfa_path):
                u = _resolve(segment_index, link.from_name, link.line_number)
                v = _resolve(segment_index, link.to_name, link.line_number)
                writer.write_edge(u, v)
                if u == v:
                    self_loops += 1
                else:
                    writer.write_edge(v, u)
                link_count += 1
        record_count = writer.records_written

        segment_map_path = None
        if self.write_segment_map:
            segment_map_path = default_segment_map_path(edge_list_path)
            write_segment_map(segment_index, segment_map_path)

        logger.info(f"Edge list complete: {edge_list_path}")
        logger.info(f"  Segments: {len(segment_index)}")
        logger.info(f"  Links: {link_count} ({self_loops} self-loops)")
        logger.info(f"  Records: {record_count}")

        return ConversionSummary(
            edge_list_path=edge_list_path,
            segment_count=len(segment_index),
            link_count=link_count,
            record_count=record_count,
            self_loops=self_loops,
            segment_map_path=segment_map_path,
        )


# ============================================================================
#                           SEGMENT MAP SIDECAR
# ============================================================================

def default_edge_list_path(gfa_path: str | Path) -> Path:
    gfa_path = Path(gfa_path)
    return gfa_path.with_name(gfa_path.stem + EDGE_LIST_SUFFIX)


def default_segment_map_path(edge_list_path: str | Path) -> Path:
    edge_list_path = Path(edge_list_path)
    return edge_list_path.with_name(edge_list_path.name + SEGMENT_MAP_SUFFIX)


def write_segment_map(segment_index: dict[str, int], output_path: str | Path) -> None:
    """Write ``index<TAB>name`` lines in index order."""
    logger.info(f"Writing segment map: {output_path}")
    with open(output_path, 'w') as f:
        for name, index in sorted(segment_index.items(), key=lambda item: item[1]):
            f.write(f"{index}\t{name}\n")


def load_segment_map(path: str | Path) -> dict[str, int]:
    """
    Read a segment map written by ``write_segment_map``.

    Raises:
        MalformedRecord: On a line without exactly two fields or a non-integer index.
    """
    segment_index: dict[str, int] = {}
    with open(path, 'r') as f:
        for line_no, raw_line in enumerate(f, 1):
            line = raw_line.rstrip('\r\n')
            if not line:
                continue
            parts = line.split('\t')
            if len(parts) != 2 or not parts[0].isdigit():
                raise MalformedRecord(f"bad segment map entry in {path}", line_no, line)
            segment_index[parts[1]] = int(parts[0])
    return segment_index

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
