"""
SpectraWeaver v0.1.0

I/O Module for SpectraWeaver.

1. gfa_edgelist.py - GFA -> binary edge list conversion, segment map sidecar
2. edgelist_format.py - binary edge list layout, writer, chunked reader
3. spectrum_export.py - eigenvalue/eigenvector/Laplacian CSV and JSON export
"""

from .edgelist_format import (
    EdgeListHeader,
    EdgeListWriter,
    read_header,
    iter_edge_chunks,
)

from .gfa_edgelist import (
    GFALink,
    ConversionSummary,
    GfaEdgeListBuilder,
    parse_segments,
    parse_links,
    write_segment_map,
    load_segment_map,
    default_edge_list_path,
    default_segment_map_path,
)

from .spectrum_export import (
    write_matrix_csv,
    write_eigenvalues_csv,
    build_summary,
    export_spectrum,
)

__all__ = [
    "EdgeListHeader",
    "EdgeListWriter",
    "read_header",
    "iter_edge_chunks",
    "GFALink",
    "ConversionSummary",
    "GfaEdgeListBuilder",
    "parse_segments",
    "parse_links",
    "write_segment_map",
    "load_segment_map",
    "default_edge_list_path",
    "default_segment_map_path",
    "write_matrix_csv",
    "write_eigenvalues_csv",
    "build_summary",
    "export_spectrum",
]
