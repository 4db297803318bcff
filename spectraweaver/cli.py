#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for SpectraWeaver.

This module provides the main CLI entry point and all subcommands for
converting GFA assembly graphs and computing Laplacian spectra.
"""

import logging
import sys
import click
from pathlib import Path
from typing import List, Optional
import yaml

from .version import __version__
from .config.schema import (
    ConfigValidationError,
    load_config,
    merge_cli_overrides,
    save_config_template,
    validate_config,
)
from .errors import SpectralError
from .io_utils.gfa_edgelist import (
    GfaEdgeListBuilder,
    default_segment_map_path,
    load_segment_map,
)
from .io_utils.spectrum_export import export_spectrum
from .pipeline import extract_with_laplacian, resolve_segment_names

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _setup_logging(ctx, config=None):
    """Configure root logging from CLI flags, falling back to the config level."""
    if ctx.obj.get('VERBOSE'):
        level = logging.DEBUG
    elif ctx.obj.get('QUIET'):
        level = logging.WARNING
    else:
        level_name = 'INFO'
        if config:
            level_name = str(config['output']['logging'].get('level', 'INFO')).upper()
        level = getattr(logging, level_name, logging.INFO)

    handlers = [logging.StreamHandler()]
    log_file = ctx.obj.get('LOG_FILE') or (config or {}).get('output', {}).get('logging', {}).get('log_file')
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def _fail(message):
    click.echo(f"✗ Error: {message}", err=True)
    sys.exit(1)


def _parse_index_list(value: str) -> List[int]:
    try:
        return [int(token) for token in value.split(',') if token.strip()]
    except ValueError:
        raise click.BadParameter(f"expected comma-separated integers, got {value!r}",
                                 param_hint='--nodes')


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.option('--log-file', type=click.Path(dir_okay=False), help='Also write log messages to this file')
@click.pass_context
def main(ctx, verbose, quiet, log_file):
    """
    SpectraWeaver: spectral analysis of GFA assembly graphs

    Converts a GFA graph into a compact binary edge list, then computes the
    Laplacian eigendecomposition of the whole graph or of an induced subgraph.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet
    ctx.obj['LOG_FILE'] = log_file


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='spectraweaver_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t',
              type=click.Choice(['default', 'banded', 'dense']),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
    except OSError as e:
        _fail(f"creating configuration: {e}")

    click.echo(f"✓ Configuration file created: {output}")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        cfg = load_config(Path(config_file))
    except ConfigValidationError as e:
        _fail(e)

    errors = validate_config(cfg)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")
    click.echo("\nKey Settings:")
    click.echo(f"  Eigen method: {cfg['eigen']['method']}")
    click.echo(f"  Band ratio: {cfg['eigen']['band_ratio']:.4f}")
    click.echo(f"  Segment map: {'ON' if cfg['conversion']['write_segment_map'] else 'OFF'}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        cfg = load_config(Path(config_file))
    except ConfigValidationError as e:
        _fail(e)

    if format == 'yaml':
        click.echo(yaml.dump(cfg, default_flow_style=False, sort_keys=False))
        return

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)
    click.echo("\nConversion:")
    click.echo(f"  Write segment map: {cfg['conversion']['write_segment_map']}")
    click.echo("\nLoader:")
    click.echo(f"  Chunk records: {cfg['loader']['chunk_records']:,}")
    click.echo("\nEigendecomposition:")
    click.echo(f"  Method: {cfg['eigen']['method']}")
    click.echo(f"  Band ratio: {cfg['eigen']['band_ratio']:.4f}")
    click.echo(f"  Negative tolerance: {cfg['eigen']['negative_tolerance']:g}")
    click.echo(f"  Clamp noise: {cfg['eigen']['clamp_noise']}")
    click.echo("\nOutput:")
    click.echo(f"  Write Laplacian: {cfg['output']['write_laplacian']}")
    click.echo(f"  Log level: {cfg['output']['logging']['level']}")


# ============================================================================
# Pipeline Commands
# ============================================================================

@main.command()
@click.argument('gfa', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Output edge list (default: <gfa stem>.edges.bin next to the GFA)')
@click.option('--segment-map/--no-segment-map', default=None,
              help='Write the <edges>.segments.tsv name sidecar (default: from config)')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.pass_context
def convert(ctx, gfa, output, segment_map, config_file):
    """
    Convert a GFA assembly graph into a binary edge list.

    Every L-line becomes two directed records (one for a self-loop).

    Examples:
        spectraweaver convert assembly.gfa
        spectraweaver convert assembly.gfa -o graph.edges.bin --no-segment-map
    """
    try:
        cfg = load_config(Path(config_file) if config_file else None)
    except ConfigValidationError as e:
        _fail(e)
    _setup_logging(ctx, cfg)

    if segment_map is None:
        segment_map = bool(cfg['conversion']['write_segment_map'])

    try:
        summary = GfaEdgeListBuilder(write_segment_map=segment_map).build_with_summary(gfa, output)
    except (SpectralError, OSError) as e:
        _fail(e)

    click.echo(f"✓ Edge list written: {summary.edge_list_path}")
    click.echo(f"  Segments: {summary.segment_count:,}")
    click.echo(f"  Links: {summary.link_count:,} ({summary.self_loops:,} self-loops)")
    click.echo(f"  Records: {summary.record_count:,}")
    if summary.segment_map_path:
        click.echo(f"  Segment map: {summary.segment_map_path}")


@main.command()
@click.argument('edge_list', type=click.Path(exists=True, dir_okay=False))
@click.option('--nodes', type=str,
              help='Comma-separated node indices (e.g. "0,2,5")')
@click.option('--segments', type=str,
              help='Comma-separated segment names (resolved through the segment map)')
@click.option('--start', type=int, help='First node index of an inclusive range')
@click.option('--end', type=int, help='Last node index of an inclusive range')
@click.option('--segment-map', 'segment_map_file', type=click.Path(exists=True, dir_okay=False),
              help='Segment map (default: <edge_list>.segments.tsv)')
@click.option('--method', type=click.Choice(['auto', 'banded', 'general']),
              help='Force an eigensolver (default: from config, normally auto)')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.option('--output', '-o', type=click.Path(file_okay=False),
              help='Directory for eigenvalues.csv, eigenvectors.csv and summary JSON')
@click.option('--write-laplacian', is_flag=True, default=None,
              help='Also write laplacian.csv to the output directory')
@click.option('--show', 'show_count', type=click.IntRange(min=0), default=20, show_default=True,
              help='Number of eigenvalues to print')
@click.pass_context
def extract(ctx, edge_list, nodes, segments, start, end, segment_map_file,
            method, config_file, output, write_laplacian, show_count):
    """
    Compute the Laplacian spectrum of a graph or an induced subgraph.

    Select nodes with exactly one of --nodes, --segments, or --start/--end;
    with none of them the full graph is analyzed.

    Examples:
        spectraweaver extract graph.edges.bin
        spectraweaver extract graph.edges.bin --segments S1,S3 -o spectrum/
        spectraweaver extract graph.edges.bin --start 0 --end 999 --method banded
    """
    use_range = start is not None or end is not None
    if (nodes is not None) + (segments is not None) + use_range > 1:
        raise click.UsageError("Use only one of --nodes, --segments, --start/--end")
    if (start is None) != (end is None):
        raise click.UsageError("--start and --end must be given together")

    try:
        cfg = load_config(Path(config_file) if config_file else None)
    except ConfigValidationError as e:
        _fail(e)
    cfg = merge_cli_overrides(cfg, {
        'eigen.method': method,
        'output.write_laplacian': write_laplacian,
    })
    errors = validate_config(cfg)
    if errors:
        _fail("; ".join(errors))
    _setup_logging(ctx, cfg)

    map_path = Path(segment_map_file) if segment_map_file else default_segment_map_path(edge_list)
    segment_names: Optional[dict] = None
    node_subset: Optional[List[int]] = None
    try:
        if map_path.exists():
            segment_names = {index: name for name, index in load_segment_map(map_path).items()}

        if nodes is not None:
            node_subset = _parse_index_list(nodes)
        elif segments is not None:
            if segment_names is None:
                _fail(f"--segments needs a segment map; not found: {map_path}")
            name_to_index = {name: index for index, name in segment_names.items()}
            node_subset = resolve_segment_names(
                [s.strip() for s in segments.split(',') if s.strip()], name_to_index
            )
        elif start is not None:
            if end < start:
                raise click.UsageError("--end must not be smaller than --start")
            node_subset = list(range(start, end + 1))

        laplacian, result = extract_with_laplacian(edge_list, node_subset, cfg)
    except SpectralError as e:
        _fail(e)

    scope = "full graph" if node_subset is None else f"{result.dimension} nodes"
    click.echo(f"✓ Spectrum of {scope} ({result.method.value} solver, bandwidth {result.bandwidth})")
    for k, value in enumerate(result.eigenvalues[:show_count]):
        click.echo(f"  λ{k} = {value:.10g}")
    if result.dimension > show_count:
        click.echo(f"  ... {result.dimension - show_count} more")

    if output:
        order = node_subset if node_subset is not None else range(result.dimension)
        seen = set()
        labels = []
        for index in order:
            if index in seen:
                continue
            seen.add(index)
            labels.append(segment_names.get(index, str(index)) if segment_names else str(index))

        written = export_spectrum(
            result,
            output,
            laplacian=laplacian if cfg['output']['write_laplacian'] else None,
            node_labels=labels,
        )
        for kind, path in written.items():
            click.echo(f"  {kind}: {path}")


# ============================================================================
# Utility Commands
# ============================================================================

@main.command()
def version():
    """Show version information."""
    click.echo(f"SpectraWeaver v{__version__}")
    click.echo("\nDependencies:")

    import numpy
    click.echo(f"  NumPy: {numpy.__version__}")

    import scipy
    click.echo(f"  SciPy: {scipy.__version__}")

    click.echo(f"  PyYAML: {yaml.__version__}")


if __name__ == '__main__':
    sys.exit(main())
