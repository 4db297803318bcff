"""
SpectraWeaver v0.1.0

Configuration schema for SpectraWeaver.

Defines all available configuration parameters with defaults and validation.

Author: SpectraWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


VALID_EIGEN_METHODS = ['auto', 'banded', 'general']
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # GFA Conversion
    # ========================================================================
    'conversion': {
        'write_segment_map': True,  # <edges>.segments.tsv sidecar (index -> name)
    },

    # ========================================================================
    # Edge List Loading
    # ========================================================================
    'loader': {
        'chunk_records': 1048576,  # Edge records read per streaming chunk
    },

    # ========================================================================
    # Eigendecomposition
    # ========================================================================
    'eigen': {
        'method': 'auto',  # 'auto', 'banded', 'general'
        'band_ratio': 1.0 / 3.0,  # bandwidth <= floor(n * ratio) -> banded solver
        'negative_tolerance': 1e-9,  # Eigenvalues below -tol are an error
        'clamp_noise': True,  # |lambda| < tol -> 0
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'write_laplacian': False,

        # Logging
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': None,
        },
    },
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config_path is given but does not exist
        ConfigValidationError: If the file is not valid YAML or not a mapping
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path) as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in config file {config_path}: {e}") from e

        if user_config is None:
            return config
        if not isinstance(user_config, dict):
            raise ConfigValidationError(
                f"Config file {config_path} must contain a mapping, got {type(user_config).__name__}"
            )

        # Deep merge user config into defaults
        config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def merge_cli_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply command-line overrides to a config dict.

    Keys use dotted notation (e.g., 'eigen.method'); None values are skipped.
    """
    config = copy.deepcopy(config)
    for key, value in overrides.items():
        if value is None:
            continue
        keys = key.split('.')
        target = config
        for k in keys[:-1]:
            target = target.setdefault(k, {})
        target[keys[-1]] = value
    return config


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'banded', 'dense')
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    # Customize for specific templates
    if template == 'banded':
        config['eigen']['method'] = 'banded'

    elif template == 'dense':
        config['eigen']['method'] = 'general'
        config['output']['write_laplacian'] = True

    elif template != 'default':
        raise ValueError(f"Unknown config template: {template}")

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    for section in ('conversion', 'loader', 'eigen', 'output'):
        if not isinstance(config.get(section), dict):
            errors.append(f"Missing required configuration section: {section}")
    if errors:
        return errors

    # Loader
    chunk_records = config['loader'].get('chunk_records')
    if not isinstance(chunk_records, int) or isinstance(chunk_records, bool) or chunk_records <= 0:
        errors.append(f"Invalid loader.chunk_records: {chunk_records!r} (must be a positive integer)")

    # Eigen settings
    eigen = config['eigen']
    if eigen.get('method') not in VALID_EIGEN_METHODS:
        errors.append(
            f"Invalid eigen.method: {eigen.get('method')!r} (expected one of {', '.join(VALID_EIGEN_METHODS)})"
        )

    band_ratio = eigen.get('band_ratio')
    if not isinstance(band_ratio, (int, float)) or not 0.0 <= band_ratio <= 1.0:
        errors.append(f"Invalid eigen.band_ratio: {band_ratio!r} (must be within [0, 1])")

    tolerance = eigen.get('negative_tolerance')
    if not isinstance(tolerance, (int, float)) or tolerance < 0:
        errors.append(f"Invalid eigen.negative_tolerance: {tolerance!r} (must be >= 0)")

    # Logging
    level = config['output'].get('logging', {}).get('level', 'INFO')
    if str(level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid output.logging.level: {level!r}")

    return errors

# SpectraWeaver v0.1.0
# Any usage is subject to this software's license.
