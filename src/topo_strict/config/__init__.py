"""
topo-strict settings package public API.

Purpose
- Export settings loading/validation entrypoints and public error types for
  the command line.

Functional requirements
- Support loading from ``topo-strict.toml`` + ``TOPO_STRICT_`` env overrides.
- Fail fast with clear structured validation/load errors.
"""

from topo_strict.config.loader import (
    DEFAULT_CONFIG_FILE,
    ENV_PREFIX,
    ConfigLoadError,
    load_config,
)
from topo_strict.config.schema import (
    DEFAULT_CONFIG,
    LOG_LEVELS,
    OUTPUT_FORMATS,
    ConfigValidationError,
    ConfigValidationIssue,
    SolverConfig,
    assert_valid_config,
    default_config,
    validate_config,
)

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILE",
    "ENV_PREFIX",
    "LOG_LEVELS",
    "OUTPUT_FORMATS",
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "SolverConfig",
    "assert_valid_config",
    "default_config",
    "load_config",
    "validate_config",
]
