"""
Table configuration.

This module provides:
- Validated, immutable configuration containers (schema.py)
- YAML loading utilities (loader.py)
"""

from gridgraph.params.schema import NeighborhoodParams, TableConfig, ValidationError
from gridgraph.params.loader import (
    load_config,
    load_config_with_overrides,
    save_config,
)

__all__ = [
    "NeighborhoodParams",
    "TableConfig",
    "ValidationError",
    "load_config",
    "load_config_with_overrides",
    "save_config",
]
