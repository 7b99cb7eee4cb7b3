"""Device (Taichi) copies of neighborhood tables.

Main classes:
- TableSpec: Declarative table specification
- TableContainer: Manages Taichi field lifecycle for tables
- NeighborhoodFields: Typed access to an uploaded table set
"""

from gridgraph.fields.base import TableContainer, TableSpec
from gridgraph.fields.neighborhood import (
    NeighborhoodFields,
    create_neighborhood_specs,
)

__all__ = [
    "TableContainer",
    "TableSpec",
    "NeighborhoodFields",
    "create_neighborhood_specs",
]
