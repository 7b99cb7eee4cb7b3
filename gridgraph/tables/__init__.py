"""
Neighborhood lookup tables.

Usage:
    from gridgraph.tables import NeighborhoodCache

    cache = NeighborhoodCache()
    tables = cache.tables(2, "indirect")
    for slot in tables.active[code]:
        ...

Submodules:
- existence: existence / causal / anticausal / active-index tables
- projection: linear memory displacements for a stride vector
- cache: explicit per-caller table cache
"""

from gridgraph.tables.existence import (
    NeighborhoodTables,
    build_neighborhood_tables,
    neighbor_exists,
)
from gridgraph.tables.projection import (
    LinearOffsetTable,
    element_strides,
    project_offsets,
    project_tables,
    shape_strides,
)
from gridgraph.tables.cache import NeighborhoodCache

__all__ = [
    "NeighborhoodTables",
    "LinearOffsetTable",
    "NeighborhoodCache",
    "build_neighborhood_tables",
    "neighbor_exists",
    "project_offsets",
    "project_tables",
    "shape_strides",
    "element_strides",
]
