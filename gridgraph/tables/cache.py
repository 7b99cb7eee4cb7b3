"""Explicit cache for neighborhood tables.

Tables depend only on (ndim, neighborhood) and, for linear offsets, the
stride vector. A NeighborhoodCache builds each distinct key once and hands
out the same read-only objects afterwards. It is owned and passed around by
the code that needs fast per-cell lookups; there is no process-wide
instance.
"""

import logging
from typing import Sequence

from gridgraph.core.border import validate_ndim
from gridgraph.core.offsets import NeighborhoodType
from gridgraph.params.schema import TableConfig
from gridgraph.tables.existence import NeighborhoodTables, build_neighborhood_tables
from gridgraph.tables.projection import LinearOffsetTable, project_tables

logger = logging.getLogger(__name__)


class NeighborhoodCache:
    """Read-mostly cache of NeighborhoodTables and LinearOffsetTables.

    Cached objects are immutable, so a cache may be shared between readers.
    Two threads missing the same key at once both build it; the results are
    identical and the later assignment wins.

    Example:
        cache = NeighborhoodCache()
        tables = cache.tables(3, NeighborhoodType.INDIRECT)
        linear = cache.linear_offsets(3, "indirect", element_strides(volume))
    """

    def __init__(self):
        self._tables: dict[tuple[int, NeighborhoodType], NeighborhoodTables] = {}
        self._linear: dict[
            tuple[int, NeighborhoodType, tuple[int, ...]], LinearOffsetTable
        ] = {}

    def tables(
        self,
        ndim: int,
        neighborhood: NeighborhoodType | str = NeighborhoodType.DIRECT,
    ) -> NeighborhoodTables:
        """Get (building on first use) the tables for ndim and neighborhood."""
        key = (validate_ndim(ndim), NeighborhoodType.parse(neighborhood))
        tables = self._tables.get(key)
        if tables is None:
            logger.debug("Cache miss for tables %s", key)
            tables = build_neighborhood_tables(*key)
            self._tables[key] = tables
        return tables

    def linear_offsets(
        self,
        ndim: int,
        neighborhood: NeighborhoodType | str,
        strides: Sequence[int],
    ) -> LinearOffsetTable:
        """Get (building on first use) the linear offsets for a stride vector."""
        tables = self.tables(ndim, neighborhood)
        key = (tables.ndim, tables.neighborhood, tuple(int(s) for s in strides))
        linear = self._linear.get(key)
        if linear is None:
            logger.debug("Cache miss for linear offsets %s", key)
            linear = project_tables(tables, key[2])
            self._linear[key] = linear
        return linear

    def warm(self, config: TableConfig) -> None:
        """Build every neighborhood listed in a configuration."""
        for params in config.neighborhoods:
            if params.strides is None:
                self.tables(params.ndim, params.neighborhood)
            else:
                self.linear_offsets(params.ndim, params.neighborhood, params.strides)
        logger.info(
            "Warmed neighborhood cache: %d table sets, %d linear offset tables",
            len(self._tables), len(self._linear),
        )

    def clear(self) -> None:
        """Drop all cached tables."""
        self._tables.clear()
        self._linear.clear()

    def __contains__(self, key: tuple[int, NeighborhoodType | str]) -> bool:
        ndim, neighborhood = key
        return (ndim, NeighborhoodType.parse(neighborhood)) in self._tables

    def __len__(self) -> int:
        """Number of cached table sets (not counting linear offsets)."""
        return len(self._tables)
