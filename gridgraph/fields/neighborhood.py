"""Neighborhood tables as Taichi fields.

Device copies of NeighborhoodTables (and optionally a LinearOffsetTable),
so kernels can index tables by border code:
- offsets: Canonical offsets (count, ndim)
- exists / causal / anticausal: Flags (n_codes, count), 1 = true
- active: Existing slots per code (n_codes, count), padded with -1
- degree: Number of existing neighbors per code (n_codes,)
- linear / linear_count: Linear displacements per code, padded with 0
"""

from typing import Any

import numpy as np

from gridgraph.core.dtypes import FLAG_DTYPE, INDEX_DTYPE, NP_INDEX_DTYPE
from gridgraph.core.errors import ConfigurationError
from gridgraph.fields.base import TableContainer, TableSpec
from gridgraph.tables.existence import NeighborhoodTables
from gridgraph.tables.projection import LinearOffsetTable


def create_neighborhood_specs(
    tables: NeighborhoodTables, with_linear: bool = False
) -> list[TableSpec]:
    """Create specifications for the device copies of a table set.

    Args:
        tables: Host tables the fields are sized from
        with_linear: Also reserve linear / linear_count

    Returns:
        List of TableSpec
    """
    n_codes, count = tables.n_border_types, tables.count
    specs = [
        TableSpec("offsets", INDEX_DTYPE, (count, tables.ndim), "Canonical offsets"),
        TableSpec("exists", FLAG_DTYPE, (n_codes, count), "Neighbor inside array"),
        TableSpec("causal", FLAG_DTYPE, (n_codes, count), "Existing scan predecessor"),
        TableSpec("anticausal", FLAG_DTYPE, (n_codes, count), "Existing scan successor"),
        TableSpec("active", INDEX_DTYPE, (n_codes, count), "Existing slots, -1 padded"),
        TableSpec("degree", INDEX_DTYPE, (n_codes,), "Existing neighbor count"),
    ]
    if with_linear:
        specs += [
            TableSpec("linear", INDEX_DTYPE, (n_codes, count), "Linear displacements"),
            TableSpec("linear_count", INDEX_DTYPE, (n_codes,), "Displacements per code"),
        ]
    return specs


class NeighborhoodFields:
    """Typed access to the device copies of a table set.

    Example:
        fields = NeighborhoodFields.from_tables(tables)
        gather_table(border, fields.degree, out)
    """

    def __init__(self, container: TableContainer, tables: NeighborhoodTables):
        """Wrap an allocated and uploaded container.

        Args:
            container: Container holding the neighborhood tables
            tables: Host tables the container was filled from
        """
        self._container = container
        self._tables = tables

    @classmethod
    def from_tables(
        cls,
        tables: NeighborhoodTables,
        linear: LinearOffsetTable | None = None,
    ) -> "NeighborhoodFields":
        """Allocate fields and upload a table set.

        Args:
            tables: Host tables
            linear: Optional linear offsets projected from the same tables

        Raises:
            ValueError: If linear does not cover every border code
            ConfigurationError: If a linear displacement does not fit the
                device index type
        """
        if linear is not None and len(linear) != tables.n_border_types:
            raise ValueError(
                f"linear offsets cover {len(linear)} border codes, "
                f"tables cover {tables.n_border_types}"
            )
        if linear is not None:
            values, counts = linear.padded(width=tables.count)
            limits = np.iinfo(NP_INDEX_DTYPE)
            if values.size and (values.min() < limits.min or values.max() > limits.max):
                raise ConfigurationError(
                    f"linear displacements for strides {linear.strides} exceed "
                    f"the device index range [{limits.min}, {limits.max}]"
                )

        container = TableContainer()
        container.register_many(
            create_neighborhood_specs(tables, with_linear=linear is not None)
        )
        container.allocate()

        active, degree = tables.padded_active()
        container.upload("offsets", tables.offsets)
        container.upload("exists", tables.exists)
        container.upload("causal", tables.causal)
        container.upload("anticausal", tables.anticausal)
        container.upload("active", active)
        container.upload("degree", degree)

        if linear is not None:
            container.upload("linear", values.astype(NP_INDEX_DTYPE))
            container.upload("linear_count", counts)

        return cls(container, tables)

    @property
    def container(self) -> TableContainer:
        return self._container

    @property
    def tables(self) -> NeighborhoodTables:
        """Host tables backing these fields."""
        return self._tables

    @property
    def offsets(self) -> Any:
        return self._container["offsets"]

    @property
    def exists(self) -> Any:
        return self._container["exists"]

    @property
    def causal(self) -> Any:
        return self._container["causal"]

    @property
    def anticausal(self) -> Any:
        return self._container["anticausal"]

    @property
    def active(self) -> Any:
        return self._container["active"]

    @property
    def degree(self) -> Any:
        return self._container["degree"]

    @property
    def linear(self) -> Any:
        """Linear displacements (only when built with linear offsets)."""
        return self._container["linear"]

    @property
    def linear_count(self) -> Any:
        return self._container["linear_count"]
