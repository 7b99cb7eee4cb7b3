"""Device table container and specification classes.

This module provides declarative management of the Taichi fields that hold
neighborhood tables on the device:
- TableSpec: Describes a table's name, dtype, and shape
- TableContainer: Manages allocation, upload, and lookup of table fields

Usage:
    container = TableContainer()
    container.register(TableSpec("degree", INDEX_DTYPE, (16,)))
    container.allocate()
    container.upload("degree", tables.degrees())
    degree = container["degree"]
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
import taichi as ti


def _numpy_dtype(dtype: Any) -> type:
    """Numpy scalar type matching a Taichi integer dtype."""
    if dtype == ti.i8:
        return np.int8
    if dtype == ti.i16:
        return np.int16
    if dtype == ti.i32:
        return np.int32
    if dtype == ti.i64:
        return np.int64
    raise ValueError(f"Unsupported table dtype: {dtype}")


def _dtype_size(dtype: Any) -> int:
    return np.dtype(_numpy_dtype(dtype)).itemsize


@dataclass(frozen=True)
class TableSpec:
    """Immutable specification for a device table.

    Attributes:
        name: Table identifier (snake_case)
        dtype: Taichi integer type (ti.i8, ti.i32, ...)
        shape: Field shape, e.g. (n_codes, count) for the existence table
        description: Human-readable description
    """

    name: str
    dtype: Any  # Taichi dtype
    shape: tuple[int, ...]
    description: str = ""

    def __post_init__(self):
        """Validate table specification."""
        if not self.name:
            raise ValueError("Table name cannot be empty")
        if not self.name.islower() or not self.name.replace("_", "").isalnum():
            raise ValueError(f"Table name must be snake_case, got: {self.name}")
        if not self.shape or any(extent < 1 for extent in self.shape):
            raise ValueError(
                f"Table '{self.name}' needs a non-empty positive shape, got {self.shape}"
            )
        _numpy_dtype(self.dtype)

    @property
    def n_elements(self) -> int:
        return int(np.prod(self.shape))


class TableContainer:
    """Manages the lifecycle of Taichi fields holding lookup tables.

    Tables are registered via TableSpec, allocated together, then filled
    from host arrays with upload(). Kernels receive the fields through
    get() or bracket notation.

    Example:
        container = TableContainer()
        container.register(TableSpec("exists", FLAG_DTYPE, (16, 8)))
        container.allocate()
        container.upload("exists", tables.exists)
        exists = container["exists"]
    """

    def __init__(self):
        self._specs: dict[str, TableSpec] = {}
        self._fields: dict[str, Any] = {}
        self._allocated = False

    @property
    def allocated(self) -> bool:
        """Check if fields have been allocated."""
        return self._allocated

    @property
    def table_names(self) -> list[str]:
        """Get list of registered table names."""
        return list(self._specs.keys())

    def register(self, spec: TableSpec) -> None:
        """Register a table specification.

        Raises:
            ValueError: If name already registered
            RuntimeError: If fields already allocated
        """
        if self._allocated:
            raise RuntimeError("Cannot register tables after allocation")
        if spec.name in self._specs:
            raise ValueError(f"Table '{spec.name}' already registered")
        self._specs[spec.name] = spec

    def register_many(self, specs: list[TableSpec]) -> None:
        for spec in specs:
            self.register(spec)

    def allocate(self) -> None:
        """Allocate a Taichi field for every registered table.

        Raises:
            RuntimeError: If already allocated or no tables registered
        """
        if self._allocated:
            raise RuntimeError("Tables already allocated")
        if not self._specs:
            raise RuntimeError("No tables registered")

        for name, spec in self._specs.items():
            self._fields[name] = ti.field(dtype=spec.dtype, shape=spec.shape)

        self._allocated = True

    def upload(self, name: str, values: np.ndarray) -> None:
        """Copy a host array into a table field.

        Args:
            name: Table name
            values: Array with exactly the registered shape

        Raises:
            ValueError: If the shape differs from the registered one
        """
        spec = self.get_spec(name)
        values = np.asarray(values)
        if values.shape != spec.shape:
            raise ValueError(
                f"Table '{name}' expects shape {spec.shape}, got {values.shape}"
            )
        self.get(name).from_numpy(
            np.ascontiguousarray(values, dtype=_numpy_dtype(spec.dtype))
        )

    def get(self, name: str) -> Any:
        """Get a table field by name.

        Raises:
            KeyError: If table not found
            RuntimeError: If fields not allocated
        """
        if not self._allocated:
            raise RuntimeError("Tables not yet allocated")
        if name not in self._fields:
            raise KeyError(f"Table '{name}' not found")
        return self._fields[name]

    def __getitem__(self, name: str) -> Any:
        """Get a table field by name using bracket notation."""
        return self.get(name)

    def get_spec(self, name: str) -> TableSpec:
        if name not in self._specs:
            raise KeyError(f"Table '{name}' not registered")
        return self._specs[name]

    @property
    def memory_bytes(self) -> int:
        """Total memory of the allocated tables in bytes."""
        if not self._allocated:
            return 0
        return sum(
            spec.n_elements * _dtype_size(spec.dtype) for spec in self._specs.values()
        )

    @property
    def memory_mb(self) -> float:
        """Estimate total memory usage in megabytes."""
        return self.memory_bytes / (1024 * 1024)

    def __contains__(self, name: str) -> bool:
        """Check if a table is registered."""
        return name in self._specs

    def __len__(self) -> int:
        """Number of registered tables."""
        return len(self._specs)
