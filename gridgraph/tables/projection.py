"""Projection of neighbor offsets onto linear memory displacements.

Given the strides of a concrete array, each existing neighbor offset of a
border code becomes a single integer that steps a flat index (or pointer)
directly to the neighbor.

Slot order is kept. Under an arbitrary stride vector the causal slots are
no longer guaranteed to form a contiguous, all-negative prefix; that
grouping only holds for the canonical strides.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from gridgraph.core.border import validate_ndim
from gridgraph.core.dtypes import NP_INDEX_DTYPE, NP_OFFSET_DTYPE
from gridgraph.core.errors import ConfigurationError
from gridgraph.tables.existence import NeighborhoodTables


def shape_strides(shape: Sequence[int]) -> tuple[int, ...]:
    """Element strides of a dense array with dimension 0 varying fastest.

    This is the memory layout the canonical slot order mirrors: for
    shape (nx, ny) the strides are (1, nx).
    """
    shape = tuple(int(extent) for extent in shape)
    validate_ndim(len(shape))
    return tuple(int(s) for s in np.cumprod((1,) + shape[:-1]))


def element_strides(array: np.ndarray) -> tuple[int, ...]:
    """A numpy array's strides in elements rather than bytes.

    Raises:
        ConfigurationError: If a byte stride is not a multiple of the item
            size, as for a field view into a packed structured array
    """
    for stride in array.strides:
        if stride % array.itemsize:
            raise ConfigurationError(
                f"byte strides {array.strides} are not multiples of "
                f"the item size {array.itemsize}"
            )
    return tuple(s // array.itemsize for s in array.strides)


def project_offsets(
    offsets: np.ndarray,
    exists: np.ndarray,
    strides: Sequence[int],
) -> tuple[np.ndarray, ...]:
    """Project the existing offsets of every border code onto strides.

    Args:
        offsets: Canonical offsets, shape (count, ndim)
        exists: Existence table, shape (n_codes, count)
        strides: Caller stride vector, length ndim

    Returns:
        One read-only int array per border code holding
        dot(offsets[slot], strides) for each existing slot, in slot order

    Raises:
        ConfigurationError: If the shapes of the inputs disagree
    """
    offsets = np.asarray(offsets, dtype=NP_OFFSET_DTYPE)
    exists = np.asarray(exists, dtype=bool)
    strides = np.asarray(strides, dtype=NP_OFFSET_DTYPE)

    if offsets.ndim != 2:
        raise ConfigurationError(
            f"offsets must have shape (count, ndim), got {offsets.shape}"
        )
    if strides.shape != (offsets.shape[1],):
        raise ConfigurationError(
            f"strides must have shape ({offsets.shape[1]},), got {strides.shape}"
        )
    if exists.ndim != 2 or exists.shape[1] != offsets.shape[0]:
        raise ConfigurationError(
            f"exists must have shape (n_codes, {offsets.shape[0]}), got {exists.shape}"
        )

    linear = offsets @ strides
    result = []
    for row in exists:
        displacements = linear[row]
        displacements.setflags(write=False)
        result.append(displacements)
    return tuple(result)


@dataclass(frozen=True, eq=False)
class LinearOffsetTable:
    """Per-border-code linear displacements for one stride vector.

    Attributes:
        strides: Stride vector the offsets were projected onto
        displacements: displacements[code] lists the linear step to each
            existing neighbor, aligned with NeighborhoodTables.active[code]
    """

    strides: tuple[int, ...]
    displacements: tuple[np.ndarray, ...]

    def __getitem__(self, code: int) -> np.ndarray:
        return self.displacements[code]

    def __len__(self) -> int:
        return len(self.displacements)

    def padded(
        self, width: int | None = None, fill: int = 0
    ) -> tuple[np.ndarray, np.ndarray]:
        """Rectangular form for device upload.

        Args:
            width: Row width (default: longest row)
            fill: Padding value

        Returns:
            (values, counts): values has one row per border code, padded
            with `fill` up to `width`; counts holds the row lengths.
        """
        longest = max((len(row) for row in self.displacements), default=0)
        if width is None:
            width = longest
        elif width < longest:
            raise ValueError(f"width must be >= {longest}, got {width}")
        values = np.full((len(self), width), fill, dtype=NP_OFFSET_DTYPE)
        counts = np.zeros(len(self), dtype=NP_INDEX_DTYPE)
        for code, row in enumerate(self.displacements):
            values[code, : len(row)] = row
            counts[code] = len(row)
        return values, counts


def project_tables(
    tables: NeighborhoodTables, strides: Sequence[int]
) -> LinearOffsetTable:
    """Project a table set onto a concrete stride vector.

    Example:
        image = np.zeros((480, 640))
        linear = project_tables(tables, element_strides(image))
        flat = image.ravel()
        code = border_type((i, j), image.shape)
        values = [flat[i * 640 + j + step] for step in linear[code]]
    """
    strides = tuple(int(s) for s in strides)
    if len(strides) != tables.ndim:
        raise ConfigurationError(
            f"strides must have length {tables.ndim}, got {len(strides)}"
        )
    return LinearOffsetTable(
        strides=strides,
        displacements=project_offsets(tables.offsets, tables.exists, strides),
    )
