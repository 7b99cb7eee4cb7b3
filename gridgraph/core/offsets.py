"""Canonical neighbor offsets for N-dimensional grids.

Offsets are enumerated so that they are sorted by ascending stride under the
canonical stride vector (1, 3, 9, ..., 3**(ndim-1)), where dimension 0 has
stride 1. This has two consequences that table consumers rely on:

- The first half of the list holds the causal neighbors (negative stride,
  scan-order predecessors of the center cell), the second half the
  anticausal ones (positive stride, scan-order successors).
- Slot k and slot count-1-k are opposite (point-reflected) neighbors.

2D layout (offsets written as (d0, d1), canonical strides (1, 3)):

    Direct:                 Indirect:
           0                    0  1  2
        1  X  2                 3  X  4
           3                    5  6  7

    Direct:   (0,-1) (-1,0) (1,0) (0,1)             strides -3 -1 1 3
    Indirect: (-1,-1) (0,-1) (1,-1) (-1,0) (1,0)
              (-1,1) (0,1) (1,1)                    strides -4 ... 4
"""

from enum import Enum

import numpy as np

from gridgraph.core.border import validate_ndim
from gridgraph.core.dtypes import NP_OFFSET_DTYPE
from gridgraph.core.errors import ConfigurationError


class NeighborhoodType(Enum):
    """Neighborhood connectivity.

    DIRECT: axis-aligned unit steps only (2*ndim neighbors)
    INDIRECT: every nonzero combination of unit steps, diagonals included
        (3**ndim - 1 neighbors)
    """

    DIRECT = 0
    INDIRECT = 1

    @classmethod
    def parse(cls, value: "NeighborhoodType | str") -> "NeighborhoodType":
        """Accept a NeighborhoodType or its name ("direct", "indirect")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        raise ConfigurationError(
            f"neighborhood must be 'direct' or 'indirect', got {value!r}"
        )


def neighbor_count(
    ndim: int, neighborhood: NeighborhoodType | str = NeighborhoodType.DIRECT
) -> int:
    """Maximum number of neighbors of a cell (the interior degree)."""
    ndim = validate_ndim(ndim)
    if NeighborhoodType.parse(neighborhood) is NeighborhoodType.DIRECT:
        return 2 * ndim
    return 3**ndim - 1


def canonical_strides(ndim: int) -> np.ndarray:
    """Stride vector (1, 3, 9, ...) that defines the canonical slot order."""
    return 3 ** np.arange(validate_ndim(ndim), dtype=NP_OFFSET_DTYPE)


def opposite_slot(slot: int, count: int) -> int:
    """Slot of the point-reflected neighbor."""
    if not 0 <= slot < count:
        raise IndexError(f"slot must be in [0, {count}), got {slot}")
    return count - 1 - slot


def _direct_offsets(ndim: int, level: int) -> list[tuple[int, ...]]:
    # -1 at this level, then all lower levels, then +1 at this level
    if level < 0:
        return []
    low = [0] * ndim
    high = [0] * ndim
    low[level] = -1
    high[level] = 1
    return [tuple(low)] + _direct_offsets(ndim, level - 1) + [tuple(high)]


def _indirect_offsets(
    point: list[int], level: int, is_center: bool
) -> list[tuple[int, ...]]:
    # is_center: all higher levels are 0, so the all-zero leaf is the center
    if level < 0:
        return [] if is_center else [tuple(point)]
    result = []
    for step in (-1, 0, 1):
        point[level] = step
        result += _indirect_offsets(point, level - 1, is_center and step == 0)
    point[level] = 0
    return result


def neighbor_offsets(
    ndim: int, neighborhood: NeighborhoodType | str = NeighborhoodType.DIRECT
) -> np.ndarray:
    """Enumerate the canonical neighbor offsets.

    Args:
        ndim: Number of dimensions
        neighborhood: DIRECT or INDIRECT

    Returns:
        Read-only int array of shape (neighbor_count, ndim), one offset per
        slot, in canonical order

    Raises:
        ConfigurationError: If ndim or neighborhood is invalid
    """
    ndim = validate_ndim(ndim)
    if NeighborhoodType.parse(neighborhood) is NeighborhoodType.DIRECT:
        offsets = _direct_offsets(ndim, ndim - 1)
    else:
        offsets = _indirect_offsets([0] * ndim, ndim - 1, True)

    array = np.array(offsets, dtype=NP_OFFSET_DTYPE).reshape(len(offsets), ndim)
    array.setflags(write=False)
    return array
