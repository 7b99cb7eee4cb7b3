"""Per-border-code neighbor existence tables.

For every border code of an ndim-dimensional array, these tables record
which canonical neighbor slots lie inside the array, split them into causal
and anticausal subsets, and compact them into active-index lists. Traversal
code computes a cell's border code once and then reads the tables directly:

    tables = build_neighborhood_tables(2, NeighborhoodType.INDIRECT)
    code = border_type((i, j), shape)
    for slot in tables.active[code]:
        neighbor = (i, j) + tables.offsets[slot]
"""

import logging
from dataclasses import dataclass

import numpy as np

from gridgraph.core.border import (
    border_type_count,
    high_border_bit,
    low_border_bit,
    validate_ndim,
)
from gridgraph.core.dtypes import NP_INDEX_DTYPE
from gridgraph.core.errors import ConfigurationError
from gridgraph.core.offsets import (
    NeighborhoodType,
    canonical_strides,
    neighbor_offsets,
    opposite_slot,
)

logger = logging.getLogger(__name__)

# Above this many dimensions eager construction gets slow (4**ndim codes)
LARGE_NDIM: int = 7


def _readonly(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


def _direct_exists(code: int, level: int) -> list[bool]:
    if level < 0:
        return []
    return (
        [not code & low_border_bit(level)]
        + _direct_exists(code, level - 1)
        + [not code & high_border_bit(level)]
    )


def _outside(level: int) -> list[bool]:
    # A non-center sub-block below `level` spans 3**(level + 1) slots
    return [False] * 3 ** (level + 1)


def _indirect_exists(code: int, level: int, is_center: bool = True) -> list[bool]:
    """Existence mask for the sub-block of slots spanned by dims 0..level.

    A border bit set at this level blocks every slot stepping across that
    border, whatever the lower dimensions do, so the whole sub-block below
    it is marked outside.
    """
    if level < 0:
        return [] if is_center else [True]

    if code & low_border_bit(level):
        result = _outside(level - 1)
    else:
        result = _indirect_exists(code, level - 1, False)

    result += _indirect_exists(code, level - 1, is_center)

    if code & high_border_bit(level):
        result += _outside(level - 1)
    else:
        result += _indirect_exists(code, level - 1, False)
    return result


def neighbor_exists(
    ndim: int,
    neighborhood: NeighborhoodType | str,
    code: int,
) -> np.ndarray:
    """Existence mask of the canonical slots for a single border code.

    Args:
        ndim: Number of dimensions
        neighborhood: DIRECT or INDIRECT
        code: Border code in [0, 4**ndim)

    Returns:
        Boolean array aligned with neighbor_offsets(ndim, neighborhood)
    """
    ndim = validate_ndim(ndim)
    if not 0 <= code < border_type_count(ndim):
        raise ConfigurationError(
            f"border code must be in [0, {border_type_count(ndim)}), got {code}"
        )
    if NeighborhoodType.parse(neighborhood) is NeighborhoodType.DIRECT:
        mask = _direct_exists(code, ndim - 1)
    else:
        mask = _indirect_exists(code, ndim - 1)
    return np.array(mask, dtype=bool)


@dataclass(frozen=True, eq=False)
class NeighborhoodTables:
    """Immutable neighbor tables for one (ndim, neighborhood) pair.

    Attributes:
        ndim: Number of dimensions
        neighborhood: DIRECT or INDIRECT
        offsets: Canonical offsets, shape (count, ndim)
        slot_strides: Dot product of each offset with canonical_strides(ndim)
        exists: exists[code, slot] is True iff the neighbor is inside
        causal: exists and slot stride < 0
        anticausal: exists and slot stride > 0
        active: active[code] is the ascending array of existing slots

    All arrays are read-only. exists, causal and anticausal have shape
    (4**ndim, count).
    """

    ndim: int
    neighborhood: NeighborhoodType
    offsets: np.ndarray
    slot_strides: np.ndarray
    exists: np.ndarray
    causal: np.ndarray
    anticausal: np.ndarray
    active: tuple[np.ndarray, ...]

    @property
    def count(self) -> int:
        """Number of neighbor slots (degree of an interior cell)."""
        return self.offsets.shape[0]

    @property
    def n_border_types(self) -> int:
        """Number of border codes covered (4**ndim)."""
        return self.exists.shape[0]

    def degree(self, code: int) -> int:
        """Number of existing neighbors for a border code."""
        return len(self.active[code])

    def degrees(self) -> np.ndarray:
        """Existing neighbor count for every border code."""
        return self.exists.sum(axis=1).astype(NP_INDEX_DTYPE)

    def opposite(self, slot: int) -> int:
        """Slot of the point-reflected neighbor."""
        return opposite_slot(slot, self.count)

    def offsets_for(self, code: int) -> np.ndarray:
        """Offsets of the existing neighbors for a border code, in slot order."""
        return self.offsets[self.active[code]]

    def causal_indices(self, code: int) -> np.ndarray:
        """Existing slots that precede the center in scan order."""
        return np.flatnonzero(self.causal[code]).astype(NP_INDEX_DTYPE)

    def anticausal_indices(self, code: int) -> np.ndarray:
        """Existing slots that follow the center in scan order."""
        return np.flatnonzero(self.anticausal[code]).astype(NP_INDEX_DTYPE)

    def padded_active(self) -> tuple[np.ndarray, np.ndarray]:
        """Rectangular form of the active-index lists.

        Returns:
            (indices, counts): indices has shape (4**ndim, count), row `code`
            holds active[code] followed by -1 padding; counts[code] is
            len(active[code]).
        """
        indices = np.full(
            (self.n_border_types, self.count), -1, dtype=NP_INDEX_DTYPE
        )
        counts = np.zeros(self.n_border_types, dtype=NP_INDEX_DTYPE)
        for code, slots in enumerate(self.active):
            indices[code, : len(slots)] = slots
            counts[code] = len(slots)
        return indices, counts


def build_neighborhood_tables(
    ndim: int,
    neighborhood: NeighborhoodType | str = NeighborhoodType.DIRECT,
) -> NeighborhoodTables:
    """Build the existence, causal, anticausal and active-index tables.

    Args:
        ndim: Number of dimensions, in [1, MAX_NDIM]
        neighborhood: DIRECT or INDIRECT

    Returns:
        NeighborhoodTables covering every border code in [0, 4**ndim)

    Raises:
        ConfigurationError: If ndim or neighborhood is invalid
    """
    ndim = validate_ndim(ndim)
    neighborhood = NeighborhoodType.parse(neighborhood)
    n_codes = border_type_count(ndim)

    if ndim >= LARGE_NDIM:
        logger.warning(
            "Building %s neighborhood tables for ndim=%d (%d border codes)",
            neighborhood.name.lower(), ndim, n_codes,
        )

    offsets = neighbor_offsets(ndim, neighborhood)
    slot_strides = _readonly(offsets @ canonical_strides(ndim))

    exists = np.empty((n_codes, offsets.shape[0]), dtype=bool)
    for code in range(n_codes):
        exists[code] = neighbor_exists(ndim, neighborhood, code)

    causal = exists & (slot_strides < 0)
    anticausal = exists & (slot_strides > 0)
    active = tuple(
        _readonly(np.flatnonzero(row).astype(NP_INDEX_DTYPE)) for row in exists
    )

    logger.debug(
        "Built %s neighborhood tables: ndim=%d, %d slots, %d border codes",
        neighborhood.name.lower(), ndim, offsets.shape[0], n_codes,
    )

    return NeighborhoodTables(
        ndim=ndim,
        neighborhood=neighborhood,
        offsets=offsets,
        slot_strides=slot_strides,
        exists=_readonly(exists),
        causal=_readonly(causal),
        anticausal=_readonly(anticausal),
        active=active,
    )
