"""Core infrastructure: border codes, canonical offsets, types, and errors."""

from gridgraph.core.border import (
    MAX_NDIM,
    border_type,
    border_type_count,
    border_types,
    high_border_bit,
    is_high_border,
    is_low_border,
    low_border_bit,
    make_border_type,
    validate_ndim,
)
from gridgraph.core.errors import (
    ConfigurationError,
    NeighborhoodError,
    PreconditionError,
)
from gridgraph.core.offsets import (
    NeighborhoodType,
    canonical_strides,
    neighbor_count,
    neighbor_offsets,
    opposite_slot,
)

__all__ = [
    "MAX_NDIM",
    "NeighborhoodType",
    "NeighborhoodError",
    "ConfigurationError",
    "PreconditionError",
    "border_type",
    "border_types",
    "border_type_count",
    "low_border_bit",
    "high_border_bit",
    "is_low_border",
    "is_high_border",
    "make_border_type",
    "validate_ndim",
    "canonical_strides",
    "neighbor_count",
    "neighbor_offsets",
    "opposite_slot",
]
