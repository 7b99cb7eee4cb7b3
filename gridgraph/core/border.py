"""Border classification for N-dimensional grid cells.

A border type is a compact bit-wise encoding of the sides of the array a
cell touches. Each dimension owns two bits:

    bit 2*d     set  <=>  point[d] == 0              (low border)
    bit 2*d + 1 set  <=>  point[d] == shape[d] - 1   (high border)

For a 2D image (dimension 0 = x, dimension 1 = y):

    bit 0: left      bit 1: right
    bit 2: top       bit 3: bottom

Code 0 means the cell is strictly interior. A dimension of extent 1 sets
both of its bits, since its only cell is on both borders at once.
"""

from typing import Iterable, Sequence

import numpy as np

from gridgraph.core.dtypes import NP_INDEX_DTYPE
from gridgraph.core.errors import ConfigurationError, PreconditionError

# Border codes are 2*ndim bits wide and must fit a signed 32-bit device int
MAX_NDIM: int = 15


def validate_ndim(ndim: int) -> int:
    """Check that a dimension count can be encoded in a border code.

    Args:
        ndim: Number of array dimensions

    Returns:
        ndim as a plain int

    Raises:
        ConfigurationError: If ndim is not an int in [1, MAX_NDIM]
    """
    if isinstance(ndim, bool) or not isinstance(ndim, (int, np.integer)):
        raise ConfigurationError(f"ndim must be an int, got {ndim!r}")
    if not 1 <= ndim <= MAX_NDIM:
        raise ConfigurationError(f"ndim must be in [1, {MAX_NDIM}], got {ndim}")
    return int(ndim)


def border_type_count(ndim: int) -> int:
    """Number of distinct border codes (4**ndim)."""
    return 1 << (2 * validate_ndim(ndim))


def low_border_bit(dim: int) -> int:
    """Bit set when a cell lies at index 0 of dimension dim."""
    return 1 << (2 * dim)


def high_border_bit(dim: int) -> int:
    """Bit set when a cell lies at the last index of dimension dim."""
    return 2 << (2 * dim)


def is_low_border(code: int, dim: int) -> bool:
    return bool(code & low_border_bit(dim))


def is_high_border(code: int, dim: int) -> bool:
    return bool(code & high_border_bit(dim))


def make_border_type(
    ndim: int, low: Iterable[int] = (), high: Iterable[int] = ()
) -> int:
    """Compose a border code from the dimensions touching each side.

    Args:
        ndim: Number of array dimensions
        low: Dimensions in which the cell is at index 0
        high: Dimensions in which the cell is at the last index

    Returns:
        The border code

    Example:
        # Top-left corner of a 2D image
        make_border_type(2, low=(0, 1))  # == 0b0101
    """
    ndim = validate_ndim(ndim)
    code = 0
    for bit, dims in ((low_border_bit, low), (high_border_bit, high)):
        for dim in dims:
            if not 0 <= dim < ndim:
                raise ConfigurationError(
                    f"dimension must be in [0, {ndim}), got {dim}"
                )
            code |= bit(dim)
    return code


def _validate_shape(shape: Sequence[int]) -> tuple[int, ...]:
    shape = tuple(int(extent) for extent in shape)
    validate_ndim(len(shape))
    for dim, extent in enumerate(shape):
        if extent < 1:
            raise ConfigurationError(
                f"shape[{dim}] must be >= 1, got {extent}"
            )
    return shape


def border_type(point: Sequence[int], shape: Sequence[int]) -> int:
    """Compute the border code of a cell.

    Args:
        point: Cell coordinate, one entry per dimension
        shape: Array extents, one entry per dimension

    Returns:
        Border code in [0, 4**ndim)

    Raises:
        ConfigurationError: If point and shape differ in length or shape is
            not a valid extent vector
        PreconditionError: If point lies outside shape
    """
    shape = _validate_shape(shape)
    point = tuple(point)
    if len(point) != len(shape):
        raise ConfigurationError(
            f"point has {len(point)} dimensions, shape has {len(shape)}"
        )

    code = 0
    for dim, (p, extent) in enumerate(zip(point, shape)):
        if not 0 <= p < extent:
            raise PreconditionError(
                f"point[{dim}] = {p} is outside [0, {extent})"
            )
        if p == 0:
            code |= low_border_bit(dim)
        if p == extent - 1:
            code |= high_border_bit(dim)
    return code


def border_types(shape: Sequence[int]) -> np.ndarray:
    """Border codes of every cell in an array of the given shape.

    Args:
        shape: Array extents

    Returns:
        Integer array of the given shape, entry [I] == border_type(I, shape)
    """
    shape = _validate_shape(shape)
    ndim = len(shape)
    codes = np.zeros(shape, dtype=NP_INDEX_DTYPE)

    for dim, extent in enumerate(shape):
        # Coordinate along dim, broadcast over the other axes
        coord = np.arange(extent).reshape(
            [extent if d == dim else 1 for d in range(ndim)]
        )
        codes |= np.where(coord == 0, low_border_bit(dim), 0).astype(NP_INDEX_DTYPE)
        codes |= np.where(
            coord == extent - 1, high_border_bit(dim), 0
        ).astype(NP_INDEX_DTYPE)

    return codes
