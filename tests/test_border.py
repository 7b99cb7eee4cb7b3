"""Tests for border classification."""

import numpy as np
import pytest

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


class TestBorderType:
    """Tests for border_type()."""

    def test_interior_is_zero(self):
        """A strictly interior cell has border code 0."""
        assert border_type((1, 1), (3, 3)) == 0
        assert border_type((4, 2, 7), (10, 10, 10)) == 0

    def test_top_left_corner(self):
        """Point (0, 0) sets the low bit of both dimensions."""
        assert border_type((0, 0), (3, 3)) == 0b0101

    def test_bottom_right_corner(self):
        """Last index in both dimensions sets both high bits."""
        assert border_type((2, 2), (3, 3)) == 0b1010

    def test_edges(self):
        """Each edge of a 2D array sets exactly one bit."""
        shape = (5, 4)
        assert border_type((0, 2), shape) == low_border_bit(0)
        assert border_type((4, 2), shape) == high_border_bit(0)
        assert border_type((2, 0), shape) == low_border_bit(1)
        assert border_type((2, 3), shape) == high_border_bit(1)

    def test_size_one_dimension_sets_both_bits(self):
        """A dimension of extent 1 is both low and high border."""
        code = border_type((0, 1), (1, 3))
        assert is_low_border(code, 0)
        assert is_high_border(code, 0)
        assert not is_low_border(code, 1)
        assert not is_high_border(code, 1)

    def test_one_dimensional(self):
        assert border_type((0,), (5,)) == 0b01
        assert border_type((4,), (5,)) == 0b10
        assert border_type((2,), (5,)) == 0

    def test_accepts_numpy_coordinates(self):
        point = np.array([0, 3])
        shape = np.array([4, 4])
        assert border_type(point, shape) == make_border_type(2, low=(0,), high=(1,))

    def test_out_of_range_point(self):
        """Coordinates outside the array are a precondition violation."""
        with pytest.raises(PreconditionError, match="outside"):
            border_type((3, 0), (3, 3))
        with pytest.raises(PreconditionError):
            border_type((0, -1), (3, 3))

    def test_length_mismatch(self):
        with pytest.raises(ConfigurationError, match="dimensions"):
            border_type((0, 0, 0), (3, 3))

    def test_invalid_extent(self):
        with pytest.raises(ConfigurationError, match=r"shape\[1\] must be >= 1"):
            border_type((0, 0), (3, 0))

    def test_errors_are_value_errors(self):
        """Both error kinds are input-validation failures."""
        assert issubclass(PreconditionError, NeighborhoodError)
        assert issubclass(ConfigurationError, ValueError)


class TestBorderBits:
    """Tests for bit helpers and dimension limits."""

    def test_bit_layout(self):
        assert low_border_bit(0) == 1
        assert high_border_bit(0) == 2
        assert low_border_bit(1) == 4
        assert high_border_bit(1) == 8
        assert low_border_bit(3) == 1 << 6

    def test_border_type_count(self):
        assert border_type_count(1) == 4
        assert border_type_count(2) == 16
        assert border_type_count(3) == 64

    def test_make_border_type(self):
        assert make_border_type(2) == 0
        assert make_border_type(2, low=(0, 1)) == 0b0101
        assert make_border_type(3, high=(2,)) == high_border_bit(2)

    def test_make_border_type_bad_dimension(self):
        with pytest.raises(ConfigurationError):
            make_border_type(2, low=(2,))

    def test_validate_ndim_limits(self):
        assert validate_ndim(1) == 1
        assert validate_ndim(MAX_NDIM) == MAX_NDIM
        assert validate_ndim(np.int64(3)) == 3
        with pytest.raises(ConfigurationError):
            validate_ndim(0)
        with pytest.raises(ConfigurationError):
            validate_ndim(MAX_NDIM + 1)
        with pytest.raises(ConfigurationError):
            validate_ndim(2.0)
        with pytest.raises(ConfigurationError):
            validate_ndim(True)

    def test_border_code_fits_32_bits(self):
        """The widest border code stays inside a signed 32-bit integer."""
        assert border_type_count(MAX_NDIM) - 1 < 2**31


class TestBorderTypes:
    """Tests for whole-array classification."""

    @pytest.mark.parametrize("shape", [(5,), (4, 3), (3, 1, 4), (2, 2, 2, 2)])
    def test_matches_pointwise(self, shape):
        """border_types agrees with border_type at every cell."""
        codes = border_types(shape)
        assert codes.shape == shape
        for index in np.ndindex(*shape):
            assert codes[index] == border_type(index, shape)

    def test_interior_count(self):
        """Only the (n-2)*(m-2) interior cells have code 0."""
        codes = border_types((6, 5))
        assert np.count_nonzero(codes == 0) == 4 * 3

    def test_representative_cells(self, representative):
        """The test oracle's cells realize every border code."""
        for ndim in (1, 2, 3):
            for code in range(border_type_count(ndim)):
                point, shape = representative(code, ndim)
                assert border_type(point, shape) == code
