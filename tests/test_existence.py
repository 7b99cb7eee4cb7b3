"""Tests for per-border-code existence tables."""

import logging

import numpy as np
import pytest

from gridgraph.core.border import border_type, make_border_type
from gridgraph.core.errors import ConfigurationError
from gridgraph.core.offsets import NeighborhoodType
from gridgraph.tables import existence
from gridgraph.tables.existence import build_neighborhood_tables, neighbor_exists

KINDS = [NeighborhoodType.DIRECT, NeighborhoodType.INDIRECT]


@pytest.fixture(scope="module")
def direct_2d():
    return build_neighborhood_tables(2, NeighborhoodType.DIRECT)


@pytest.fixture(scope="module")
def indirect_2d():
    return build_neighborhood_tables(2, NeighborhoodType.INDIRECT)


class TestExistence:
    """Tests for the existence table."""

    @pytest.mark.parametrize("kind", KINDS)
    @pytest.mark.parametrize("ndim", [1, 2, 3, 4])
    def test_shapes(self, ndim, kind):
        tables = build_neighborhood_tables(ndim, kind)
        assert tables.n_border_types == 4**ndim
        assert tables.exists.shape == (4**ndim, tables.count)
        assert tables.causal.shape == tables.exists.shape
        assert tables.anticausal.shape == tables.exists.shape
        assert len(tables.active) == 4**ndim

    @pytest.mark.parametrize("kind", KINDS)
    @pytest.mark.parametrize("ndim", [1, 2, 3, 4])
    def test_interior_has_all_neighbors(self, ndim, kind):
        tables = build_neighborhood_tables(ndim, kind)
        assert tables.exists[0].all()
        assert tables.degree(0) == tables.count

    @pytest.mark.parametrize("ndim", [1, 2, 3, 4])
    def test_all_low_corner(self, ndim):
        """At the all-low corner only non-negative steps survive."""
        code = make_border_type(ndim, low=range(ndim))
        direct = build_neighborhood_tables(ndim, NeighborhoodType.DIRECT)
        indirect = build_neighborhood_tables(ndim, NeighborhoodType.INDIRECT)
        assert direct.exists[code].sum() == ndim
        assert indirect.exists[code].sum() == 2**ndim - 1

    @pytest.mark.parametrize("kind", KINDS)
    @pytest.mark.parametrize("ndim", [1, 2, 3])
    def test_matches_coordinates(self, ndim, kind, brute_force_exists):
        """Every code agrees with stepping from an explicit cell."""
        tables = build_neighborhood_tables(ndim, kind)
        for code in range(tables.n_border_types):
            expected = brute_force_exists(tables.offsets, code)
            np.testing.assert_array_equal(tables.exists[code], expected, err_msg=f"code {code}")

    def test_top_left_corner_direct(self, direct_2d):
        code = border_type((0, 0), (3, 3))
        assert list(direct_2d.exists[code]) == [False, False, True, True]

    def test_center_indirect(self, indirect_2d):
        code = border_type((1, 1), (3, 3))
        assert code == 0
        assert indirect_2d.exists[code].sum() == 8

    def test_blocked_axis_blocks_diagonals(self, indirect_2d):
        """A low border in dimension 1 removes the whole row of -1 steps."""
        code = make_border_type(2, low=(1,))
        blocked = indirect_2d.offsets[:, 1] == -1
        assert not indirect_2d.exists[code][blocked].any()
        assert indirect_2d.exists[code][~blocked].all()

    def test_size_one_dimension(self, indirect_2d):
        """Extent 1 in dimension 0 leaves only steps with d0 == 0."""
        code = border_type((0, 1), (1, 3))
        surviving = indirect_2d.offsets[indirect_2d.exists[code]]
        assert [tuple(o) for o in surviving] == [(0, -1), (0, 1)]

    def test_single_code_matches_table(self, indirect_2d):
        for code in (0, 5, 10, 15):
            np.testing.assert_array_equal(
                neighbor_exists(2, "indirect", code), indirect_2d.exists[code]
            )

    def test_invalid_code(self):
        with pytest.raises(ConfigurationError, match="border code"):
            neighbor_exists(2, "direct", 16)


class TestCausality:
    """Tests for the causal/anticausal split."""

    @pytest.mark.parametrize("kind", KINDS)
    @pytest.mark.parametrize("ndim", [1, 2, 3])
    def test_partition(self, ndim, kind):
        """Existing slots are exactly one of causal/anticausal; others neither."""
        tables = build_neighborhood_tables(ndim, kind)
        np.testing.assert_array_equal(tables.causal ^ tables.anticausal, tables.exists)
        assert not (tables.causal & tables.anticausal).any()

    @pytest.mark.parametrize("kind", KINDS)
    def test_interior_halves(self, kind):
        """For an interior cell the first half is causal, the second anticausal."""
        tables = build_neighborhood_tables(3, kind)
        half = tables.count // 2
        assert tables.causal[0, :half].all()
        assert not tables.causal[0, half:].any()
        assert tables.anticausal[0, half:].all()

    def test_causal_indices(self, indirect_2d):
        code = make_border_type(2, high=(0,))
        causal = indirect_2d.causal_indices(code)
        anticausal = indirect_2d.anticausal_indices(code)
        assert list(causal) == [0, 1, 3]
        assert list(anticausal) == [5, 6]
        assert list(np.union1d(causal, anticausal)) == list(indirect_2d.active[code])


class TestActiveIndices:
    """Tests for compacted active-index lists and derived views."""

    @pytest.mark.parametrize("kind", KINDS)
    def test_active_matches_exists(self, kind):
        tables = build_neighborhood_tables(3, kind)
        for code in range(tables.n_border_types):
            assert list(tables.active[code]) == list(np.flatnonzero(tables.exists[code]))

    def test_degrees(self, direct_2d):
        degrees = direct_2d.degrees()
        assert degrees[0] == 4
        assert degrees[make_border_type(2, low=(0, 1))] == 2
        assert degrees[make_border_type(2, low=(0,), high=(0,))] == 2
        assert degrees[15] == 0

    def test_offsets_for(self, direct_2d):
        code = make_border_type(2, low=(0, 1))
        assert [tuple(o) for o in direct_2d.offsets_for(code)] == [(1, 0), (0, 1)]

    def test_opposite(self, indirect_2d):
        for slot in range(indirect_2d.count):
            np.testing.assert_array_equal(
                indirect_2d.offsets[indirect_2d.opposite(slot)],
                -indirect_2d.offsets[slot],
            )

    def test_padded_active(self, direct_2d):
        indices, counts = direct_2d.padded_active()
        assert indices.shape == (16, 4)
        code = make_border_type(2, low=(0, 1))
        assert list(indices[code]) == [2, 3, -1, -1]
        assert counts[code] == 2
        np.testing.assert_array_equal(counts, direct_2d.degrees())


class TestConstruction:
    """Tests for immutability, determinism, and validation."""

    def test_tables_read_only(self, direct_2d):
        with pytest.raises(ValueError):
            direct_2d.exists[0, 0] = False
        with pytest.raises(ValueError):
            direct_2d.active[0][0] = 1
        with pytest.raises(Exception):  # FrozenInstanceError
            direct_2d.ndim = 3

    @pytest.mark.parametrize("kind", KINDS)
    def test_idempotent(self, kind):
        a = build_neighborhood_tables(3, kind)
        b = build_neighborhood_tables(3, kind)
        np.testing.assert_array_equal(a.offsets, b.offsets)
        np.testing.assert_array_equal(a.exists, b.exists)
        np.testing.assert_array_equal(a.causal, b.causal)
        np.testing.assert_array_equal(a.anticausal, b.anticausal)
        for x, y in zip(a.active, b.active):
            np.testing.assert_array_equal(x, y)

    def test_string_neighborhood(self):
        tables = build_neighborhood_tables(2, "indirect")
        assert tables.neighborhood is NeighborhoodType.INDIRECT

    def test_invalid_inputs(self):
        with pytest.raises(ConfigurationError):
            build_neighborhood_tables(0)
        with pytest.raises(ConfigurationError):
            build_neighborhood_tables(2, "hexagonal")

    def test_large_ndim_warning(self, monkeypatch, caplog):
        monkeypatch.setattr(existence, "LARGE_NDIM", 2)
        with caplog.at_level(logging.WARNING, logger="gridgraph.tables.existence"):
            build_neighborhood_tables(1)
            assert not caplog.records
            build_neighborhood_tables(2, "indirect")
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].name == "gridgraph.tables.existence"
        assert "ndim=2" in warnings[0].getMessage()
