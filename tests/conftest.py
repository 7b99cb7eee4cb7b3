"""Pytest fixtures and test utilities for gridgraph."""

import numpy as np
import pytest

from gridgraph.config import init_taichi
from gridgraph.tables import NeighborhoodCache


@pytest.fixture(scope="session", autouse=True)
def taichi_init():
    """Initialize Taichi once per test session with CPU backend."""
    init_taichi(backend="cpu", debug=True)
    yield


@pytest.fixture
def cache():
    """Fresh table cache per test."""
    return NeighborhoodCache()


@pytest.fixture
def representative():
    """Cell and shape realizing a given border code."""
    return representative_cell


def representative_cell(code: int, ndim: int) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """Pick a point inside a small array whose border code is `code`.

    Each dimension gets extent 3 (or 1 when both of its bits are set) and the
    point sits at the low end, the middle, or the high end accordingly.
    """
    point, shape = [], []
    for d in range(ndim):
        low = code & (1 << (2 * d))
        high = code & (2 << (2 * d))
        if low and high:
            point.append(0)
            shape.append(1)
        elif low:
            point.append(0)
            shape.append(3)
        elif high:
            point.append(2)
            shape.append(3)
        else:
            point.append(1)
            shape.append(3)
    return tuple(point), tuple(shape)


@pytest.fixture
def brute_force_exists():
    """Existence mask from explicit coordinates, independent of the builder."""
    return existence_by_coordinates


def existence_by_coordinates(offsets: np.ndarray, code: int) -> np.ndarray:
    """Mark each offset that stays inside the representative array of code."""
    ndim = offsets.shape[1]
    point, shape = representative_cell(code, ndim)
    target = np.asarray(point) + offsets
    return np.all((target >= 0) & (target < np.asarray(shape)), axis=1)
