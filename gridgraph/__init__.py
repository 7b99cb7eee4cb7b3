"""
gridgraph: border-aware neighborhood tables for N-dimensional grids.

Precomputes, per dimensionality and neighborhood kind, which neighbors of a
grid cell lie inside the array, indexed by a compact border code.
"""

__version__ = "0.1.0"
