"""
Test fixtures package for txmerkle tests.

Usage:
    from fixtures import dh, make_leaf_ids

    def test_something():
        leaves = make_leaf_ids(4)
        assert build_merkle_root(leaves) == reference_root(leaves)
"""

from .common import (
    dh,
    make_leaf_ids,
    reference_root,
    flip_hex_char,
)

__all__ = [
    "dh",
    "make_leaf_ids",
    "reference_root",
    "flip_hex_char",
]
