"""
Test fixtures package for hashtree tests.

This package provides factory functions for creating test objects:
- trees.py: Merkle tree builders and traversal helpers
- records.py: structured records for canonical hashing
"""

from .trees import (
    GREEK_ITEMS,
    make_test_tree,
    make_big_tree,
    int_digest,
    make_increasing_tree,
    find_leaf,
    iter_branches,
)

from .records import (
    Trade,
    TradeRecord,
    make_trade,
    make_hashed_party_trade,
)

__all__ = [
    # Trees
    "GREEK_ITEMS",
    "make_test_tree",
    "make_big_tree",
    "int_digest",
    "make_increasing_tree",
    "find_leaf",
    "iter_branches",
    # Records
    "Trade",
    "TradeRecord",
    "make_trade",
    "make_hashed_party_trade",
]
