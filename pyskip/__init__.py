"""pyskip: a probabilistic ordered map (skip list) in Python.

The package exposes the map via `pyskip.SkipList`. Keys are ordered by an
explicit three-way comparator chosen at construction time; see
`pyskip.comparators` for ready-made ones.
"""

from __future__ import annotations

__all__ = [
    "SkipList",
    "Traversal",
    "natural_order",
    "reverse_order",
    "by_key",
    "CountingComparator",
    "SkipListError",
    "InvalidArgumentError",
    "KeyNotFoundError",
    "TraversalStateError",
]

from .comparators import CountingComparator, by_key, natural_order, reverse_order
from .errors import InvalidArgumentError, KeyNotFoundError, SkipListError, TraversalStateError
from .skiplist import SkipList, Traversal
