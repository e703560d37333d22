"""Exceptions raised by the skip-list map.

Only two situations are *errors* for callers: passing a ``None`` key and
looking up a key that is not there. Removing a missing key or asking
``contains_key`` about it is a normal outcome and raises nothing.
"""
from __future__ import annotations

from typing import Any

__all__ = [
    "SkipListError",
    "InvalidArgumentError",
    "KeyNotFoundError",
    "TraversalStateError",
]


class SkipListError(Exception):
    """Base class for every error raised by :mod:`pyskip`."""


class InvalidArgumentError(SkipListError, ValueError):
    """A ``None`` key or an out-of-range constructor argument."""


class KeyNotFoundError(SkipListError, KeyError):
    """``get`` was asked for a key the map does not hold."""

    def __init__(self, key: Any):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"key not found: {self.key!r}"


class TraversalStateError(SkipListError, RuntimeError):
    """``remove()`` on a traversal with no freshly yielded entry."""
