"""Three-way comparators for :class:`pyskip.SkipList`.

A comparator is any callable ``cmp(a, b) -> int`` returning a negative number
when ``a`` sorts before ``b``, zero when they are the same key and a positive
number otherwise. The map never falls back to a default ordering, so these
helpers exist to make the common cases one word long.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

__all__ = [
    "Comparator",
    "natural_order",
    "reverse_order",
    "by_key",
    "CountingComparator",
]

T = TypeVar("T")

Comparator = Callable[[T, T], int]


def natural_order(a: Any, b: Any) -> int:
    """Order keys by their own ``<`` / ``>`` operators."""
    return (a > b) - (a < b)


def reverse_order(cmp: Comparator[T]) -> Comparator[T]:
    def _reversed(a: T, b: T) -> int:
        return cmp(b, a)

    return _reversed


def by_key(fn: Callable[[T], Any]) -> Comparator[T]:
    """Compare ``fn(a)`` with ``fn(b)`` in natural order (cf. ``sorted(key=...)``)."""

    def _by_key(a: T, b: T) -> int:
        return natural_order(fn(a), fn(b))

    return _by_key


class CountingComparator(Generic[T]):
    """Comparator wrapper that counts how many times it was invoked.

    The count is a hardware-independent cost proxy: a search that touches
    ``n`` nodes performs roughly ``n`` comparisons, whatever the machine.

    >>> cmp = CountingComparator(natural_order)
    >>> cmp(1, 2), cmp(2, 2)
    (-1, 0)
    >>> cmp.reset()
    2
    >>> cmp.count
    0
    """

    __slots__ = ("_cmp", "count")

    def __init__(self, cmp: Comparator[T]):
        self._cmp = cmp
        self.count = 0

    def __call__(self, a: T, b: T) -> int:
        self.count += 1
        return self._cmp(a, b)

    def reset(self) -> int:
        """Zero the counter, returning the total accumulated so far."""
        total, self.count = self.count, 0
        return total

    def __repr__(self) -> str:  # pragma: no cover
        return f"CountingComparator<{self._cmp!r}:{self.count}>"
