"""A skip-list ordered map.

Nodes are stacked into *lanes*: every node sits on lane 0, about half of them
also on lane 1, a quarter on lane 2 and so on. Searches start on the highest
populated lane of the sentinel and drop one lane whenever the next key would
overshoot, which gives logarithmic cost on average without any rebalancing.

Nodes live in an arena (a plain list) and link to each other by slot index.
Slot 0 is the keyless sentinel; a link pointing back at it ends the lane, so
there is no ``None`` to special-case while walking.

Complexities (average case):
    • search   – O(log n)
    • insert   – O(log n)
    • remove   – O(log n)
    • iterate  – O(n)

The probabilistic height algorithm uses the classic 50 % branching factor.
"""
from __future__ import annotations

import logging
import random
import sys
from collections.abc import Callable, Iterator
from operator import attrgetter
from typing import Generic, Optional, TextIO, TypeVar

from .comparators import Comparator
from .errors import InvalidArgumentError, KeyNotFoundError, TraversalStateError

__all__ = ["SkipList", "Traversal", "MAX_HEIGHT", "P"]

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")
T = TypeVar("T")

MAX_HEIGHT = 16  # Supports > 65k elements on average.
P = 0.5

_HEAD = 0  # arena slot of the sentinel
_DUMP_WIDTH = 10


class _Node(Generic[K, V]):
    __slots__ = ("key", "value", "forward")

    def __init__(self, key: Optional[K], value: Optional[V], height: int):
        self.key = key
        self.value = value
        self.forward: list[int] = [_HEAD] * height

    def __repr__(self) -> str:  # pragma: no cover
        return f"Node<{self.key!r}:{self.value!r}>"  # type: ignore[arg-type]


class Traversal(Generic[T]):
    """Lazy, forward-only walk over the bottom lane in ascending key order.

    A traversal follows live links and cannot be restarted: once it has raised
    ``StopIteration`` it stays exhausted. Ask the map for a fresh one instead.

    The traversal holds on to the node it yielded last, not to its slot. A
    node removed behind its back keeps its old lane-0 link, so the walk
    carries on with the removed node's former successor even if the slot is
    handed to a new key meanwhile.
    """

    __slots__ = ("_map", "_project", "_prev", "_cursor", "_armed", "_done")

    def __init__(self, skiplist: SkipList, project: Callable[[_Node], T]):
        head = skiplist._nodes[_HEAD]
        self._map = skiplist
        self._project = project
        self._prev: _Node = head
        self._cursor: _Node = head
        self._armed = False
        self._done = False

    def __iter__(self) -> Traversal[T]:
        return self

    def __next__(self) -> T:
        if self._done:
            raise StopIteration
        nxt = self._cursor.forward[0]
        if nxt == _HEAD:
            self._done = True
            raise StopIteration
        node = self._map._nodes[nxt]
        self._prev, self._cursor = self._cursor, node
        self._armed = True
        return self._project(node)

    def remove(self) -> None:
        """Remove the entry yielded last from the underlying map."""
        if not self._armed:
            raise TraversalStateError("remove() needs a freshly yielded entry")
        key = self._cursor.key
        logger.debug("traversal removing %r", key)
        self._map.remove(key)
        # The removed node is gone; resume from its lane-0 predecessor.
        self._cursor = self._prev
        self._armed = False


class SkipList(Generic[K, V]):
    """Ordered map from keys to values, sorted by an explicit comparator.

    Parameters
    ----------
    comparator: Callable[[K, K], int]
        Three-way comparison: negative, zero or positive when the first key
        sorts before, equal to or after the second. Required, there is no
        default ordering.
    capacity: int
        Maximum number of lanes (the sentinel's tower height).
    p: float
        Probability that a new tower grows by one more lane.
    rng: random.Random | None
        Source for tower heights; seed one for reproducible layouts.
    """

    def __init__(
        self,
        comparator: Comparator[K],
        *,
        capacity: int = MAX_HEIGHT,
        p: float = P,
        rng: Optional[random.Random] = None,
    ):
        if not callable(comparator):
            raise InvalidArgumentError(f"comparator must be callable, got {comparator!r}")
        if capacity < 1:
            raise InvalidArgumentError(f"capacity must be at least 1, got {capacity}")
        if not 0.0 < p < 1.0:
            raise InvalidArgumentError(f"p must lie strictly between 0 and 1, got {p}")
        self._cmp = comparator
        self._capacity = capacity
        self._p = p
        self._random = rng.random if rng is not None else random.random
        self._nodes: list[_Node[K, V]] = [_Node(None, None, capacity)]
        self._free: list[int] = []
        # Per-lane predecessors, overwritten by every set/remove.
        self._update: list[int] = [_HEAD] * capacity
        self._height = 0
        self._size = 0

    # ---------------------------------------------------------------------
    # Mutation API
    # ---------------------------------------------------------------------
    def set(self, key: K, value: V) -> Optional[V]:
        """Insert or update `key` with `value`.

        Returns the value that was replaced, or ``None`` for a fresh insert.
        """
        self._check_key(key)
        nodes, cmp, update = self._nodes, self._cmp, self._update
        x = _HEAD
        for i in reversed(range(self._height)):
            while (nxt := nodes[x].forward[i]) != _HEAD:
                c = cmp(nodes[nxt].key, key)  # type: ignore[arg-type]
                if c > 0:
                    break
                if c == 0:  # Update
                    node = nodes[nxt]
                    old, node.value = node.value, value
                    return old
                x = nxt
            update[i] = x
        lvl = self._random_height()
        if lvl > self._height:
            for i in range(self._height, lvl):
                update[i] = _HEAD
            logger.debug("height grows %d -> %d", self._height, lvl)
            self._height = lvl
        idx = self._allocate(key, value, lvl)
        forward = nodes[idx].forward
        for i in range(lvl):
            prev = nodes[update[i]].forward
            forward[i] = prev[i]
            prev[i] = idx
        self._size += 1
        return None

    def remove(self, key: K) -> Optional[V]:
        """Remove `key`, returning its value or ``None`` if it was absent."""
        self._check_key(key)
        if self._size == 0:
            return None
        nodes, cmp, update = self._nodes, self._cmp, self._update
        x = _HEAD
        for i in reversed(range(self._height)):
            while (nxt := nodes[x].forward[i]) != _HEAD and cmp(nodes[nxt].key, key) < 0:  # type: ignore[arg-type]
                x = nxt
            update[i] = x
        target = nodes[x].forward[0]
        if target == _HEAD or cmp(nodes[target].key, key) != 0:  # type: ignore[arg-type]
            return None
        node = nodes[target]
        for i, succ in enumerate(node.forward):
            nodes[update[i]].forward[i] = succ
        self._size -= 1
        if len(node.forward) >= self._height:
            self._recount_height()
        value = node.value
        self._release(target)
        return value

    # ---------------------------------------------------------------------
    # Query API
    # ---------------------------------------------------------------------
    def get(self, key: K) -> V:
        """Return the value stored under `key`.

        Raises :class:`KeyNotFoundError` when the key is absent.
        """
        self._check_key(key)
        if self._height == 0 or (idx := self._find(key)) == _HEAD:
            raise KeyNotFoundError(key)
        return self._nodes[idx].value  # type: ignore[return-value]

    def contains_key(self, key: K) -> bool:
        self._check_key(key)
        return self._find(key) != _HEAD

    def size(self) -> int:
        return self._size

    @property
    def height(self) -> int:
        """Number of lanes currently populated (0 when empty)."""
        return self._height

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Iteration helpers (ordered)
    # ------------------------------------------------------------------
    def keys(self) -> Traversal[K]:
        return Traversal(self, attrgetter("key"))

    def values(self) -> Traversal[V]:
        return Traversal(self, attrgetter("value"))

    def items(self) -> Traversal[tuple[K, V]]:
        return Traversal(self, attrgetter("key", "value"))

    def __iter__(self) -> Iterator[tuple[K, V]]:
        return self.items()

    def for_each(self, visitor: Callable[[K, V], object]) -> None:
        """Call ``visitor(key, value)`` for every entry in key order."""
        for node in self._walk():
            visitor(node.key, node.value)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def dump(self, pen: Optional[TextIO] = None) -> None:
        """Draw every node's tower, one row per node, for manual inspection.

        Keys are right-aligned in a fixed-width column; ``-*`` marks a lane the
        node sits on and `` |`` a lane passing by it. The layout is meant for
        eyes only and may change.
        """
        pen = pen or sys.stdout
        leading = " " * _DUMP_WIDTH
        links = leading + " |" * self._height + "\n"
        pen.write(leading + " X" * self._height + "\n")
        pen.write(links)
        for node in self._walk():
            label = "<null>" if node.key is None else str(node.key)
            tower = len(node.forward)
            pen.write(label[:_DUMP_WIDTH].rjust(_DUMP_WIDTH))
            pen.write("-*" * tower + " |" * (self._height - tower) + "\n")
            pen.write(links)
        pen.write(leading + " O" * self._height + "\n")

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"SkipList({{{body}}})"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _check_key(key: object) -> None:
        if key is None:
            raise InvalidArgumentError("null key")

    def _find(self, key: K) -> int:
        """Slot holding `key`, or the sentinel slot when it is absent."""
        nodes, cmp = self._nodes, self._cmp
        x = _HEAD
        for i in reversed(range(self._height)):
            while (nxt := nodes[x].forward[i]) != _HEAD:
                c = cmp(nodes[nxt].key, key)  # type: ignore[arg-type]
                if c > 0:
                    break
                if c == 0:
                    return nxt
                x = nxt
        return _HEAD

    def _walk(self) -> Iterator[_Node[K, V]]:
        nodes = self._nodes
        x = nodes[_HEAD].forward[0]
        while x != _HEAD:
            yield nodes[x]
            x = nodes[x].forward[0]

    def _random_height(self) -> int:
        lvl = 1
        while self._random() < self._p and lvl < self._capacity:
            lvl += 1
        return lvl

    def _recount_height(self) -> None:
        head = self._nodes[_HEAD].forward
        lvl = self._capacity
        while lvl and head[lvl - 1] == _HEAD:
            lvl -= 1
        if lvl != self._height:
            logger.debug("height shrinks %d -> %d", self._height, lvl)
        self._height = lvl

    def _allocate(self, key: K, value: V, height: int) -> int:
        node: _Node[K, V] = _Node(key, value, height)
        if self._free:
            idx = self._free.pop()
            self._nodes[idx] = node
        else:
            idx = len(self._nodes)
            self._nodes.append(node)
        return idx

    def _release(self, idx: int) -> None:
        node = self._nodes[idx]
        # forward stays: a traversal parked here still needs its successor
        node.key = node.value = None
        self._free.append(idx)
