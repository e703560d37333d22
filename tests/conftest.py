"""Shared fixtures for the skip-list tests."""
import os
import random

import pytest
from hypothesis import settings

from pyskip import SkipList, natural_order
from pyskip.skiplist import _HEAD

settings.register_profile("fast", max_examples=25, deadline=None)
settings.register_profile("slow", max_examples=500, deadline=None)
settings.load_profile("slow" if os.environ.get("HYPO_SLOW") == "1" else "fast")


class ScriptedRandom:
    """Stand-in for random.Random replaying fixed coin flips."""

    def __init__(self, *flips: float):
        self._flips = list(flips)

    def random(self) -> float:
        return self._flips.pop(0)


def lanes(sl):
    """Slots reachable on every lane, bottom lane first."""
    nodes = sl._nodes
    result = []
    for lane in range(sl.capacity):
        walked = []
        x = nodes[_HEAD].forward[lane]
        while x != _HEAD:
            walked.append(x)
            x = nodes[x].forward[lane]
        result.append(walked)
    return result


def check_invariants(sl):
    """Assert ordering, tower contiguity, height and size bookkeeping."""
    nodes = sl._nodes
    walked = lanes(sl)
    bottom = walked[0]
    heights = {slot: len(nodes[slot].forward) for slot in bottom}

    assert sl.size() == len(sl) == len(bottom)
    assert sl.height == max(heights.values(), default=0)
    for lane, slots in enumerate(walked):
        # a node is on this lane iff its tower reaches it
        assert slots == [s for s in bottom if heights[s] > lane]
        keys = [nodes[s].key for s in slots]
        for a, b in zip(keys, keys[1:]):
            assert sl._cmp(a, b) < 0


@pytest.fixture(scope="session")
def invariants():
    return check_invariants


@pytest.fixture
def ints():
    """Integer-keyed map with a seeded height generator."""
    return SkipList(natural_order, rng=random.Random(20240501))


@pytest.fixture
def strings():
    return SkipList(natural_order, rng=random.Random(20240502))


@pytest.fixture
def scripted():
    return ScriptedRandom
