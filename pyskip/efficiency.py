"""Comparison-counting efficiency harness.

Wall-clock timings depend on the machine; the number of comparator calls an
operation makes does not. For each map size the harness fills a map with
random integer keys, then repeats a get / set / remove cycle and averages the
comparisons each operation needed. Every cycle sets one fresh key and removes
one live key, so the map keeps its size while being measured.

Expected shape of the results: the averages grow with ``log2(size)``.
"""
from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass
from typing import Optional

import numpy as np

from .comparators import CountingComparator, natural_order
from .skiplist import SkipList

__all__ = [
    "DEFAULT_SIZES",
    "DEFAULT_ROUNDS",
    "EfficiencyResult",
    "measure",
    "run",
    "format_report",
]

logger = logging.getLogger(__name__)

DEFAULT_SIZES = (100, 200, 500, 1000, 2000, 5000, 10000, 20000, 50000, 100000, 200000, 500000)
DEFAULT_ROUNDS = 100
_KEY_SPACE = 2**31 - 1


@dataclass
class EfficiencyResult:
    """Comparator calls per operation for one map size."""
    size: int
    rounds: int
    get_mean: float
    set_mean: float
    remove_mean: float
    get_p95: float
    set_p95: float
    remove_p95: float
    height: int

    def to_dict(self) -> dict:
        return asdict(self)


def _fresh_key(rng: random.Random, live: set[int], key_space: int) -> int:
    while (key := rng.randrange(key_space)) in live:
        pass
    return key


def measure(
    size: int,
    *,
    rounds: int = DEFAULT_ROUNDS,
    rng: Optional[random.Random] = None,
    key_space: int = _KEY_SPACE,
) -> EfficiencyResult:
    """Average comparator calls of get/set/remove on a map holding `size` keys."""
    if size < 1 or rounds < 1:
        raise ValueError(f"size and rounds must be positive, got {size=} {rounds=}")
    if key_space <= size + rounds:
        raise ValueError(f"key_space {key_space} too small for {size} keys over {rounds} rounds")
    rng = rng or random.Random()
    cmp = CountingComparator(natural_order)
    sl: SkipList[int, str] = SkipList(cmp, rng=rng)

    keys: list[int] = []
    live: set[int] = set()
    for _ in range(size):
        key = _fresh_key(rng, live, key_space)
        sl.set(key, "hello")
        keys.append(key)
        live.add(key)

    gets = np.empty(rounds, dtype=np.int64)
    sets = np.empty(rounds, dtype=np.int64)
    removes = np.empty(rounds, dtype=np.int64)
    for r in range(rounds):
        cmp.reset()
        sl.get(keys[rng.randrange(len(keys))])
        gets[r] = cmp.reset()

        key = _fresh_key(rng, live, key_space)
        sl.set(key, "hello")
        sets[r] = cmp.reset()
        keys.append(key)
        live.add(key)

        # swap-pop a uniformly chosen live key
        i = rng.randrange(len(keys))
        keys[i], keys[-1] = keys[-1], keys[i]
        victim = keys.pop()
        sl.remove(victim)
        removes[r] = cmp.reset()
        live.discard(victim)

    result = EfficiencyResult(
        size=size,
        rounds=rounds,
        get_mean=float(np.mean(gets)),
        set_mean=float(np.mean(sets)),
        remove_mean=float(np.mean(removes)),
        get_p95=float(np.percentile(gets, 95)),
        set_p95=float(np.percentile(sets, 95)),
        remove_p95=float(np.percentile(removes, 95)),
        height=sl.height,
    )
    logger.info(
        "size=%d get=%.1f set=%.1f remove=%.1f height=%d",
        size, result.get_mean, result.set_mean, result.remove_mean, result.height,
    )
    return result


def run(
    sizes: Iterable[int] = DEFAULT_SIZES,
    *,
    rounds: int = DEFAULT_ROUNDS,
    seed: Optional[int] = None,
    progress: Optional[Callable[[Iterable[int]], Iterable[int]]] = None,
) -> list[EfficiencyResult]:
    """Measure every size in turn; `progress` may wrap the sizes (e.g. ``tqdm``)."""
    rng = random.Random(seed)
    sizes = list(sizes)
    return [measure(n, rounds=rounds, rng=rng) for n in (progress(sizes) if progress else sizes)]


def format_report(results: Iterable[EfficiencyResult]) -> str:
    """Render results as a fixed-width table of mean comparisons."""
    lines = [
        f"{'Size':>10} {'Get':>10} {'Set':>10} {'Remove':>10} {'Height':>8}",
        "-" * 52,
    ]
    for r in results:
        lines.append(
            f"{r.size:>10,} {r.get_mean:>10.1f} {r.set_mean:>10.1f} "
            f"{r.remove_mean:>10.1f} {r.height:>8}"
        )
    return "\n".join(lines)
