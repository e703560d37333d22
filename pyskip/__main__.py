"""Manual demo: ``python -m pyskip``.

Inserts 6, 4 and 8, prints the map after each insert, draws its lanes,
removes one key and draws them again.
"""
from __future__ import annotations

import argparse
import random
import sys
from typing import Optional, Sequence, TextIO

from .comparators import natural_order
from .skiplist import SkipList

_NAMES = {4: "four", 6: "six", 8: "eight"}


def main(argv: Optional[Sequence[str]] = None, pen: Optional[TextIO] = None) -> int:
    parser = argparse.ArgumentParser(prog="pyskip", description=__doc__.splitlines()[0])
    parser.add_argument("--remove", type=int, default=8, help="Key to remove before the second dump")
    parser.add_argument("--seed", type=int, default=None, help="Seed for tower heights")
    args = parser.parse_args(argv)
    pen = pen or sys.stdout

    sl: SkipList[int, str] = SkipList(natural_order, rng=random.Random(args.seed))
    print(repr(sl), file=pen)
    for key in (6, 4, 8):
        sl.set(key, _NAMES[key])
        print(repr(sl), file=pen)
    sl.dump(pen)
    sl.remove(args.remove)
    sl.dump(pen)
    return 0


if __name__ == "__main__":
    sys.exit(main())
