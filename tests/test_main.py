"""Tests for the ``python -m pyskip`` demo driver."""
import io

from pyskip.__main__ import main


def test_demo_output():
    pen = io.StringIO()
    assert main(["--seed", "1"], pen=pen) == 0
    lines = pen.getvalue().splitlines()
    assert lines[:4] == [
        "SkipList({})",
        "SkipList({6: 'six'})",
        "SkipList({4: 'four', 6: 'six'})",
        "SkipList({4: 'four', 6: 'six', 8: 'eight'})",
    ]
    rows = [line for line in lines[4:] if "-*" in line]
    # first dump shows three nodes, second dump two
    assert [r.split("-*")[0].strip() for r in rows] == ["4", "6", "8", "4", "6"]


def test_demo_remove_other_key():
    pen = io.StringIO()
    main(["--seed", "2", "--remove", "4"], pen=pen)
    rows = [line for line in pen.getvalue().splitlines() if "-*" in line]
    assert [r.split("-*")[0].strip() for r in rows] == ["4", "6", "8", "6", "8"]
