#!/usr/bin/env python3
"""Efficiency benchmark for pyskip: comparator calls per operation vs map size."""

import argparse
import json
import logging
from pathlib import Path
from typing import List

import numpy as np
import plotly.graph_objects as go
from tqdm import tqdm

from pyskip.efficiency import DEFAULT_ROUNDS, DEFAULT_SIZES, EfficiencyResult, format_report, run


def plot_comparisons(results: List[EfficiencyResult], title: str, output_path: Path):
    fig = go.Figure()
    sizes = [r.size for r in results]

    for label, attr in (("Get", "get_mean"), ("Set", "set_mean"), ("Remove", "remove_mean")):
        fig.add_trace(go.Scatter(
            x=sizes,
            y=[getattr(r, attr) for r in results],
            mode="lines+markers",
            name=label,
        ))

    # Reference curve: one comparison per lane on the way down.
    fig.add_trace(go.Scatter(
        x=sizes,
        y=np.log2(np.asarray(sizes, dtype=float)),
        mode="lines",
        name="log2(n)",
        line={"dash": "dot"},
    ))

    fig.update_layout(
        title=title,
        xaxis_title="Map size",
        yaxis_title="Comparisons per operation",
        xaxis_type="log",
    )

    fig.write_html(output_path)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--sizes", type=int, nargs="+", default=list(DEFAULT_SIZES), help="Map sizes to measure")
    parser.add_argument("--rounds", type=int, default=DEFAULT_ROUNDS, help="get/set/remove cycles per size")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for keys and tower heights")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    args.output.mkdir(parents=True, exist_ok=True)

    results = run(
        args.sizes,
        rounds=args.rounds,
        seed=args.seed,
        progress=lambda sizes: tqdm(sizes, desc="SkipList sizes"),
    )
    print(format_report(results))

    # Generate reports
    plot_comparisons(results, "SkipList comparisons per operation", args.output / "comparisons.html")

    # Save metrics
    with open(args.output / "metrics.json", "w") as f:
        json.dump({"pyskip": [r.to_dict() for r in results]}, f, indent=2)


if __name__ == "__main__":
    main()
