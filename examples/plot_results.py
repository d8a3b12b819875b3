#!/usr/bin/env python3
"""
Plot saved noise sweep results.

Reads one or more CSV files written by run_simulation.py and plots, per
lattice size:
  1) mean defect count vs noise rate
  2) spanning-chain rate vs noise rate (with 95% Wilson interval)

Examples:
  python examples/plot_results.py results/sweep.csv
  python examples/plot_results.py results/*.csv --out results/sweep.png
"""

from __future__ import annotations

import argparse
import csv
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Tuple

import matplotlib.pyplot as plt


def load_csv(path: Path) -> List[Dict[str, str]]:
    with path.open("r", newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def wilson_ci_95(hits: int, shots: int) -> Tuple[float, float]:
    """
    Wilson score interval for a binomial proportion at ~95% confidence.
    Returns (lo, hi). If shots==0, returns (0,0).
    """
    if shots <= 0:
        return 0.0, 0.0
    z = 1.959963984540054
    n = float(shots)
    phat = float(hits) / n
    denom = 1.0 + (z * z) / n
    center = (phat + (z * z) / (2.0 * n)) / denom
    half = (z / denom) * ((phat * (1.0 - phat) / n + (z * z) / (4.0 * n * n)) ** 0.5)
    return max(0.0, center - half), min(1.0, center + half)


def group_by_size(rows: List[Dict[str, str]]):
    """Group rows by (width, height) and sort each group by p."""
    by_size = defaultdict(list)
    for r in rows:
        key = (int(r["width"]), int(r["height"]))
        by_size[key].append((
            float(r["p"]),
            float(r["mean_defects"]),
            float(r["spanning_rate"]),
            int(float(r["shots"])),
        ))
    return {k: sorted(v) for k, v in by_size.items()}


def main() -> int:
    parser = argparse.ArgumentParser(description="Plot planar lattice sweep results")
    parser.add_argument("csv", nargs="+", type=Path, help="CSV files from run_simulation.py")
    parser.add_argument("--out", type=Path, default=Path("results/sweep.png"), help="Output PNG")
    args = parser.parse_args()

    rows = []
    for path in args.csv:
        rows.extend(load_csv(path))
    if not rows:
        print("No rows to plot.")
        return 1

    fig, (ax_def, ax_span) = plt.subplots(1, 2, figsize=(11, 4.5))
    for (w, h), pts in sorted(group_by_size(rows).items()):
        ps = [t[0] for t in pts]
        label = f"{w}x{h}"
        ax_def.plot(ps, [t[1] for t in pts], marker="o", label=label)

        rates = [t[2] for t in pts]
        cis = [wilson_ci_95(round(rate * shots), shots) for _, _, rate, shots in pts]
        lo = [r - c[0] for r, c in zip(rates, cis)]
        hi = [c[1] - r for r, c in zip(rates, cis)]
        ax_span.errorbar(ps, rates, yerr=[lo, hi], marker="o", capsize=3, label=label)

    ax_def.set_xlabel("noise rate p")
    ax_def.set_ylabel("mean defects")
    ax_def.grid(True, alpha=0.3)
    ax_def.legend()
    ax_span.set_xlabel("noise rate p")
    ax_span.set_ylabel("spanning chain rate")
    ax_span.grid(True, alpha=0.3)
    ax_span.legend()
    fig.tight_layout()

    args.out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(args.out, dpi=150)
    print(f"Saved {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
