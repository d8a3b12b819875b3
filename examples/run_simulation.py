#!/usr/bin/env python3
"""
Example script: Run a planar lattice noise sweep

Applies i.i.d. edge noise at several rates, corrects greedily by pairing the
closest defects, and reports mean defect count, correction weight and how
often a correction chain spans the lattice top to bottom.

Examples:
  python examples/run_simulation.py
  python examples/run_simulation.py --width 15 --height 9 --shots 20000
  python examples/run_simulation.py --rates 0.02,0.05,0.1 --csv results/sweep.csv
"""

import sys
import argparse
import csv
import logging
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from planarqec import LatticeConfig, LatticeSimulator


def _parse_rates_csv(text: str):
    """
    Parse a comma-separated list of floats, e.g. "0.01,0.05,0.1".
    """
    parts = [p.strip() for p in text.split(",") if p.strip()]
    return [float(p) for p in parts]


def _write_csv(path: Path, cfg: LatticeConfig, results):
    path.parent.mkdir(parents=True, exist_ok=True)
    fields = ["width", "height", "p", "mean_defects", "mean_weight",
              "spanning_rate", "residual_rate", "shots", "seconds"]
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for p, stats in results.items():
            w.writerow({"width": cfg.width, "height": cfg.height, "p": p, **stats})


def main():
    """Run the noise sweep."""
    parser = argparse.ArgumentParser(
        description="Run a planar lattice noise/correction sweep",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-s", "--shots", type=int, default=5000,
                        help="Total number of shots per noise rate (default: 5000)")
    parser.add_argument("--width", type=int, default=11, help="Faces along x (default: 11)")
    parser.add_argument("--height", type=int, default=7, help="Faces along y (default: 7)")
    parser.add_argument("--seed", type=lambda s: int(s, 0), default=0xC0FFEE,
                        help="RNG seed (default: 0xC0FFEE)")
    parser.add_argument("--cores", type=int, default=None,
                        help="Worker processes (default: all but one)")
    parser.add_argument(
        "--rates",
        type=_parse_rates_csv,
        default=[0.01, 0.02, 0.04, 0.06, 0.08, 0.10],
        help="Comma-separated noise rates to test, e.g. --rates 0.01,0.05,0.1",
    )
    parser.add_argument("--csv", type=Path, default=None, help="Write results to this CSV file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = LatticeConfig(width=args.width, height=args.height, seed=args.seed)
    simulator = LatticeSimulator(config, num_cores=args.cores)

    results = simulator.run_experiment(
        noise_rates=args.rates,
        total_shots=args.shots,
        verbose=True,
    )

    if args.csv is not None:
        _write_csv(args.csv, config, results)
        print(f"Wrote {args.csv}")

    return results


if __name__ == "__main__":
    main()
