"""
Planar Lattice Simulator

Monte Carlo driver for the planar lattice: i.i.d. edge noise followed by
greedy nearest-pair correction, with optional parallel processing. Also
provides the run set-up and per-turn noise bursts used by interactive
front ends.
"""

import logging
import multiprocessing
import time
from typing import Dict, List, Optional, Tuple

from .config import LatticeConfig
from .lattice import PlanarLattice
from .noise import RNG, apply_edge_noise, inject_defect_pairs
from .routing import apply_correction_path, find_closest_pair, path_spans_top_bottom

logger = logging.getLogger(__name__)


def greedy_correct(lattice: PlanarLattice) -> Tuple[int, bool]:
    """
    Pair defects closest-first until fewer than two remain.

    Returns
    -------
    tuple
        (total correction weight, whether any path spanned top to bottom)
    """
    weight = 0
    spanning = False
    while True:
        pair = find_closest_pair(lattice.list_defects())
        if pair is None:
            break
        path = apply_correction_path(lattice, *pair)
        weight += len(path) - 1
        if path_spans_top_bottom(path, lattice.height):
            spanning = True
    return weight, spanning


def worker_simulation(args: Tuple) -> Dict[str, int]:
    """
    Runs a batch of noise/correction shots on a single core.

    Parameters
    ----------
    args : tuple
        (seed, shots, noise_rate, width, height)

    Returns
    -------
    dict
        Summed counters: shots, defects, weight, spanning, residual
    """
    seed, shots, noise_rate, width, height = args
    rng = RNG(seed)
    lattice = PlanarLattice(width, height)

    totals = {"shots": 0, "defects": 0, "weight": 0, "spanning": 0, "residual": 0}
    for _ in range(shots):
        lattice.reset()
        apply_edge_noise(lattice, noise_rate, rng)
        totals["defects"] += lattice.defect_count()

        weight, spanning = greedy_correct(lattice)
        totals["weight"] += weight
        totals["spanning"] += int(spanning)
        # Boundary flips can leave an odd defect out; it has no partner.
        totals["residual"] += lattice.defect_count()
        totals["shots"] += 1
    return totals


class LatticeSimulator:
    """
    Noise/correction simulator for a planar lattice.

    Parameters
    ----------
    config : LatticeConfig, optional
        Run configuration. If None, uses default settings.
    num_cores : int, optional
        Number of CPU cores to use. If None, uses all but one. With a single
        core the shots run in-process.
    """

    def __init__(self, config: Optional[LatticeConfig] = None,
                 num_cores: Optional[int] = None):
        self.config = (config or LatticeConfig()).validate()
        self.num_cores = num_cores or max(1, multiprocessing.cpu_count() - 1)
        self.rng = self.config.make_rng()

    # -- interactive runs ------------------------------------------------

    def start_run(self, lattice: Optional[PlanarLattice] = None) -> PlanarLattice:
        """
        Reset a lattice and seed it with an even number of defects.

        Flips a random number (from ``config.initial_pairs``) of distinct
        interior edges. If the result is still odd, one more edge is added.
        """
        cfg = self.config
        if lattice is None:
            lattice = cfg.make_lattice()
        lattice.reset()

        used = set()
        pairs = self.rng.next_int(*cfg.initial_pairs)
        inject_defect_pairs(lattice, self.rng, pairs, used, cfg.max_attempts)
        if lattice.defect_count() % 2 == 1:
            inject_defect_pairs(lattice, self.rng, 1, used, cfg.max_attempts)

        logger.debug("run started with %d defects", lattice.defect_count())
        return lattice

    def noise_burst(self, lattice: PlanarLattice, turn: int) -> int:
        """
        Inject a burst of interior-edge noise on every ``noise_every``-th turn.

        Returns the number of edges toggled (0 on quiet turns).
        """
        cfg = self.config
        if turn % cfg.noise_every != 0:
            return 0
        pairs = self.rng.next_int(*cfg.burst_pairs)
        return inject_defect_pairs(lattice, self.rng, pairs, None, cfg.max_attempts)

    # -- Monte Carlo -----------------------------------------------------

    def _worker_args(self, noise_rate: float, total_shots: int) -> List[Tuple]:
        shots_per_worker = total_shots // self.num_cores
        return [
            (self.rng.next_u32(), shots_per_worker, float(noise_rate),
             self.config.width, self.config.height)
            for _ in range(self.num_cores)
        ]

    def run_point(self, noise_rate: float, total_shots: int, pool=None) -> Dict[str, float]:
        """
        Run a single noise rate and return summary stats.

        Returns
        -------
        dict
            {"mean_defects", "mean_weight", "spanning_rate", "residual_rate",
             "shots", "seconds"}
        """
        if not 0.0 <= noise_rate <= 1.0:
            raise ValueError(f"noise rate must be in [0, 1], got {noise_rate}")

        args = self._worker_args(noise_rate, total_shots)
        start_time = time.time()

        created_pool = False
        if self.num_cores == 1 and pool is None:
            worker_results = [worker_simulation(a) for a in args]
        else:
            if pool is None:
                pool = multiprocessing.Pool(self.num_cores)
                created_pool = True
            worker_results = pool.map(worker_simulation, args)

        if created_pool:
            pool.close()
            pool.join()

        totals = {k: sum(r[k] for r in worker_results) for k in worker_results[0]}
        shots = totals["shots"]
        elapsed = float(time.time() - start_time)
        logger.debug("p=%.4f: %d shots in %.2fs", noise_rate, shots, elapsed)

        if shots == 0:
            return {"mean_defects": 0.0, "mean_weight": 0.0, "spanning_rate": 0.0,
                    "residual_rate": 0.0, "shots": 0, "seconds": elapsed}
        return {
            "mean_defects": totals["defects"] / shots,
            "mean_weight": totals["weight"] / shots,
            "spanning_rate": totals["spanning"] / shots,
            "residual_rate": totals["residual"] / shots,
            "shots": int(shots),
            "seconds": elapsed,
        }

    def run_experiment(
        self,
        noise_rates: List[float],
        total_shots: int = 5000,
        verbose: bool = True,
        pool=None,
    ) -> Dict[float, Dict[str, float]]:
        """
        Run the simulation across multiple noise rates.

        Parameters
        ----------
        noise_rates : list of float
            Per-edge flip probabilities to test
        total_shots : int, default=5000
            Total number of shots per noise rate
        verbose : bool, default=True
            Whether to print progress information

        Returns
        -------
        dict
            {p: run_point(p) stats}
        """
        cfg = self.config
        if verbose:
            print(f"--- PLANAR LATTICE {cfg.width}x{cfg.height} ---")
            print(f"{'Noise Rate':<12} | {'Shots':<8} | {'Defects':<9} | "
                  f"{'Weight':<9} | {'Spanning':<9} | {'Time (s)':<8}")
            print("-" * 70)

        created_pool = False
        if pool is None and self.num_cores > 1:
            pool = multiprocessing.Pool(self.num_cores)
            created_pool = True

        results = {}
        try:
            for p in noise_rates:
                stats = self.run_point(p, total_shots, pool=pool)
                results[p] = stats
                if verbose:
                    print(f"{p:<12.4f} | {stats['shots']:<8} | "
                          f"{stats['mean_defects']:<9.3f} | {stats['mean_weight']:<9.3f} | "
                          f"{stats['spanning_rate']:<9.5f} | {stats['seconds']:<8.2f}")
        finally:
            if created_pool:
                pool.close()
                pool.join()

        if verbose:
            print("\n--- SIMULATION COMPLETE ---")
        return results
