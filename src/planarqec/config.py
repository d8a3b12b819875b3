"""
Run Configuration Module

Parameters for building a lattice, seeding the RNG and sizing noise bursts.
"""

from dataclasses import dataclass
from typing import Tuple

from .lattice import PlanarLattice
from .noise import DEFAULT_MAX_ATTEMPTS, RNG


@dataclass
class LatticeConfig:
    """
    Configuration for a lattice run.

    Parameters
    ----------
    width : int, default=11
        Faces along x
    height : int, default=7
        Faces along y
    noise_rate : float, default=0.08
        Per-edge flip probability for i.i.d. noise
    seed : int, default=0xC0FFEE
        Seed for the run RNG
    initial_pairs : tuple of int, default=(12, 14)
        Inclusive range of interior edges flipped when a run starts
    burst_pairs : tuple of int, default=(1, 5)
        Inclusive range of interior edges flipped per noise burst
    noise_every : int, default=2
        A burst is injected on turns divisible by this value
    max_attempts : int, default=200
        Draw limit for the fresh interior edge search
    """
    width: int = 11
    height: int = 7
    noise_rate: float = 0.08
    seed: int = 0xC0FFEE
    initial_pairs: Tuple[int, int] = (12, 14)
    burst_pairs: Tuple[int, int] = (1, 5)
    noise_every: int = 2
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def validate(self):
        if self.width < 3 or self.height < 3:
            raise ValueError("width and height must be >= 3")
        if not 0.0 <= self.noise_rate <= 1.0:
            raise ValueError("noise_rate must be in [0, 1]")
        for name in ("initial_pairs", "burst_pairs"):
            lo, hi = getattr(self, name)
            if lo < 0 or hi < lo:
                raise ValueError(f"{name} must be a range (lo, hi) with 0 <= lo <= hi")
        if self.noise_every < 1:
            raise ValueError("noise_every must be >= 1")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        return self

    def make_lattice(self) -> PlanarLattice:
        return PlanarLattice(self.width, self.height)

    def make_rng(self) -> RNG:
        return RNG(self.seed)
