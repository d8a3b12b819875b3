"""
Noise Injection Module

Seeded pseudo-random source and the edge-noise routines built on
``PlanarLattice.toggle_edge``. The RNG is always passed in by the caller so
that a run is reproducible from its seed.
"""

import logging
from typing import Optional, Set

from .lattice import HORIZONTAL, VERTICAL, Edge, PlanarLattice

logger = logging.getLogger(__name__)

DEFAULT_SEED = 0x12345678
DEFAULT_MAX_ATTEMPTS = 200

_MASK32 = 0xFFFFFFFF


class RNG:
    """
    xorshift32 pseudo-random generator.

    Parameters
    ----------
    seed : int, default=0x12345678
        Initial state, reduced mod 2**32. Zero is a fixed point of xorshift,
        so a zero seed falls back to the default seed.

    Examples
    --------
    >>> a, b = RNG(7), RNG(7)
    >>> [a.next_u32() for _ in range(3)] == [b.next_u32() for _ in range(3)]
    True
    """

    def __init__(self, seed: int = DEFAULT_SEED):
        state = int(seed) & _MASK32
        self._state = state or DEFAULT_SEED

    @property
    def state(self) -> int:
        return self._state

    def next_u32(self) -> int:
        x = self._state
        x ^= (x << 13) & _MASK32
        x ^= x >> 17
        x ^= (x << 5) & _MASK32
        self._state = x
        return x

    def next_float(self) -> float:
        """Uniform float in [0, 1)."""
        return self.next_u32() / 4294967296.0

    def next_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high] (inclusive)."""
        if high < low:
            raise ValueError(f"empty range [{low}, {high}]")
        return low + int(self.next_float() * (high - low + 1))


def _edge_key(edge: Edge):
    kind, x, y = edge
    return (kind, x, y)


def apply_edge_noise(lattice: PlanarLattice, p: float, rng: RNG) -> int:
    """
    Apply i.i.d. X-error noise to every edge with probability p.

    Horizontal edges are visited first (row by row, y in [0..H]), then
    vertical edges (y in [0..H-1], x in [0..W]); each edge consumes exactly
    one draw.

    Returns
    -------
    int
        Number of edges toggled
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"noise probability must be in [0, 1], got {p}")

    flips = 0
    for edge in lattice.edges():
        if rng.next_float() < p:
            lattice.toggle_edge(edge)
            flips += 1
    return flips


def random_interior_edge(lattice: PlanarLattice, rng: RNG) -> Edge:
    """
    Draw an edge whose two neighbouring faces both exist.

    Interior horizontal edges: x in [0..W-1], y in [1..H-1]
    Interior vertical edges:   x in [1..W-1], y in [0..H-1]
    """
    W, H = lattice.width, lattice.height
    if rng.next_float() < 0.5:
        x = int(rng.next_float() * W)
        y = 1 + int(rng.next_float() * (H - 1))
        return Edge(HORIZONTAL, x, y)
    x = 1 + int(rng.next_float() * (W - 1))
    y = int(rng.next_float() * H)
    return Edge(VERTICAL, x, y)


def toggle_fresh_interior_edge(
    lattice: PlanarLattice,
    rng: RNG,
    used: Set,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Optional[Edge]:
    """
    Toggle an interior edge not already in ``used`` and record it there.

    Skipping used edges keeps a burst from cancelling its own toggles.
    Gives up after ``max_attempts`` draws and returns None without touching
    the lattice.
    """
    for _ in range(max_attempts):
        edge = random_interior_edge(lattice, rng)
        key = _edge_key(edge)
        if key in used:
            continue
        used.add(key)
        lattice.toggle_edge(edge)
        return edge
    logger.debug("no fresh interior edge after %d attempts", max_attempts)
    return None


def inject_defect_pairs(
    lattice: PlanarLattice,
    rng: RNG,
    pairs: int,
    used: Optional[Set] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> int:
    """
    Noise burst: toggle ``pairs`` distinct interior edges.

    Returns the number of edges actually toggled, which can fall short of
    ``pairs`` when the fresh-edge search gives up.
    """
    if pairs < 0:
        raise ValueError(f"pairs must be >= 0, got {pairs}")
    if used is None:
        used = set()

    toggled = 0
    for _ in range(pairs):
        if toggle_fresh_interior_edge(lattice, rng, used, max_attempts) is not None:
            toggled += 1
    if toggled < pairs:
        logger.debug("noise burst short: %d of %d edges toggled", toggled, pairs)
    return toggled
