"""
Correction routing helpers.

Paths are chosen outside the lattice: an L-shaped route between two faces
(x first, then y) applied one dual step at a time, plus the nearest-pair
heuristic used to suggest which defects to join.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from .lattice import Face, PlanarLattice


def path_cost(a: Face, b: Face) -> int:
    """Manhattan distance between two faces."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def manhattan_path(a: Face, b: Face) -> List[Face]:
    """Faces visited going from a to b along x first, then along y."""
    fx, fy = a
    path = [Face(fx, fy)]
    while fx != b[0]:
        fx += 1 if b[0] > fx else -1
        path.append(Face(fx, fy))
    while fy != b[1]:
        fy += 1 if b[1] > fy else -1
        path.append(Face(fx, fy))
    return path


def apply_correction_path(lattice: PlanarLattice, a: Face, b: Face) -> List[Face]:
    """
    Join faces a and b with a correction chain.

    Each consecutive pair of faces on ``manhattan_path(a, b)`` is applied
    with ``lattice.apply_dual_step``. Returns the path.
    """
    path = manhattan_path(a, b)
    for cur, nxt in zip(path, path[1:]):
        lattice.apply_dual_step(cur, nxt)
    return path


def find_closest_pair(defects: Sequence[Face]) -> Optional[Tuple[Face, Face]]:
    """
    Closest pair of defects by Manhattan distance.

    Ties go to the first pair in enumeration order. None if fewer than two
    defects are given.
    """
    if len(defects) < 2:
        return None

    best = None
    best_dist = None
    for i in range(len(defects)):
        for j in range(i + 1, len(defects)):
            d = path_cost(defects[i], defects[j])
            if best_dist is None or d < best_dist:
                best_dist = d
                best = (defects[i], defects[j])
    return best


def path_spans_top_bottom(path: Iterable[Face], height: int) -> bool:
    """
    True when a path touches both the top row and the bottom row of faces.

    A chain like that may complete a logical operator on the planar code.
    """
    touches_top = False
    touches_bottom = False
    for face in path:
        if face[1] <= 0:
            touches_top = True
        if face[1] >= height - 1:
            touches_bottom = True
    return touches_top and touches_bottom
