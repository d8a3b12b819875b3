"""
planarqec: planar lattice X-error simulation

Edge-error bitfields on an open planar lattice, face-parity syndromes,
seeded noise injection and correction-path application.
"""

import logging

__version__ = "0.1.0"

from .lattice import HORIZONTAL, VERTICAL, Edge, Face, PlanarLattice, planar_code_matrix
from .noise import RNG, apply_edge_noise, inject_defect_pairs, random_interior_edge, toggle_fresh_interior_edge
from .routing import apply_correction_path, find_closest_pair, manhattan_path, path_cost, path_spans_top_bottom
from .config import LatticeConfig
from .simulator import LatticeSimulator

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "HORIZONTAL",
    "VERTICAL",
    "Edge",
    "Face",
    "PlanarLattice",
    "planar_code_matrix",
    "RNG",
    "apply_edge_noise",
    "random_interior_edge",
    "toggle_fresh_interior_edge",
    "inject_defect_pairs",
    "manhattan_path",
    "apply_correction_path",
    "path_cost",
    "find_closest_pair",
    "path_spans_top_bottom",
    "LatticeConfig",
    "LatticeSimulator",
]
