"""
Unit tests for correction routing
"""

import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from planarqec.lattice import Edge, Face, PlanarLattice
from planarqec.noise import RNG, inject_defect_pairs
from planarqec.routing import (
    apply_correction_path,
    find_closest_pair,
    manhattan_path,
    path_cost,
    path_spans_top_bottom,
)


class TestManhattanPath(unittest.TestCase):
    """Test cases for L-shaped routes"""

    def test_x_then_y(self):
        path = manhattan_path(Face(1, 1), Face(3, 0))
        self.assertEqual(path, [Face(1, 1), Face(2, 1), Face(3, 1), Face(3, 0)])

    def test_single_face(self):
        self.assertEqual(manhattan_path(Face(2, 2), Face(2, 2)), [Face(2, 2)])

    def test_unit_steps(self):
        a, b = Face(4, 0), Face(0, 3)
        path = manhattan_path(a, b)
        self.assertEqual(len(path) - 1, path_cost(a, b))
        for cur, nxt in zip(path, path[1:]):
            self.assertEqual(path_cost(cur, nxt), 1)


class TestCorrectionPath(unittest.TestCase):
    """Test cases for apply_correction_path"""

    def test_cancels_pair(self):
        lat = PlanarLattice(6, 5)
        apply_correction_path(lat, Face(0, 4), Face(4, 1))
        self.assertEqual(lat.list_defects(), [Face(4, 1), Face(0, 4)])
        apply_correction_path(lat, Face(0, 4), Face(4, 1))
        self.assertEqual(lat.list_defects(), [])
        self.assertFalse(lat.error_vector().any())

    def test_toggles_route_edges(self):
        lat = PlanarLattice(5, 5)
        apply_correction_path(lat, Face(1, 1), Face(2, 2))
        flipped = [e for e in lat.edges() if lat.get_edge(e)]
        self.assertEqual(flipped, [Edge.horizontal(2, 2), Edge.vertical(2, 1)])

    def test_corrects_noise_burst(self):
        lat = PlanarLattice(11, 7)
        inject_defect_pairs(lat, RNG(99), 6)
        while True:
            pair = find_closest_pair(lat.list_defects())
            if pair is None:
                break
            apply_correction_path(lat, *pair)
        self.assertEqual(lat.list_defects(), [])


class TestClosestPair(unittest.TestCase):
    """Test cases for find_closest_pair"""

    def test_too_few(self):
        self.assertIsNone(find_closest_pair([]))
        self.assertIsNone(find_closest_pair([Face(1, 1)]))

    def test_closest(self):
        defects = [Face(0, 0), Face(5, 0), Face(2, 3), Face(5, 2)]
        self.assertEqual(find_closest_pair(defects), (Face(5, 0), Face(5, 2)))

    def test_tie_goes_to_first(self):
        defects = [Face(0, 0), Face(1, 0), Face(4, 4), Face(4, 5)]
        self.assertEqual(find_closest_pair(defects), (Face(0, 0), Face(1, 0)))


class TestSpanning(unittest.TestCase):
    """Test cases for path_spans_top_bottom"""

    def test_spanning(self):
        self.assertTrue(path_spans_top_bottom(manhattan_path(Face(1, 0), Face(2, 4)), 5))

    def test_not_spanning(self):
        self.assertFalse(path_spans_top_bottom(manhattan_path(Face(0, 0), Face(4, 3)), 5))
        self.assertFalse(path_spans_top_bottom(manhattan_path(Face(0, 4), Face(4, 1)), 5))


if __name__ == "__main__":
    unittest.main()
