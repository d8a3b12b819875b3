"""
Unit tests for the run configuration and simulator
"""

import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from planarqec.config import LatticeConfig
from planarqec.lattice import PlanarLattice
from planarqec.simulator import LatticeSimulator, greedy_correct, worker_simulation


class TestLatticeConfig(unittest.TestCase):
    """Test cases for LatticeConfig"""

    def test_defaults(self):
        cfg = LatticeConfig().validate()
        lat = cfg.make_lattice()
        self.assertEqual((lat.width, lat.height), (11, 7))
        self.assertEqual(cfg.make_rng().state, 0xC0FFEE)

    def test_invalid(self):
        bad = [
            LatticeConfig(width=2),
            LatticeConfig(noise_rate=1.2),
            LatticeConfig(initial_pairs=(5, 3)),
            LatticeConfig(burst_pairs=(-1, 2)),
            LatticeConfig(noise_every=0),
            LatticeConfig(max_attempts=0),
        ]
        for cfg in bad:
            with self.assertRaises(ValueError):
                cfg.validate()


class TestLatticeSimulator(unittest.TestCase):
    """Test cases for LatticeSimulator"""

    def setUp(self):
        self.config = LatticeConfig(width=7, height=5, seed=42)
        self.sim = LatticeSimulator(self.config, num_cores=1)

    def test_start_run_even_defects(self):
        lat = self.sim.start_run()
        n = len(lat.list_defects())
        self.assertEqual(n % 2, 0)
        self.assertGreater(n, 0)
        # between 12 and 15 distinct interior edges were flipped
        flips = int(lat.error_vector().sum())
        self.assertTrue(12 <= flips <= 15, msg=str(flips))

    def test_start_run_resets_given_lattice(self):
        lat = PlanarLattice(7, 5)
        self.sim.start_run(lat)
        again = self.sim.start_run(lat)
        self.assertIs(again, lat)
        self.assertTrue(12 <= int(lat.error_vector().sum()) <= 15)

    def test_start_run_reproducible(self):
        a = LatticeSimulator(self.config, num_cores=1).start_run()
        b = LatticeSimulator(self.config, num_cores=1).start_run()
        self.assertEqual(a, b)

    def test_noise_burst_turns(self):
        lat = PlanarLattice(7, 5)
        self.assertEqual(self.sim.noise_burst(lat, 3), 0)
        self.assertFalse(lat.error_vector().any())
        toggled = self.sim.noise_burst(lat, 4)
        self.assertTrue(1 <= toggled <= 5)
        self.assertEqual(len(lat.list_defects()) % 2, 0)

    def test_greedy_correct_clears_even_defects(self):
        lat = self.sim.start_run()
        weight, _ = greedy_correct(lat)
        self.assertGreater(weight, 0)
        self.assertEqual(lat.list_defects(), [])

    def test_worker_counts(self):
        totals = worker_simulation((7, 20, 0.0, 5, 5))
        self.assertEqual(totals, {"shots": 20, "defects": 0, "weight": 0,
                                  "spanning": 0, "residual": 0})
        totals = worker_simulation((7, 20, 0.1, 5, 5))
        self.assertEqual(totals["shots"], 20)
        self.assertLessEqual(totals["residual"], 20)

    def test_worker_deterministic(self):
        self.assertEqual(worker_simulation((11, 30, 0.1, 6, 4)),
                         worker_simulation((11, 30, 0.1, 6, 4)))

    def test_run_point(self):
        stats = self.sim.run_point(0.05, 40)
        self.assertEqual(stats["shots"], 40)
        self.assertGreater(stats["mean_defects"], 0.0)
        self.assertTrue(0.0 <= stats["spanning_rate"] <= 1.0)
        self.assertTrue(0.0 <= stats["residual_rate"] <= 1.0)

    def test_run_point_invalid_rate(self):
        with self.assertRaises(ValueError):
            self.sim.run_point(-0.5, 10)

    def test_run_experiment(self):
        results = self.sim.run_experiment([0.0, 0.05], total_shots=20, verbose=False)
        self.assertEqual(list(results), [0.0, 0.05])
        self.assertEqual(results[0.0]["mean_defects"], 0.0)
        self.assertEqual(results[0.0]["spanning_rate"], 0.0)

    def test_run_experiment_reproducible(self):
        a = LatticeSimulator(self.config, num_cores=1).run_experiment([0.1], 25, verbose=False)
        b = LatticeSimulator(self.config, num_cores=1).run_experiment([0.1], 25, verbose=False)
        self.assertEqual(a[0.1]["mean_defects"], b[0.1]["mean_defects"])
        self.assertEqual(a[0.1]["mean_weight"], b[0.1]["mean_weight"])


if __name__ == "__main__":
    unittest.main()
