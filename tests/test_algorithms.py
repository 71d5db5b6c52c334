"""
Tests for the sorting algorithms, run headless through the Recorder.
"""

import random
import unittest

from algorithms import REGISTRY, algorithms_by_tag, get_algorithm, list_algorithms
from algorithms.radix import digit
from engine import Recorder, compare, record
from errors import UnknownAlgorithmError


ALL_KEYS = sorted(REGISTRY)


def sample_inputs():
    rng = random.Random(1234)
    yield []
    yield [7]
    yield [4, 4, 4, 4, 4]
    yield [1, 2, 3, 4, 5, 6]
    yield [6, 5, 4, 3, 2, 1]
    yield [0, 1000, 0, 999, 5]
    for size in (2, 3, 10, 33, 64):
        yield [rng.randint(0, 400) for _ in range(size)]


class TestRegistry(unittest.TestCase):
    def test_all_algorithms_present(self):
        self.assertEqual(
            set(REGISTRY),
            {"bubble", "selection", "insertion", "quick", "merge", "heap", "shell", "radix"},
        )

    def test_lookup(self):
        self.assertEqual(get_algorithm("merge").label, "Merge Sort")
        self.assertIsNone(get_algorithm("bogo"))
        self.assertEqual([a.key for a in list_algorithms()], list(REGISTRY))

    def test_pseudocode_lines_cover_steps(self):
        for key in ALL_KEYS:
            rec = record(key, [9, 2, 7, 4, 4, 1, 8])
            lines = len(REGISTRY[key].pseudocode)
            for step in rec.steps:
                self.assertTrue(0 <= step.pseudocode_line < lines, (key, step))

    def test_tag_filter(self):
        keys = {a.key for a in algorithms_by_tag("quadratic")}
        self.assertEqual(keys, {"bubble", "selection", "insertion"})


class TestSortsProduceSortedPermutations(unittest.TestCase):
    def test_every_algorithm_on_every_input(self):
        for key in ALL_KEYS:
            for values in sample_inputs():
                with self.subTest(algorithm=key, values=values):
                    rec = record(key, values)
                    self.assertEqual(rec.result, sorted(values))
                    self.assertEqual(rec.metrics.size, len(values))
                    self.assertEqual(rec.metrics.is_sorted, True)

    def test_comparison_lower_bound(self):
        for key in ALL_KEYS:
            for values in sample_inputs():
                if not values:
                    continue
                with self.subTest(algorithm=key, n=len(values)):
                    self.assertGreaterEqual(record(key, values).metrics.comparisons, len(values) - 1)

    def test_counters_match_yielded_steps(self):
        for key in ALL_KEYS:
            for values in sample_inputs():
                with self.subTest(algorithm=key, values=values):
                    rec = record(key, values)
                    actions = [s.action for s in rec.steps]
                    self.assertEqual(rec.metrics.comparisons, actions.count("compare"))
                    self.assertEqual(rec.metrics.swaps, actions.count("swap") + actions.count("write"))
                    self.assertEqual([s.step_number for s in rec.steps], list(range(len(rec.steps))))

    def test_running_tally_never_decreases(self):
        rec = record("quick", [5, 9, 1, 7, 3, 3, 8, 0])
        tallies = [(s.metrics["comparisons"], s.metrics["swaps"]) for s in rec.steps]
        for before, after in zip(tallies, tallies[1:]):
            self.assertLessEqual(before[0], after[0])
            self.assertLessEqual(before[1], after[1])
        self.assertEqual(tallies[-1], (rec.metrics.comparisons, rec.metrics.swaps))

    def test_everything_tagged_sorted_at_the_end(self):
        for key in ALL_KEYS:
            rec = record(key, [3, 1, 2, 5, 4])
            self.assertEqual(rec.model.snapshot()["tags"], {i: ["sorted"] for i in range(5)}, key)


class TestExactCounts(unittest.TestCase):
    def assertCounts(self, key, values, comparisons, swaps):
        rec = record(key, values)
        self.assertEqual(rec.result, sorted(values))
        self.assertEqual((rec.metrics.comparisons, rec.metrics.swaps), (comparisons, swaps))
        return rec

    def test_bubble_counts_every_inversion(self):
        # [5, 3, 8, 1, 9, 2] has 8 inversions
        self.assertCounts("bubble", [5, 3, 8, 1, 9, 2], 15, 8)

    def test_bubble_always_makes_every_pass(self):
        self.assertCounts("bubble", [1, 2, 3, 4], 6, 0)

    def test_selection_on_sorted_input_swaps_nothing(self):
        self.assertCounts("selection", [1, 2, 3], 3, 0)

    def test_selection_counts_every_probe(self):
        self.assertCounts("selection", [3, 2, 1], 3, 1)

    def test_insertion(self):
        self.assertCounts("insertion", [1, 2, 3], 2, 0)
        self.assertCounts("insertion", [3, 2, 1], 3, 3)

    def test_insertion_charges_one_swap_per_shift(self):
        # every shift removes exactly one inversion; dropping the key is free
        for values in sample_inputs():
            with self.subTest(values=values):
                rec = record("insertion", values)
                inversions = sum(
                    1 for i in range(len(values)) for j in range(i + 1, len(values))
                    if values[i] > values[j]
                )
                self.assertEqual(rec.metrics.swaps, inversions)

    def test_key_drop_is_a_step_but_not_a_swap(self):
        rec = record("insertion", [2, 1])
        self.assertEqual([s.action for s in rec.steps], ["compare", "write", "place"])
        self.assertEqual(rec.steps[-1].values, (1,))
        self.assertEqual(rec.steps[-1].metrics["swaps"], 1)

    def test_shell_with_single_gap_matches_insertion(self):
        self.assertCounts("shell", [3, 2, 1], 3, 3)

    def test_quick(self):
        self.assertCounts("quick", [3, 1, 2], 2, 2)

    def test_quick_skips_self_swaps(self):
        # every element is smaller than the pivot: i == j throughout
        self.assertCounts("quick", [1, 2, 3], 3, 0)

    def test_merge_writes_every_position_at_every_level(self):
        self.assertCounts("merge", [2, 1], 1, 2)
        rec = record("merge", [8, 7, 6, 5, 4, 3, 2, 1])
        self.assertEqual(rec.metrics.swaps, 24)

    def test_heap(self):
        self.assertCounts("heap", [1, 2, 3], 3, 4)

    def test_radix(self):
        rec = self.assertCounts("radix", [170, 45, 75, 90, 802, 24, 2, 66], 7, 24)
        self.assertEqual(rec.result, [2, 24, 45, 66, 75, 90, 170, 802])
        self.assertEqual(rec.metrics.total_steps, 7 + 24 + 2 * 8 * 3)

    def test_radix_all_zeros_makes_no_pass(self):
        self.assertCounts("radix", [0, 0, 0], 2, 0)

    def test_digit(self):
        self.assertEqual(digit(802, 1), 2)
        self.assertEqual(digit(802, 10), 0)
        self.assertEqual(digit(802, 100), 8)


class TestStepRecords(unittest.TestCase):
    def test_compare_step_carries_indices_and_values(self):
        rec = record("bubble", [2, 1])
        first, second = rec.steps
        self.assertEqual((first.action, first.indices, first.values), ("compare", (0, 1), (2, 1)))
        self.assertEqual((second.action, second.values), ("swap", (1, 2)))
        self.assertIn("swap", second.explanation)

    def test_steps_are_frozen(self):
        step = record("bubble", [2, 1]).steps[0]
        with self.assertRaises(Exception):
            step.action = "swap"


class TestRecorder(unittest.TestCase):
    def test_unknown_algorithm(self):
        with self.assertRaises(UnknownAlgorithmError):
            Recorder().start("bogo", [1, 2])

    def test_run_requires_start(self):
        with self.assertRaises(RuntimeError):
            Recorder().run_to_completion()

    def test_export(self):
        rec = record("selection", [2, 1])
        data = rec.export()
        self.assertEqual(data["algo_key"], "selection")
        self.assertEqual(data["input"], [2, 1])
        self.assertEqual(data["result"], [1, 2])
        self.assertEqual(len(data["steps"]), rec.metrics.total_steps)
        self.assertEqual(data["metrics"]["swaps"], 1)

    def test_compare_picks_lower_counts(self):
        values = [9, 8, 7, 6, 5, 4, 3, 2, 1]
        result = compare(record("bubble", values), record("merge", values))
        self.assertEqual(result.winner_comparisons, "Merge Sort")
        self.assertEqual(result.left.algo_label, "Bubble Sort")

    def test_compare_tie(self):
        result = compare(record("bubble", [1, 2]), record("selection", [1, 2]))
        self.assertEqual(result.winner_comparisons, "tie")
        self.assertEqual(result.winner_swaps, "tie")


if __name__ == "__main__":
    unittest.main()
