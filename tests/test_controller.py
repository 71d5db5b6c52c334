"""
Tests for the RunController state machine and its stop / pause / step
guarantees.  Runs use a zero step interval; cross-thread hand-offs go
through threading.Event with a bounded wait.
"""

import threading
import unittest

from algorithms import REGISTRY
from config import VisualizerConfig
from engine import ALLOWED_ACTIONS, RunController, RunState, record
from errors import (
    InvalidSizeError,
    InvalidTransitionError,
    InvalidValueError,
    UnknownAlgorithmError,
)
from model import SortListener, Tag


FAST = VisualizerConfig(default_speed_ms=0, pause_poll_ms=10)
TIMEOUT = 10

INPUT = [9, 4, 7, 1, 8, 2, 6, 3, 5, 0, 4]


def make_controller(values=INPUT, listener=None):
    ctrl = RunController(FAST, listener=listener)
    ctrl.set_custom_array(values)
    return ctrl


class StopAfter(SortListener):
    """Requests a stop from inside the run once `limit` steps were seen."""

    def __init__(self, limit):
        self.limit = limit
        self.seen = 0
        self.ctrl = None

    def on_step(self, step):
        self.seen += 1
        if self.seen == self.limit:
            self.ctrl.stop()


class StateLog(SortListener):
    def __init__(self):
        self.states = []

    def on_run_state_changed(self, state):
        self.states.append(state)


class Mirror(SortListener):
    """Rebuilds the array from events alone, the way a renderer would."""

    def __init__(self):
        self.values = []

    def on_array_replaced(self, values):
        self.values = list(values)

    def on_value_changed(self, index, value):
        self.values[index] = value


class PauseAt(SortListener):
    """Pauses the run at step `at` and signals the test thread."""

    def __init__(self, at):
        self.at = at
        self.ctrl = None
        self.paused = threading.Event()
        self.stepped = threading.Event()
        self.step_numbers = []

    def on_step(self, step):
        self.step_numbers.append(step.step_number)
        if step.step_number == self.at:
            self.ctrl.pause()
        elif step.step_number == self.at + 1:
            self.stepped.set()

    def on_run_state_changed(self, state):
        if state == RunState.PAUSED:
            self.paused.set()


# ---------------------------------------------------------------------------
# Basic lifecycle
# ---------------------------------------------------------------------------
class TestLifecycle(unittest.TestCase):
    def test_initial_state(self):
        ctrl = RunController(FAST)
        self.assertEqual(ctrl.state, RunState.IDLE)
        self.assertEqual(ctrl.available_actions(), ALLOWED_ACTIONS[RunState.IDLE])

    def test_run_completes_and_matches_recorder(self):
        log = StateLog()
        ctrl = make_controller(listener=log)
        self.assertEqual(ctrl.run("quick"), RunState.COMPLETED)
        expected = record("quick", INPUT).metrics
        self.assertEqual(ctrl.model.values, sorted(INPUT))
        self.assertEqual(ctrl.stats.comparisons, expected.comparisons)
        self.assertEqual(ctrl.stats.swaps, expected.swaps)
        self.assertEqual(log.states, [RunState.RUNNING, RunState.COMPLETED])
        self.assertEqual(ctrl.model.tagged(Tag.SORTED), list(range(len(INPUT))))

    def test_snapshot_after_completion(self):
        ctrl = make_controller([3, 1, 2])
        ctrl.run("bubble")
        snap = ctrl.snapshot()
        self.assertEqual(snap["state"], "completed")
        self.assertEqual(snap["algorithm"], "bubble")
        self.assertEqual(snap["values"], [1, 2, 3])
        self.assertEqual(snap["tags"], {0: ["sorted"], 1: ["sorted"], 2: ["sorted"]})
        self.assertEqual(snap["actions"], ["custom", "generate", "speed"])
        self.assertEqual(snap["step"]["step_number"], 4)
        self.assertIsNone(snap["error"])

    def test_events_are_enough_to_mirror_the_array(self):
        mirror = Mirror()
        ctrl = make_controller(listener=mirror)
        ctrl.run("merge")
        self.assertEqual(mirror.values, ctrl.model.values)

    def test_start_on_completed_array_is_a_no_op(self):
        ctrl = make_controller()
        ctrl.run("bubble")
        swaps = ctrl.stats.swaps
        self.assertFalse(ctrl.start("bubble"))
        self.assertEqual(ctrl.run("heap"), RunState.COMPLETED)
        self.assertEqual(ctrl.algorithm_id, "bubble")
        self.assertEqual(ctrl.stats.swaps, swaps)

    def test_threaded_start_and_wait(self):
        ctrl = make_controller()
        self.assertTrue(ctrl.start("shell"))
        self.assertTrue(ctrl.wait(TIMEOUT))
        self.assertEqual(ctrl.state, RunState.COMPLETED)
        self.assertEqual(ctrl.model.values, sorted(INPUT))

    def test_single_element(self):
        ctrl = make_controller([42])
        self.assertEqual(ctrl.run("radix"), RunState.COMPLETED)
        self.assertEqual(ctrl.model.values, [42])


# ---------------------------------------------------------------------------
# Array replacement
# ---------------------------------------------------------------------------
class TestArrayReplacement(unittest.TestCase):
    def test_generate_respects_size_and_range(self):
        ctrl = RunController(FAST, seed=7)
        values = ctrl.generate(size=30)
        self.assertEqual(len(values), 30)
        self.assertTrue(all(FAST.min_value <= v <= FAST.max_value for v in values))
        self.assertEqual(ctrl.model.values, values)

    def test_generate_with_seed_is_reproducible(self):
        ctrl = RunController(FAST)
        self.assertEqual(ctrl.generate(size=10, seed=3), ctrl.generate(size=10, seed=3))

    def test_generate_rejects_bad_sizes(self):
        ctrl = RunController(FAST)
        ctrl.generate(size=5)
        for size in (0, -3, FAST.max_size + 1):
            with self.assertRaises(InvalidSizeError):
                ctrl.generate(size=size)
        with self.assertRaises(InvalidValueError):
            ctrl.generate(size="12")
        self.assertEqual(len(ctrl.model), 5)

    def test_generate_after_completion_resets_to_idle(self):
        ctrl = make_controller()
        ctrl.run("insertion")
        ctrl.generate(size=8)
        self.assertEqual(ctrl.state, RunState.IDLE)
        self.assertEqual(ctrl.stats.as_dict(), {"comparisons": 0, "swaps": 0, "elapsed_ms": 0.0})
        self.assertEqual(ctrl.snapshot()["tags"], {})
        self.assertTrue(ctrl.start("insertion"))
        ctrl.wait(TIMEOUT)

    def test_custom_array_size_mismatch(self):
        ctrl = make_controller([1, 2, 3])
        with self.assertRaises(InvalidSizeError):
            ctrl.set_custom_array([5, 4], size=3)
        self.assertEqual(ctrl.model.values, [1, 2, 3])

    def test_custom_array_rejects_bad_input_without_change(self):
        ctrl = make_controller([1, 2, 3])
        with self.assertRaises(InvalidSizeError):
            ctrl.set_custom_array([])
        with self.assertRaises(InvalidValueError):
            ctrl.set_custom_array([3, -1])
        self.assertEqual(ctrl.model.values, [1, 2, 3])

    def test_replacing_the_array_from_inside_the_run_is_rejected(self):
        class Meddler(SortListener):
            def on_step(self, step):
                ctrl.set_custom_array([1, 2])

        ctrl = make_controller([3, 2, 1], listener=Meddler())
        with self.assertRaises(InvalidTransitionError):
            ctrl.run("bubble")
        self.assertEqual(ctrl.state, RunState.STOPPED)
        self.assertIsInstance(ctrl.error, InvalidTransitionError)


# ---------------------------------------------------------------------------
# Start validation
# ---------------------------------------------------------------------------
class TestStartValidation(unittest.TestCase):
    def test_unknown_algorithm(self):
        ctrl = make_controller()
        with self.assertRaises(UnknownAlgorithmError):
            ctrl.start("bogo")
        self.assertEqual(ctrl.state, RunState.IDLE)

    def test_empty_array(self):
        ctrl = RunController(FAST)
        with self.assertRaises(InvalidSizeError):
            ctrl.run("bubble")
        self.assertEqual(ctrl.state, RunState.IDLE)

    def test_start_while_running_is_ignored(self):
        results = []

        class Restarter(SortListener):
            def on_step(self, step):
                if step.step_number == 0:
                    results.append(ctrl.start("heap"))

        ctrl = make_controller(listener=Restarter())
        ctrl.run("selection")
        self.assertEqual(results, [False])
        self.assertEqual(ctrl.algorithm_id, "selection")
        self.assertEqual(ctrl.state, RunState.COMPLETED)


# ---------------------------------------------------------------------------
# Stop
# ---------------------------------------------------------------------------
class TestStop(unittest.TestCase):
    def run_and_stop(self, key, values, limit):
        stopper = StopAfter(limit)
        ctrl = make_controller(values, listener=stopper)
        stopper.ctrl = ctrl
        return ctrl, ctrl.run(key)

    def test_stop_at_every_step_leaves_a_permutation(self):
        values = [5, 3, 8, 1, 9, 2, 7, 3, 0]
        for key in sorted(REGISTRY):
            total = record(key, values).metrics.total_steps
            for limit in range(1, total + 1):
                with self.subTest(algorithm=key, stop_after=limit):
                    ctrl, state = self.run_and_stop(key, values, limit)
                    self.assertEqual(state, RunState.STOPPED)
                    self.assertEqual(sorted(ctrl.model.values), sorted(values))
                    self.assertEqual(ctrl.delay.suspend_count, limit)
                    self.assertEqual(ctrl.last_step.step_number, limit - 1)

    def test_stop_halfway_keeps_partial_stats(self):
        values = list(range(20, 0, -1))
        total = record("bubble", values).metrics.total_steps
        ctrl, state = self.run_and_stop("bubble", values, total // 2)
        self.assertEqual(state, RunState.STOPPED)
        self.assertGreater(ctrl.stats.comparisons, 0)
        self.assertLess(ctrl.stats.comparisons, 190)
        self.assertFalse(ctrl.stats.is_timing)
        self.assertEqual(ctrl.snapshot()["tags"].get(0, []), [])

    def test_stop_when_not_running_is_a_no_op(self):
        ctrl = make_controller()
        self.assertFalse(ctrl.stop())
        self.assertEqual(ctrl.state, RunState.IDLE)

    def test_start_again_after_stop_resumes_on_partial_result(self):
        ctrl, _ = self.run_and_stop("insertion", INPUT, 5)
        self.assertEqual(ctrl.available_actions(), ALLOWED_ACTIONS[RunState.STOPPED])
        self.assertEqual(ctrl.run("insertion"), RunState.COMPLETED)
        self.assertEqual(ctrl.model.values, sorted(INPUT))

    def test_threaded_stop_while_paused(self):
        pauser = PauseAt(3)
        ctrl = make_controller(listener=pauser)
        pauser.ctrl = ctrl
        ctrl.start("merge")
        self.assertTrue(pauser.paused.wait(TIMEOUT))
        self.assertTrue(ctrl.stop())
        self.assertTrue(ctrl.wait(TIMEOUT))
        self.assertEqual(ctrl.state, RunState.STOPPED)
        self.assertEqual(sorted(ctrl.model.values), sorted(INPUT))

    def test_generate_while_paused_stops_first(self):
        log = StateLog()
        pauser = PauseAt(2)
        ctrl = make_controller(listener=pauser)
        ctrl.subscribe(log)
        pauser.ctrl = ctrl
        ctrl.start("heap")
        self.assertTrue(pauser.paused.wait(TIMEOUT))
        old_model = ctrl.model
        ctrl.generate(size=6)
        self.assertEqual(log.states[-2:], [RunState.STOPPED, RunState.IDLE])
        self.assertEqual(sorted(old_model.values), sorted(INPUT))
        self.assertEqual(len(ctrl.model), 6)


class FailAt(SortListener):
    def __init__(self, at):
        self.at = at

    def on_step(self, step):
        if step.step_number == self.at:
            raise RuntimeError("renderer crashed")


class TestListenerFailure(unittest.TestCase):
    def run_and_fail(self, key, values, at):
        ctrl = make_controller(values, listener=FailAt(at))
        with self.assertRaises(RuntimeError):
            ctrl.run(key)
        return ctrl

    def test_failure_while_insertion_holds_its_key(self):
        # step 1 is the first shift: the key 1 is out of the array
        ctrl = self.run_and_fail("insertion", [5, 4, 3, 2, 1], 1)
        self.assertEqual(ctrl.state, RunState.STOPPED)
        self.assertEqual(sorted(ctrl.model.values), [1, 2, 3, 4, 5])
        self.assertIsInstance(ctrl.error, RuntimeError)
        self.assertIsNotNone(ctrl.snapshot()["error"])

    def test_failure_at_every_step_leaves_a_permutation(self):
        values = [5, 3, 8, 1, 9, 2, 7, 3, 0]
        for key in sorted(REGISTRY):
            total = record(key, values).metrics.total_steps
            for at in range(total):
                with self.subTest(algorithm=key, fail_at=at):
                    ctrl = self.run_and_fail(key, values, at)
                    self.assertEqual(ctrl.state, RunState.STOPPED)
                    self.assertEqual(sorted(ctrl.model.values), sorted(values))
                    self.assertEqual(ctrl.last_step.step_number, at)

    def test_failed_run_can_be_restarted(self):
        failer = FailAt(4)
        ctrl = make_controller(INPUT, listener=failer)
        with self.assertRaises(RuntimeError):
            ctrl.run("merge")
        ctrl.events.unsubscribe(failer)
        self.assertEqual(ctrl.run("merge"), RunState.COMPLETED)
        self.assertEqual(ctrl.model.values, sorted(INPUT))
        self.assertIsNone(ctrl.error)


# ---------------------------------------------------------------------------
# Pause / resume / step
# ---------------------------------------------------------------------------
class TestPauseResume(unittest.TestCase):
    def test_pause_then_resume_gives_identical_results(self):
        expected = record("quick", INPUT)
        pauser = PauseAt(10)
        ctrl = make_controller(listener=pauser)
        pauser.ctrl = ctrl
        ctrl.start("quick")
        self.assertTrue(pauser.paused.wait(TIMEOUT))
        self.assertEqual(ctrl.state, RunState.PAUSED)
        frozen = ctrl.stats.as_dict()
        self.assertEqual(ctrl.stats.comparisons + ctrl.stats.swaps, 11)

        ctrl.resume()
        self.assertTrue(ctrl.wait(TIMEOUT))
        self.assertEqual(ctrl.state, RunState.COMPLETED)
        self.assertEqual(ctrl.model.values, expected.result)
        self.assertEqual(ctrl.stats.comparisons, expected.metrics.comparisons)
        self.assertEqual(ctrl.stats.swaps, expected.metrics.swaps)
        self.assertGreaterEqual(ctrl.stats.comparisons, frozen["comparisons"])
        self.assertEqual(pauser.step_numbers, list(range(expected.metrics.total_steps)))

    def test_step_advances_exactly_one_primitive(self):
        pauser = PauseAt(4)
        ctrl = make_controller(listener=pauser)
        pauser.ctrl = ctrl
        ctrl.start("bubble")
        self.assertTrue(pauser.paused.wait(TIMEOUT))
        self.assertEqual(ctrl.available_actions(), ALLOWED_ACTIONS[RunState.PAUSED])

        ctrl.step()
        self.assertTrue(pauser.stepped.wait(TIMEOUT))
        self.assertEqual(ctrl.last_step.step_number, 5)
        self.assertEqual(ctrl.state, RunState.PAUSED)

        ctrl.toggle_pause()
        self.assertTrue(ctrl.wait(TIMEOUT))
        self.assertEqual(ctrl.state, RunState.COMPLETED)
        self.assertEqual(ctrl.model.values, sorted(INPUT))

    def test_speed_changes_while_paused(self):
        pauser = PauseAt(1)
        ctrl = make_controller(listener=pauser)
        pauser.ctrl = ctrl
        ctrl.start("selection", speed_ms=0)
        self.assertTrue(pauser.paused.wait(TIMEOUT))
        self.assertEqual(ctrl.set_speed(5000), FAST.max_speed_ms)
        self.assertEqual(ctrl.set_speed(0), 0)
        ctrl.resume()
        self.assertTrue(ctrl.wait(TIMEOUT))
        self.assertEqual(ctrl.state, RunState.COMPLETED)


class TestInvalidTransitions(unittest.TestCase):
    def test_controls_outside_a_run(self):
        ctrl = make_controller()
        for action in (ctrl.pause, ctrl.resume, ctrl.step, ctrl.toggle_pause):
            with self.assertRaises(InvalidTransitionError):
                action()
        ctrl.run("bubble")
        with self.assertRaises(InvalidTransitionError):
            ctrl.pause()
        self.assertEqual(ctrl.state, RunState.COMPLETED)

    def test_resume_while_running_is_rejected(self):
        class Resumer(SortListener):
            def on_step(self, step):
                ctrl.resume()

        ctrl = make_controller([2, 1], listener=Resumer())
        with self.assertRaises(InvalidTransitionError):
            ctrl.run("bubble")
        self.assertEqual(ctrl.state, RunState.STOPPED)

    def test_error_message_names_action_and_state(self):
        ctrl = make_controller()
        with self.assertRaises(InvalidTransitionError) as cm:
            ctrl.step()
        self.assertEqual(str(cm.exception), "Cannot step while idle")


class TestSpeed(unittest.TestCase):
    def test_presets(self):
        ctrl = RunController(FAST)
        self.assertEqual(ctrl.set_speed_preset("slow"), 250)
        self.assertEqual(ctrl.delay.interval_ms, 250)
        with self.assertRaises(InvalidValueError):
            ctrl.set_speed_preset("ludicrous")

    def test_clamped(self):
        ctrl = RunController(FAST)
        self.assertEqual(ctrl.set_speed(-10), 0)
        self.assertEqual(ctrl.set_speed(10_000), 1000)


if __name__ == "__main__":
    unittest.main()
