"""
Tests for InterruptibleDelay.  Every blocking call runs on a helper
thread with a bounded join, so a regression fails instead of hanging.
"""

import threading
import unittest

from engine.delay import InterruptibleDelay
from errors import SortAbortedError


def suspend_in_thread(delay):
    outcome = {}

    def target():
        try:
            delay.suspend()
            outcome["result"] = "returned"
        except SortAbortedError:
            outcome["result"] = "aborted"

    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread, outcome


class TestInterruptibleDelay(unittest.TestCase):
    def test_zero_interval_returns_at_once(self):
        delay = InterruptibleDelay(0)
        delay.suspend()
        delay.suspend()
        self.assertEqual(delay.suspend_count, 2)

    def test_stop_raises(self):
        delay = InterruptibleDelay(0)
        delay.request_stop()
        with self.assertRaises(SortAbortedError):
            delay.suspend()

    def test_negative_interval_is_clamped(self):
        delay = InterruptibleDelay(-5)
        self.assertEqual(delay.interval_ms, 0.0)

    def test_reset_clears_signals(self):
        delay = InterruptibleDelay(0)
        delay.pause()
        delay.request_stop()
        delay.suspend_count = 3
        delay.reset()
        self.assertFalse(delay.is_paused)
        self.assertFalse(delay.stop_requested)
        self.assertEqual(delay.suspend_count, 0)
        delay.suspend()

    def test_stop_interrupts_a_long_wait(self):
        delay = InterruptibleDelay(60_000)
        thread, outcome = suspend_in_thread(delay)
        delay.request_stop()
        thread.join(5)
        self.assertFalse(thread.is_alive())
        self.assertEqual(outcome["result"], "aborted")

    def test_speed_change_applies_to_a_wait_in_progress(self):
        delay = InterruptibleDelay(60_000)
        thread, outcome = suspend_in_thread(delay)
        delay.interval_ms = 0
        thread.join(5)
        self.assertFalse(thread.is_alive())
        self.assertEqual(outcome["result"], "returned")

    def test_pause_blocks_until_resume(self):
        delay = InterruptibleDelay(0, poll_interval_ms=10)
        delay.pause()
        thread, outcome = suspend_in_thread(delay)
        thread.join(0.2)
        self.assertTrue(thread.is_alive())
        delay.resume()
        thread.join(5)
        self.assertEqual(outcome["result"], "returned")

    def test_stop_while_paused_aborts(self):
        delay = InterruptibleDelay(0)
        delay.pause()
        thread, outcome = suspend_in_thread(delay)
        delay.request_stop()
        thread.join(5)
        self.assertEqual(outcome["result"], "aborted")

    def test_step_once_lets_one_suspend_through(self):
        delay = InterruptibleDelay(0)
        delay.pause()
        delay.step_once()
        delay.suspend()
        self.assertTrue(delay.is_paused)

        thread, outcome = suspend_in_thread(delay)
        thread.join(0.2)
        self.assertTrue(thread.is_alive())
        delay.step_once()
        thread.join(5)
        self.assertEqual(outcome["result"], "returned")

    def test_resume_discards_unused_step_permits(self):
        delay = InterruptibleDelay(0)
        delay.pause()
        delay.step_once()
        delay.resume()
        delay.pause()
        thread, outcome = suspend_in_thread(delay)
        thread.join(0.2)
        self.assertTrue(thread.is_alive())
        delay.request_stop()
        thread.join(5)
        self.assertEqual(outcome["result"], "aborted")


if __name__ == "__main__":
    unittest.main()
