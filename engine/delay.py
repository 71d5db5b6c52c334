"""
delay.py — Interruptible Delay
===============================
The ONE place where a sort run ever blocks.  The driver calls
suspend() after every Step the algorithm yields:

    running  →  wait `interval_ms` (read live, so the speed slider
                takes effect on the very next step), then return
    paused   →  wait on the condition until resume / stop / step_once,
                re-checking at least every `poll_interval_ms`
    stopped  →  raise SortAbortedError

All waits are Condition.wait() calls, so pause / resume / stop wake a
sleeping worker immediately instead of waiting out a polling sleep.
The signalling methods may be called from any thread.
"""

import logging
import threading
import time

from errors import SortAbortedError

logger = logging.getLogger(__name__)


class InterruptibleDelay:
    """
    Attributes:
        interval_ms      : Pause between two steps while running (live).
        poll_interval_ms : Upper bound on a single wait while paused.
        suspend_count    : Number of suspend() calls since reset().
    """

    def __init__(self, interval_ms: float = 50, poll_interval_ms: float = 100):
        self._cond = threading.Condition()
        self._interval_ms = max(0.0, float(interval_ms))
        self.poll_interval_ms = poll_interval_ms
        self._paused = False
        self._stop_requested = False
        self._step_permits = 0
        self.suspend_count = 0

    # ------------------------------------------------------------------
    # Speed (live)
    # ------------------------------------------------------------------
    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    @interval_ms.setter
    def interval_ms(self, value: float) -> None:
        with self._cond:
            self._interval_ms = max(0.0, float(value))
            self._cond.notify_all()

    # ------------------------------------------------------------------
    # Signals
    # ------------------------------------------------------------------
    def pause(self) -> None:
        with self._cond:
            self._paused = True
            self._cond.notify_all()

    def resume(self) -> None:
        with self._cond:
            self._paused = False
            self._step_permits = 0
            self._cond.notify_all()

    def step_once(self) -> None:
        """Let exactly one suspend() through while paused."""
        with self._cond:
            self._step_permits += 1
            self._cond.notify_all()

    def request_stop(self) -> None:
        with self._cond:
            self._stop_requested = True
            self._cond.notify_all()

    def reset(self) -> None:
        """Clear every signal before a new run."""
        with self._cond:
            self._paused = False
            self._stop_requested = False
            self._step_permits = 0
            self.suspend_count = 0
            self._cond.notify_all()

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested

    # ------------------------------------------------------------------
    # Suspension point
    # ------------------------------------------------------------------
    def suspend(self) -> None:
        with self._cond:
            self.suspend_count += 1
            if self._wait_while_paused():
                return
            if self._stop_requested:
                raise SortAbortedError("Sorting stopped")

            # the deadline follows interval_ms, so a speed change cuts a long wait short
            started = time.monotonic()
            while not (self._stop_requested or self._paused):
                remaining = self._interval_ms / 1000.0 - (time.monotonic() - started)
                if remaining <= 0:
                    break
                self._cond.wait(remaining)
            if self._wait_while_paused():
                return
            if self._stop_requested:
                raise SortAbortedError("Sorting stopped")

    def _wait_while_paused(self) -> bool:
        """Block while paused.  Returns True if a single-step permit was used."""
        poll = self.poll_interval_ms / 1000.0
        while self._paused and not self._stop_requested:
            if self._step_permits:
                self._step_permits -= 1
                logger.debug("single step granted while paused")
                return True
            self._cond.wait(poll)
        return False
