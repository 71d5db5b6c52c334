"""
controller.py — Run Controller
===============================
The RunController is the ONLY object the UI talks to.  It owns the
ArrayModel, the StatsTracker, the InterruptibleDelay and the run state,
and drives one algorithm generator at a time.

State machine:
    IDLE       →  start()            →  RUNNING
    RUNNING    →  pause()            →  PAUSED
    PAUSED     →  resume()           →  RUNNING
    RUNNING |
    PAUSED     →  stop() / generate  →  STOPPED   (once the algorithm unwinds)
    RUNNING    →  (generator done)   →  COMPLETED
    STOPPED |
    COMPLETED  →  generate / custom  →  IDLE
    STOPPED    →  start()            →  RUNNING   (re-run on the partial result)

Threading:
  start() drives the generator on a daemon worker thread and returns at
  once; run() drives it on the caller's thread.  Either way the worker is
  the only writer of the array and the stats while a run is active.  The
  control methods (pause / resume / stop / set_speed) only flip signals
  on the InterruptibleDelay, which the worker observes at its next
  suspension point.
"""

import logging
import random
import threading
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional

from algorithms import AlgoInfo, get_algorithm
from algorithms.step import SortTracer, Step
from config import DEFAULT_CONFIG, SPEED_PRESETS, VisualizerConfig
from engine.delay import InterruptibleDelay
from errors import (
    InvalidSizeError,
    InvalidTransitionError,
    InvalidValueError,
    SortAbortedError,
    UnknownAlgorithmError,
)
from model import ArrayModel, EventHub, SortListener, StatsTracker, Tag

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class RunState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    STOPPED   = "stopped"
    COMPLETED = "completed"


ACTIVE_STATES = (RunState.RUNNING, RunState.PAUSED)

# UI actions that make sense in each state — the UI enables exactly these
ALLOWED_ACTIONS: Dict[RunState, FrozenSet[str]] = {
    RunState.IDLE:      frozenset({"start", "generate", "custom", "speed"}),
    RunState.RUNNING:   frozenset({"pause", "stop", "generate", "custom", "speed"}),
    RunState.PAUSED:    frozenset({"resume", "step", "stop", "generate", "custom", "speed"}),
    RunState.STOPPED:   frozenset({"start", "generate", "custom", "speed"}),
    RunState.COMPLETED: frozenset({"generate", "custom", "speed"}),
}


# ---------------------------------------------------------------------------
# RunController
# ---------------------------------------------------------------------------
class RunController:
    """
    Attributes:
        state        : Current RunState.
        model        : The ArrayModel being sorted (replaced on every generate).
        stats        : Comparison / swap counters of the current run.
        delay        : Suspension point shared with the running algorithm.
        events       : EventHub every renderer subscribes to.
        algorithm_id : Key of the algorithm of the current / last run.
        last_step    : Most recent Step yielded by the algorithm.
        error        : Unexpected exception that ended the last run, if any.
    """

    def __init__(
        self,
        config: Optional[VisualizerConfig] = None,
        listener: Optional[SortListener] = None,
        seed: Optional[int] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.events = EventHub()
        if listener is not None:
            self.events.subscribe(listener)

        self.stats = StatsTracker(self.events)
        self.delay = InterruptibleDelay(self.config.default_speed_ms, self.config.pause_poll_ms)
        self.model = ArrayModel(max_size=self.config.max_size, stats=self.stats, listener=self.events)

        self.state:        RunState          = RunState.IDLE
        self.algorithm_id: Optional[str]     = None
        self.last_step:    Optional[Step]    = None
        self.error:        Optional[BaseException] = None

        self._rng = random.Random(seed)
        self._lock = threading.RLock()
        self._finished = threading.Event()
        self._finished.set()
        self._worker: Optional[threading.Thread] = None
        self._run_thread_id: Optional[int] = None

    def subscribe(self, listener: SortListener) -> SortListener:
        return self.events.subscribe(listener)

    # ------------------------------------------------------------------
    # Array lifecycle
    # ------------------------------------------------------------------
    def generate(self, size: Optional[int] = None, seed: Optional[int] = None) -> list:
        """Stop any run and load `size` random bar heights."""
        size = self.config.default_size if size is None else size
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidValueError(f"Size must be an integer, got {size!r}")
        if not 0 < size <= self.config.max_size:
            raise InvalidSizeError(size, self.config.max_size)
        rng = random.Random(seed) if seed is not None else self._rng
        values = [rng.randint(self.config.min_value, self.config.max_value) for _ in range(size)]
        self._replace(values)
        return values

    def set_custom_array(self, values: Iterable[int], size: Optional[int] = None) -> None:
        """Stop any run and load user-supplied values (must match `size` if given)."""
        values = list(values)
        if size is not None and size != len(values):
            raise InvalidSizeError(len(values), self.config.max_size, expected=size)
        self._replace(values)

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------
    def start(self, algorithm_id: str, speed_ms: Optional[float] = None) -> bool:
        """Launch a run on a worker thread.  Returns False if nothing was started."""
        if not self.is_active:
            self._settle()
        with self._lock:
            info = self._begin(algorithm_id, speed_ms)
            if info is None:
                return False
            self._worker = threading.Thread(
                target=self._execute, args=(info, False),
                name=f"sort-{info.key}", daemon=True,
            )
            self._worker.start()
        return True

    def run(self, algorithm_id: str, speed_ms: Optional[float] = None) -> RunState:
        """Same as start() but runs on the calling thread; returns the final state."""
        if not self.is_active:
            self._settle()
        with self._lock:
            info = self._begin(algorithm_id, speed_ms)
        if info is not None:
            self._execute(info, True)
        return self.state

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until no run is in flight.  Returns False on timeout."""
        if threading.get_ident() == self._run_thread_id:
            return False
        return self._finished.wait(timeout)

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------
    def pause(self) -> None:
        with self._lock:
            if self.state != RunState.RUNNING:
                raise InvalidTransitionError("pause", self.state)
            self.delay.pause()
            self._set_state(RunState.PAUSED)

    def resume(self) -> None:
        with self._lock:
            if self.state != RunState.PAUSED:
                raise InvalidTransitionError("resume", self.state)
            self.delay.resume()
            self._set_state(RunState.RUNNING)

    def toggle_pause(self) -> RunState:
        with self._lock:
            if self.state == RunState.RUNNING:
                self.pause()
            elif self.state == RunState.PAUSED:
                self.resume()
            else:
                raise InvalidTransitionError("toggle pause", self.state)
            return self.state

    def step(self) -> None:
        """Advance exactly one primitive while paused."""
        with self._lock:
            if self.state != RunState.PAUSED:
                raise InvalidTransitionError("step", self.state)
            self.delay.step_once()

    def stop(self) -> bool:
        """Request a stop.  The state becomes STOPPED when the algorithm unwinds."""
        with self._lock:
            if self.state not in ACTIVE_STATES:
                logger.debug("stop ignored while %s", self.state.value)
                return False
            self.delay.request_stop()
            return True

    def set_speed(self, speed_ms: float) -> float:
        speed_ms = self.config.clamp_speed(speed_ms)
        self.delay.interval_ms = speed_ms
        return speed_ms

    def set_speed_preset(self, preset: str) -> float:
        if preset not in SPEED_PRESETS:
            raise InvalidValueError(f"Unknown speed preset: {preset}")
        return self.set_speed(SPEED_PRESETS[preset])

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    def available_actions(self) -> FrozenSet[str]:
        return ALLOWED_ACTIONS[self.state]

    @property
    def is_active(self) -> bool:
        return self.state in ACTIVE_STATES

    def snapshot(self) -> Dict[str, Any]:
        """JSON-friendly picture of everything a renderer needs."""
        with self._lock:
            arr = self.model.snapshot()
            step = self.last_step
            return {
                "state":     self.state.value,
                "algorithm": self.algorithm_id,
                "values":    arr["values"],
                "tags":      arr["tags"],
                "stats":     self.stats.as_dict(),
                "speed_ms":  self.delay.interval_ms,
                "actions":   sorted(self.available_actions()),
                "step": {
                    "step_number":     step.step_number,
                    "action":          step.action,
                    "indices":         list(step.indices),
                    "pseudocode_line": step.pseudocode_line,
                    "explanation":     step.explanation,
                } if step else None,
                "error": str(self.error) if self.error else None,
            }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _begin(self, algorithm_id: str, speed_ms: Optional[float]) -> Optional[AlgoInfo]:
        """Validate a start request and switch to RUNNING.  None means no-op."""
        if self.state in ACTIVE_STATES:
            logger.debug("start ignored: already %s", self.state.value)
            return None
        if self.state == RunState.COMPLETED:
            logger.debug("start ignored: array already sorted")
            return None

        info = get_algorithm(algorithm_id)
        if info is None:
            raise UnknownAlgorithmError(algorithm_id)
        if len(self.model) == 0:
            raise InvalidSizeError(0, self.config.max_size)
        if speed_ms is not None:
            self.set_speed(speed_ms)

        self.delay.reset()
        self.model.clear_tags()
        self.stats.reset()
        self.algorithm_id = info.key
        self.last_step = None
        self.error = None
        self._finished.clear()
        self._set_state(RunState.RUNNING)
        return info

    def _execute(self, info: AlgoInfo, reraise: bool) -> None:
        self._run_thread_id = threading.get_ident()
        gen = info.fn(SortTracer(self.model, self.stats))
        logger.info("running %s on %d values", info.key, len(self.model))
        try:
            for step in gen:
                self.last_step = step
                self.events.on_step(step)
                try:
                    self.delay.suspend()
                except SortAbortedError as exc:
                    # unwind the algorithm from its own suspension point
                    gen.throw(exc)
                    raise
        except SortAbortedError:
            self.stats.stop_clock()
            logger.info(
                "%s stopped after %d comparisons, %d swaps",
                info.key, self.stats.comparisons, self.stats.swaps,
            )
            self._set_state(RunState.STOPPED)
        except Exception as exc:
            self._unwind(gen)
            self.stats.stop_clock()
            logger.exception("%s failed", info.key)
            self.error = exc
            self._set_state(RunState.STOPPED)
            if reraise:
                raise
        else:
            self.stats.stop_clock()
            self.model.tag_all(Tag.SORTED)
            logger.info(
                "%s completed: %d comparisons, %d swaps in %.1f ms",
                info.key, self.stats.comparisons, self.stats.swaps, self.stats.elapsed_ms,
            )
            self._set_state(RunState.COMPLETED)
        finally:
            gen.close()
            self._run_thread_id = None
            self._finished.set()

    @staticmethod
    def _unwind(gen) -> None:
        """Abort a suspended algorithm so it puts back any value it holds."""
        try:
            gen.throw(SortAbortedError("run failed"))
        except SortAbortedError:
            pass

    def _replace(self, values: list) -> None:
        # validate into a detached model first so a bad array changes nothing
        fresh = ArrayModel(values, max_size=self.config.max_size)
        self._halt()
        with self._lock:
            fresh.stats = self.stats
            fresh.listener = self.events
            self.model = fresh
            self.stats.reset(start_clock=False)
            self.algorithm_id = None
            self.last_step = None
            self.error = None
            self.events.on_array_replaced(fresh.values)
            self._set_state(RunState.IDLE)
        logger.debug("loaded %d values", len(fresh))

    def _halt(self) -> None:
        """Stop the active run (if any) and wait for it to unwind."""
        with self._lock:
            if self.state in ACTIVE_STATES:
                if threading.get_ident() == self._run_thread_id:
                    raise InvalidTransitionError("replace the array from inside the running sort", self.state)
                self.delay.request_stop()
        self._settle()

    def _settle(self) -> None:
        """Wait for the previous run (stopping or finishing) to fully unwind."""
        if threading.get_ident() == self._run_thread_id:
            return
        self._finished.wait()
        worker = self._worker
        if worker is not None and worker is not threading.current_thread():
            worker.join()
            self._worker = None

    def _set_state(self, state: RunState) -> None:
        with self._lock:
            if self.state == state:
                return
            logger.debug("run state %s → %s", self.state.value, state.value)
            self.state = state
            self.events.on_run_state_changed(state)
