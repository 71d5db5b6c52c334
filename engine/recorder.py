"""
recorder.py — Headless Run Recorder & Analytics
================================================
Runs an algorithm to completion with no delay and no pause handling,
keeps every Step, then computes the metrics the Analytics panel and
Comparison Mode need.

Usage:
    rec = Recorder()
    rec.start(algo_key="quick", values=[5, 3, 8, 1])
    rec.run_to_completion()          # exhausts the generator
    metrics = rec.get_metrics()      # the analytics card
    rec.result                       # the sorted values

Comparison Mode:
    The UI holds two Recorders (one per algo), runs both on the SAME
    input, then calls compare(rec1, rec2) → ComparisonResult.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from algorithms import AlgoInfo, get_algorithm
from algorithms.step import SortTracer, Step
from config import DEFAULT_CONFIG
from errors import UnknownAlgorithmError
from model import ArrayModel, StatsTracker


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    size:          int   = 0
    comparisons:   int   = 0
    swaps:         int   = 0
    total_steps:   int   = 0          # number of Steps yielded
    wall_time_ms:  float = 0.0        # wall-clock time to run to completion
    is_sorted:     bool  = False


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""   # which algo compared less
    winner_swaps:       str = ""
    winner_steps:       str = ""


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run.
        metrics : Computed RunMetrics (available after run_to_completion).
        model   : The ArrayModel the algorithm sorted.
        stats   : Counters of the run.
    """

    def __init__(self, max_size: int = DEFAULT_CONFIG.max_size):
        self.max_size = max_size
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None
        self.model:   Optional[ArrayModel] = None
        self.stats:   Optional[StatsTracker] = None

        self._algo_info: Optional[AlgoInfo] = None
        self._input:     List[int]          = []
        self._generator = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, values: Iterable[int]) -> None:
        """Initialise the model and the generator for this run."""
        info = get_algorithm(algo_key)
        if info is None:
            raise UnknownAlgorithmError(algo_key)

        self._algo_info = info
        self._input = list(values)
        self.stats = StatsTracker()
        self.model = ArrayModel(max_size=self.max_size, stats=self.stats)
        # an empty input is legal here: the algorithms simply do nothing
        if self._input:
            self.model.set_values(self._input)
        self.steps = []
        self.metrics = None
        self._generator = info.fn(SortTracer(self.model, self.stats))

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the generator, record every step, compute metrics."""
        if self._generator is None:
            raise RuntimeError("Call start() first.")

        self.stats.reset()
        for step in self._generator:
            self.steps.append(step)
        self.stats.stop_clock()
        self._generator = None

        self.metrics = self._compute_metrics()
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def result(self) -> List[int]:
        return self.model.values if self.model else []

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "input":    list(self._input),
            "result":   self.result,
            "metrics":  self.metrics.__dict__ if self.metrics else {},
            "steps": [
                {
                    "step_number":     s.step_number,
                    "action":          s.action,
                    "indices":         list(s.indices),
                    "values":          list(s.values),
                    "pseudocode_line": s.pseudocode_line,
                    "explanation":     s.explanation,
                }
                for s in self.steps
            ],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self) -> RunMetrics:
        info = self._algo_info
        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            size=len(self._input),
            comparisons=self.stats.comparisons,
            swaps=self.stats.swaps,
            total_steps=len(self.steps),
            wall_time_ms=self.stats.elapsed_ms,
            is_sorted=self.model.is_sorted(),
        )


def record(algo_key: str, values: Iterable[int]) -> Recorder:
    """Convenience: start + run_to_completion in one call."""
    rec = Recorder()
    rec.start(algo_key, values)
    rec.run_to_completion()
    return rec


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons, l.algo_label, r.algo_label),
        winner_swaps      =winner(l.swaps, r.swaps, l.algo_label, r.algo_label),
        winner_steps      =winner(l.total_steps, r.total_steps, l.algo_label, r.algo_label),
    )
