"""
stats.py — Comparison / Swap Counters
======================================
Two monotonically non-decreasing counters plus a wall clock.
reset() is called once per run; every increment is pushed to the
listener so the stats panel updates live.
"""

import time
from typing import Callable, Dict, Optional

from model.events import SortListener


class StatsTracker:
    """
    Attributes:
        comparisons : Element-pair comparisons made this run.
        swaps       : Exchanges and counted positional writes this run.
        elapsed_ms  : Wall time since reset(), frozen by stop_clock().
    """

    def __init__(
        self,
        listener: Optional[SortListener] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.comparisons: int = 0
        self.swaps:       int = 0
        self._listener = listener
        self._clock = clock
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None

    def reset(self, start_clock: bool = True) -> None:
        self.comparisons = 0
        self.swaps = 0
        self._started_at = self._clock() if start_clock else None
        self._stopped_at = None
        self._notify()

    def record_comparison(self) -> None:
        self.comparisons += 1
        self._notify()

    def record_swap(self) -> None:
        self.swaps += 1
        self._notify()

    def stop_clock(self) -> None:
        if self._started_at is not None and self._stopped_at is None:
            self._stopped_at = self._clock()
            self._notify()

    @property
    def elapsed_ms(self) -> float:
        if self._started_at is None:
            return 0.0
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return round((end - self._started_at) * 1000, 2)

    @property
    def is_timing(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    def as_dict(self) -> Dict[str, float]:
        return {
            "comparisons": self.comparisons,
            "swaps":       self.swaps,
            "elapsed_ms":  self.elapsed_ms,
        }

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener.on_stats_changed(self.comparisons, self.swaps, self.elapsed_ms)
