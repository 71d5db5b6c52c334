"""
engine/
-------
Execution & recording layer.

    from engine import RunController, RunState, InterruptibleDelay
    from engine import Recorder, RunMetrics, compare
"""

from engine.delay      import InterruptibleDelay
from engine.controller import RunController, RunState, ALLOWED_ACTIONS
from engine.recorder   import Recorder, RunMetrics, ComparisonResult, compare, record

__all__ = [
    "InterruptibleDelay",
    "RunController",
    "RunState",
    "ALLOWED_ACTIONS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "record",
]
