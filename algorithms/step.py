"""
step.py — Algorithm Step Snapshot & Primitive Tracer
=====================================================
Every algorithm is a generator that yields Step objects.  A Step is a
frozen record of ONE primitive operation:

    • what happened      (compare / swap / write / place / inspect)
    • where              (the indices involved, and their values now)
    • which line of pseudocode is executing
    • a plain-English explanation for Learning Mode
    • the running comparison / swap tally

Each yield is a suspension point: the driver (RunController or
Recorder) decides what happens between two steps — sleep, wait while
paused, or throw SortAbortedError back in to stop the run.

Algorithms never build Steps by hand.  They call the SortTracer
primitives with `yield from`, which perform the mutation, charge the
stats, set the visual tags, and yield exactly one Step:

    def bubble(t: SortTracer):
        yield from t.compare(j, j + 1, line=3)
        if t.model[j] > t.model[j + 1]:
            yield from t.swap(j, j + 1, line=4)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Tuple

from model import ArrayModel, StatsTracker, Tag


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        action          : "compare", "swap", "write", "place" or "inspect".
        indices         : Array positions touched by this step.
        values          : Values at those positions AFTER the step.
        pseudocode_line : 0-based index into the algorithm's PSEUDOCODE.
        explanation     : Human-readable "why" text for Learning Mode.
        metrics         : Running tally {"comparisons": …, "swaps": …}.
    """

    step_number:      int                 = 0
    action:           str                 = ""
    indices:          Tuple[int, ...]     = ()
    values:           Tuple[int, ...]     = ()
    pseudocode_line:  int                 = 0
    explanation:      str                 = ""
    metrics:          Dict[str, Any]      = field(default_factory=dict)


Trace = Generator[Step, None, None]


class SortTracer:
    """
    Thin instrumented façade over ArrayModel + StatsTracker.

    Usage inside an algorithm generator:
        yield from t.compare(i, j, line=2)
        yield from t.write(k, value, line=5, explanation="copy back")
    """

    def __init__(self, model: ArrayModel, stats: StatsTracker):
        self.model = model
        self.stats = stats
        self.step_no = 0

    @property
    def n(self) -> int:
        return len(self.model)

    # ------------------------------------------------------------------
    # Primitives — each yields exactly one Step (swap i == i yields none)
    # ------------------------------------------------------------------
    def compare(self, i: int, j: int, line: int = 0, explanation: str = "") -> Trace:
        a, b = self.model.get(i), self.model.get(j)
        self.stats.record_comparison()
        self.model.add_tag(i, Tag.COMPARING)
        self.model.add_tag(j, Tag.COMPARING)
        try:
            yield self._build(
                "compare", (i, j), line,
                explanation or f"Compare a[{i}]={a} with a[{j}]={b}.",
            )
        finally:
            self.model.remove_tag(i, Tag.COMPARING)
            self.model.remove_tag(j, Tag.COMPARING)

    def swap(self, i: int, j: int, line: int = 0, explanation: str = "") -> Trace:
        if i == j:
            return
        self.model.swap(i, j)
        yield self._build(
            "swap", (i, j), line,
            explanation or f"Swap a[{i}] and a[{j}] → {self.model[i]}, {self.model[j]}.",
        )

    def write(self, i: int, value: int, line: int = 0, explanation: str = "") -> Trace:
        self.model.set(i, value)
        yield self._build("write", (i,), line, explanation or f"Write {value} into a[{i}].")

    def place(self, i: int, value: int, line: int = 0, explanation: str = "") -> Trace:
        """Like write(), but not charged as a swap (insertion's key drop)."""
        self.model.set(i, value, counted=False)
        yield self._build("place", (i,), line, explanation or f"Place {value} into a[{i}].")

    def inspect(self, i: int, line: int = 0, explanation: str = "") -> Trace:
        """A visible read with no comparison (radix digit extraction)."""
        self.model.add_tag(i, Tag.SELECTED)
        try:
            yield self._build("inspect", (i,), line, explanation or f"Read a[{i}]={self.model[i]}.")
        finally:
            self.model.remove_tag(i, Tag.SELECTED)

    # ------------------------------------------------------------------
    # Tag helpers (no step, no stats)
    # ------------------------------------------------------------------
    def mark(self, i: int, tag: Tag) -> None:
        self.model.add_tag(i, tag)

    def unmark(self, i: int, tag: Tag) -> None:
        self.model.remove_tag(i, tag)

    def mark_range(self, lo: int, hi: int, tag: Tag) -> None:
        """Tag every index in [lo, hi)."""
        for i in range(lo, hi):
            self.model.add_tag(i, tag)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _build(self, action: str, indices: Tuple[int, ...], line: int, explanation: str) -> Step:
        step = Step(
            step_number=self.step_no,
            action=action,
            indices=indices,
            values=tuple(self.model.get(i) for i in indices),
            pseudocode_line=line,
            explanation=explanation,
            metrics={"comparisons": self.stats.comparisons, "swaps": self.stats.swaps},
        )
        self.step_no += 1
        return step
