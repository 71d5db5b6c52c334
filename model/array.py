"""
array.py — The Bars Being Sorted
=================================
ArrayModel owns the values, the per-index visual tags, and forwards
every change to a SortListener.  Algorithms only ever touch it through
swap() / set() / get(); the renderer only ever reads it.

Accounting: swap() and set() both bump the swap counter of the attached
StatsTracker.  set(counted=False) is for moves that are shown but not
charged: insertion's key drop, and an aborted algorithm putting back
the value it was holding.
"""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional

from errors import IndexOutOfRangeError, InvalidSizeError, InvalidValueError
from model.events import SortListener
from model.stats import StatsTracker


# ---------------------------------------------------------------------------
# Tag — maps 1-to-1 with the bar colour classes of the renderer
# ---------------------------------------------------------------------------
class Tag(Enum):
    COMPARING = "comparing"   # red — the pair under comparison right now
    SELECTED  = "selected"    # amber — current minimum / key being inserted
    PIVOT     = "pivot"       # purple — quick-sort pivot
    SORTED    = "sorted"      # green — in its final position


DEFAULT_MAX_SIZE = 200

_NO_TAGS: FrozenSet[str] = frozenset()


# ---------------------------------------------------------------------------
# ArrayModel
# ---------------------------------------------------------------------------
class ArrayModel:
    """
    Attributes:
        max_size : Largest accepted length for set_values().
        stats    : StatsTracker charged for swaps / writes (optional).
        listener : Receives value / tag / replacement events (optional).
    """

    def __init__(
        self,
        values: Optional[Iterable[int]] = None,
        max_size: int = DEFAULT_MAX_SIZE,
        stats: Optional[StatsTracker] = None,
        listener: Optional[SortListener] = None,
    ):
        self.max_size = max_size
        self.stats    = stats
        self.listener = listener
        self._values: List[int] = []
        self._tags:   Dict[int, FrozenSet[str]] = {}
        if values is not None:
            self.set_values(values)

    # ------------------------------------------------------------------
    # Whole-array
    # ------------------------------------------------------------------
    def set_values(self, values: Iterable[int]) -> None:
        """Replace the contents.  Nothing changes unless every check passes."""
        new_values = list(values)
        if not 0 < len(new_values) <= self.max_size:
            raise InvalidSizeError(len(new_values), self.max_size)
        for v in new_values:
            _check_value(v)
        self._values = new_values
        self._tags = {}
        if self.listener:
            self.listener.on_array_replaced(list(new_values))

    @property
    def values(self) -> List[int]:
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> int:
        return self.get(index)

    def __iter__(self):
        return iter(list(self._values))

    def is_sorted(self) -> bool:
        return all(self._values[i - 1] <= self._values[i] for i in range(1, len(self._values)))

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------
    def get(self, index: int) -> int:
        self._check_index(index)
        return self._values[index]

    def set(self, index: int, value: int, counted: bool = True) -> None:
        self._check_index(index)
        _check_value(value)
        self._values[index] = value
        if counted and self.stats:
            self.stats.record_swap()
        if self.listener:
            self.listener.on_value_changed(index, value)

    def swap(self, i: int, j: int) -> None:
        self._check_index(i)
        self._check_index(j)
        if i == j:
            return
        vals = self._values
        vals[i], vals[j] = vals[j], vals[i]
        if self.stats:
            self.stats.record_swap()
        if self.listener:
            self.listener.on_value_changed(i, vals[i])
            self.listener.on_value_changed(j, vals[j])

    # ------------------------------------------------------------------
    # Tags (observational only — algorithms never read them back)
    # ------------------------------------------------------------------
    def tags(self, index: int) -> FrozenSet[str]:
        self._check_index(index)
        return self._tags.get(index, _NO_TAGS)

    def add_tag(self, index: int, tag: Tag) -> None:
        current = self.tags(index)
        if tag.value not in current:
            self._set_tags(index, current | {tag.value})

    def remove_tag(self, index: int, tag: Tag) -> None:
        current = self.tags(index)
        if tag.value in current:
            self._set_tags(index, current - {tag.value})

    def tag_all(self, tag: Tag) -> None:
        for i in range(len(self._values)):
            self.add_tag(i, tag)

    def clear_tags(self) -> None:
        for index in sorted(self._tags):
            if self._tags[index]:
                self._set_tags(index, _NO_TAGS)
        self._tags = {}

    def tagged(self, tag: Tag) -> List[int]:
        return sorted(i for i, t in self._tags.items() if tag.value in t)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, object]:
        # copy first: a worker thread may be mutating while a renderer reads
        values, tags = list(self._values), dict(self._tags)
        return {
            "values": values,
            "tags":   {i: sorted(t) for i, t in tags.items() if t},
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _set_tags(self, index: int, tags: FrozenSet[str]) -> None:
        if tags:
            self._tags[index] = tags
        else:
            self._tags.pop(index, None)
        if self.listener:
            self.listener.on_tag_changed(index, tags)

    def _check_index(self, index) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._values):
            raise IndexOutOfRangeError(index, len(self._values))

    def __repr__(self) -> str:
        return f"ArrayModel({self._values!r})"


def parse_values(text: str) -> List[int]:
    """Parse "5, 3 8,1" style user input into a list of non-negative ints."""
    tokens = text.replace(",", " ").split()
    values = []
    for tok in tokens:
        try:
            values.append(int(tok))
        except ValueError:
            raise InvalidValueError(f"Not an integer: {tok!r}")
    for v in values:
        _check_value(v)
    return values


def _check_value(value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidValueError(f"Values must be integers, got {value!r}")
    if value < 0:
        raise InvalidValueError(f"Values must be non-negative, got {value}")
