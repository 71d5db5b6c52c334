"""
events.py — Observer Interface
===============================
The core never draws anything.  It reports every observable change
through a SortListener; the renderer (SVG canvas, terminal, test
probe, …) subclasses it and overrides the hooks it cares about.

EventHub is itself a listener that fans each call out to every
subscriber in subscription order.  Exceptions raised by a subscriber
propagate to whoever triggered the event.
"""

from typing import FrozenSet, List, TYPE_CHECKING

if TYPE_CHECKING:
    from algorithms.step import Step


class SortListener:
    """No-op base class — override only the hooks you need."""

    def on_value_changed(self, index: int, value: int) -> None:
        pass

    def on_tag_changed(self, index: int, tags: FrozenSet[str]) -> None:
        pass

    def on_stats_changed(self, comparisons: int, swaps: int, elapsed_ms: float) -> None:
        pass

    def on_run_state_changed(self, state) -> None:
        pass

    def on_array_replaced(self, values: List[int]) -> None:
        pass

    def on_step(self, step: "Step") -> None:
        pass


class EventHub(SortListener):
    def __init__(self):
        self._listeners: List[SortListener] = []

    def subscribe(self, listener: SortListener) -> SortListener:
        if listener not in self._listeners:
            self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: SortListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def __len__(self) -> int:
        return len(self._listeners)

    # -- fan-out --
    def on_value_changed(self, index, value):
        for l in list(self._listeners):
            l.on_value_changed(index, value)

    def on_tag_changed(self, index, tags):
        for l in list(self._listeners):
            l.on_tag_changed(index, tags)

    def on_stats_changed(self, comparisons, swaps, elapsed_ms):
        for l in list(self._listeners):
            l.on_stats_changed(comparisons, swaps, elapsed_ms)

    def on_run_state_changed(self, state):
        for l in list(self._listeners):
            l.on_run_state_changed(state)

    def on_array_replaced(self, values):
        for l in list(self._listeners):
            l.on_array_replaced(values)

    def on_step(self, step):
        for l in list(self._listeners):
            l.on_step(step)
