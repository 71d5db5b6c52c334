"""
algorithms/__init__.py — Algorithm Registry
============================================
Single source of truth for every sorting algorithm the visualizer knows.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, fn, pseudocode, tags, stable, …),
        …
    }

Every `fn` is a generator function taking a SortTracer.  Adding an
algorithm is: write the generator, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from algorithms.bubble    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc
from algorithms.selection import selection_sort as _selection, PSEUDOCODE as _selection_pc
from algorithms.insertion import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc
from algorithms.quick     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc
from algorithms.merge     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc
from algorithms.heap      import heap_sort      as _heap,      PSEUDOCODE as _heap_pc
from algorithms.shell     import shell_sort     as _shell,     PSEUDOCODE as _shell_pc
from algorithms.radix     import radix_sort     as _radix,     PSEUDOCODE as _radix_pc


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bubble"
    label:            str                    # human label, e.g. "Bubble Sort"
    fn:               Callable               # the generator function
    pseudocode:       List[str]              # lines for the side-panel
    tags:             List[str] = field(default_factory=list)   # e.g. ["comparison", "in-place"]
    stable:           bool     = False
    complexity_time:  str      = ""          # e.g. "O(n²)"
    complexity_space: str      = ""          # e.g. "O(1)"
    description:      str      = ""          # one-liner for the info card


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", fn=_bubble, pseudocode=_bubble_pc,
        tags=["comparison", "in-place", "quadratic"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Compares adjacent elements and swaps them if they are in the wrong "
                    "order, repeating until the array is sorted.",
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort", fn=_selection, pseudocode=_selection_pc,
        tags=["comparison", "in-place", "quadratic"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Finds the minimum of the unsorted portion and places it at the "
                    "beginning, then repeats for the remaining array.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", fn=_insertion, pseudocode=_insertion_pc,
        tags=["comparison", "in-place", "quadratic"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Builds the sorted array one element at a time by inserting each "
                    "element into its correct position.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", fn=_quick, pseudocode=_quick_pc,
        tags=["comparison", "in-place", "divide-and-conquer"],
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Picks the last element as pivot, partitions the range into smaller "
                    "and larger elements, then sorts both partitions recursively.",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort", fn=_merge, pseudocode=_merge_pc,
        tags=["comparison", "divide-and-conquer"], stable=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Divides the array into two halves, sorts them recursively, then "
                    "merges the sorted halves.",
    ),

    "heap": AlgoInfo(
        key="heap", label="Heap Sort", fn=_heap, pseudocode=_heap_pc,
        tags=["comparison", "in-place"],
        complexity_time="O(n log n)", complexity_space="O(1)",
        description="Builds a max-heap and repeatedly extracts the maximum, restoring "
                    "the heap each time.",
    ),

    "shell": AlgoInfo(
        key="shell", label="Shell Sort", fn=_shell, pseudocode=_shell_pc,
        tags=["comparison", "in-place", "gap"],
        complexity_time="O(n²) worst (gap halving)", complexity_space="O(1)",
        description="Insertion sort over elements a gap apart, halving the gap until it "
                    "reaches one.",
    ),

    "radix": AlgoInfo(
        key="radix", label="LSD Radix Sort", fn=_radix, pseudocode=_radix_pc,
        tags=["non-comparison", "digit"], stable=True,
        complexity_time="O(d · (n + 10))", complexity_space="O(n)",
        description="Sorts non-negative integers digit by digit, least significant first, "
                    "with a stable counting pass per digit.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
]
