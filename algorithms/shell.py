"""
shell.py — Shell Sort
======================
Insertion sort over a shrinking gap sequence: n//2, n//4, …, 1.
Each gap pass uses the same shift-and-insert loop as insertion sort,
so it inherits the same accounting and the same abort handling.
Not stable — long-gap moves can reorder equal values.
"""

from typing import List

from algorithms.insertion import gapped_insertion
from algorithms.step import SortTracer, Trace
from model import Tag


PSEUDOCODE: List[str] = [
    "def shell_sort(a):",                                   # 0
    "    gap ← n // 2",                                     # 1
    "    while gap > 0:",                                   # 2
    "        for i in gap .. n-1:",                         # 3
    "            key ← a[i];  hole ← i",                    # 4
    "            while hole ≥ gap and a[hole-gap] > key:",  # 5
    "                a[hole] ← a[hole-gap]",                # 6
    "                hole ← hole - gap",                    # 7
    "            a[hole] ← key",                            # 8
    "        gap ← gap // 2",                               # 9
]


def shell_sort(t: SortTracer) -> Trace:
    gap = t.n // 2
    while gap > 0:
        yield from gapped_insertion(t, gap, lines=(5, 6, 8))
        gap //= 2
    t.mark_range(0, t.n, Tag.SORTED)
