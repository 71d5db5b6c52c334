"""
selection.py — Selection Sort
==============================
Scan the unsorted suffix for its minimum, then move it to the front
with one swap.  Every probe of the scan is a comparison, even when the
minimum does not change.  Ties keep the first minimum found, which is
why the algorithm is not stable (the long-range swap can jump over an
equal value).
"""

from typing import List

from algorithms.step import SortTracer, Trace
from model import Tag


PSEUDOCODE: List[str] = [
    "def selection_sort(a):",                       # 0
    "    for i in 0 .. n-2:",                       # 1
    "        min ← i",                              # 2
    "        for j in i+1 .. n-1:",                 # 3
    "            if a[j] < a[min]: min ← j",        # 4
    "        if min ≠ i: swap(a[i], a[min])",       # 5
]


def selection_sort(t: SortTracer) -> Trace:
    a = t.model
    n = t.n
    for i in range(n - 1):
        min_idx = i
        t.mark(i, Tag.SELECTED)
        for j in range(i + 1, n):
            yield from t.compare(min_idx, j, line=4)
            if a[j] < a[min_idx]:
                t.unmark(min_idx, Tag.SELECTED)
                min_idx = j
                t.mark(min_idx, Tag.SELECTED)

        if min_idx != i:
            yield from t.swap(
                i, min_idx, line=5,
                explanation=f"Smallest remaining value {a[min_idx]} moves to position {i}.",
            )
        t.unmark(min_idx, Tag.SELECTED)
        t.unmark(i, Tag.SELECTED)
        t.mark(i, Tag.SORTED)
    if n:
        t.mark(n - 1, Tag.SORTED)
