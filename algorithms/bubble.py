"""
bubble.py — Bubble Sort
========================
Adjacent compare-swap passes.  After pass i the largest i+1 values sit
in their final slots, so the upper bound shrinks by one each pass.
No early exit: a pass without swaps still runs, which keeps the
comparison count at exactly n(n-1)/2.

Stable — only a strict `>` triggers a swap.
"""

from typing import List

from algorithms.step import SortTracer, Trace
from model import Tag


PSEUDOCODE: List[str] = [
    "def bubble_sort(a):",                          # 0
    "    for i in 0 .. n-2:",                       # 1
    "        for j in 0 .. n-i-2:",                 # 2
    "            if a[j] > a[j+1]:",                # 3
    "                swap(a[j], a[j+1])",           # 4
    "        mark a[n-i-1] sorted",                 # 5
]


def bubble_sort(t: SortTracer) -> Trace:
    a = t.model
    n = t.n
    for i in range(n - 1):
        for j in range(n - i - 1):
            yield from t.compare(j, j + 1, line=3)
            if a[j] > a[j + 1]:
                yield from t.swap(
                    j, j + 1, line=4,
                    explanation=f"a[{j}] > a[{j + 1}] — out of order, swap them.",
                )
        t.mark(n - i - 1, Tag.SORTED)
    if n:
        t.mark(0, Tag.SORTED)
