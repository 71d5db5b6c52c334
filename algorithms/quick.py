"""
quick.py — Quick Sort (Lomuto partition)
=========================================
Pivot = last element of the range.  Values strictly smaller than the
pivot are swapped into the left block; values equal to the pivot stay
on the "greater-or-equal" side.  A swap of an element with itself is
skipped and not counted.  After partitioning, the pivot sits in its
final slot and both sides are sorted recursively.
"""

from typing import List

from algorithms.step import SortTracer, Trace
from model import Tag


PSEUDOCODE: List[str] = [
    "def quick_sort(a, lo, hi):",                   # 0
    "    if lo < hi:",                              # 1
    "        p ← partition(a, lo, hi)",             # 2
    "        quick_sort(a, lo, p-1)",               # 3
    "        quick_sort(a, p+1, hi)",               # 4
    "def partition(a, lo, hi):",                    # 5
    "    pivot ← a[hi];  i ← lo - 1",               # 6
    "    for j in lo .. hi-1:",                     # 7
    "        if a[j] < pivot:",                     # 8
    "            i ← i + 1;  swap(a[i], a[j])",     # 9
    "    swap(a[i+1], a[hi])",                      # 10
    "    return i + 1",                             # 11
]


def quick_sort(t: SortTracer) -> Trace:
    yield from _quick(t, 0, t.n - 1)
    t.mark_range(0, t.n, Tag.SORTED)


def _quick(t: SortTracer, lo: int, hi: int) -> Trace:
    if lo < hi:
        p = yield from _partition(t, lo, hi)
        yield from _quick(t, lo, p - 1)
        yield from _quick(t, p + 1, hi)
    elif lo == hi:
        t.mark(lo, Tag.SORTED)


def _partition(t: SortTracer, lo: int, hi: int):
    a = t.model
    pivot = a[hi]
    t.mark(hi, Tag.PIVOT)
    i = lo - 1
    try:
        for j in range(lo, hi):
            yield from t.compare(
                j, hi, line=8,
                explanation=f"Compare a[{j}]={a[j]} with pivot {pivot}.",
            )
            if a[j] < pivot:
                i += 1
                yield from t.swap(i, j, line=9)
        yield from t.swap(
            i + 1, hi, line=10,
            explanation=f"Pivot {pivot} moves to its final position {i + 1}.",
        )
    finally:
        t.unmark(hi, Tag.PIVOT)
    t.mark(i + 1, Tag.SORTED)
    return i + 1
