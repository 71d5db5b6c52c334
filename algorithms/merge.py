"""
merge.py — Merge Sort (top-down)
=================================
Split at mid = (lo + hi) // 2, sort both halves, then merge them back
through two temporary buffers.  `<=` takes from the left run on ties,
which makes the sort stable.

Accounting (kept deliberately): every copy back into the array is a
counted write, so "swaps" for merge sort is the number of writes.

Mid-merge the array holds a prefix of merged output followed by stale
values.  If the run is stopped there, the unconsumed tails of both
buffers are written back behind the merged prefix, which restores a
permutation of the input.
"""

from typing import List

from algorithms.step import SortTracer, Trace
from errors import SortAbortedError
from model import Tag


PSEUDOCODE: List[str] = [
    "def merge_sort(a, lo, hi):",                       # 0
    "    if lo < hi:",                                  # 1
    "        mid ← (lo + hi) // 2",                     # 2
    "        merge_sort(a, lo, mid)",                   # 3
    "        merge_sort(a, mid+1, hi)",                 # 4
    "        L ← a[lo..mid];  R ← a[mid+1..hi]",        # 5
    "        while L and R:",                           # 6
    "            if L[0] <= R[0]: a[k++] ← L.pop(0)",   # 7
    "            else:            a[k++] ← R.pop(0)",   # 8
    "        copy the rest of L, then of R",            # 9
]


def merge_sort(t: SortTracer) -> Trace:
    yield from _merge_sort(t, 0, t.n - 1)
    t.mark_range(0, t.n, Tag.SORTED)


def _merge_sort(t: SortTracer, lo: int, hi: int) -> Trace:
    if lo < hi:
        mid = (lo + hi) // 2
        yield from _merge_sort(t, lo, mid)
        yield from _merge_sort(t, mid + 1, hi)
        yield from _merge(t, lo, mid, hi)


def _merge(t: SortTracer, lo: int, mid: int, hi: int) -> Trace:
    a = t.model
    left = [a[x] for x in range(lo, mid + 1)]
    right = [a[x] for x in range(mid + 1, hi + 1)]
    i = j = 0
    k = lo
    try:
        while i < len(left) and j < len(right):
            # highlight where each run head started out
            yield from t.compare(
                lo + i, mid + 1 + j, line=6,
                explanation=f"Compare left head {left[i]} with right head {right[j]}.",
            )
            if left[i] <= right[j]:
                value, line = left[i], 7
                i += 1
            else:
                value, line = right[j], 8
                j += 1
            k += 1
            yield from t.write(k - 1, value, line=line)

        while i < len(left):
            value = left[i]
            i += 1
            k += 1
            yield from t.write(k - 1, value, line=9)

        while j < len(right):
            value = right[j]
            j += 1
            k += 1
            yield from t.write(k - 1, value, line=9)
    except SortAbortedError:
        for offset, value in enumerate(left[i:] + right[j:]):
            a.set(k + offset, value, counted=False)
        raise
