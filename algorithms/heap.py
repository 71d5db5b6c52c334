"""
heap.py — Heap Sort
====================
Build a max-heap bottom-up with sift-down, then repeatedly swap the
root (the maximum) behind the shrinking heap and sift the new root down.
Children are checked left first; the right child only takes over when it
is strictly larger, so on equal children the left one wins.
"""

from typing import List

from algorithms.step import SortTracer, Trace
from model import Tag


PSEUDOCODE: List[str] = [
    "def heap_sort(a):",                                    # 0
    "    for i in n//2-1 .. 0: sift_down(a, n, i)",         # 1
    "    for end in n-1 .. 1:",                             # 2
    "        swap(a[0], a[end])",                           # 3
    "        sift_down(a, end, 0)",                         # 4
    "def sift_down(a, size, i):",                           # 5
    "    largest ← i",                                      # 6
    "    if left < size and a[left] > a[largest]: …",       # 7
    "    if right < size and a[right] > a[largest]: …",     # 8
    "    if largest ≠ i: swap, sift_down(a, size, largest)", # 9
]


def heap_sort(t: SortTracer) -> Trace:
    n = t.n
    for i in range(n // 2 - 1, -1, -1):
        yield from _sift_down(t, n, i)

    for end in range(n - 1, 0, -1):
        yield from t.swap(
            0, end, line=3,
            explanation=f"Root {t.model[0]} is the heap maximum — move it to position {end}.",
        )
        t.mark(end, Tag.SORTED)
        yield from _sift_down(t, end, 0)
    if n:
        t.mark(0, Tag.SORTED)


def _sift_down(t: SortTracer, size: int, i: int) -> Trace:
    a = t.model
    largest = i
    left, right = 2 * i + 1, 2 * i + 2

    if left < size:
        yield from t.compare(largest, left, line=7)
        if a[left] > a[largest]:
            largest = left

    if right < size:
        yield from t.compare(largest, right, line=8)
        if a[right] > a[largest]:
            largest = right

    if largest != i:
        yield from t.swap(i, largest, line=9)
        yield from _sift_down(t, size, largest)
