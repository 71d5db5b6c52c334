"""
insertion.py — Insertion Sort
==============================
Take a[i] out as the key, shift every greater predecessor one slot to
the right, drop the key into the hole.  Stable — shifting stops at the
first predecessor that is <= key.

Accounting: every shift is a counted write; dropping the key into the
hole is shown as a step but not counted.  Every probe, including the
one that ends the scan, is a comparison.

While the key is held outside the array one slot holds a stale
duplicate; if the run is stopped there the key is written back into
the hole so the array stays a permutation of its input.
"""

from typing import List

from algorithms.step import SortTracer, Trace
from errors import SortAbortedError
from model import Tag


PSEUDOCODE: List[str] = [
    "def insertion_sort(a):",                       # 0
    "    for i in 1 .. n-1:",                       # 1
    "        key ← a[i];  hole ← i",                # 2
    "        while hole > 0 and a[hole-1] > key:",  # 3
    "            a[hole] ← a[hole-1]",              # 4
    "            hole ← hole - 1",                  # 5
    "        a[hole] ← key",                        # 6
]


def insertion_sort(t: SortTracer) -> Trace:
    yield from gapped_insertion(t, gap=1, lines=(3, 4, 6))
    t.mark_range(0, t.n, Tag.SORTED)


def gapped_insertion(t: SortTracer, gap: int, lines=(0, 0, 0)) -> Trace:
    """One insertion pass over elements `gap` apart (gap=1 is plain insertion sort)."""
    a = t.model
    compare_line, shift_line, place_line = lines
    for i in range(gap, t.n):
        key = a[i]
        hole = i
        t.mark(i, Tag.SELECTED)
        try:
            while hole >= gap:
                prev = hole - gap
                yield from t.compare(
                    prev, hole, line=compare_line,
                    explanation=f"Compare a[{prev}]={a[prev]} with key {key}.",
                )
                if a[prev] <= key:
                    break
                dst, hole = hole, prev
                yield from t.write(
                    dst, a[prev], line=shift_line,
                    explanation=f"{a[prev]} > {key} — shift it right to position {dst}.",
                )
            if hole != i:
                yield from t.place(
                    hole, key, line=place_line,
                    explanation=f"Insert key {key} at position {hole}.",
                )
        except SortAbortedError:
            a.set(hole, key, counted=False)
            raise
        finally:
            t.unmark(i, Tag.SELECTED)
