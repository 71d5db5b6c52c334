"""
radix.py — LSD Radix Sort (base 10)
====================================
Non-negative integers only.  Find the maximum (n-1 comparisons), then
run one stable counting-sort pass per decimal digit, least significant
first.  Each pass:

    1. inspect every element and count its digit
    2. walk the input backwards, placing each value into an output buffer
       (also inspected, one step per element)
    3. write the buffer back — every write is counted as a swap

Digit inspection is a visible step but not a comparison.  If stopped
during the write-back, the rest of the buffer is written in so the array
is still a permutation of its input.
"""

from typing import List

from algorithms.step import SortTracer, Trace
from errors import SortAbortedError
from model import Tag


BASE = 10

PSEUDOCODE: List[str] = [
    "def radix_sort(a):",                                   # 0
    "    m ← max(a);  exp ← 1",                             # 1
    "    while m // exp > 0:",                              # 2
    "        count[d] ← #values with digit d at exp",       # 3
    "        prefix-sum count",                             # 4
    "        for i in n-1 .. 0: out[--count[d]] ← a[i]",    # 5
    "        a ← out",                                      # 6
    "        exp ← exp * 10",                               # 7
]


def radix_sort(t: SortTracer) -> Trace:
    a = t.model
    n = t.n
    if n == 0:
        return

    max_idx = 0
    for i in range(1, n):
        yield from t.compare(max_idx, i, line=1)
        if a[i] > a[max_idx]:
            max_idx = i
    max_value = a[max_idx]

    exp = 1
    while max_value // exp > 0:
        yield from _counting_pass(t, exp)
        exp *= BASE
    t.mark_range(0, n, Tag.SORTED)


def digit(value: int, exp: int) -> int:
    return (value // exp) % BASE


def _counting_pass(t: SortTracer, exp: int) -> Trace:
    a = t.model
    n = t.n
    counts = [0] * BASE
    for i in range(n):
        yield from t.inspect(
            i, line=3,
            explanation=f"Digit of {a[i]} at place {exp} is {digit(a[i], exp)}.",
        )
        counts[digit(a[i], exp)] += 1
    for d in range(1, BASE):
        counts[d] += counts[d - 1]

    output = [0] * n
    for i in range(n - 1, -1, -1):
        d = digit(a[i], exp)
        counts[d] -= 1
        output[counts[d]] = a[i]
        yield from t.inspect(
            i, line=5,
            explanation=f"{a[i]} goes to slot {counts[d]} of the output buffer.",
        )

    written = 0
    try:
        for i in range(n):
            written = i + 1
            yield from t.write(i, output[i], line=6)
    except SortAbortedError:
        for i in range(written, n):
            a.set(i, output[i], counted=False)
        raise
