"""
insertion.py — Insertion Sort
==============================
Grows a sorted prefix one element at a time.

Events per key (i = 1 … n-1):
  1. Pick up a[i]                             →  CURRENT i
  2. Each shift of a larger left neighbour    →  COMPARING (j, j+1)
  3. Key dropped into its slot                →  prefix 0..i SORTED

The key only moves past strictly greater values, so equal values keep
their relative order.  Each comparing step is captured before its shift
is applied and shifts are done by exchanging neighbours, so every
snapshot is a permutation of the input (no half-shifted duplicates).
While a key is in flight the sorted prefix is still 0..i-1; position i
only turns SORTED once the key has landed.
"""

from typing import Generator, Sequence

from arrays.element import ArrayElement, ElementState
from algorithms.step import Step, StepBuilder, Highlight, HighlightKind


def insertion_sort(elements: Sequence[ArrayElement]) -> Generator[Step, None, None]:
    sb  = StepBuilder(elements)
    arr = sb.working
    n   = len(arr)

    if n > 1:
        # a one-element prefix is trivially sorted
        sb.mark_sorted(0)

    for i in range(1, n):
        key = arr[i]
        yield sb.build(
            f"Inserting element {key.value} into sorted portion",
            Highlight(HighlightKind.CURRENT, (i,)),
            marks={i: ElementState.CURRENT},
        )

        j = i - 1
        while j >= 0 and arr[j].value > key.value:
            yield sb.build(
                f"Moving element {arr[j].value} one position right",
                Highlight(HighlightKind.COMPARING, (j, j + 1)),
                marks={j: ElementState.COMPARING, j + 1: ElementState.COMPARING},
            )
            sb.swap(j, j + 1)
            j -= 1

        sb.mark_sorted(*range(i + 1))
        yield sb.build(
            f"Element {key.value} placed in correct position",
            Highlight(HighlightKind.SORTED, tuple(range(i + 1))),
        )

    yield sb.build_final()
