"""
selection.py — Selection Sort
==============================
For each position i, scan the unsorted tail for the minimum and swap it
into place.

Events:
  1. Each scanned candidate j vs. the running minimum  →  COMPARING (j, minIdx);
     the running minimum is painted PIVOT
  2. After the scan, if minIdx != i                    →  one SWAPPING step
  3. Final step                                        →  everything SORTED

Only a strictly smaller value replaces the running minimum, so the first
minimum wins on ties.  Positions < i are SORTED in every step of outer
iteration i.
"""

from typing import Generator, Sequence

from arrays.element import ArrayElement, ElementState
from algorithms.step import Step, StepBuilder, Highlight, HighlightKind


def selection_sort(elements: Sequence[ArrayElement]) -> Generator[Step, None, None]:
    sb  = StepBuilder(elements)
    arr = sb.working
    n   = len(arr)

    for i in range(n - 1):
        min_idx = i

        for j in range(i + 1, n):
            yield sb.build(
                f"Comparing element at position {j} with current minimum at position {min_idx}",
                Highlight(HighlightKind.COMPARING, (j, min_idx)),
                marks={min_idx: ElementState.PIVOT, j: ElementState.COMPARING},
            )
            if arr[j].value < arr[min_idx].value:
                min_idx = j

        if min_idx != i:
            sb.swap(i, min_idx)
            yield sb.build(
                f"Swapping minimum element {arr[i].value} to position {i}",
                Highlight(HighlightKind.SWAPPING, (i, min_idx)),
                marks={i: ElementState.SWAPPING, min_idx: ElementState.SWAPPING},
            )

        sb.mark_sorted(i)

    yield sb.build_final()
