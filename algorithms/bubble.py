"""
bubble.py — Bubble Sort
========================
Generator-based bubble sort.  Yields a Step at every meaningful event:
  1. Compare a[j] and a[j+1]               →  COMPARING pair
  2. Swap them if a[j] > a[j+1]            →  SWAPPING pair (after the swap)
  3. End of outer pass i                   →  position n-i-1 is SORTED
  4. Final step                            →  everything SORTED

Ties never swap, so equal values keep their relative order.

This is also the stand-in for merge / quick / heap sort until those get
their own generators (see the registry in algorithms/__init__.py).
"""

from typing import Generator, Sequence

from arrays.element import ArrayElement, ElementState
from algorithms.step import Step, StepBuilder, Highlight, HighlightKind


def bubble_sort(elements: Sequence[ArrayElement]) -> Generator[Step, None, None]:
    sb  = StepBuilder(elements)
    arr = sb.working
    n   = len(arr)

    for i in range(n - 1):
        for j in range(n - i - 1):
            yield sb.build(
                f"Comparing elements at positions {j} and {j + 1}",
                Highlight(HighlightKind.COMPARING, (j, j + 1)),
                marks={j: ElementState.COMPARING, j + 1: ElementState.COMPARING},
            )

            if arr[j].value > arr[j + 1].value:
                sb.swap(j, j + 1)
                yield sb.build(
                    f"Swapping elements {arr[j + 1].value} and {arr[j].value}",
                    Highlight(HighlightKind.SWAPPING, (j, j + 1)),
                    marks={j: ElementState.SWAPPING, j + 1: ElementState.SWAPPING},
                )

        # largest remaining value has bubbled to the end of the window
        last = n - i - 1
        sb.mark_sorted(last)
        yield sb.build(
            f"Element {arr[last].value} is in its final position",
            Highlight(HighlightKind.SORTED, (last,)),
        )

    yield sb.build_final()
