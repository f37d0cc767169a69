"""
step.py — Algorithm Step Snapshot
==================================
Every sorting algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • The full array, in its current order, with a state per element
    • Which indices are being compared / swapped / marked right now
    • Which positions are already known to be sorted
    • A plain-English description of what just happened

Design decisions:
  - Step and ArrayElement are frozen dataclasses holding tuples, so a
    Step cannot change after it is yielded. The generator is the only
    writer; the playback controller and renderer are pure readers.
  - `highlight` says what this one step is about; `sorted_indices` is
    the running total and only ever grows within a run.
  - `step_number` / `total_steps` are stamped when the sequence is
    materialised (see algorithms.generate_steps), since a lazy
    generator cannot know its own length.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Sequence, Set, Tuple

from arrays.element import ArrayElement, ElementState


class HighlightKind(Enum):
    COMPARING = "comparing"   # pair (i, j)
    SWAPPING  = "swapping"    # pair (i, j)
    SORTED    = "sorted"      # set of indices
    PIVOT     = "pivot"       # single index
    CURRENT   = "current"     # single index
    NONE      = "none"


@dataclass(frozen=True)
class Highlight:
    kind:    HighlightKind   = HighlightKind.NONE
    indices: Tuple[int, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "indices": list(self.indices)}


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number    : 0-based index of this step in the run.
        total_steps    : Length of the materialised sequence (0 while lazy).
        elements       : Full array snapshot after this step's mutation.
        description    : Human-readable text for the step.
        highlight      : What this step is about (compare / swap / sorted …).
        sorted_indices : Positions known to be sorted so far (never shrinks).
        is_final       : True on the very last step (everything sorted).
    """

    step_number:    int                       = 0
    total_steps:    int                       = 0
    elements:       Tuple[ArrayElement, ...]  = ()
    description:    str                       = ""
    highlight:      Highlight                 = field(default_factory=Highlight)
    sorted_indices: FrozenSet[int]            = frozenset()
    is_final:       bool                      = False

    @property
    def values(self) -> List[float]:
        return [el.value for el in self.elements]

    @property
    def states(self) -> List[ElementState]:
        return [el.state for el in self.elements]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number":    self.step_number,
            "total_steps":    self.total_steps,
            "elements":       [el.to_dict() for el in self.elements],
            "description":    self.description,
            "highlight":      self.highlight.to_dict(),
            "sorted_indices": sorted(self.sorted_indices),
            "is_final":       self.is_final,
        }


# ---------------------------------------------------------------------------
# Convenience builder so algorithms don't have to spell out every snapshot
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Owns the working copy of the array for one run and turns its current
    contents into Steps.

    Usage inside an algorithm generator:
        sb  = StepBuilder(elements)
        arr = sb.working
        yield sb.build(
            f"Comparing elements at positions {j} and {j + 1}",
            Highlight(HighlightKind.COMPARING, (j, j + 1)),
            marks={j: ElementState.COMPARING, j + 1: ElementState.COMPARING},
        )
        sb.swap(j, j + 1)
        …
        yield sb.build_final()

    Any index not in `marks` is painted SORTED if it is in `sorted_indices`,
    else DEFAULT.
    """

    def __init__(self, elements: Sequence[ArrayElement]):
        self.working:        List[ArrayElement] = [el.with_state(ElementState.DEFAULT) for el in elements]
        self.sorted_indices: Set[int]           = set()
        self.step_no:        int                = 0
        self._painted:       Dict[Tuple[ArrayElement, ElementState], ArrayElement] = {}
        self._frozen_sorted: FrozenSet[int]     = frozenset()

    # -- helpers --
    def swap(self, i: int, j: int) -> None:
        self.working[i], self.working[j] = self.working[j], self.working[i]

    def mark_sorted(self, *indices: int) -> None:
        self.sorted_indices.update(indices)
        if len(self.sorted_indices) != len(self._frozen_sorted):
            self._frozen_sorted = frozenset(self.sorted_indices)

    def build(
        self,
        description: str,
        highlight: Highlight,
        marks: Optional[Mapping[int, ElementState]] = None,
        is_final: bool = False,
    ) -> Step:
        marks = marks or {}

        snapshot = []
        for idx, el in enumerate(self.working):
            state = marks.get(idx)
            if state is None:
                state = ElementState.SORTED if idx in self.sorted_indices else ElementState.DEFAULT
            snapshot.append(self._paint(el, state))

        step = Step(
            step_number=self.step_no,
            elements=tuple(snapshot),
            description=description,
            highlight=highlight,
            sorted_indices=self._frozen_sorted,
            is_final=is_final,
        )
        self.step_no += 1
        return step

    def _paint(self, el: ArrayElement, state: ElementState) -> ArrayElement:
        # one instance per (element, state): snapshots share them
        key = (el, state)
        painted = self._painted.get(key)
        if painted is None:
            painted = self._painted[key] = el.with_state(state)
        return painted

    def build_final(self) -> Step:
        n = len(self.working)
        self.mark_sorted(*range(n))
        description = "Array is completely sorted!" if n > 1 else "Array is already sorted"
        return self.build(
            description,
            Highlight(HighlightKind.SORTED, tuple(range(n))),
            is_final=True,
        )
