"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sorting algorithm the visualizer knows
about.

    from algorithms import REGISTRY, get_algorithm, generate_steps

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, fn, complexity, …),
        …
    }

Merge, quick and heap sort are declared but not implemented yet: their
entries point at the bubble sort generator and carry `placeholder=True`
so callers can tell that the visualised behaviour is bubble sort, not
what the name says.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Sequence

from arrays.element import ArrayElement, validate_elements
from algorithms.step import Step, StepBuilder, Highlight, HighlightKind
from algorithms.bubble    import bubble_sort
from algorithms.selection import selection_sort
from algorithms.insertion import insertion_sort
from shared.logger import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                 # registry key, e.g. "bubble"
    label:            str                 # human label, e.g. "Bubble Sort"
    fn:               Callable            # the step generator
    complexity_time:  str = ""
    complexity_space: str = ""
    best_case:        str = ""
    worst_case:       str = ""
    description:      str = ""
    placeholder:      bool = False        # True → fn is a stand-in (bubble sort)
    tags:             List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":              self.key,
            "label":            self.label,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "best_case":        self.best_case,
            "worst_case":       self.worst_case,
            "description":      self.description,
            "placeholder":      self.placeholder,
            "tags":             list(self.tags),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", fn=bubble_sort,
        complexity_time="O(n²)", complexity_space="O(1)",
        best_case="O(n)", worst_case="O(n²)",
        description="Repeatedly steps through the list, compares adjacent elements "
                    "and swaps them if they are in the wrong order.",
        tags=["comparison", "stable", "in-place"],
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort", fn=selection_sort,
        complexity_time="O(n²)", complexity_space="O(1)",
        best_case="O(n²)", worst_case="O(n²)",
        description="Finds the minimum element and places it at the beginning. "
                    "Repeats for the remaining unsorted portion.",
        tags=["comparison", "in-place"],
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", fn=insertion_sort,
        complexity_time="O(n²)", complexity_space="O(1)",
        best_case="O(n)", worst_case="O(n²)",
        description="Builds the final sorted array one item at a time by inserting "
                    "each element into its correct position.",
        tags=["comparison", "stable", "in-place"],
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort (Coming Soon)", fn=bubble_sort,
        complexity_time="O(n log n)", complexity_space="O(n)",
        best_case="O(n log n)", worst_case="O(n log n)",
        description="Divides the array into halves, sorts them separately, "
                    "then merges the sorted halves.",
        placeholder=True,
        tags=["comparison", "stable", "divide-and-conquer"],
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort (Coming Soon)", fn=bubble_sort,
        complexity_time="O(n log n)", complexity_space="O(log n)",
        best_case="O(n log n)", worst_case="O(n²)",
        description="Selects a pivot element and partitions the array around it, "
                    "then recursively sorts the sub-arrays.",
        placeholder=True,
        tags=["comparison", "partition", "divide-and-conquer"],
    ),

    "heap": AlgoInfo(
        key="heap", label="Heap Sort (Coming Soon)", fn=bubble_sort,
        complexity_time="O(n log n)", complexity_space="O(1)",
        best_case="O(n log n)", worst_case="O(n log n)",
        description="Builds a max heap from the array, then repeatedly extracts "
                    "the maximum element.",
        placeholder=True,
        tags=["comparison", "in-place"],
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def is_supported(key: str) -> bool:
    return key in REGISTRY


def generate_steps(key: str, elements: Sequence[ArrayElement]) -> List[Step]:
    """
    Run the selected generator to completion and return the full,
    numbered Step sequence.

    An unknown key yields an empty list (logged as a warning) instead of
    raising; callers should check `is_supported` to tell that apart from
    a real result.  Non-array input raises TypeError.
    """
    elements = validate_elements(elements)

    info = get_algorithm(key)
    if info is None:
        logger.warning("Unsupported algorithm %r: no steps generated", key)
        return []
    if info.placeholder:
        logger.info("%s is not implemented yet; visualising bubble sort instead", info.label)

    steps = list(info.fn(elements))
    total = len(steps)
    return [replace(s, step_number=no, total_steps=total) for no, s in enumerate(steps)]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "Step",
    "StepBuilder",
    "Highlight",
    "HighlightKind",
    "bubble_sort",
    "selection_sort",
    "insertion_sort",
    "get_algorithm",
    "list_algorithms",
    "is_supported",
    "generate_steps",
]
