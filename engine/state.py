"""
state.py — Visualization State
===============================
The view model a renderer reads.  Playback pushes every delivered Step
into it via `apply`; the renderer polls `snapshot()` and never needs to
know anything about the algorithm that produced the data.

Writes come from the playback worker thread while reads come from the
request thread, so every access goes through one lock.
"""

import threading
from typing import Any, Dict, List, Optional, Sequence

from arrays.element import ArrayElement, ElementState
from algorithms.step import Highlight, Step


class VisualizationState:

    def __init__(self):
        self._lock = threading.Lock()
        self._elements:    List[ArrayElement] = []
        self._highlight:   Highlight          = Highlight()
        self._description: str                = ""
        self._step_index:  int                = -1
        self._total_steps: int                = 0
        self._sorted:      List[int]          = []

    def load(self, elements: Sequence[ArrayElement]) -> None:
        """Show a fresh, un-run array."""
        with self._lock:
            self._elements    = [el.with_state(ElementState.DEFAULT) for el in elements]
            self._highlight   = Highlight()
            self._description = ""
            self._step_index  = -1
            self._total_steps = 0
            self._sorted      = []

    def apply(self, step: Step, index: int) -> None:
        """on_step callback target for the PlaybackController."""
        with self._lock:
            self._elements    = list(step.elements)
            self._highlight   = step.highlight
            self._description = step.description
            self._step_index  = index
            self._total_steps = step.total_steps
            self._sorted      = sorted(step.sorted_indices)

    def clear(self) -> None:
        self.load([])

    @property
    def step_index(self) -> int:
        with self._lock:
            return self._step_index

    @property
    def elements(self) -> List[ArrayElement]:
        with self._lock:
            return list(self._elements)

    def snapshot(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        with self._lock:
            data = {
                "elements":       [el.to_dict() for el in self._elements],
                "values":         [el.value for el in self._elements],
                "states":         [el.state.value for el in self._elements],
                "highlight":      self._highlight.to_dict(),
                "description":    self._description,
                "step_index":     self._step_index,
                "total_steps":    self._total_steps,
                "sorted_indices": list(self._sorted),
            }
        if extra:
            data.update(extra)
        return data

    to_dict = snapshot
