"""
recorder.py — Run Recorder & Analytics
========================================
Builds a complete Run (all Steps, generated eagerly), then computes the
analytics the UI shows next to the bars and in Comparison Mode.

Usage:
    rec = Recorder()
    run = rec.start(algo_key="bubble", elements=arr)
    if run.error: …                  # unsupported selector, nothing to play
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot

Comparison Mode:
    Two Recorders, one per algorithm, fed the SAME array, then
    compare(rec1, rec2) → ComparisonResult.
"""

import sys
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Sequence

from arrays.element import ArrayElement, validate_elements
from algorithms import get_algorithm, generate_steps, AlgoInfo
from algorithms.step import Step, HighlightKind
from engine.run import Run
from shared.logger import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    placeholder:   bool  = False      # steps came from the bubble sort stand-in
    array_size:    int   = 0
    comparisons:   int   = 0          # COMPARING steps
    swaps:         int   = 0          # SWAPPING steps
    total_steps:   int   = 0
    wall_time_ms:  float = 0.0        # time to generate the whole sequence
    memory_bytes:  int   = 0          # approx size of the step buffer
    supported:     bool  = True


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""
    winner_swaps:       str = ""
    winner_steps:       str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        run     : The Run built by the last start() call.
        metrics : RunMetrics for that run.
    """

    def __init__(self):
        self.run:     Optional[Run]        = None
        self.metrics: Optional[RunMetrics] = None

        self._algo_info: Optional[AlgoInfo] = None

    def start(self, algo_key: str, elements: Sequence[ArrayElement]) -> Run:
        """
        Generate every Step for `algo_key` over `elements`.

        Bad input raises (TypeError / ValueError).  An unknown algorithm
        does not: the Run comes back empty with `error` set.
        """
        snapshot = validate_elements(elements)

        self._algo_info = get_algorithm(algo_key)
        started = time.monotonic()
        steps = generate_steps(algo_key, snapshot)
        wall_ms = (time.monotonic() - started) * 1000

        run = Run(algorithm=algo_key, input_snapshot=snapshot, steps=steps)
        if self._algo_info is None:
            run.error = f"Unsupported algorithm: {algo_key}"

        self.run     = run
        self.metrics = self._compute_metrics(wall_ms)
        if run.error is None:
            logger.info("Recorded %s over %d elements: %d steps",
                        algo_key, len(snapshot), len(steps))
        return run

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def steps(self) -> List[Step]:
        return self.run.steps if self.run else []

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        run = self.run
        return {
            "algo_key": run.algorithm if run else "",
            "input":    [el.to_dict() for el in run.input_snapshot] if run else [],
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "run":      run.to_dict() if run else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info  = self._algo_info
        run   = self.run
        steps = run.steps

        comparisons = sum(1 for s in steps if s.highlight.kind == HighlightKind.COMPARING)
        swaps       = sum(1 for s in steps if s.highlight.kind == HighlightKind.SWAPPING)

        mem = sys.getsizeof(steps)
        for s in steps:
            mem += sys.getsizeof(s) + sys.getsizeof(s.elements)

        return RunMetrics(
            algo_key=run.algorithm,
            algo_label=info.label if info else "",
            placeholder=info.placeholder if info else False,
            array_size=len(run.input_snapshot),
            comparisons=comparisons,
            swaps=swaps,
            total_steps=len(steps),
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
            supported=info is not None,
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult (fewer is better)."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.algo_label if l_val < r_val else r.algo_label

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons),
        winner_swaps=winner(l.swaps, r.swaps),
        winner_steps=winner(l.total_steps, r.total_steps),
    )
