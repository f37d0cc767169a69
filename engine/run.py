"""
run.py — One Algorithm Execution
=================================
A Run bundles the input snapshot, the fully materialised Step sequence
and the playback cursor.  It is created by the Recorder, its cursor and
status are moved only by the PlaybackController, and it is thrown away
when the caller resets or starts another run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from arrays.element import ArrayElement
from algorithms.step import Step


class RunStatus(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    FINISHED = "finished"


@dataclass
class Run:
    """
    Attributes:
        algorithm      : Registry key the steps were generated with.
        input_snapshot : The array as it was handed to the generator.
        steps          : Complete Step sequence (empty if unsupported).
        cursor         : Index of the step currently shown.
        status         : RunStatus.
        error          : Set when the run could not be produced.
    """

    algorithm:      str
    input_snapshot: List[ArrayElement]  = field(default_factory=list)
    steps:          List[Step]          = field(default_factory=list)
    cursor:         int                 = 0
    status:         RunStatus           = RunStatus.IDLE
    error:          Optional[str]       = None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.cursor < len(self.steps):
            return self.steps[self.cursor]
        return None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.steps)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm":   self.algorithm,
            "cursor":      self.cursor,
            "total_steps": self.total_steps,
            "status":      self.status.value,
            "error":       self.error,
        }
