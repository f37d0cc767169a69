"""
engine/
-------
Playback & recording layer.

    from engine import PlaybackController, Recorder, VisualizationState
"""

from engine.run      import Run, RunStatus
from engine.playback import (
    PlaybackController,
    PlaybackHandle,
    PlaybackState,
    SPEED_PRESETS,
    delay_for_speed,
    resolve_speed,
)
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare
from engine.state    import VisualizationState

__all__ = [
    "Run",
    "RunStatus",
    "PlaybackController",
    "PlaybackHandle",
    "PlaybackState",
    "SPEED_PRESETS",
    "delay_for_speed",
    "resolve_speed",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "VisualizationState",
]
