"""
engine/
-------
Scheduling, playback & run layer.

    from engine import AlgorithmRunner, Playback, TimerScheduler, ManualScheduler
"""

from engine.scheduler import Scheduler, TimerScheduler, ManualScheduler
from engine.playback  import Playback, PlaybackRun, PlaybackState, SPEED_PRESETS
from engine.runner    import AlgorithmRunner, RunRequestError

__all__ = [
    "Scheduler",
    "TimerScheduler",
    "ManualScheduler",
    "Playback",
    "PlaybackRun",
    "PlaybackState",
    "SPEED_PRESETS",
    "AlgorithmRunner",
    "RunRequestError",
]
