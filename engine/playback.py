"""
playback.py — Step Playback Engine
===================================
Replays an algorithm trace as timed highlight updates.

Step i fires `i * delay` seconds after start():
    highlighted nodes ← previous ∪ {step.node_id}
    highlighted edges ← previous ∪ {step.edge_id}   (if the step has one)
and both sets are published as NEW frozensets through `on_update`.

State machine:
    IDLE      →  start(steps)      →  PLAYING
    PLAYING   →  every step fired  →  FINISHED
    any       →  start(steps)      →  PLAYING   (previous run stopped first)
    any       →  stop()            →  IDLE
    start([])                      →  FINISHED  (no highlights)

Cancellation:
  Each start() creates a PlaybackRun handle that owns every pending
  scheduler token and a generation number.  Stopping cancels all tokens
  AND invalidates the handle under the engine lock; a callback that was
  already on its way checks the handle before touching anything, so no
  update from a stopped run is ever published.
"""

import logging
import threading
from enum import Enum
from functools import partial
from typing import Callable, FrozenSet, List, Optional, Sequence, Set

from algorithms.step import AlgorithmStep
from engine.scheduler import Scheduler

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE     = "idle"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,
    "medium": 0.5,
    "fast":   0.15,
    "turbo":  0.05,
}


# ---------------------------------------------------------------------------
# Run handle
# ---------------------------------------------------------------------------
class PlaybackRun:
    """
    Attributes:
        generation : increases by one per start(); identifies this run.
        total      : number of steps in the trace.
        fired      : number of steps published so far.
        active     : False once finished or cancelled.
    """

    def __init__(self, generation: int, total: int):
        self.generation: int       = generation
        self.total:      int       = total
        self.fired:      int       = 0
        self.active:     bool      = total > 0
        self.tokens:     List      = []
        self.nodes:      Set[str]  = set()
        self.edges:      Set[str]  = set()

    def cancel(self, scheduler: Scheduler) -> None:
        self.active = False
        for token in self.tokens:
            scheduler.cancel(token)
        self.tokens = []


UpdateCallback = Callable[[FrozenSet[str], FrozenSet[str]], None]


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------
class Playback:
    """
    Attributes:
        state     : Current PlaybackState.
        delay     : Seconds between steps.
        on_update : callback(nodes, edges) with the new highlight sets.
        on_clear  : callback() fired when a run is stopped or replaced.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_update: UpdateCallback,
        on_clear: Optional[Callable[[], None]] = None,
        delay: float = SPEED_PRESETS["medium"],
    ):
        self.scheduler = scheduler
        self.on_update = on_update
        self.on_clear  = on_clear
        self.delay:  float         = max(0.0, delay)
        self.state:  PlaybackState = PlaybackState.IDLE

        self._run:        Optional[PlaybackRun] = None
        self._generation: int                   = 0
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, steps: Sequence[AlgorithmStep]) -> PlaybackRun:
        with self._lock:
            self._cancel_current()

            self._generation += 1
            run = PlaybackRun(self._generation, len(steps))
            self._run = run

            if not steps:
                self.state = PlaybackState.FINISHED
                return run

            self.state = PlaybackState.PLAYING
            for index, step in enumerate(steps):
                token = self.scheduler.schedule(
                    index * self.delay,
                    partial(self._fire, run, step),
                )
                run.tokens.append(token)
            logger.debug("Playback #%d scheduled %d steps", run.generation, len(steps))
            return run

    def stop(self) -> None:
        with self._lock:
            self._cancel_current()
            self.state = PlaybackState.IDLE

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> float:
        """Takes effect from the next start()."""
        self.delay = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])
        return self.delay

    def set_delay(self, seconds: float) -> None:
        self.delay = max(0.0, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_run(self) -> Optional[PlaybackRun]:
        return self._run

    @property
    def is_playing(self) -> bool:
        return self.state == PlaybackState.PLAYING

    @property
    def is_finished(self) -> bool:
        return self.state == PlaybackState.FINISHED

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _fire(self, run: PlaybackRun, step: AlgorithmStep) -> None:
        with self._lock:
            if not run.active or run is not self._run:
                return
            run.nodes.add(step.node_id)
            if step.edge_id is not None:
                run.edges.add(step.edge_id)
            run.fired += 1
            self.on_update(frozenset(run.nodes), frozenset(run.edges))

            if run.fired == run.total:
                run.active = False
                run.tokens = []
                self.state = PlaybackState.FINISHED

    def _cancel_current(self) -> None:
        if self._run is not None:
            self._run.cancel(self.scheduler)
            self._run = None
        if self.on_clear is not None:
            self.on_clear()
