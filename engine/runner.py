"""
runner.py — Algorithm Run API
==============================
What the HTTP layer calls when the user presses Run / Clear.

    runner = AlgorithmRunner(store, TimerScheduler(), delay=0.5)
    result = runner.run("dijkstra", start_id, end_id)
    runner.stop()

run():
  1. validate the request (known algorithm, start node, end node for
     Dijkstra) — RunRequestError before any computation
  2. project the CURRENT store into a fresh AdjacencyList
  3. compute the full trace synchronously
  4. hand the trace to Playback, which stops any previous run first

Playback writes straight into the store's highlight sets.
"""

import logging
from typing import Optional, Union

from algorithms import AlgoInfo, get_algorithm
from algorithms.step import AlgorithmKind, AlgorithmResult
from engine.playback import SPEED_PRESETS, Playback, PlaybackState
from engine.scheduler import Scheduler
from graph.adjacency import project
from graph.store import GraphStore

logger = logging.getLogger(__name__)


class RunRequestError(ValueError):
    """Raised when a run is requested without what the algorithm needs."""


class AlgorithmRunner:
    """
    Attributes:
        store       : the GraphStore runs read from and highlight into.
        playback    : the Playback replaying the latest trace.
        last_result : result of the latest run (None after reset()).
    """

    def __init__(self, store: GraphStore, scheduler: Scheduler, delay: float = SPEED_PRESETS["medium"]):
        self.store = store
        self.playback = Playback(
            scheduler,
            on_update=self._publish,
            on_clear=store.clear_highlights,
            delay=delay,
        )
        self.last_result: Optional[AlgorithmResult] = None

    # ------------------------------------------------------------------
    # Run / stop
    # ------------------------------------------------------------------
    def run(
        self,
        kind: Union[str, AlgorithmKind],
        start_id: Optional[str],
        end_id: Optional[str] = None,
    ) -> AlgorithmResult:
        info = self._validate(kind, start_id, end_id)

        with self.store.lock:
            adjacency = project(self.store.nodes.values(), self.store.edges.values(), self.store.mode)
        if info.needs_end:
            result = info.fn(adjacency, start_id, end_id)
        else:
            result = info.fn(adjacency, start_id)

        self.last_result = result
        self.playback.start(result.steps)
        logger.info(
            "Running %s from %s%s: %d steps",
            info.key, start_id, f" to {end_id}" if info.needs_end else "", len(result.steps),
        )
        return result

    def stop(self) -> None:
        """Cancel pending playback and clear the highlight sets."""
        self.playback.stop()

    def reset(self) -> None:
        """Stop and forget the last result (algorithm or mode changed)."""
        self.stop()
        self.last_result = None

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> PlaybackState:
        return self.playback.state

    @property
    def is_running(self) -> bool:
        return self.playback.is_playing

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _validate(self, kind, start_id, end_id) -> AlgoInfo:
        if not isinstance(kind, (str, AlgorithmKind)):
            raise RunRequestError(f"Unknown algorithm: {kind!r}")
        info = get_algorithm(kind)
        if info is None:
            raise RunRequestError(f"Unknown algorithm: {kind}")
        if not start_id or not isinstance(start_id, str):
            raise RunRequestError("Select a start node first")
        if start_id not in self.store.nodes:
            raise RunRequestError(f"Unknown start node: {start_id}")
        if info.needs_end:
            if not end_id or not isinstance(end_id, str):
                raise RunRequestError(f"{info.label} needs an end node")
            if end_id not in self.store.nodes:
                raise RunRequestError(f"Unknown end node: {end_id}")
        return info

    def _publish(self, nodes, edges) -> None:
        self.store.set_highlighted_nodes(nodes)
        self.store.set_highlighted_edges(edges)
