"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Label-setting shortest path from start to end.

  1. dist[start] = 0, every other node ∞, no predecessors
  2. Select the unfinalised node with the smallest finite distance
     (linear scan in node order; first one wins on ties).  None left → stop
  3. Finalise it and emit its step (edge = its predecessor edge)
  4. Finalised node is the end node → stop, no further relaxation
  5. Relax each outgoing arc to an unfinalised node:
        dist[node] + w < dist[nbr]  →  dist[nbr], pred[nbr] updated
  6. Walk predecessors back from end; the path is valid only if the walk
     reaches start and dist[end] is finite

start == end always yields path [start] with total weight 0.

`steps` is the finalisation order (the animation trace) and is distinct
from `path`.  Dijkstra requires non-negative weights; with negative weights
the result is unspecified.
"""

from typing import List, Optional, Tuple

from algorithms.step import AlgorithmStep, ShortestPathResult
from graph.adjacency import AdjacencyList

INF = float("inf")


def dijkstra(adjacency: AdjacencyList, start_id: str, end_id: str) -> ShortestPathResult:
    steps: List[AlgorithmStep] = []
    n = len(adjacency)

    dist:      List[float]                           = [INF] * n
    pred:      List[Optional[Tuple[int, str]]]       = [None] * n
    finalised: List[bool]                            = [False] * n

    start = adjacency.handle(start_id)
    end   = adjacency.handle(end_id)

    if start is not None:
        dist[start] = 0.0

        for _ in range(n):
            # --- select minimum-distance unfinalised node ---
            current, smallest = -1, INF
            for handle in range(n):
                if not finalised[handle] and dist[handle] < smallest:
                    current, smallest = handle, dist[handle]
            if current < 0:
                break                       # the rest is unreachable

            # --- finalise ---
            finalised[current] = True
            link = pred[current]
            steps.append(AlgorithmStep(adjacency.ids[current], link[1] if link else None))
            if current == end:
                break

            # --- relax ---
            for entry, nbr in zip(adjacency.arcs[current], adjacency.targets[current]):
                if finalised[nbr]:
                    continue
                candidate = smallest + entry.weight
                if candidate < dist[nbr]:
                    dist[nbr] = candidate
                    pred[nbr] = (current, entry.edge_id)

    if start_id == end_id:
        return ShortestPathResult(steps=steps, path=[start_id], total_weight=0.0)

    path = _reconstruct(adjacency, pred, start, end)
    if path is None or dist[end] == INF:
        return ShortestPathResult(steps=steps)
    return ShortestPathResult(steps=steps, path=path, total_weight=dist[end])


# ---------------------------------------------------------------------------
def _reconstruct(
    adjacency: AdjacencyList,
    pred: List[Optional[Tuple[int, str]]],
    start: Optional[int],
    end: Optional[int],
) -> Optional[List[str]]:
    if start is None or end is None:
        return None
    path, cur = [], end
    while cur is not None:
        path.append(adjacency.ids[cur])
        link = pred[cur]
        cur = link[0] if link else None
    path.reverse()
    return path if path[0] == adjacency.ids[start] else None
