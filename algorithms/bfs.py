"""
bfs.py — Breadth-First Search
==============================
Level-order traversal from a start node over a projected AdjacencyList.

  1. Seed the FIFO queue and the visited set with the start node
  2. Dequeue a node  →  emit its step
  3. Enqueue every unvisited neighbour (adjacency order), marking it
     visited on enqueue so it can never be queued twice

Unreachable nodes never appear in the trace.
"""

from collections import deque
from typing import Deque, List, Optional, Tuple

from algorithms.step import AlgorithmKind, AlgorithmStep, TraversalResult
from graph.adjacency import AdjacencyList


def bfs(adjacency: AdjacencyList, start_id: str) -> TraversalResult:
    steps: List[AlgorithmStep] = []

    start = adjacency.handle(start_id)
    if start is None:
        # not in the projection: nothing to expand
        return TraversalResult(AlgorithmKind.BFS, [AlgorithmStep(start_id)])

    visited = [False] * len(adjacency)
    visited[start] = True
    queue: Deque[Tuple[int, Optional[str]]] = deque([(start, None)])

    while queue:
        node, edge_id = queue.popleft()
        steps.append(AlgorithmStep(adjacency.ids[node], edge_id))

        for entry, nbr in zip(adjacency.arcs[node], adjacency.targets[node]):
            if not visited[nbr]:
                visited[nbr] = True
                queue.append((nbr, entry.edge_id))

    return TraversalResult(AlgorithmKind.BFS, steps)
