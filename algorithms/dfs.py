"""
dfs.py — Depth-First Search
=============================
Pre-order depth-first traversal using an explicit stack of neighbour
iterators (no Python recursion limit on long chains).

Emission order is exactly that of the recursive formulation:

    visit(n):
        emit n
        for nbr in adj(n):
            if nbr not visited: visit(nbr)

A node is marked visited when it is emitted, so cycles terminate and a
node reachable along several branches is emitted once, under the edge of
the first branch that reached it.
"""

from typing import Iterator, List, Tuple

from algorithms.step import AlgorithmKind, AlgorithmStep, TraversalResult
from graph.adjacency import AdjacencyEntry, AdjacencyList


def dfs(adjacency: AdjacencyList, start_id: str) -> TraversalResult:
    steps: List[AlgorithmStep] = []

    start = adjacency.handle(start_id)
    if start is None:
        return TraversalResult(AlgorithmKind.DFS, [AlgorithmStep(start_id)])

    visited = [False] * len(adjacency)
    visited[start] = True
    steps.append(AlgorithmStep(start_id))

    stack: List[Iterator[Tuple[AdjacencyEntry, int]]] = [_neighbours(adjacency, start)]
    while stack:
        for entry, nbr in stack[-1]:
            if not visited[nbr]:
                visited[nbr] = True
                steps.append(AlgorithmStep(entry.target_id, entry.edge_id))
                stack.append(_neighbours(adjacency, nbr))
                break
        else:
            # every neighbour handled, backtrack
            stack.pop()

    return TraversalResult(AlgorithmKind.DFS, steps)


def _neighbours(adjacency: AdjacencyList, handle: int) -> Iterator[Tuple[AdjacencyEntry, int]]:
    return iter(zip(adjacency.arcs[handle], adjacency.targets[handle]))
