"""
adjacency.py — Adjacency Projector
===================================
Turns the store's node / edge collections plus the GraphMode into the
traversal-ready structure every algorithm consumes.

    adj = project(store.nodes.values(), store.edges.values(), store.mode)
    adj["a"]   →  [AdjacencyEntry(target_id="b", edge_id="e1", weight=4.0), …]

Ordering:
  - every node id is a key, in node insertion order (possibly with [])
  - each node's arcs follow edge insertion order
  - in UNDIRECTED mode the reverse arcs are appended after ALL forward
    arcs, again in edge insertion order

Internally the list is an arena: node ids are mapped once to integer
handles and each arc also stores its target handle, so the engines can
keep visited / distance state in plain lists instead of hashing ids in
their inner loops.  The mapping API (`adj[node_id]`, `keys()`, `in`)
is what callers outside the engines use.

`project` is a pure function — call it fresh before every run.
"""

from typing import Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Sequence

from graph.edge import Edge, GraphMode
from graph.node import Node


class AdjacencyEntry(NamedTuple):
    """One directed traversal arc."""
    target_id: str
    edge_id:   str
    weight:    float = 1.0


class AdjacencyList:
    """
    Attributes:
        ids     : node ids by handle (handle = position in this list).
        index   : {node_id: handle}
        arcs    : arcs[handle] → [AdjacencyEntry, …]
        targets : targets[handle] → [target handle, …] parallel to arcs
    """

    __slots__ = ("ids", "index", "arcs", "targets")

    def __init__(self, node_ids: Iterable[str] = ()):
        self.ids:     List[str]                  = []
        self.index:   Dict[str, int]             = {}
        self.arcs:    List[List[AdjacencyEntry]] = []
        self.targets: List[List[int]]            = []
        for node_id in node_ids:
            self.add_node(node_id)

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------
    def add_node(self, node_id: str) -> int:
        handle = self.index.get(node_id)
        if handle is None:
            handle = len(self.ids)
            self.ids.append(node_id)
            self.index[node_id] = handle
            self.arcs.append([])
            self.targets.append([])
        return handle

    def add_arc(self, source_id: str, target_id: str, edge_id: str, weight: float = 1.0) -> bool:
        """Append source → target.  Arcs touching unknown nodes are dropped."""
        src = self.index.get(source_id)
        tgt = self.index.get(target_id)
        if src is None or tgt is None:
            return False
        self.arcs[src].append(AdjacencyEntry(target_id, edge_id, weight))
        self.targets[src].append(tgt)
        return True

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence]) -> "AdjacencyList":
        """
        Build from {node_id: [AdjacencyEntry | (target, edge, weight) | dict]}.
        Targets that are not keys of the mapping are added as arc-less nodes.
        """
        adj = cls(mapping.keys())
        for source_id, entries in mapping.items():
            for entry in entries:
                if isinstance(entry, dict):
                    entry = AdjacencyEntry(entry["target_id"], entry["edge_id"], entry.get("weight", 1.0))
                else:
                    entry = AdjacencyEntry(*entry)
                adj.add_node(entry.target_id)
                adj.add_arc(source_id, entry.target_id, entry.edge_id, entry.weight)
        return adj

    # ------------------------------------------------------------------
    # Mapping-style read access
    # ------------------------------------------------------------------
    def __getitem__(self, node_id: str) -> List[AdjacencyEntry]:
        return self.arcs[self.index[node_id]]

    def get(self, node_id: str, default: Optional[List[AdjacencyEntry]] = None):
        handle = self.index.get(node_id)
        return default if handle is None else self.arcs[handle]

    def keys(self) -> List[str]:
        return list(self.ids)

    def items(self):
        return zip(self.ids, self.arcs)

    def handle(self, node_id: str) -> Optional[int]:
        return self.index.get(node_id)

    def __contains__(self, node_id) -> bool:
        return node_id in self.index

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)

    def __len__(self) -> int:
        return len(self.ids)

    def to_dict(self) -> Dict[str, List[AdjacencyEntry]]:
        return {node_id: list(arcs) for node_id, arcs in self.items()}

    def __repr__(self) -> str:
        return f"AdjacencyList(nodes={len(self.ids)}, arcs={sum(len(a) for a in self.arcs)})"


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------
def project(nodes: Iterable[Node], edges: Iterable[Edge], mode: GraphMode) -> AdjacencyList:
    adj = AdjacencyList(node.id for node in nodes)
    edges = list(edges)

    for edge in edges:
        adj.add_arc(edge.source, edge.target, edge.id, _weight_of(edge))

    if mode is GraphMode.UNDIRECTED:
        for edge in edges:
            adj.add_arc(edge.target, edge.source, edge.id, _weight_of(edge))

    return adj


def _weight_of(edge: Edge) -> float:
    weight = getattr(edge, "weight", None)
    return 1.0 if weight is None else weight
