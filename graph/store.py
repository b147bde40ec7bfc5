"""
store.py — Graph Store
=======================
Single source of truth for the graph.  The HTTP layer forwards every user
gesture here; the playback engine writes the highlight sets back here.

Responsibilities:
  1. Node CRUD           (add / delete / rename / move)
  2. Edge CRUD           (add / delete / reweight)
  3. Graph mode          (toggle / set)
  4. Bulk replace        (load from a snapshot, clear)
  5. Highlight sets      (replace wholesale, clear)
  6. Node-label counter  ("Node <n>" numbering, restored after bulk loads)

Invariants (enforced on every mutation):
  - node ids and edge ids are unique
  - an edge's endpoints always name nodes currently in the store
  - no self-loops
  - no duplicate edge for the same pair; in UNDIRECTED mode (a, b) and
    (b, a) are the same pair
  - deleting a node deletes every incident edge in the same call

Requests that would break an invariant are declined silently: the method
returns None / False and the store is unchanged.  They are expected user
input noise, not errors.

Highlight sets are derived state with no consistency constraint — they
may still name ids that were deleted since.

Thread safety: every method runs under `store.lock` (reentrant).  Code that
reads several collections at once (snapshot dump, adjacency projection)
holds the same lock.
"""

import logging
import random
import threading
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from graph.edge import Edge, GraphMode
from graph.node import Node, default_label

logger = logging.getLogger(__name__)


def restore_node_counter(nodes: Iterable[Node]) -> int:
    """Largest N among labels of the exact form "Node N" (0 if none)."""
    best = 0
    for node in nodes:
        n = node.label_number()
        if n is not None and n > best:
            best = n
    return best


class GraphStore:
    """
    Attributes:
        nodes             : {node_id: Node}  (insertion ordered)
        edges             : {edge_id: Edge}  (insertion ordered)
        mode              : GraphMode
        highlighted_nodes : frozenset of node ids
        highlighted_edges : frozenset of edge ids
        node_counter      : value used for the last auto-generated label
    """

    def __init__(self, mode: GraphMode = GraphMode.UNDIRECTED):
        self.nodes:             Dict[str, Node] = {}
        self.edges:             Dict[str, Edge] = {}
        self.mode:              GraphMode      = mode
        self.highlighted_nodes: FrozenSet[str] = frozenset()
        self.highlighted_edges: FrozenSet[str] = frozenset()
        self.node_counter:      int            = 0
        self.lock = threading.RLock()

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, position: Optional[Tuple[float, float]] = None) -> Node:
        """Create "Node <n>" at `position`, or at a random spot near the canvas centre."""
        if position is None:
            position = (250 + random.random() * 200, 150 + random.random() * 200)
        with self.lock:
            self.node_counter += 1
            node = Node(x=position[0], y=position[1], label=default_label(self.node_counter))
            self.nodes[node.id] = node
            return node

    def delete_node(self, node_id: str) -> bool:
        with self.lock:
            if node_id not in self.nodes:
                return False
            del self.nodes[node_id]
            self.edges = {eid: e for eid, e in self.edges.items() if not e.touches(node_id)}
            return True

    def rename_node(self, node_id: str, label: str) -> bool:
        with self.lock:
            node = self.nodes.get(node_id)
            if node is None:
                return False
            node.label = label
            return True

    def move_node(self, node_id: str, x: float, y: float) -> bool:
        with self.lock:
            node = self.nodes.get(node_id)
            if node is None:
                return False
            node.move_to(x, y)
            return True

    def get_node(self, node_id: str) -> Optional[Node]:
        with self.lock:
            return self.nodes.get(node_id)

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(
        self,
        source: Optional[str],
        target: Optional[str],
        source_handle: Optional[str] = None,
        target_handle: Optional[str] = None,
    ) -> Optional[Edge]:
        """Connect source → target with weight 1.  None if declined."""
        if not isinstance(source, str) or not isinstance(target, str) or not source or not target:
            logger.debug("Declined edge %r→%r: endpoints must be node ids", source, target)
            return None
        with self.lock:
            if source not in self.nodes or target not in self.nodes:
                logger.debug("Declined edge %s→%s: unknown endpoint", source, target)
                return None
            if source == target:
                logger.debug("Declined self-loop on %s", source)
                return None
            if self.get_edge_between(source, target) is not None:
                logger.debug("Declined duplicate edge %s→%s (%s)", source, target, self.mode.value)
                return None

            edge = Edge(source, target, weight=1.0, source_handle=source_handle, target_handle=target_handle)
            self.edges[edge.id] = edge
            return edge

    def delete_edge(self, edge_id: str) -> bool:
        with self.lock:
            return self.edges.pop(edge_id, None) is not None

    def set_edge_weight(self, edge_id: str, weight: float) -> bool:
        with self.lock:
            edge = self.edges.get(edge_id)
            if edge is None:
                return False
            edge.weight = float(weight)
            return True

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        with self.lock:
            return self.edges.get(edge_id)

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge linking a and b under the current mode."""
        with self.lock:
            for edge in self.edges.values():
                if edge.connects(a, b, self.mode):
                    return edge
            return None

    # ==================================================================
    # GRAPH MODE
    # ==================================================================
    def toggle_mode(self) -> GraphMode:
        with self.lock:
            self.mode = self.mode.toggled()
            return self.mode

    def set_mode(self, mode: GraphMode) -> None:
        with self.lock:
            self.mode = mode

    # ==================================================================
    # BULK REPLACE
    # ==================================================================
    def replace(self, nodes: List[Node], edges: List[Edge], mode: GraphMode) -> None:
        """
        Swap in a complete, already-validated graph and recompute the
        label counter from the new labels.  Used by snapshot loading.
        """
        counter = restore_node_counter(nodes)
        new_nodes = {n.id: n for n in nodes}
        new_edges = {e.id: e for e in edges}
        with self.lock:
            self.nodes = new_nodes
            self.edges = new_edges
            self.mode = mode
            self.node_counter = counter
        logger.info(
            "Loaded graph: %d nodes, %d edges, %s (label counter=%d)",
            len(new_nodes), len(new_edges), mode.value, counter,
        )

    def clear(self) -> None:
        with self.lock:
            self.nodes = {}
            self.edges = {}
            self.node_counter = 0
            self.clear_highlights()

    # ==================================================================
    # HIGHLIGHTS
    # ==================================================================
    def set_highlighted_nodes(self, node_ids: Iterable[str]) -> None:
        with self.lock:
            self.highlighted_nodes = frozenset(node_ids)

    def set_highlighted_edges(self, edge_ids: Iterable[str]) -> None:
        with self.lock:
            self.highlighted_edges = frozenset(edge_ids)

    def clear_highlights(self) -> None:
        with self.lock:
            self.highlighted_nodes = frozenset()
            self.highlighted_edges = frozenset()

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_ids(self) -> List[str]:
        with self.lock:
            return list(self.nodes.keys())

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def __repr__(self) -> str:
        return f"GraphStore(nodes={self.node_count()}, edges={self.edge_count()}, mode={self.mode.value})"
