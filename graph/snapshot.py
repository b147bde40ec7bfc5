"""
snapshot.py — Persistence Snapshot
===================================
The plain data shape the store is saved to and restored from:

    {"version": 1, "graphMode": "undirected", "nodes": [...], "edges": [...]}

How the snapshot is stored (file, download, browser storage) is not this
module's concern — see graph/persistence.py for the file store the app uses.

Loading is all-or-nothing: `parse_snapshot` builds and checks the complete
node / edge set first, and only `load_snapshot` touches the store, in a
single `GraphStore.replace` call.  Anything malformed raises SnapshotError
and the store keeps its current graph.
"""

import json
from typing import Any, Dict, List, Set, Tuple, Union

from graph.edge import Edge, GraphMode
from graph.node import Node
from graph.store import GraphStore

SNAPSHOT_VERSION = 1


class SnapshotError(ValueError):
    """Raised when snapshot data is malformed.  The store is left untouched."""


# ---------------------------------------------------------------------------
# Save
# ---------------------------------------------------------------------------
def dump_snapshot(store: GraphStore) -> Dict[str, Any]:
    with store.lock:
        return {
            "version":   SNAPSHOT_VERSION,
            "graphMode": store.mode.value,
            "nodes":     [n.to_dict() for n in store.nodes.values()],
            "edges":     [e.to_dict() for e in store.edges.values()],
        }


def dumps_snapshot(store: GraphStore) -> str:
    return json.dumps(dump_snapshot(store), indent=2)


# ---------------------------------------------------------------------------
# Load
# ---------------------------------------------------------------------------
def parse_snapshot(data: Any) -> Tuple[List[Node], List[Edge], GraphMode]:
    """Validate `data` and build the graph it describes without applying it."""
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object")
    if data.get("nodes") is None or data.get("edges") is None:
        raise SnapshotError("Snapshot is missing 'nodes' or 'edges'")
    if not isinstance(data["nodes"], list) or not isinstance(data["edges"], list):
        raise SnapshotError("'nodes' and 'edges' must be lists")

    version = data.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version: {version!r}")

    try:
        mode = GraphMode(data.get("graphMode") or GraphMode.UNDIRECTED.value)
    except ValueError:
        raise SnapshotError(f"Unknown graph mode: {data.get('graphMode')!r}") from None

    nodes = [_build(Node, raw, "node") for raw in data["nodes"]]
    node_ids: Set[str] = set()
    for node in nodes:
        if node.id in node_ids:
            raise SnapshotError(f"Duplicate node id: {node.id}")
        node_ids.add(node.id)

    edges: List[Edge] = []
    edge_ids: Set[str] = set()
    pairs: Set[Tuple[str, str]] = set()
    for raw in data["edges"]:
        edge = _build(Edge, raw, "edge")
        if edge.id in edge_ids:
            raise SnapshotError(f"Duplicate edge id: {edge.id}")
        if edge.source not in node_ids or edge.target not in node_ids:
            raise SnapshotError(f"Edge {edge.id} references a missing node")
        if edge.source == edge.target:
            raise SnapshotError(f"Edge {edge.id} is a self-loop")
        # exact repeats only: a graph toggled to undirected may keep a→b and b→a
        if (edge.source, edge.target) in pairs:
            raise SnapshotError(f"Edge {edge.id} repeats {edge.source}→{edge.target}")
        pairs.add((edge.source, edge.target))
        edge_ids.add(edge.id)
        edges.append(edge)

    return nodes, edges, mode


def load_snapshot(store: GraphStore, data: Any) -> None:
    nodes, edges, mode = parse_snapshot(data)
    store.replace(nodes, edges, mode)


def loads_snapshot(store: GraphStore, text: Union[str, bytes]) -> None:
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise SnapshotError(f"Invalid JSON: {exc}") from exc
    load_snapshot(store, data)


def _build(cls, raw: Any, what: str):
    if not isinstance(raw, dict):
        raise SnapshotError(f"Each {what} must be an object")
    try:
        obj = cls.from_dict(raw)
    except KeyError as exc:
        raise SnapshotError(f"A {what} is missing required field {exc}") from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise SnapshotError(f"Malformed {what}: {exc}") from exc
    if not obj.id:
        raise SnapshotError(f"A {what} has an empty id")
    return obj
