"""
graph/
-----
Core data layer.  Public API:

    from graph import GraphStore, Node, Edge, GraphMode
    from graph import project, AdjacencyList, AdjacencyEntry
    from graph import dump_snapshot, load_snapshot, SnapshotError
"""

from graph.ids       import generate_id
from graph.node      import Node
from graph.edge      import Edge, GraphMode
from graph.store     import GraphStore, restore_node_counter
from graph.adjacency import AdjacencyEntry, AdjacencyList, project
from graph.snapshot  import (
    SNAPSHOT_VERSION,
    SnapshotError,
    dump_snapshot,
    dumps_snapshot,
    load_snapshot,
    loads_snapshot,
    parse_snapshot,
)
from graph.persistence import SnapshotFile

__all__ = [
    "generate_id",
    "Node",
    "Edge",           "GraphMode",
    "GraphStore",     "restore_node_counter",
    "AdjacencyEntry", "AdjacencyList",  "project",
    "SNAPSHOT_VERSION",
    "SnapshotError",
    "dump_snapshot",  "dumps_snapshot",
    "load_snapshot",  "loads_snapshot",
    "parse_snapshot",
    "SnapshotFile",
]
