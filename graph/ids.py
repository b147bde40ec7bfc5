"""
ids.py — Identifier Generator
==============================
Process-unique string ids for nodes and edges.

    generate_id("node")  →  "node_3f9c21ab_1"
    generate_id("edge")  →  "edge_77d0e4c2_2"

The random part keeps ids from different processes apart; the trailing
sequence number guarantees uniqueness inside one process.
"""

import itertools
import uuid

_sequence = itertools.count(1)


def generate_id(prefix: str = "node") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}_{next(_sequence)}"
