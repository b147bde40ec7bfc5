import json

import pytest

from graph.edge import GraphMode
from graph.node import Node
from graph.persistence import SnapshotFile
from graph.snapshot import SnapshotError, dump_snapshot, load_snapshot, loads_snapshot
from graph.store import GraphStore, restore_node_counter


def node(node_id, label):
    return {"id": node_id, "position": {"x": 0, "y": 0}, "label": label}


def edge(edge_id, source, target, weight=1):
    return {"id": edge_id, "source": source, "target": target, "weight": weight}


def snapshot(nodes, edges, mode="undirected"):
    return {"version": 1, "graphMode": mode, "nodes": nodes, "edges": edges}


def test_dump_shape(store):
    a, b = store.add_node((1, 2)), store.add_node((3, 4))
    e = store.add_edge(a.id, b.id)

    data = dump_snapshot(store)

    assert data["version"] == 1
    assert data["graphMode"] == "undirected"
    assert data["nodes"][0] == {"id": a.id, "position": {"x": 1.0, "y": 2.0}, "label": "Node 1"}
    assert data["edges"] == [{"id": e.id, "source": a.id, "target": b.id, "weight": 1.0}]


def test_load_replaces_graph_and_mode(store):
    store.add_node()
    load_snapshot(store, snapshot([node("a", "A"), node("b", "B")], [edge("e1", "a", "b", 3)], "directed"))

    assert store.node_ids() == ["a", "b"]
    assert store.get_edge("e1").weight == 3
    assert store.mode is GraphMode.DIRECTED


def test_counter_restored_from_max_default_label(store):
    load_snapshot(store, snapshot([node("a", "Node 3"), node("b", "Node 7"), node("c", "Node 1")], []))

    assert store.add_node().label == "Node 8"


def test_counter_ignores_custom_labels(store):
    load_snapshot(store, snapshot([node("a", "Alpha"), node("b", "Beta")], []))

    assert store.add_node().label == "Node 1"


def test_counter_only_matches_exact_pattern():
    nodes = [Node(label=l, node_id=str(i)) for i, l in enumerate(["Node 5x", "My Node 9", "Node 4", "node 12"])]

    assert restore_node_counter(nodes) == 4
    assert restore_node_counter([]) == 0


@pytest.mark.parametrize("data", [
    {"version": 1, "graphMode": "undirected", "edges": []},
    {"version": 1, "graphMode": "undirected", "nodes": []},
    [],
    "nodes",
])
def test_missing_collections_rejected_without_mutation(store, data):
    a = store.add_node()

    with pytest.raises(SnapshotError):
        load_snapshot(store, data)

    assert store.node_ids() == [a.id]


@pytest.mark.parametrize("data", [
    snapshot([{"position": {"x": 0, "y": 0}, "label": "x"}], []),
    snapshot([node("a", "A")], [{"id": "e1", "source": "a"}]),
    snapshot([node("a", "A"), node("b", "B")], [edge("e1", "a", "ghost")]),
    snapshot([node("a", "A")], [edge("e1", "a", "a")]),
    snapshot([node("a", "A"), node("a", "B")], []),
    snapshot([node("a", "A"), node("b", "B")], [edge("e1", "a", "b"), edge("e2", "a", "b")]),
    snapshot([{"id": "z", "position": {"x": 0, "y": 0}, "label": 5}], [], mode="directed"),
    snapshot([{"id": 7, "position": {"x": 0, "y": 0}, "label": "x"}], []),
    snapshot([node("a", "A"), node("b", "B")], [{"id": "e1", "source": ["a"], "target": "b"}]),
    snapshot([node("a", "A"), node("b", "B")], [edge("e1", "a", "b", True)]),
    snapshot([node("a", "A"), node("b", "B")], [edge("e1", "a", "b", "heavy")]),
    snapshot([node("a", "A")], [], mode="sideways"),
    {**snapshot([], []), "version": 2},
])
def test_malformed_content_never_partially_applies(store, data):
    a = store.add_node()
    store.set_mode(GraphMode.DIRECTED)

    with pytest.raises(SnapshotError):
        load_snapshot(store, data)

    assert store.node_ids() == [a.id]
    assert store.mode is GraphMode.DIRECTED
    assert store.node_counter == 1


def test_antiparallel_edges_allowed_in_directed_snapshot(store):
    load_snapshot(store, snapshot(
        [node("a", "A"), node("b", "B")],
        [edge("e1", "a", "b"), edge("e2", "b", "a")],
        "directed",
    ))

    assert store.edge_count() == 2


def test_corrupt_json_rejected(store):
    with pytest.raises(SnapshotError):
        loads_snapshot(store, '{"nodes": [')


def test_nested_export_shape_accepted(store):
    data = {
        "version": 1,
        "nodes": [
            {"id": "a", "type": "custom", "position": {"x": 1, "y": 1}, "data": {"label": "Node 2"}},
            {"id": "b", "type": "custom", "position": {"x": 2, "y": 2}, "data": {"label": "B"}},
        ],
        "edges": [{"id": "e1", "source": "a", "target": "b", "type": "custom", "data": {"weight": 7}}],
    }
    load_snapshot(store, data)

    assert store.get_node("a").label == "Node 2"
    assert store.get_edge("e1").weight == 7
    assert store.mode is GraphMode.UNDIRECTED
    assert store.node_counter == 2


def test_missing_weight_defaults_to_one(store):
    load_snapshot(store, snapshot([node("a", "A"), node("b", "B")], [{"id": "e1", "source": "a", "target": "b"}]))

    assert store.get_edge("e1").weight == 1


def test_dump_then_load_keeps_graph(store):
    a, b, c = store.add_node((0, 0)), store.add_node((1, 0)), store.add_node((2, 0))
    store.add_edge(a.id, b.id)
    store.set_edge_weight(store.add_edge(b.id, c.id).id, 2.5)
    store.rename_node(c.id, "Exit")

    other = GraphStore()
    load_snapshot(other, json.loads(json.dumps(dump_snapshot(store))))

    assert dump_snapshot(other) == dump_snapshot(store)
    assert other.add_node().label == "Node 3"


def test_snapshot_file_save_and_restore(tmp_path, store):
    path = tmp_path / "state.json"
    a, b = store.add_node(), store.add_node()
    store.add_edge(a.id, b.id)

    assert SnapshotFile(path).save(store)

    restored = GraphStore()
    assert SnapshotFile(path).restore(restored)
    assert restored.node_ids() == [a.id, b.id]
    assert restored.node_counter == 2


def test_snapshot_file_ignores_missing_and_corrupt_files(tmp_path, store):
    missing = SnapshotFile(tmp_path / "absent.json")
    assert not missing.restore(store)

    corrupt = tmp_path / "bad.json"
    corrupt.write_text("{not json")
    assert not SnapshotFile(corrupt).restore(store)

    invalid = tmp_path / "invalid.json"
    invalid.write_text(json.dumps(snapshot([node("a", "A")], [edge("e1", "a", "zz")])))
    assert not SnapshotFile(invalid).restore(store)

    assert store.node_count() == 0


def test_non_string_label_rejected_by_import_route(client):
    client.post("/api/nodes", json={})
    before = client.get("/api/graph").get_json()

    resp = client.post("/api/graph/import", json={
        "nodes": [{"id": "z", "label": 5}], "edges": [], "graphMode": "directed",
    })

    assert resp.status_code == 400
    assert client.get("/api/graph").get_json() == before


def test_antiparallel_edges_survive_toggle_save_and_restore(tmp_path):
    store = GraphStore(GraphMode.DIRECTED)
    a, b = store.add_node(), store.add_node()
    store.add_edge(a.id, b.id)
    store.add_edge(b.id, a.id)
    store.toggle_mode()
    path = tmp_path / "state.json"
    SnapshotFile(path).save(store)

    restored = GraphStore()
    assert SnapshotFile(path).restore(restored)

    assert restored.mode is GraphMode.UNDIRECTED
    assert restored.edge_count() == 2
    assert dump_snapshot(restored) == dump_snapshot(store)


def test_undirected_snapshot_with_antiparallel_edges_loads(store):
    load_snapshot(store, snapshot(
        [node("a", "A"), node("b", "B")],
        [edge("e1", "a", "b"), edge("e2", "b", "a")],
    ))

    assert store.mode is GraphMode.UNDIRECTED
    assert store.edge_count() == 2


def test_empty_graph_restores_its_mode(tmp_path):
    store = GraphStore()
    store.set_mode(GraphMode.DIRECTED)
    path = tmp_path / "state.json"
    SnapshotFile(path).save(store)

    restored = GraphStore()
    assert SnapshotFile(path).restore(restored)

    assert restored.node_count() == 0
    assert restored.mode is GraphMode.DIRECTED
