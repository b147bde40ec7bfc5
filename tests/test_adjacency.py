from types import SimpleNamespace

from graph.adjacency import AdjacencyEntry, AdjacencyList, project
from graph.edge import Edge, GraphMode
from graph.node import Node


def make_node(node_id, label=None):
    return Node(label=label or node_id.upper(), node_id=node_id)


def make_edge(edge_id, source, target, weight=1):
    return Edge(source, target, weight=weight, edge_id=edge_id)


def test_nodes_without_edges_get_empty_lists():
    adj = project([make_node("a"), make_node("b")], [], GraphMode.UNDIRECTED)

    assert len(adj) == 2
    assert adj["a"] == []
    assert adj["b"] == []
    assert adj.keys() == ["a", "b"]


def test_directed_projection_is_one_way():
    adj = project([make_node("a"), make_node("b")], [make_edge("e1", "a", "b", 5)], GraphMode.DIRECTED)

    assert adj["a"] == [AdjacencyEntry("b", "e1", 5)]
    assert adj["b"] == []


def test_undirected_projection_adds_reverse_arc_with_same_edge_and_weight():
    adj = project([make_node("a"), make_node("b")], [make_edge("e1", "a", "b", 3)], GraphMode.UNDIRECTED)

    assert adj["a"] == [AdjacencyEntry("b", "e1", 3)]
    assert adj["b"] == [AdjacencyEntry("a", "e1", 3)]


def test_reverse_arcs_come_after_forward_arcs():
    nodes = [make_node("a"), make_node("b"), make_node("c")]
    edges = [make_edge("e1", "b", "a"), make_edge("e2", "a", "c")]
    adj = project(nodes, edges, GraphMode.UNDIRECTED)

    # a's forward arc (e2) precedes its reverse arc from e1
    assert [e.edge_id for e in adj["a"]] == ["e2", "e1"]


def test_missing_weight_defaults_to_one():
    edge = SimpleNamespace(id="e1", source="a", target="b", weight=None)
    adj = project([make_node("a"), make_node("b")], [edge], GraphMode.DIRECTED)

    assert adj["a"][0].weight == 1


def test_projection_reflects_latest_mutation(store):
    a, b = store.add_node((0, 0)), store.add_node((1, 1))
    edge = store.add_edge(a.id, b.id)
    before = project(store.nodes.values(), store.edges.values(), store.mode)

    store.set_edge_weight(edge.id, 9)
    after = project(store.nodes.values(), store.edges.values(), store.mode)

    assert before[a.id][0].weight == 1
    assert after[a.id][0].weight == 9


def test_from_mapping_adds_unknown_targets_as_nodes():
    adj = AdjacencyList.from_mapping({"a": [("b", "e1", 2)]})

    assert "b" in adj
    assert adj["b"] == []
    assert adj.handle("b") == 1
    assert adj.targets[0] == [1]
