import itertools

from algorithms.dijkstra import dijkstra
from algorithms.step import AlgorithmKind, AlgorithmStep
from graph.adjacency import AdjacencyList


def make_adjacency(entries):
    return AdjacencyList.from_mapping(entries)


def test_adjacent_nodes():
    result = dijkstra(make_adjacency({"a": [("b", "e1", 5)], "b": []}), "a", "b")

    assert result.kind is AlgorithmKind.DIJKSTRA
    assert result.path == ["a", "b"]
    assert result.total_weight == 5


def test_prefers_cheaper_longer_path():
    adj = make_adjacency({
        "a": [("b", "e1", 1), ("d", "e3", 10)],
        "b": [("d", "e2", 1)],
        "d": [],
    })
    result = dijkstra(adj, "a", "d")

    assert result.path == ["a", "b", "d"]
    assert result.total_weight == 2


def test_mixed_weights():
    adj = make_adjacency({
        "a": [("b", "e1", 7), ("c", "e2", 2)],
        "b": [("d", "e3", 1)],
        "c": [("b", "e4", 3), ("d", "e5", 8)],
        "d": [],
    })
    result = dijkstra(adj, "a", "d")

    # a→c→b→d = 6, a→b→d = 8, a→c→d = 10
    assert result.path == ["a", "c", "b", "d"]
    assert result.total_weight == 6


def test_fractional_weights_are_not_rounded():
    adj = make_adjacency({"a": [("b", "e1", 0.25)], "b": [("c", "e2", 0.5)], "c": []})

    assert dijkstra(adj, "a", "c").total_weight == 0.75


def test_unreachable_end_has_no_path():
    adj = make_adjacency({"a": [("b", "e1", 1)], "b": [], "c": []})
    result = dijkstra(adj, "a", "c")

    assert result.path is None
    assert result.total_weight is None
    assert not result.found
    assert [s.node_id for s in result.steps] == ["a", "b"]


def test_start_equals_end():
    result = dijkstra(make_adjacency({"a": [("b", "e1", 1)], "b": []}), "a", "a")

    assert result.path == ["a"]
    assert result.total_weight == 0
    assert result.steps == [AlgorithmStep("a")]


def test_start_equals_end_on_isolated_node():
    result = dijkstra(make_adjacency({"a": [], "b": []}), "b", "b")

    assert result.path == ["b"]
    assert result.total_weight == 0


def test_stops_when_end_is_finalised():
    adj = make_adjacency({
        "a": [("b", "e1", 1), ("c", "e2", 5)],
        "b": [],
        "c": [],
    })
    result = dijkstra(adj, "a", "b")

    assert [s.node_id for s in result.steps] == ["a", "b"]


def test_steps_record_predecessor_edge():
    adj = make_adjacency({
        "a": [("b", "e1", 4), ("c", "e2", 1)],
        "c": [("b", "e3", 1)],
        "b": [],
    })
    result = dijkstra(adj, "a", "b")

    assert result.steps == [
        AlgorithmStep("a", None),
        AlgorithmStep("c", "e2"),
        AlgorithmStep("b", "e3"),
    ]


def test_path_is_a_walk_in_the_adjacency_with_minimum_weight():
    entries = {
        "s": [("a", "e1", 2), ("b", "e2", 6), ("c", "e3", 9)],
        "a": [("b", "e4", 3), ("d", "e5", 8)],
        "b": [("d", "e6", 2), ("c", "e7", 1)],
        "c": [("t", "e8", 4)],
        "d": [("t", "e9", 3)],
        "t": [],
    }
    adj = make_adjacency(entries)
    result = dijkstra(adj, "s", "t")

    weights = {}
    for src, arcs in entries.items():
        for tgt, _, w in arcs:
            weights[(src, tgt)] = min(w, weights.get((src, tgt), float("inf")))

    walk_cost = sum(weights[(u, v)] for u, v in zip(result.path, result.path[1:]))
    assert result.path[0] == "s" and result.path[-1] == "t"
    assert walk_cost == result.total_weight

    # brute force over simple paths
    best = float("inf")
    inner = [n for n in entries if n not in ("s", "t")]
    for r in range(len(inner) + 1):
        for middle in itertools.permutations(inner, r):
            route = ["s", *middle, "t"]
            pairs = list(zip(route, route[1:]))
            if all(p in weights for p in pairs):
                best = min(best, sum(weights[p] for p in pairs))
    assert result.total_weight == best == 10


def test_repeated_runs_are_identical():
    adj = make_adjacency({
        "a": [("b", "e1", 1), ("c", "e2", 1)],
        "b": [("d", "e3", 1)],
        "c": [("d", "e4", 1)],
        "d": [],
    })

    assert dijkstra(adj, "a", "d") == dijkstra(adj, "a", "d")


def test_unknown_start_yields_empty_trace():
    result = dijkstra(make_adjacency({"a": []}), "zz", "a")

    assert result.steps == []
    assert result.path is None
