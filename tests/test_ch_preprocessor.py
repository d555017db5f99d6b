import random

import pytest

from hierroute.ch_distance import CHDistanceQueryManager, CHGraph
from hierroute.ch_preprocessor import CHPreprocessor, preprocess
from hierroute.computors import adjacency_lists
from hierroute.contraction_graph import ContractionGraph
from hierroute.dijkstra import shortest_distance


def make_graph(nodes, edges):
    graph = ContractionGraph(nodes)
    for source, target, weight in edges:
        graph.add_edge(source, target, weight)
    return graph


def build_hierarchy(nodes, edges):
    graph = make_graph(nodes, edges)
    best = {}
    for node in range(nodes):
        for edge in graph.outgoing_edges(node).values():
            best[(edge.source_node, edge.target_node)] = edge
    preprocess(graph)
    for node in range(nodes):
        for edge in graph.outgoing_edges(node).values():
            key = (edge.source_node, edge.target_node)
            if key not in best or edge.weight < best[key].weight:
                best[key] = edge
    hierarchy = CHGraph(graph.ranks)
    for edge in best.values():
        s, t = edge.source_node, edge.target_node
        if graph.ranks[s] < graph.ranks[t]:
            hierarchy.add_edge(s, t, edge.weight, True, False, edge.middle_node)
        else:
            hierarchy.add_edge(t, s, edge.weight, False, True, edge.middle_node)
    return hierarchy


def random_edges(seed, nodes, count):
    rng = random.Random(seed)
    edges = []
    while len(edges) < count:
        s, t = rng.randrange(nodes), rng.randrange(nodes)
        if s != t:
            edges.append((s, t, rng.randint(1, 20)))
    return edges


def test_empty_graph_has_no_shortcuts():
    assert preprocess(ContractionGraph(0)) == []


def test_ranks_form_a_permutation():
    edges = random_edges(1, 10, 25)
    graph = make_graph(10, edges)
    preprocess(graph)
    assert sorted(graph.ranks) == list(range(1, 11))


def test_no_shortcut_when_a_witness_exists():
    graph = make_graph(3, [(0, 1, 1), (1, 2, 1), (0, 2, 1)])
    assert preprocess(graph) == []


def test_graph_keeps_only_shortcuts():
    edges = random_edges(2, 12, 35)
    graph = make_graph(12, edges)
    shortcuts = preprocess(graph)
    remaining = [e for n in range(12) for e in graph.outgoing_edges(n).values()]
    assert all(edge.middle_node is not None for edge in remaining)
    assert set(remaining) <= set(shortcuts)


def test_shortcuts_bypass_lower_ranked_nodes():
    edges = random_edges(3, 12, 40)
    graph = make_graph(12, edges)
    shortcuts = preprocess(graph)
    ranks = graph.ranks
    for shortcut in shortcuts:
        assert ranks[shortcut.middle_node] < ranks[shortcut.source_node]
        assert ranks[shortcut.middle_node] < ranks[shortcut.target_node]


def test_class_and_function_agree():
    edges = random_edges(4, 10, 30)
    preprocessor = CHPreprocessor(make_graph(10, edges))
    result = preprocessor.preprocess()
    assert result == preprocessor.shortcuts
    assert result == preprocess(make_graph(10, edges))


def test_bidirectional_line_distances():
    edges = [(0, 1, 2), (1, 0, 2), (1, 2, 3), (2, 1, 3), (2, 3, 4), (3, 2, 4)]
    hierarchy = build_hierarchy(4, edges)
    outgoing, _ = adjacency_lists(4, edges)
    manager = CHDistanceQueryManager(hierarchy)
    for start in range(4):
        for goal in range(4):
            assert manager.find_distance(start, goal) == shortest_distance(start, goal, outgoing)


@pytest.mark.parametrize("seed", [5, 6, 7, 8])
def test_hierarchy_distances_match_dijkstra(seed):
    nodes = 14
    edges = random_edges(seed, nodes, 40)
    hierarchy = build_hierarchy(nodes, edges)
    outgoing, _ = adjacency_lists(nodes, edges)
    manager = CHDistanceQueryManager(hierarchy)
    for start in range(nodes):
        for goal in range(nodes):
            assert manager.find_distance(start, goal) == shortest_distance(start, goal, outgoing)