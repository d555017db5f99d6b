import itertools

import pytest

from hierroute.ch_distance import CHDistanceQueryManager, CHGraph, Direction
from hierroute.dijkstra import shortest_distance
from hierroute.structures import INFINITY, NodeData

# Original graph: a two-way line 0 -1- 1 -2- 2 -3- 3 plus an isolated node 4.
ORIGINAL = [[(1, 1)], [(0, 1), (2, 2)], [(1, 2), (3, 3)], [(2, 3)], []]
RANKS = [3, 1, 2, 4, 5]


def line_hierarchy() -> CHGraph:
    graph = CHGraph(RANKS)
    graph.add_edge(1, 0, 1, True, True)
    graph.add_edge(1, 2, 2, True, True)
    graph.add_edge(2, 3, 3, True, True)
    graph.add_edge(2, 0, 3, True, True, middle_node=1)
    graph.add_edge(0, 3, 6, True, True, middle_node=2)
    return graph


def test_all_pairs_match_plain_dijkstra():
    manager = CHDistanceQueryManager(line_hierarchy())
    for start, goal in itertools.product(range(5), repeat=2):
        assert manager.find_distance(start, goal) == shortest_distance(start, goal, ORIGINAL)


def test_repeated_queries_give_same_answers():
    manager = CHDistanceQueryManager(line_hierarchy())
    pairs = list(itertools.product(range(4), repeat=2))
    first = [manager.find_distance(s, g) for s, g in pairs]
    second = [manager.find_distance(s, g) for s, g in reversed(pairs)]
    assert first == list(reversed(second))


def test_state_is_reset_after_query():
    graph = line_hierarchy()
    manager = CHDistanceQueryManager(graph)
    manager.find_distance(1, 3)
    assert [graph.data(n) for n in range(len(graph))] == [NodeData(rank=r) for r in RANKS]


def test_unreachable_goal():
    manager = CHDistanceQueryManager(line_hierarchy())
    assert manager.find_distance(0, 4) == INFINITY


def test_same_node_has_zero_distance():
    manager = CHDistanceQueryManager(line_hierarchy())
    assert manager.find_distance(2, 2) == 0


def test_one_way_edge():
    graph = CHGraph([1, 2])
    graph.add_edge(0, 1, 7, True, False)
    manager = CHDistanceQueryManager(graph)
    assert manager.find_distance(0, 1) == 7
    assert manager.find_distance(1, 0) == INFINITY


def test_middle_node_of_shortcut_and_original_edge():
    graph = line_hierarchy()
    assert graph.middle_node(2, 0, Direction.FORWARD) == 1
    assert graph.middle_node(0, 2, Direction.BACKWARD) == 1
    assert graph.middle_node(1, 2, Direction.FORWARD) is None


def test_edge_distance_lookup_is_symmetric_in_rank_order():
    graph = line_hierarchy()
    assert graph.distance(1, 0, Direction.FORWARD) == 1
    assert graph.distance(0, 1, Direction.FORWARD) == 1
    assert graph.distance(3, 0, Direction.BACKWARD) == 6


def test_missing_edge_raises():
    graph = line_hierarchy()
    with pytest.raises(KeyError):
        graph.middle_node(1, 3, Direction.FORWARD)


def test_add_edge_rejects_unknown_node():
    graph = CHGraph([1, 2])
    with pytest.raises(IndexError):
        graph.add_edge(0, 5, 1, True, True)


def test_graph_length_and_edges():
    graph = line_hierarchy()
    assert len(graph) == 5
    assert [edge.target_node for edge in graph.next_nodes(2)] == [3, 0]