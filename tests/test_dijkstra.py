import random

import pytest

from hierroute.dijkstra import (
    PathEdge,
    format_path,
    one_to_all,
    shortest_distance,
    shortest_path,
)
from hierroute.structures import INFINITY


def _sample_graph():
    outgoing = [[] for _ in range(5)]
    for s, t, w in [(0, 1, 4), (0, 2, 1), (2, 1, 2), (1, 3, 1)]:
        outgoing[s].append((t, w))
    return outgoing


def _random_graph(seed, nodes=12, edges=30):
    rng = random.Random(seed)
    outgoing = [[] for _ in range(nodes)]
    for _ in range(edges):
        s, t = rng.randrange(nodes), rng.randrange(nodes)
        outgoing[s].append((t, rng.randint(1, 20)))
    return outgoing


def test_distance_on_sample():
    assert shortest_distance(0, 3, _sample_graph()) == 4


def test_start_equals_goal_is_zero():
    graph = _sample_graph()
    assert shortest_distance(2, 2, graph) == 0
    distance, path = shortest_path(2, 2, graph)
    assert (distance, path) == (0, [])


def test_unreachable_goal():
    graph = _sample_graph()
    assert shortest_distance(0, 4, graph) == INFINITY
    assert shortest_path(3, 0, graph) == (INFINITY, [])


@pytest.mark.parametrize("seed", range(5))
def test_distance_agrees_with_one_to_all(seed):
    graph = _random_graph(seed)
    distances = one_to_all(0, graph)
    for goal in range(len(graph)):
        assert shortest_distance(0, goal, graph) == distances[goal]


@pytest.mark.parametrize("seed", range(5))
def test_path_is_connected_and_sums_to_distance(seed):
    graph = _random_graph(seed)
    for goal in range(len(graph)):
        distance, path = shortest_path(0, goal, graph)
        if distance == INFINITY:
            assert path == []
            continue
        if goal == 0:
            assert path == []
            continue
        assert path[0].source == 0
        assert path[-1].target == goal
        for first, second in zip(path, path[1:]):
            assert first.target == second.source
        assert sum(edge.length for edge in path) == distance


def test_one_to_all_on_reversed_graph():
    graph = _sample_graph()
    incoming = [[] for _ in graph]
    for s, edges in enumerate(graph):
        for t, w in edges:
            incoming[t].append((s, w))
    backward = one_to_all(3, incoming)
    for node in range(len(graph)):
        assert backward[node] == shortest_distance(node, 3, graph)


def test_format_path_text():
    path = [PathEdge(0, 2, 1), PathEdge(2, 1, 2)]
    text = format_path(0, 1, 3, path)
    assert text == (
        "~~~ Outputting path from 0 to 1 (distance 3) ~~~\n"
        "0 -> 2 (1)\n"
        "2 -> 1 (2)\n"
        "~~~ End of path ~~~\n"
    )


def test_format_path_not_found():
    assert format_path(5, 7, INFINITY, []) == "Did not find path from 5 to 7.\n"


def test_invalid_start_raises():
    with pytest.raises(IndexError):
        shortest_distance(10, 0, _sample_graph())