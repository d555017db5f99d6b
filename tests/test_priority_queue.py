import pytest

from hierroute.priority_queue import ContractionQueue


def _drain(queue):
    out = []
    while len(queue):
        top = queue.front()
        out.append((top.id, top.weight))
        queue.pop()
    return out


def test_insert_then_drain_is_sorted():
    weights = [5, -2, 9, 0, 3, -7, 4]
    queue = ContractionQueue(len(weights))
    for node, weight in enumerate(weights):
        queue.insert(node, weight)
    drained = _drain(queue)
    assert [w for _, w in drained] == sorted(weights)
    assert sorted(n for n, _ in drained) == list(range(len(weights)))


def test_push_only_and_build_heap():
    weights = [8, 6, 7, 5, 3, 0, 9, -1]
    queue = ContractionQueue(len(weights))
    for node, weight in enumerate(weights):
        queue.push_only(node, weight)
    queue.build_heap()
    assert [w for _, w in _drain(queue)] == sorted(weights)


def test_front_is_minimum():
    queue = ContractionQueue(3)
    queue.insert(0, 4)
    queue.insert(1, 1)
    queue.insert(2, 2)
    top = queue.front()
    assert (top.id, top.weight) == (1, 1)
    assert len(queue) == 3


def test_front_returns_copy():
    queue = ContractionQueue(1)
    queue.insert(0, 10)
    top = queue.front()
    top.weight = -100
    assert queue.front().weight == 10


def test_change_value_down_and_up():
    queue = ContractionQueue(4)
    for node, weight in enumerate([1, 2, 3, 4]):
        queue.insert(node, weight)
    queue.change_value(3, -5)
    assert queue.front().id == 3
    queue.change_value(3, 100)
    assert queue.front().id == 0
    drained = _drain(queue)
    assert drained[-1] == (3, 100)
    assert [w for _, w in drained] == sorted(w for _, w in drained)


def test_change_value_same_weight_keeps_order():
    queue = ContractionQueue(2)
    queue.insert(0, 1)
    queue.insert(1, 2)
    queue.change_value(1, 2)
    assert _drain(queue) == [(0, 1), (1, 2)]


def test_reinsert_after_pop():
    queue = ContractionQueue(2)
    queue.insert(0, 1)
    queue.insert(1, 2)
    queue.pop()
    queue.insert(0, 7)
    assert _drain(queue) == [(1, 2), (0, 7)]


def test_change_value_of_popped_node_raises():
    queue = ContractionQueue(2)
    queue.insert(0, 1)
    queue.insert(1, 2)
    queue.pop()
    with pytest.raises(KeyError):
        queue.change_value(0, 3)


def test_empty_queue_errors():
    queue = ContractionQueue(1)
    assert len(queue) == 0
    with pytest.raises(IndexError):
        queue.front()
    with pytest.raises(IndexError):
        queue.pop()


def test_build_heap_on_empty_queue_keeps_it_empty():
    queue = ContractionQueue(0)
    queue.build_heap()
    assert len(queue) == 0