import pytest

from sclib.heap import Heap, HeapItem

ARR = [1, 0, 4, 5, 7, 9, 8, 6, 3, 2]


def test_single_add_pop():
    heap = Heap(0)
    heap.add(100, "test")
    item = heap.pop()
    assert item == HeapItem(100, "test")


def test_capacity_too_large():
    with pytest.raises(ValueError):
        Heap((1 << 64) // 2)


def test_negative_capacity():
    with pytest.raises(ValueError):
        Heap(-1)


def test_add_pop_interleaved_then_ordered():
    heap = Heap(3)
    for i in range(1000):
        assert heap.add(i, i) is True
        item = heap.pop()
        assert item is not None
        assert item.key == item.data == i

    for value in ARR:
        assert heap.add(value, value * 2) is True
    for i in range(10):
        item = heap.pop()
        assert item.key == i
        assert item.data == i * 2
    assert len(heap) == 0


def test_max_heap_by_negation():
    heap = Heap(0)
    for value in ARR:
        assert heap.add(-value, value * 2) is True
    for i in range(10):
        item = heap.pop()
        assert -item.key == 9 - i
        assert item.data == (9 - i) * 2


def test_peek_pop_and_size():
    heap = Heap(2)
    assert heap.add(9, 9) is True
    assert heap.peek() == HeapItem(9, 9)
    assert heap.pop() == HeapItem(9, 9)

    for i in range(100):
        assert heap.add(i, i) is True
    for i in range(100):
        assert heap.pop() == HeapItem(i, i)

    assert heap.peek() is None
    assert heap.pop() is None
    assert len(heap) == 0
    assert heap.add(1, None) is True
    assert len(heap) == 1
    heap.clear()
    assert len(heap) == 0
    assert heap.add(1, None) is True
    assert len(heap) == 1


def test_peek_does_not_remove():
    heap = Heap()
    heap.add(5, "a")
    heap.add(2, "b")
    assert heap.peek().key == 2
    assert len(heap) == 2


def test_growth_limit():
    heap = Heap(2, max_items=100)
    results = [heap.add(i, i) for i in range(105)]
    assert results.index(False) == 63
    assert not any(results[63:])
    assert len(heap) == 63
    assert [heap.pop().key for _ in range(63)] == list(range(63))


def test_example_order():
    entries = [(1, "first"), (4, "fourth"), (5, "fifth"), (3, "third"), (2, "second")]
    heap = Heap(0)
    for priority, name in entries:
        heap.add(priority, name)
    out = []
    while (item := heap.pop()) is not None:
        out.append(item.data)
    assert out == ["first", "second", "third", "fourth", "fifth"]

    for priority, name in entries:
        heap.add(-priority, name)
    out = []
    while (item := heap.pop()) is not None:
        out.append((item.key, item.data))
    assert out == [(-5, "fifth"), (-4, "fourth"), (-3, "third"), (-2, "second"), (-1, "first")]