from hostargs.hostargs_iterator import ValueIterator
from hostargs.hostargs_values import UNDEFINED


def test_pop_advances_and_peek_does_not():
    it = ValueIterator([1, "a", True])
    assert it.index == 0
    assert it.peek() == 1
    assert it.index == 0
    assert it.pop() == 1
    assert it.index == 1
    assert it.peek() == "a"
    assert it.pop() == "a"
    assert it.pop() is True
    assert it.index == 3


def test_past_end_yields_undefined_and_keeps_counting():
    it = ValueIterator([1])
    it.pop()
    assert it.exhausted
    assert it.peek() is UNDEFINED
    assert it.pop() is UNDEFINED
    assert it.pop() is UNDEFINED
    assert it.index == 3
    assert it.remaining == 0


def test_empty_sequence():
    it = ValueIterator([])
    assert it.exhausted
    assert it.length == 0
    assert it.pop() is UNDEFINED


def test_index_is_monotonic():
    it = ValueIterator(list(range(3)))
    seen = []
    for op in ["peek", "pop", "peek", "peek", "pop", "pop", "pop", "peek"]:
        before = it.index
        getattr(it, op)()
        assert it.index - before == (1 if op == "pop" else 0)
        seen.append(it.index)
    assert seen == sorted(seen)


def test_iterator_borrows_the_sequence():
    values = [1, 2]
    it = ValueIterator(values)
    assert it.remaining == 2
    it.pop()
    assert it.remaining == 1
    assert values == [1, 2]
