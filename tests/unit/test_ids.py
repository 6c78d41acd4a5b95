"""
Unit tests for IdGenerator.
"""

import pytest

from redzone.contexts.tracker import IdGenerator


@pytest.mark.unit
def test_uses_clock_when_it_advances():
    ticks = iter([1000, 2000, 3000])
    ids = IdGenerator(clock=lambda: next(ticks))

    assert [ids.next_id(), ids.next_id(), ids.next_id()] == [1000, 2000, 3000]


@pytest.mark.unit
def test_same_instant_ids_are_distinct_and_ordered():
    ids = IdGenerator(clock=lambda: 1000)

    first, second, third = ids.next_id(), ids.next_id(), ids.next_id()

    assert first < second < third
    assert (first, second, third) == (1000, 1001, 1002)


@pytest.mark.unit
def test_clock_going_backwards_still_increases():
    ticks = iter([5000, 4000])
    ids = IdGenerator(clock=lambda: next(ticks))

    assert ids.next_id() == 5000
    assert ids.next_id() == 5001


@pytest.mark.unit
def test_observe_raises_floor():
    ids = IdGenerator(clock=lambda: 1000)
    ids.observe([10, 9000, 42])

    assert ids.last_issued == 9000
    assert ids.next_id() == 9001


@pytest.mark.unit
def test_observe_never_lowers_floor():
    ids = IdGenerator(clock=lambda: 1000, floor=5000)
    ids.observe([])
    ids.observe([1])

    assert ids.next_id() == 5001
