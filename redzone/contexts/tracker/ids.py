"""
Entity id generation.

Ids are integers derived from wall-clock milliseconds, but the generator never
hands out the same or a smaller id twice: when the clock has not advanced (two
entities created in the same instant) or has gone backwards, the next id is the
previous one plus one.
"""

from typing import Callable, Iterable

from redzone.utils.timestamp import now_ms


class IdGenerator:
    """
    Strictly increasing id source.

    Args:
        clock: Callable returning the current time in integer milliseconds
        floor: Largest id already in use; every issued id will exceed it

    Example:
        ids = IdGenerator(clock=lambda: 1000)
        ids.next_id()  # 1000
        ids.next_id()  # 1001
    """

    def __init__(self, clock: Callable[[], int] = now_ms, floor: int = 0):
        self._clock = clock
        self._last = floor

    @property
    def last_issued(self) -> int:
        return self._last

    def observe(self, existing_ids: Iterable[int]) -> None:
        """Raise the floor so no id in existing_ids can be issued again."""
        self._last = max([self._last, *existing_ids])

    def next_id(self) -> int:
        candidate = self._clock()
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate
