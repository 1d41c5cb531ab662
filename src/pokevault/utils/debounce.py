"""Debouncing for chatty inputs such as inline search queries."""

import asyncio
import itertools
from collections.abc import Hashable


class Debouncer:
    """Per-key debouncer.

    Every call to :meth:`settle` waits ``delay`` seconds and then reports
    whether it is still the latest call for its key. Callers drop the work
    when it returns False.
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._counter = itertools.count(1)
        self._latest: dict[Hashable, int] = {}

    async def settle(self, key: Hashable) -> bool:
        token = next(self._counter)
        self._latest[key] = token
        await asyncio.sleep(self.delay)

        if self._latest.get(key) != token:
            return False
        del self._latest[key]
        return True
