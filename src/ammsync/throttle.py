import asyncio
import collections
import time

from ammsync.logging import logger
from ammsync.types.aliases import Weight


class RequestThrottle:
    """
    Bounds the weighted number of outbound requests issued in any one-second interval.

    A single throttle is shared by every worker in a synchronization run. The lock is held only to
    decide whether a reservation can be issued now, or how long the caller must wait. Waiting is
    done with `asyncio.sleep` outside the lock, so throttled workers yield to the event loop.

    A limit of zero disables throttling.
    """

    WINDOW_SECONDS = 1.0

    def __init__(self, requests_per_second: int = 0) -> None:
        if requests_per_second < 0:
            raise ValueError("requests_per_second must be non-negative")

        self.limit = requests_per_second
        self._issued: collections.deque[tuple[float, Weight]] = collections.deque()
        self._issued_weight: Weight = 0
        self._lock = asyncio.Lock()

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(requests_per_second={self.limit})"

    @property
    def enabled(self) -> bool:
        return self.limit > 0

    def _expire(self, now: float) -> None:
        while self._issued and self._issued[0][0] + self.WINDOW_SECONDS <= now:
            _, weight = self._issued.popleft()
            self._issued_weight -= weight

    def _issue(self, now: float, weight: Weight) -> None:
        self._issued.append((now, weight))
        self._issued_weight += weight

    async def _reserve_chunk(self, weight: Weight) -> None:
        while True:
            async with self._lock:
                now = time.monotonic()
                self._expire(now)
                if self._issued_weight + weight <= self.limit:
                    self._issue(now, weight)
                    return
                delay = self._issued[0][0] + self.WINDOW_SECONDS - now

            logger.debug(f"Throttled: waiting {delay:.3f}s for {weight} request unit(s)")
            await asyncio.sleep(delay)

    async def reserve(self, weight: Weight = 1) -> None:
        """
        Suspend until `weight` units can be issued without exceeding the limit, then record them.

        A reservation heavier than the limit is issued in chunks of at most `limit` units, each
        waiting for room in its own window.
        """

        if not self.enabled or weight <= 0:
            return

        remaining = weight
        while remaining > 0:
            chunk = min(remaining, self.limit)
            await self._reserve_chunk(chunk)
            remaining -= chunk
