import asyncio
import time

import pytest

from ammsync.throttle import RequestThrottle


class RecordingThrottle(RequestThrottle):
    def __init__(self, requests_per_second: int) -> None:
        super().__init__(requests_per_second)
        self.issued: list[tuple[float, int]] = []

    def _issue(self, now: float, weight: int) -> None:
        self.issued.append((now, weight))
        super()._issue(now, weight)


def assert_window_bound(issued: list[tuple[float, int]], limit: int) -> None:
    for start, _ in issued:
        in_window = sum(weight for ts, weight in issued if start <= ts < start + 1.0)
        assert in_window <= limit


async def test_unlimited_throttle_never_waits():
    throttle = RequestThrottle(0)
    assert not throttle.enabled

    start = time.monotonic()
    await asyncio.gather(*[throttle.reserve(4) for _ in range(1_000)])
    assert time.monotonic() - start < 0.5


async def test_zero_weight_is_free():
    throttle = RecordingThrottle(1)
    await throttle.reserve(0)
    assert throttle.issued == []


def test_negative_limit_rejected():
    with pytest.raises(ValueError):
        RequestThrottle(-1)


async def test_issues_within_limit_without_waiting():
    throttle = RecordingThrottle(10)

    start = time.monotonic()
    for _ in range(10):
        await throttle.reserve(1)
    assert time.monotonic() - start < 0.5
    assert len(throttle.issued) == 10


async def test_concurrent_reservations_respect_limit():
    limit = 5
    throttle = RecordingThrottle(limit)

    await asyncio.gather(*[throttle.reserve(1) for _ in range(12)])

    assert sum(weight for _, weight in throttle.issued) == 12
    assert_window_bound(throttle.issued, limit)
    # 12 units at 5/s requires at least two full windows to elapse
    assert throttle.issued[-1][0] - throttle.issued[0][0] >= 2.0


async def test_weighted_reservations_respect_limit():
    limit = 6
    throttle = RecordingThrottle(limit)

    await asyncio.gather(*[throttle.reserve(weight) for weight in (4, 1, 4, 1, 4)])

    assert_window_bound(throttle.issued, limit)


async def test_oversized_reservation_is_split_within_limit():
    throttle = RecordingThrottle(2)

    await throttle.reserve(4)

    assert [weight for _, weight in throttle.issued] == [2, 2]
    assert_window_bound(throttle.issued, 2)
    assert throttle.issued[1][0] - throttle.issued[0][0] >= 1.0


async def test_oversized_reservation_after_prior_issue_respects_limit():
    throttle = RecordingThrottle(3)

    await throttle.reserve(1)
    await throttle.reserve(4)

    assert sum(weight for _, weight in throttle.issued) == 5
    assert_window_bound(throttle.issued, 3)


async def test_waiting_does_not_block_the_event_loop():
    throttle = RequestThrottle(1)
    await throttle.reserve(1)

    ticks = 0

    async def ticker() -> None:
        nonlocal ticks
        while True:
            ticks += 1
            await asyncio.sleep(0.05)

    ticker_task = asyncio.create_task(ticker())
    await throttle.reserve(1)
    ticker_task.cancel()

    # the ticker kept running while the second reservation waited ~1 second
    assert ticks >= 10
