from __future__ import annotations

import asyncio
import time

import pytest
from loguru import logger

from ocean_exporter.scheduler import CancellationToken, IntervalTicker


class TestCancellationToken:
    @pytest.mark.asyncio
    async def test_wait_times_out_when_not_cancelled(self):
        token = CancellationToken()
        assert await token.wait(0.01) is False
        assert not token.cancelled

    @pytest.mark.asyncio
    async def test_cancel_wakes_waiter(self):
        token = CancellationToken()
        waiter = asyncio.create_task(token.wait(10))
        await asyncio.sleep(0)

        token.cancel()

        assert await asyncio.wait_for(waiter, timeout=1) is True

    @pytest.mark.asyncio
    async def test_non_positive_timeout_does_not_sleep(self):
        token = CancellationToken()
        assert await token.wait(0) is False
        token.cancel()
        assert await token.wait(-1) is True


class TestIntervalTicker:
    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            IntervalTicker(0)

    @pytest.mark.asyncio
    async def test_first_tick_is_immediate_then_periodic(self):
        token = CancellationToken()
        ticker = IntervalTicker(0.05)
        started = time.monotonic()
        seen: list[tuple[int, float]] = []

        async for tick in ticker.ticks(token):
            seen.append((tick, time.monotonic() - started))
            if tick == 2:
                token.cancel()

        assert [t for t, _ in seen] == [0, 1, 2]
        assert seen[0][1] < 0.04
        assert seen[2][1] >= 0.09

    @pytest.mark.asyncio
    async def test_cancel_while_waiting_ends_iteration(self):
        token = CancellationToken()
        ticker = IntervalTicker(60)
        ticks: list[int] = []

        async def consume():
            async for tick in ticker.ticks(token):
                ticks.append(tick)

        task = asyncio.create_task(consume())
        await asyncio.sleep(0.01)
        token.cancel()
        await asyncio.wait_for(task, timeout=1)

        assert ticks == [0]

    @pytest.mark.asyncio
    async def test_overrun_skips_missed_ticks(self):
        # start at 0, the first pass finishes at 3.99 with a 1s interval
        readings = iter([0.0, 3.99, 4.0])
        ticker = IntervalTicker(1.0, clock=lambda: next(readings))
        token = CancellationToken()
        messages: list[str] = []
        sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")

        ticks: list[int] = []
        started = time.monotonic()
        try:
            async for tick in ticker.ticks(token):
                ticks.append(tick)
                if tick == 1:
                    token.cancel()
        finally:
            logger.remove(sink_id)

        assert ticks == [0, 1]
        # the second tick is due at 4.0, not immediately at 1.0, 2.0 and 3.0
        assert time.monotonic() - started < 0.5
        assert any("skipping 3 tick(s)" in m for m in messages)
