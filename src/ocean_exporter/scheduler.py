"""Ticker and cancellation primitives driving the periodic sync loop."""

from __future__ import annotations

import asyncio
import math
import time
from typing import AsyncIterator, Callable, Protocol

from loguru import logger


class CancellationToken:
    """Cooperative stop signal shared between the driver loop and its owner."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self, timeout: float | None = None) -> bool:
        """Sleep up to ``timeout`` seconds. Returns True if cancelled meanwhile."""
        if timeout is not None and timeout <= 0:
            return self.cancelled
        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            pass
        return self.cancelled


class Ticker(Protocol):
    def ticks(self, token: CancellationToken) -> AsyncIterator[int]: ...


class IntervalTicker:
    """Yields one tick immediately and then every ``interval_sec`` seconds.

    Ticks are only produced between passes: the consumer handles a tick
    before asking for the next one, so passes never overlap. When a pass
    overruns one or more intervals the missed ticks are dropped rather than
    fired back to back.
    """

    def __init__(self, interval_sec: float, clock: Callable[[], float] = time.monotonic):
        if interval_sec <= 0:
            raise ValueError(f"interval_sec must be positive, got {interval_sec}")
        self.interval_sec = interval_sec
        self._clock = clock

    async def ticks(self, token: CancellationToken) -> AsyncIterator[int]:
        tick = 0
        next_at = self._clock()
        while not token.cancelled:
            yield tick
            tick += 1

            next_at += self.interval_sec
            now = self._clock()
            if now > next_at:
                missed = math.ceil((now - next_at) / self.interval_sec)
                next_at += missed * self.interval_sec
                logger.warning(f"Sync pass overran the {self.interval_sec}s interval, skipping {missed} tick(s)")

            if await token.wait(next_at - now):
                break
