"""API quota governance.

The governor tracks two independent limits:

* the remote quota reported by GitHub through ``x-ratelimit-remaining`` and
  ``x-ratelimit-reset`` headers, and
* a self-imposed soft cap of ``window_limit`` calls per ``window_seconds``.

``before_call`` only ever delays a caller; it never rejects. ``on_response``
applies header updates synchronously, so the next ``before_call`` always sees
the most recent quota received on this event loop. Concurrent in-flight
requests can still overrun the remote limit by at most the number of requests
already past the gate, which is why governance is advisory.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

DEFAULT_REMAINING = 5000


@dataclass
class RateLimitState:
    """Mutable quota state. Instants are on the governor's monotonic clock."""

    remaining: int
    reset_at: float | None
    window_count: int
    window_start: float


class QuotaGovernor:
    """Gate for every outbound GitHub call."""

    def __init__(
        self,
        *,
        window_limit: int = 30,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.window_limit = window_limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._wall_clock = wall_clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self.state = RateLimitState(
            remaining=DEFAULT_REMAINING,
            reset_at=None,
            window_count=0,
            window_start=clock(),
        )

    async def before_call(self) -> None:
        """Suspend until the next call may proceed, then count it."""

        async with self._lock:
            state = self.state

            if state.remaining == 0 and state.reset_at is not None:
                delay = state.reset_at - self._clock()
                if delay > 0:
                    logger.info("GitHub quota exhausted, waiting {:.1f}s for reset", delay)
                    await self._sleep(delay)

            elapsed = self._clock() - state.window_start
            if elapsed < self.window_seconds:
                if state.window_count >= self.window_limit:
                    wait = self.window_seconds - elapsed
                    logger.debug("Soft rate limit reached, waiting {:.1f}s", wait)
                    await self._sleep(wait)
                    state.window_count = 0
                    state.window_start = self._clock()
            else:
                state.window_count = 0
                state.window_start = self._clock()

            state.window_count += 1

    def on_response(self, headers: Mapping[str, str]) -> None:
        """Record quota headers from a GitHub response."""

        remaining = _parse_int(headers.get("x-ratelimit-remaining"))
        if remaining is None:
            return
        self.state.remaining = remaining

        reset_epoch = _parse_int(headers.get("x-ratelimit-reset"))
        if reset_epoch is not None:
            seconds_left = reset_epoch - self._wall_clock()
            if seconds_left > 0:
                self.state.reset_at = self._clock() + seconds_left


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None
