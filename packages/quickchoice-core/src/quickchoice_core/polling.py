"""Fixed-interval progress callbacks tied to an outstanding future."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from quickchoice_core.errors import InvalidArgumentError


async def _tick_forever(on_tick: Callable[[], Any], interval: float) -> None:
    while True:
        on_tick()
        await asyncio.sleep(interval)


async def poll_until_resolved(
    on_tick: Callable[[], Any],
    future: asyncio.Future,
    interval_ms: float,
) -> None:
    """Call ``on_tick`` every ``interval_ms`` milliseconds until ``future`` settles.

    The future's outcome is left untouched; callers await it themselves. The
    last tick may land after settlement, so ``on_tick`` is progress feedback
    only. There is no timeout: a future that never settles keeps ticking.
    """
    if not callable(on_tick):
        raise InvalidArgumentError("on_tick must be callable.")
    if not asyncio.isfuture(future):
        raise InvalidArgumentError("future must be an asyncio Future or Task.")
    if (
        isinstance(interval_ms, bool)
        or not isinstance(interval_ms, (int, float))
        or interval_ms <= 0
    ):
        raise InvalidArgumentError("interval_ms must be a positive number.")

    ticker = asyncio.ensure_future(_tick_forever(on_tick, interval_ms / 1000))
    try:
        await asyncio.wait({future, ticker}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        ticker.cancel()
        (outcome,) = await asyncio.gather(ticker, return_exceptions=True)

    # on_tick raised before the future settled
    if isinstance(outcome, Exception):
        raise outcome
