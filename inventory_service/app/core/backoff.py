"""Backoff utilities.

`exponential_backoff` yields `(attempt, delay)` for the caller to try an operation,
then sleeps before the next attempt. The first attempt runs immediately; the caller
breaks out of the loop on success and re-raises on the last attempt.
"""
import asyncio
from typing import AsyncIterator


async def exponential_backoff(
    initial_delay: float,
    max_delay: float,
    multiplier: float,
    max_attempts: int,
) -> AsyncIterator[tuple[int, float]]:
    delay = initial_delay
    for attempt in range(1, max_attempts + 1):
        yield attempt, delay
        if attempt < max_attempts:
            await asyncio.sleep(delay)
            delay = min(delay * multiplier, max_delay)
