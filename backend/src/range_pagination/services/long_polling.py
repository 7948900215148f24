"""Long polling over a range-restricted view.

Used for half-open ranges ("everything from N onward") when nothing is there
yet: re-query a bounded number of times with a delay in between, and hand
back the first non-empty result. Running out of attempts is a normal outcome
and yields an empty list.
"""

import asyncio
import time
from typing import Protocol

from range_pagination.logging import get_logger

logger = get_logger(__name__)


class Fetchable[T](Protocol):
    def fetch(self) -> list[T]: ...


class AsyncFetchable[T](Protocol):
    async def fetch(self) -> list[T]: ...


def poll_until_non_empty[T](view: Fetchable[T], max_attempts: int, delay: float) -> list[T]:
    """Blocking long poll. Holds the calling thread while it waits."""
    for attempt in range(1, max_attempts + 1):
        items = view.fetch()
        if items:
            logger.debug("long_poll_hit", attempt=attempt, count=len(items))
            return items
        if attempt < max_attempts:
            time.sleep(delay)
    logger.info("long_poll_exhausted", attempts=max_attempts)
    return []


async def poll_until_non_empty_async[T](
    view: AsyncFetchable[T], max_attempts: int, delay: float
) -> list[T]:
    """Suspending long poll.

    Yields to the event loop while waiting. Cancelling the surrounding task
    raises asyncio.CancelledError out of the pending sleep or query; no
    partial result is returned.
    """
    for attempt in range(1, max_attempts + 1):
        items = await view.fetch()
        if items:
            logger.debug("long_poll_hit", attempt=attempt, count=len(items))
            return items
        if attempt < max_attempts:
            await asyncio.sleep(delay)
    logger.info("long_poll_exhausted", attempts=max_attempts)
    return []
