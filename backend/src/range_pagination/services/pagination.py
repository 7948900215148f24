"""Pagination business logic.

Orchestrates validation, slicing and long polling for one request and maps
the outcome to a RangeResponse. ``respond`` is for synchronous sources and
blocks while long polling; ``respond_async`` awaits instead and can be
cancelled.
"""

import asyncio

from range_pagination.exceptions import PaginationError
from range_pagination.logging import get_logger
from range_pagination.schemas.range import Page, RangeSpec
from range_pagination.services.long_polling import (
    poll_until_non_empty,
    poll_until_non_empty_async,
)
from range_pagination.services.paginator import AsyncSource, Source, restrict, restrict_async
from range_pagination.services.policy import PaginationPolicy
from range_pagination.services.responses import (
    RangeResponse,
    from_error,
    full_listing,
    partial_content,
)

logger = get_logger(__name__)


def _rejected[T](exc: PaginationError) -> RangeResponse[T]:
    logger.info("range_rejected", code=exc.code, reason=exc.message)
    return from_error(exc)


def respond[T](
    source: Source[T],
    range_spec: RangeSpec | None,
    policy: PaginationPolicy[T],
) -> RangeResponse[T]:
    """Serve ``range_spec`` (or the whole source when None) from ``source``."""
    range_spec = policy.applicable(range_spec)
    try:
        policy.check(range_spec)
        if range_spec is None:
            return full_listing(list(source.fetch(0, None)), policy)
        view = restrict(source, range_spec)
    except PaginationError as exc:
        return _rejected(exc)

    if policy.long_polling and range_spec.is_half_open:
        items = poll_until_non_empty(view, policy.max_attempts, policy.delay)
        page = Page(items=items, first_index=view.first_index)
        return partial_content(page, policy, long_polled=True)

    page = view.page()
    total = source.count() if page.items else None
    return partial_content(page, policy, total=total)


async def respond_async[T](
    source: AsyncSource[T],
    range_spec: RangeSpec | None,
    policy: PaginationPolicy[T],
) -> RangeResponse[T]:
    """Async form of respond().

    Raises:
        asyncio.CancelledError: the request was abandoned while long polling.
    """
    range_spec = policy.applicable(range_spec)
    try:
        policy.check(range_spec)
        if range_spec is None:
            return full_listing(list(await source.fetch(0, None)), policy)
        view = await restrict_async(source, range_spec)
    except PaginationError as exc:
        return _rejected(exc)

    if policy.long_polling and range_spec.is_half_open:
        try:
            items = await poll_until_non_empty_async(view, policy.max_attempts, policy.delay)
        except asyncio.CancelledError:
            logger.info("long_poll_cancelled", first_index=view.first_index)
            raise
        page = Page(items=items, first_index=view.first_index)
        return partial_content(page, policy, long_polled=True)

    page = await view.page()
    total = await source.count() if page.items else None
    return partial_content(page, policy, total=total)
