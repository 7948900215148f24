"""Shared FastAPI dependencies.

Reusable type aliases and dependency functions that routers import.
Pagination policies are dependencies too, so tests (or deployments) can
swap them through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from range_pagination.config import settings
from range_pagination.db.session import get_db
from range_pagination.logging import get_logger
from range_pagination.models import Event
from range_pagination.schemas.event import EOF_TOPIC
from range_pagination.schemas.range import RangeSpec
from range_pagination.services.policy import PaginationPolicy

logger = get_logger(__name__)

DB = Annotated[AsyncSession, Depends(get_db)]


def get_range(range_header: Annotated[str | None, Header(alias="Range")] = None) -> RangeSpec | None:
    """Parse the Range header. Values that are not range expressions are ignored.

    Bounds too large for a 64-bit index raise InvalidRangeError, which the
    app turns into a 400.
    """
    if range_header is None:
        return None
    range_spec = RangeSpec.parse(range_header)
    if range_spec is None:
        logger.warning("range_header_ignored", value=range_header)
    return range_spec


RequestedRange = Annotated[RangeSpec | None, Depends(get_range)]


def is_eof(event: Event) -> bool:
    return event.topic == EOF_TOPIC


def listing_policy() -> PaginationPolicy[Event]:
    return PaginationPolicy.from_settings(settings)


def limited_policy() -> PaginationPolicy[Event]:
    return PaginationPolicy.from_settings(settings, max_count=settings.events_max_count)


def feed_policy() -> PaginationPolicy[Event]:
    return PaginationPolicy.from_settings(settings, long_polling=True)


def stream_policy() -> PaginationPolicy[Event]:
    return PaginationPolicy.from_settings(settings, long_polling=True, end_of_stream=is_eof)
