import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from range_pagination.models import Event
from range_pagination.repositories.event import add_event, event_source
from range_pagination.repositories.sources import QuerySource
from range_pagination.schemas.range import RangeSpec
from range_pagination.services.paginator import paginate_async
from tests.seeds import TOPICS


@pytest.mark.asyncio
async def test_query_source_count(seeded_db: AsyncSession) -> None:
    assert await event_source(seeded_db).count() == 5


@pytest.mark.asyncio
async def test_query_source_count_respects_filters(seeded_db: AsyncSession) -> None:
    source: QuerySource[Event] = QuerySource(
        seeded_db, select(Event).where(Event.topic.in_(["login", "eof"])).order_by(Event.id)
    )
    assert await source.count() == 2


@pytest.mark.asyncio
async def test_query_source_fetch(seeded_db: AsyncSession) -> None:
    source = event_source(seeded_db)
    assert [e.topic for e in await source.fetch(1, 2)] == TOPICS[1:3]
    assert [e.topic for e in await source.fetch(3, None)] == TOPICS[3:]
    assert await source.fetch(10, None) == []


@pytest.mark.asyncio
async def test_paginate_query_tail(seeded_db: AsyncSession) -> None:
    page = await paginate_async(event_source(seeded_db), RangeSpec(end=2))
    assert [e.topic for e in page.items] == ["refund", "eof"]
    assert page.first_index == 3


@pytest.mark.asyncio
async def test_add_event_is_visible_to_next_fetch(seeded_db: AsyncSession) -> None:
    source = event_source(seeded_db)
    assert await source.fetch(5, None) == []

    event = await add_event(seeded_db, "signup", "{}")

    assert event.id is not None
    assert event.created_at is not None
    assert [e.id for e in await source.fetch(5, None)] == [event.id]
