"""Event data-access layer.

Pure query functions, no business logic or HTTP concerns.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from range_pagination.models import Event
from range_pagination.repositories.sources import QuerySource


def events_query() -> Select[tuple[Event]]:
    """All events in feed order."""
    return select(Event).order_by(Event.id)


def event_source(db: AsyncSession) -> QuerySource[Event]:
    return QuerySource(db, events_query())


async def add_event(db: AsyncSession, topic: str, payload: str) -> Event:
    """Insert an event and flush so its id and timestamp are populated."""
    event = Event(topic=topic, payload=payload)
    db.add(event)
    await db.flush()
    await db.refresh(event)
    return event
