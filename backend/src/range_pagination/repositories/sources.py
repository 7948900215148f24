"""Countable, sliceable sources for the paginator.

SequenceSource / AsyncSequenceSource wrap an in-memory sequence; they keep a
reference rather than a copy, so appends made between long-poll attempts are
seen by the next fetch. QuerySource pages a SQLAlchemy select with
OFFSET/LIMIT and counts it with a wrapping COUNT(*).
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


def _slice[T](items: Sequence[T], offset: int, limit: int | None) -> list[T]:
    stop = None if limit is None else offset + limit
    return list(items[offset:stop])


class SequenceSource[T]:
    def __init__(self, items: Sequence[T]) -> None:
        self.items = items

    def count(self) -> int:
        return len(self.items)

    def fetch(self, offset: int, limit: int | None) -> list[T]:
        return _slice(self.items, offset, limit)


class AsyncSequenceSource[T]:
    def __init__(self, items: Sequence[T]) -> None:
        self.items = items

    async def count(self) -> int:
        return len(self.items)

    async def fetch(self, offset: int, limit: int | None) -> list[T]:
        return _slice(self.items, offset, limit)


class QuerySource[T]:
    """Async source over a single-entity select.

    The statement must have a deterministic ORDER BY, otherwise pages can
    overlap or skip rows between requests.
    """

    def __init__(self, db: AsyncSession, stmt: Select[Any]) -> None:
        self.db = db
        self.stmt = stmt

    async def count(self) -> int:
        stmt = select(func.count()).select_from(self.stmt.order_by(None).subquery())
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def fetch(self, offset: int, limit: int | None) -> list[T]:
        stmt = self.stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
