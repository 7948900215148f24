"""Apply a RangeSpec to an ordered, countable source.

Sources are anything with ``count()`` and ``fetch(offset, limit)``; see
repositories/sources.py for the in-memory and SQLAlchemy implementations.
``restrict`` returns a lazy view that re-reads the source on every
``fetch()``, which is what long polling needs. ``paginate`` is the one-shot
form that returns a materialized Page.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from range_pagination.exceptions import InvalidRangeError
from range_pagination.schemas.range import MAX_INDEX, Page, RangeSpec


class Source[T](Protocol):
    def count(self) -> int: ...

    def fetch(self, offset: int, limit: int | None) -> Sequence[T]:
        """Return up to ``limit`` items starting at ``offset``; ``None`` means to the end."""
        ...


class AsyncSource[T](Protocol):
    async def count(self) -> int: ...

    async def fetch(self, offset: int, limit: int | None) -> Sequence[T]: ...


@dataclass(frozen=True)
class Window:
    """Offset/limit pair a range resolves to, plus the index reported to the client."""

    offset: int
    limit: int | None
    first_index: int


@dataclass(frozen=True)
class RangeView[T]:
    """A source restricted to one window. Every fetch() queries the source again."""

    source: Source[T]
    window: Window

    @property
    def first_index(self) -> int:
        return self.window.first_index

    def fetch(self) -> list[T]:
        if self.window.limit == 0:
            return []
        return list(self.source.fetch(self.window.offset, self.window.limit))

    def page(self) -> Page[T]:
        return Page(items=self.fetch(), first_index=self.first_index)


@dataclass(frozen=True)
class AsyncRangeView[T]:
    """Async counterpart of RangeView."""

    source: AsyncSource[T]
    window: Window

    @property
    def first_index(self) -> int:
        return self.window.first_index

    async def fetch(self) -> list[T]:
        if self.window.limit == 0:
            return []
        return list(await self.source.fetch(self.window.offset, self.window.limit))

    async def page(self) -> Page[T]:
        return Page(items=await self.fetch(), first_index=self.first_index)


def resolve_window(range_spec: RangeSpec, total: int | None = None) -> Window:
    """Translate a range into an offset/limit window.

    ``total`` (the source length) is only consulted for tail ranges, which
    select the last ``end`` elements and clamp to the start of the source.
    A subset whose end lies before its start selects nothing. Limits are
    capped at MAX_INDEX so they fit a 64-bit LIMIT; no source is that long.

    Raises:
        InvalidRangeError: the range has neither bound.
    """
    start, end = range_spec.start, range_spec.end
    if start is not None:
        if end is None:
            return Window(offset=start, limit=None, first_index=start)
        limit = min(max(0, end - start + 1), MAX_INDEX)
        return Window(offset=start, limit=limit, first_index=start)
    if end is not None:
        if total is None:
            raise ValueError("tail ranges need the source length")
        first = max(0, total - end)
        return Window(offset=first, limit=total - first, first_index=first)
    raise InvalidRangeError()


def restrict[T](source: Source[T], range_spec: RangeSpec) -> RangeView[T]:
    total = source.count() if range_spec.is_tail else None
    return RangeView(source=source, window=resolve_window(range_spec, total))


def paginate[T](source: Source[T], range_spec: RangeSpec) -> Page[T]:
    """Slice ``source`` by ``range_spec``.

    Example, source = [1, 2, 3, 4, 5]:
        1-2 -> Page([2, 3], first_index=1)
        2-  -> Page([3, 4, 5], first_index=2)
        -2  -> Page([4, 5], first_index=3)
    """
    return restrict(source, range_spec).page()


async def restrict_async[T](source: AsyncSource[T], range_spec: RangeSpec) -> AsyncRangeView[T]:
    total = await source.count() if range_spec.is_tail else None
    return AsyncRangeView(source=source, window=resolve_window(range_spec, total))


async def paginate_async[T](source: AsyncSource[T], range_spec: RangeSpec) -> Page[T]:
    view = await restrict_async(source, range_spec)
    return await view.page()
