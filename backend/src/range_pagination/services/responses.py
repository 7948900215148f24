"""Map pagination outcomes to transport-neutral response descriptors.

A RangeResponse says which status to send, what goes in the body (items or
an error message) and which range headers to set. Rendering it is left to
the HTTP layer (routers/rendering.py).
"""

from dataclasses import dataclass
from http import HTTPStatus

from range_pagination.exceptions import PaginationError
from range_pagination.schemas.range import ContentRange, Page
from range_pagination.services.policy import PaginationPolicy

NO_ELEMENTS = "No elements in requested range."
NO_ELEMENTS_YET = "No elements in requested range at this time. Try again later."


@dataclass(frozen=True)
class RangeResponse[T]:
    """Descriptor of one paginated response.

    ``items`` is set for 200/206, ``message`` and ``code`` for every error
    status. ``accept_ranges`` names the unit on non-error responses so
    clients can discover that the endpoint paginates.
    """

    status: HTTPStatus
    items: list[T] | None = None
    message: str | None = None
    code: str | None = None
    accept_ranges: str | None = None
    content_range: ContentRange | None = None

    @property
    def is_error(self) -> bool:
        return self.items is None


def full_listing[T](items: list[T], policy: PaginationPolicy[T]) -> RangeResponse[T]:
    """200 with every element; advertises the unit."""
    return RangeResponse(status=HTTPStatus.OK, items=items, accept_ranges=policy.unit)


def not_satisfiable[T](*, long_polled: bool = False) -> RangeResponse[T]:
    return RangeResponse(
        status=HTTPStatus.REQUESTED_RANGE_NOT_SATISFIABLE,
        message=NO_ELEMENTS_YET if long_polled else NO_ELEMENTS,
        code="range_not_satisfiable",
    )


def partial_content[T](
    page: Page[T],
    policy: PaginationPolicy[T],
    *,
    total: int | None = None,
    long_polled: bool = False,
) -> RangeResponse[T]:
    """206 for a non-empty page, 416 for an empty one.

    For a long-polled page the total length is unknown and left out, unless
    the policy's end-of-stream predicate accepts the last item: then the
    range is closed at ``first_index + len(items)`` so the client stops
    polling. Otherwise ``total`` is the source length.
    """
    if not page.items:
        return not_satisfiable(long_polled=long_polled)
    if long_polled:
        closed = policy.is_end_of_stream(page.items[-1])
        total = page.first_index + len(page.items) if closed else None
    return RangeResponse(
        status=HTTPStatus.PARTIAL_CONTENT,
        items=page.items,
        accept_ranges=policy.unit,
        content_range=ContentRange(
            unit=policy.unit,
            start=page.first_index,
            end=page.last_index,
            total=total,
        ),
    )


def from_error[T](exc: PaginationError) -> RangeResponse[T]:
    """400 for an invalid range, 413 for one over the policy's cap."""
    return RangeResponse(status=exc.status_code, message=exc.message, code=exc.code)
