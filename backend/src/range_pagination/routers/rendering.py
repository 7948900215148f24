"""Render RangeResponse descriptors as HTTP responses."""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import TypeAdapter

from range_pagination.schemas.error import ErrorResponse
from range_pagination.services.responses import RangeResponse

ACCEPT_RANGES = "Accept-Ranges"
CONTENT_RANGE = "Content-Range"


def range_headers(descriptor: RangeResponse[Any]) -> dict[str, str]:
    headers: dict[str, str] = {}
    if descriptor.accept_ranges:
        headers[ACCEPT_RANGES] = descriptor.accept_ranges
    if descriptor.content_range is not None:
        headers[CONTENT_RANGE] = descriptor.content_range.header()
    return headers


def render(descriptor: RangeResponse[Any], adapter: TypeAdapter[list[Any]]) -> JSONResponse:
    """Serialize the items with ``adapter``, or the message into the error envelope.

    The descriptor's unit and content range become the ``Accept-Ranges`` and
    ``Content-Range`` headers.
    """
    if descriptor.is_error:
        content: Any = ErrorResponse.of(descriptor.code or "error", descriptor.message or "")
    else:
        items = adapter.validate_python(descriptor.items, from_attributes=True)
        content = adapter.dump_python(items, mode="json")
    return JSONResponse(
        status_code=int(descriptor.status),
        content=content,
        headers=range_headers(descriptor),
    )
