"""Domain exceptions raised by the pagination core and the events service.

The pagination service converts PaginationError subclasses into response
descriptors. Anything that escapes to the app is translated by the
exception handlers in main.py into the standard error envelope:
{"error": {"code": "...", "message": "..."}}.
"""

from http import HTTPStatus


class DomainError(Exception):
    """Base class for all domain exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PaginationError(DomainError):
    """A requested range that cannot be served. Never retried."""

    status_code: HTTPStatus = HTTPStatus.BAD_REQUEST
    code: str = "pagination_error"


class InvalidRangeError(PaginationError):
    """Raised when a range specifies neither bound, or one outside 0..2**63-1."""

    code = "invalid_range"

    def __init__(self, message: str = "Range must specify upper or lower bound or both.") -> None:
        super().__init__(message)


class RangeTooLargeError(PaginationError):
    """Raised when a request would return more elements than the policy allows."""

    status_code = HTTPStatus.REQUEST_ENTITY_TOO_LARGE
    code = "range_too_large"

    def __init__(self, max_count: int) -> None:
        self.max_count = max_count
        super().__init__(f"Requested range is out of range (max range: {max_count}).")
