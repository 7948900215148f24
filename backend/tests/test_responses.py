from http import HTTPStatus

from range_pagination.exceptions import InvalidRangeError, RangeTooLargeError
from range_pagination.schemas.range import ContentRange, Page
from range_pagination.services.policy import PaginationPolicy
from range_pagination.services.responses import (
    NO_ELEMENTS,
    NO_ELEMENTS_YET,
    from_error,
    full_listing,
    partial_content,
)


def test_full_listing_advertises_unit() -> None:
    response = full_listing([1, 2], PaginationPolicy[int](unit="rows"))
    assert response.status == HTTPStatus.OK
    assert response.items == [1, 2]
    assert response.accept_ranges == "rows"
    assert response.content_range is None
    assert not response.is_error


def test_partial_content_reports_total() -> None:
    response = partial_content(Page(items=[2, 3], first_index=1), PaginationPolicy[int](), total=5)
    assert response.status == HTTPStatus.PARTIAL_CONTENT
    assert response.items == [2, 3]
    assert response.accept_ranges == "elements"
    assert response.content_range == ContentRange(unit="elements", start=1, end=2, total=5)


def test_empty_page_is_not_satisfiable() -> None:
    response = partial_content(Page(items=[], first_index=9), PaginationPolicy[int](), total=5)
    assert response.status == HTTPStatus.REQUESTED_RANGE_NOT_SATISFIABLE
    assert response.message == NO_ELEMENTS
    assert response.is_error
    assert response.accept_ranges is None


def test_empty_long_poll_asks_to_retry() -> None:
    response = partial_content(Page(items=[], first_index=9), PaginationPolicy[int](), long_polled=True)
    assert response.status == HTTPStatus.REQUESTED_RANGE_NOT_SATISFIABLE
    assert response.message == NO_ELEMENTS_YET


def test_long_poll_leaves_total_open() -> None:
    policy = PaginationPolicy[int](long_polling=True, end_of_stream=lambda n: n < 0)
    response = partial_content(Page(items=[7, 8], first_index=3), policy, total=99, long_polled=True)
    assert response.content_range == ContentRange(unit="elements", start=3, end=4, total=None)


def test_long_poll_closes_range_at_end_of_stream() -> None:
    policy = PaginationPolicy[int](long_polling=True, end_of_stream=lambda n: n < 0)
    response = partial_content(Page(items=[7, -1], first_index=3), policy, long_polled=True)
    assert response.content_range == ContentRange(unit="elements", start=3, end=4, total=5)


def test_from_error() -> None:
    bad = from_error(InvalidRangeError())
    assert bad.status == HTTPStatus.BAD_REQUEST
    assert bad.code == "invalid_range"
    assert bad.message == "Range must specify upper or lower bound or both."

    too_large = from_error(RangeTooLargeError(10))
    assert too_large.status == HTTPStatus.REQUEST_ENTITY_TOO_LARGE
    assert too_large.code == "range_too_large"
    assert too_large.accept_ranges is None
