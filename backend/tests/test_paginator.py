import pytest

from range_pagination.exceptions import InvalidRangeError
from range_pagination.repositories.sources import AsyncSequenceSource, SequenceSource
from range_pagination.schemas.range import MAX_INDEX, RangeSpec
from range_pagination.services.paginator import (
    Window,
    paginate,
    paginate_async,
    resolve_window,
    restrict,
)


@pytest.fixture
def numbers() -> SequenceSource[int]:
    return SequenceSource([1, 2, 3, 4, 5])


def test_subset(numbers: SequenceSource[int]) -> None:
    page = paginate(numbers, RangeSpec(start=1, end=2))
    assert page.items == [2, 3]
    assert page.first_index == 1


def test_skip(numbers: SequenceSource[int]) -> None:
    page = paginate(numbers, RangeSpec(start=2))
    assert page.items == [3, 4, 5]
    assert page.first_index == 2


def test_tail(numbers: SequenceSource[int]) -> None:
    page = paginate(numbers, RangeSpec(end=2))
    assert page.items == [4, 5]
    assert page.first_index == 3


def test_tail_overflow() -> None:
    page = paginate(SequenceSource([1, 2]), RangeSpec(end=4))
    assert page.items == [1, 2]
    assert page.first_index == 0


def test_no_bounds_raises(numbers: SequenceSource[int]) -> None:
    with pytest.raises(InvalidRangeError):
        paginate(numbers, RangeSpec())


def test_no_bounds_raises_for_empty_source() -> None:
    with pytest.raises(InvalidRangeError):
        paginate(SequenceSource([]), RangeSpec())


@pytest.mark.parametrize("length", [1, 5, 17])
def test_subset_lengths(length: int) -> None:
    source = SequenceSource(list(range(length)))
    for a in range(length):
        for b in range(a, length):
            page = paginate(source, RangeSpec(start=a, end=b))
            assert len(page.items) == b - a + 1
            assert page.first_index == a


@pytest.mark.parametrize("length", [0, 3, 8])
def test_tail_open_matches_suffix(length: int) -> None:
    data = list(range(length))
    for a in range(length + 1):
        page = paginate(SequenceSource(data), RangeSpec(start=a))
        assert page.items == data[a:]
        assert page.first_index == a


@pytest.mark.parametrize("length", [0, 3, 8])
def test_tail_clamps(length: int) -> None:
    data = list(range(length))
    for n in range(length + 3):
        page = paginate(SequenceSource(data), RangeSpec(end=n))
        if n <= length:
            assert page.items == data[length - n :]
            assert page.first_index == length - n
        else:
            assert page.items == data
            assert page.first_index == 0


def test_subset_past_end_is_short(numbers: SequenceSource[int]) -> None:
    page = paginate(numbers, RangeSpec(start=3, end=100))
    assert page.items == [4, 5]
    assert page.first_index == 3


def test_reversed_subset_is_empty(numbers: SequenceSource[int]) -> None:
    assert paginate(numbers, RangeSpec(start=3, end=1)).items == []


def test_resolve_window_handles_large_indices() -> None:
    big = 2**40
    assert resolve_window(RangeSpec(start=big, end=big + 9)) == Window(offset=big, limit=10, first_index=big)
    assert resolve_window(RangeSpec(end=10), total=big) == Window(offset=big - 10, limit=10, first_index=big - 10)


def test_resolve_window_caps_limit_at_max_index(numbers: SequenceSource[int]) -> None:
    range_spec = RangeSpec(start=0, end=MAX_INDEX)
    assert resolve_window(range_spec) == Window(offset=0, limit=MAX_INDEX, first_index=0)
    assert paginate(numbers, range_spec).items == [1, 2, 3, 4, 5]


def test_resolve_window_tail_at_max_index() -> None:
    assert resolve_window(RangeSpec(end=MAX_INDEX), total=5) == Window(offset=0, limit=5, first_index=0)


def test_resolve_window_needs_total_for_tail() -> None:
    with pytest.raises(ValueError):
        resolve_window(RangeSpec(end=3))


def test_view_refetches_source() -> None:
    data = [1, 2]
    view = restrict(SequenceSource(data), RangeSpec(start=2))
    assert view.fetch() == []
    data.append(3)
    assert view.fetch() == [3]


@pytest.mark.asyncio
async def test_paginate_async_tail() -> None:
    page = await paginate_async(AsyncSequenceSource([1, 2, 3, 4, 5]), RangeSpec(end=2))
    assert page.items == [4, 5]
    assert page.first_index == 3
