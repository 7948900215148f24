"""Range types shared by the pagination core and the HTTP layer.

RangeSpec:    the requested interval, parsed from a ``Range`` header.
Page[T]:      a materialized slice plus the absolute index of its first item.
ContentRange: which slice of the collection a response body represents.

Plain dataclasses: the core never serializes them. The HTTP layer renders
ContentRange into a header and the page items through the endpoint's schema.
"""

import re
from dataclasses import dataclass

from range_pagination.exceptions import InvalidRangeError

# <unit>=<from>-<to>[, <from>-<to>...], either bound may be empty
_RANGE_HEADER = re.compile(r"^\s*([!#$%&'*+.^_`|~0-9A-Za-z-]+)\s*=\s*(\d*)\s*-\s*(\d*)\s*(?:,.*)?$")

# Largest index a 64-bit signed OFFSET/LIMIT can carry
MAX_INDEX = 2**63 - 1


@dataclass(frozen=True)
class RangeSpec:
    """A requested interval of an ordered collection, in ``unit``.

    ``start`` and ``end`` are inclusive, zero-based indices. Only ``start``
    means "everything from start onward", only ``end`` means "the last
    ``end`` elements". A spec with neither bound can be built but is rejected
    by the paginator.
    """

    start: int | None = None
    end: int | None = None
    unit: str = "elements"

    def __post_init__(self) -> None:
        if (self.start is not None and self.start < 0) or (self.end is not None and self.end < 0):
            raise InvalidRangeError("Range bounds must be non-negative.")
        if (self.start or 0) > MAX_INDEX or (self.end or 0) > MAX_INDEX:
            raise InvalidRangeError(f"Range bounds must not exceed {MAX_INDEX}.")

    @property
    def is_half_open(self) -> bool:
        return self.start is not None and self.end is None

    @property
    def is_tail(self) -> bool:
        return self.start is None and self.end is not None

    @classmethod
    def parse(cls, header: str) -> "RangeSpec | None":
        """Parse a ``Range`` header value such as ``elements=0-9``.

        Returns None when the value is not a range expression at all, so the
        caller can treat the request as unranged. Only the first range of a
        multi-range header is used. ``elements=-`` parses to a spec with no
        bounds.

        Raises:
            InvalidRangeError: a bound is larger than MAX_INDEX.
        """
        match = _RANGE_HEADER.match(header)
        if match is None:
            return None
        unit, start, end = match.groups()
        return cls(
            start=int(start) if start else None,
            end=int(end) if end else None,
            unit=unit,
        )


@dataclass(frozen=True)
class Page[T]:
    """Items of one range request. ``first_index`` is the absolute index of ``items[0]``."""

    items: list[T]
    first_index: int

    @property
    def last_index(self) -> int:
        return self.first_index + len(self.items) - 1


@dataclass(frozen=True)
class ContentRange:
    """Content-Range metadata. ``total`` is None while the length is still unknown."""

    unit: str
    start: int
    end: int
    total: int | None = None

    def header(self) -> str:
        total = "*" if self.total is None else str(self.total)
        return f"{self.unit} {self.start}-{self.end}/{total}"
