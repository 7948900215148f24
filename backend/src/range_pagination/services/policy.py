"""Per-endpoint pagination configuration and the range validation rules."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Self

from range_pagination.config import Settings
from range_pagination.exceptions import InvalidRangeError, RangeTooLargeError
from range_pagination.schemas.range import RangeSpec

DEFAULT_UNIT = "elements"
DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_DELAY = 1.5


@dataclass(frozen=True)
class PaginationPolicy[T]:
    """How one endpoint paginates.

    Attributes:
        unit: Range unit the endpoint understands and advertises.
        max_count: Largest number of elements a single response may carry.
            None or 0 means unlimited. When set, unranged and half-open
            requests are rejected because their size is unknown up front.
        long_polling: Retry half-open ranges that come back empty.
        max_attempts: Queries per long poll before answering 416.
        delay: Seconds to wait between long-poll queries.
        end_of_stream: Called with the last element of a long-poll result.
            When it returns True the response carries a total length, which
            tells the client to stop polling.
    """

    unit: str = DEFAULT_UNIT
    max_count: int | None = None
    long_polling: bool = False
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay: float = DEFAULT_DELAY
    end_of_stream: Callable[[T], bool] | None = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay < 0:
            raise ValueError("delay must not be negative")
        if self.max_count is not None and self.max_count < 0:
            raise ValueError("max_count must not be negative")

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> Self:
        """Build a policy from the application settings, then apply ``overrides``."""
        values: dict[str, Any] = {
            "unit": settings.pagination_unit,
            "max_attempts": settings.pagination_max_attempts,
            "delay": settings.pagination_delay,
        }
        values.update(overrides)
        return cls(**values)

    @property
    def capped(self) -> bool:
        return bool(self.max_count)

    def applicable(self, range_spec: RangeSpec | None) -> RangeSpec | None:
        """Return the range if this policy should honour it.

        A range in a different unit is not addressed to us and the request
        is handled as unranged.
        """
        if range_spec is None or range_spec.unit != self.unit:
            return None
        return range_spec

    def check(self, range_spec: RangeSpec | None) -> None:
        """Validate an applicable range (or its absence) against this policy.

        Validity is checked before size: a boundless range is an
        InvalidRangeError even on a capped endpoint.
        """
        if range_spec is None:
            if self.capped:
                raise RangeTooLargeError(self.max_count or 0)
            return
        if range_spec.start is None and range_spec.end is None:
            raise InvalidRangeError()
        max_count = self.max_count
        if not max_count:
            return
        if range_spec.is_half_open:
            raise RangeTooLargeError(max_count)
        if span(range_spec) > max_count:
            raise RangeTooLargeError(max_count)

    def is_end_of_stream(self, item: T) -> bool:
        return self.end_of_stream is not None and self.end_of_stream(item)


def span(range_spec: RangeSpec) -> int:
    """Number of elements a bounded range asks for."""
    if range_spec.start is None:
        return range_spec.end or 0
    if range_spec.end is None:
        raise ValueError("half-open ranges have no span")
    return max(0, range_spec.end - range_spec.start + 1)
