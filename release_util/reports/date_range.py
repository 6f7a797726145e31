"""
Date range validation for the --date-range option.

Validation failures are expected user errors: they come back as a result
carrying the warning text to print, never as exceptions.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..domain.constants import release_query
from ..domain.deployment import DateRange
from ..utils.datetime_utils import parse_date_option


class RangeFailure(Enum):
    """Why a date range was rejected, with the warning shown to the user."""

    MISSING_RANGE_BOUND = "Must provide two dates when using the date range option."
    INVALID_START_DATE = "Invalid start date supplied to date range option."
    INVALID_END_DATE = "Invalid end date supplied to date range option."

    @property
    def message(self) -> str:
        return f"{release_query.WARNING_MARKER} {self.value}"


@dataclass(frozen=True)
class DateRangeResult:
    """Either a validated DateRange or the first failure found."""

    date_range: DateRange | None = None
    failure: RangeFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def validate_date_range(values: Sequence[str] | None) -> DateRangeResult:
    """
    Validate the two values given to --date-range.

    The start date is checked before the end date and only the first
    failure is reported. Values beyond the second are ignored.

    Args:
        values: Raw option values, in the order given

    Returns:
        DateRangeResult with either date_range or failure set

    Example:
        >>> validate_date_range(["2023-01-01"]).failure
        <RangeFailure.MISSING_RANGE_BOUND: 'Must provide two dates when using the date range option.'>
    """
    if not values or len(values) < 2:
        return DateRangeResult(failure=RangeFailure.MISSING_RANGE_BOUND)

    start = parse_date_option(values[0])
    if start is None:
        return DateRangeResult(failure=RangeFailure.INVALID_START_DATE)

    end = parse_date_option(values[1])
    if end is None:
        return DateRangeResult(failure=RangeFailure.INVALID_END_DATE)

    return DateRangeResult(date_range=DateRange(start=start, end=end))
