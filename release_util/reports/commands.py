"""
errors / stats report pipelines.

    source -> FetchResult -> filter_records -> (stats: aggregate) -> JSON text

The date range, when requested, is validated before the source is called.
Warning results skip filtering and formatting and are returned verbatim.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from ..core.logging_config import get_logger
from ..domain.constants import release_query
from ..domain.deployment import FilterCriteria
from ..domain.payload import FetchResult
from .date_range import validate_date_range
from .filters import filter_records
from .formatter import format_records, format_stats
from .stats import aggregate

logger = get_logger(__name__)


class DeploymentSource(Protocol):
    def fetch_errors(self, top_count: int) -> FetchResult: ...

    def fetch_errors_in_range(self, start: datetime, end: datetime) -> FetchResult: ...

    def fetch_stats(self, top_count: int) -> FetchResult: ...

    def fetch_stats_in_range(self, start: datetime, end: datetime) -> FetchResult: ...


@dataclass(frozen=True)
class ReportRequest:
    """
    What the user asked a report for.

    Attributes:
        top_count: Number of deployments considered
        date_range: Raw --date-range values, or None when the option was not given
        release_name: Exact release name filter
        environment_name: Exact environment name filter
    """

    top_count: int = release_query.DEFAULT_TOP_COUNT
    date_range: Sequence[str] | None = None
    release_name: str | None = None
    environment_name: str | None = None

    @property
    def criteria(self) -> FilterCriteria:
        return FilterCriteria(
            release_name=self.release_name,
            environment_name=self.environment_name,
            top_count=self.top_count,
        )


def _fetch(
    request: ReportRequest,
    fetch_top: Callable[[int], FetchResult],
    fetch_range: Callable[[datetime, datetime], FetchResult],
) -> FetchResult:
    if request.date_range is None:
        return fetch_top(request.top_count)

    validated = validate_date_range(request.date_range)
    if not validated.ok:
        return FetchResult.failure(validated.failure.message)

    return fetch_range(validated.date_range.start, validated.date_range.end)


def run_errors(source: DeploymentSource, request: ReportRequest) -> str:
    """
    Produce the errors report text.

    Returns:
        Indented JSON list of deployments, or the warning text
    """
    criteria = request.criteria
    fetched = _fetch(request, source.fetch_errors, source.fetch_errors_in_range)
    if not fetched.ok:
        logger.info(f"errors report returned a warning: {fetched.warning}")
        return fetched.warning

    return format_records(filter_records(fetched.records, criteria))


def run_stats(source: DeploymentSource, request: ReportRequest) -> str:
    """
    Produce the stats report text.

    Returns:
        Indented JSON list of per-day rows plus a Total row, or the warning text
    """
    criteria = request.criteria
    fetched = _fetch(request, source.fetch_stats, source.fetch_stats_in_range)
    if not fetched.ok:
        logger.info(f"stats report returned a warning: {fetched.warning}")
        return fetched.warning

    return format_stats(aggregate(filter_records(fetched.records, criteria)))
