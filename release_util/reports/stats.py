"""
Deployment stats aggregation.

Groups deployments by the calendar day they started on and tallies each
outcome, then appends a Total row over the whole collection.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date

from ..domain.constants import stats_report
from ..domain.deployment import AggregationResult, AggregationRow, DeploymentRecord


def _day_key(record: DeploymentRecord) -> date | None:
    return record.started_on.date() if record.started_on is not None else None


def _sort_key(day: date | None) -> tuple[bool, date]:
    # Never-started deployments sort ahead of every real day
    return (day is not None, day or date.min)


def _day_label(day: date | None) -> str:
    if day is None:
        return stats_report.NOT_STARTED_LABEL
    return day.strftime(stats_report.DATE_FORMAT)


def tally(label: str, records: Iterable[DeploymentRecord]) -> AggregationRow:
    """Build one row counting each status and summing durations."""
    row = AggregationRow(date=label)
    for record in records:
        row.add(record)
    return row


def aggregate(records: Sequence[DeploymentRecord]) -> AggregationResult:
    """
    Aggregate deployments into per-day stats rows plus a Total row.

    Rows are ordered by day, with the "Not started" bucket (deployments
    without a start time) first. The Total row is tallied over the full
    input rather than summed from the day rows.

    Args:
        records: Filtered deployments

    Returns:
        AggregationResult; for empty input, only a zeroed Total row

    Example:
        result = aggregate(records)
        for row in result.daily_rows:
            print(row.date, row.succeeded, row.failed)
        print("Total failures:", result.total.failed)
    """
    by_day: defaultdict[date | None, list[DeploymentRecord]] = defaultdict(list)
    for record in records:
        by_day[_day_key(record)].append(record)

    rows = [tally(_day_label(day), by_day[day]) for day in sorted(by_day, key=_sort_key)]
    rows.append(tally(stats_report.TOTAL_LABEL, records))

    return AggregationResult(rows=rows)
