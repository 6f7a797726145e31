"""
Deployment domain models - release deployment records and stats rows

Represents the data the release reports work with:
    - DeploymentStatus: closed set of deployment outcomes
    - DeploymentRecord: one observed deployment of a release to an environment
    - DateRange / FilterCriteria: what the user asked for
    - AggregationRow / AggregationResult: per-day stats with a Total row
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from ..utils.datetime_utils import format_day_timespan, format_timespan, parse_ado_timestamp, parse_timespan
from .constants import release_query

# Unset StartedOn is written back the way the release service reports it
UNSET_TIMESTAMP = "0001-01-01T00:00:00"


class DeploymentStatus(Enum):
    """
    Outcome of a deployment attempt.

    Values are the names the release service uses in serialized payloads.
    """

    UNDEFINED = "Undefined"
    NOT_DEPLOYED = "NotDeployed"
    IN_PROGRESS = "InProgress"
    SUCCEEDED = "Succeeded"
    PARTIALLY_SUCCEEDED = "PartiallySucceeded"
    FAILED = "Failed"

    @classmethod
    def parse(cls, value: Any) -> "DeploymentStatus":
        """
        Parse a status from a payload value.

        Accepts a DeploymentStatus, the status name in any letter case
        ("Succeeded", "partiallySucceeded") or the service's numeric flag value.

        Raises:
            ValueError: If the value is not one of the six known statuses

        Example:
            >>> DeploymentStatus.parse("partiallySucceeded")
            <DeploymentStatus.PARTIALLY_SUCCEEDED: 'PartiallySucceeded'>
            >>> DeploymentStatus.parse(16)
            <DeploymentStatus.FAILED: 'Failed'>
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, int) and not isinstance(value, bool):
            if value in _STATUS_FLAGS:
                return _STATUS_FLAGS[value]
            raise ValueError(f"Unknown deployment status flag: {value}")

        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls.parse(int(text))
            for status in cls:
                if status.value.lower() == text.lower():
                    return status

        raise ValueError(f"Unknown deployment status: {value!r}")

    @property
    def is_error(self) -> bool:
        """True for outcomes reported by the errors command."""
        return self in (DeploymentStatus.FAILED, DeploymentStatus.PARTIALLY_SUCCEEDED)


_STATUS_FLAGS = {
    0: DeploymentStatus.UNDEFINED,
    1: DeploymentStatus.NOT_DEPLOYED,
    2: DeploymentStatus.IN_PROGRESS,
    4: DeploymentStatus.SUCCEEDED,
    8: DeploymentStatus.PARTIALLY_SUCCEEDED,
    16: DeploymentStatus.FAILED,
}


@dataclass(frozen=True)
class DeploymentRecord:
    """
    One observed deployment of a release to an environment.

    Attributes:
        release_name: Release identifier (e.g., "Release-42")
        environment_name: Target environment (e.g., "Production")
        started_on: When the deployment started, or None if it never started
        status: Deployment outcome
        time_taken: Elapsed wall time of the deployment attempt

    Example:
        record = DeploymentRecord(
            release_name="Release-42",
            environment_name="Production",
            started_on=datetime(2023, 1, 2, 9, 30),
            status=DeploymentStatus.SUCCEEDED,
            time_taken=timedelta(minutes=12),
        )
    """

    release_name: str
    environment_name: str
    started_on: datetime | None
    status: DeploymentStatus
    time_taken: timedelta = timedelta(0)

    def __post_init__(self) -> None:
        """
        Validate field types.

        Raises:
            TypeError: If status is not a DeploymentStatus or time_taken is not a timedelta
        """
        if not isinstance(self.status, DeploymentStatus):
            raise TypeError(f"status must be DeploymentStatus, got {type(self.status)}")
        if not isinstance(self.time_taken, timedelta):
            raise TypeError(f"time_taken must be timedelta, got {type(self.time_taken)}")
        if self.started_on is not None and not isinstance(self.started_on, datetime):
            raise TypeError(f"started_on must be datetime or None, got {type(self.started_on)}")

    @property
    def is_started(self) -> bool:
        return self.started_on is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the release service payload shape."""
        return {
            "ReleaseName": self.release_name,
            "EnvironmentName": self.environment_name,
            "StartedOn": self.started_on.isoformat() if self.started_on else UNSET_TIMESTAMP,
            "Status": self.status.value,
            "TimeTaken": format_timespan(self.time_taken),
        }


def from_json(data: dict[str, Any]) -> DeploymentRecord:
    """
    Create a DeploymentRecord from a release service payload entry.

    Args:
        data: Dictionary with ReleaseName, EnvironmentName, StartedOn, Status, TimeTaken

    Returns:
        DeploymentRecord instance

    Raises:
        KeyError: If ReleaseName, EnvironmentName or Status is missing
        ValueError: If Status, StartedOn or TimeTaken cannot be parsed

    Example:
        record = from_json({
            "ReleaseName": "Release-42",
            "EnvironmentName": "Production",
            "StartedOn": "2023-01-02T09:30:00Z",
            "Status": "Succeeded",
            "TimeTaken": "00:12:00",
        })
    """
    return DeploymentRecord(
        release_name=data["ReleaseName"],
        environment_name=data["EnvironmentName"],
        started_on=parse_ado_timestamp(data.get("StartedOn")),
        status=DeploymentStatus.parse(data["Status"]),
        time_taken=parse_timespan(data.get("TimeTaken")),
    )


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive started-on window for a release query.

    No ordering is enforced between start and end; the release service
    decides what a reversed window means.
    """

    start: datetime
    end: datetime


@dataclass(frozen=True)
class FilterCriteria:
    """
    Optional equality filters applied to fetched deployments.

    Attributes:
        release_name: Keep only this release (exact match) when set
        environment_name: Keep only this environment (exact match) when set
        top_count: Number of deployments considered, taken from the front of the collection
    """

    release_name: str | None = None
    environment_name: str | None = None
    top_count: int = release_query.DEFAULT_TOP_COUNT

    def __post_init__(self) -> None:
        if isinstance(self.top_count, bool) or not isinstance(self.top_count, int):
            raise TypeError(f"top_count must be int, got {type(self.top_count)}")
        if self.top_count < 1:
            raise ValueError(f"top_count must be a positive integer, got {self.top_count}")


@dataclass
class AggregationRow:
    """
    Deployment outcome tally for one day (or the Total row).

    Attributes:
        date: "MM-dd-yyyy", "Not started" or "Total"
        undefined .. failed: Number of deployments with each status
        time_taken: Summed duration of every deployment in the row
    """

    date: str
    undefined: int = 0
    not_deployed: int = 0
    in_progress: int = 0
    succeeded: int = 0
    partially_succeeded: int = 0
    failed: int = 0
    time_taken: timedelta = field(default_factory=timedelta)

    def count_for(self, status: DeploymentStatus) -> int:
        return getattr(self, _STATUS_FIELDS[status])

    def add(self, record: DeploymentRecord) -> None:
        """Tally one deployment into this row."""
        attribute = _STATUS_FIELDS[record.status]
        setattr(self, attribute, getattr(self, attribute) + 1)
        self.time_taken += record.time_taken

    @property
    def total_count(self) -> int:
        return sum(self.count_for(status) for status in DeploymentStatus)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the status names as keys, in status order."""
        row: dict[str, Any] = {"Date": self.date}
        for status in DeploymentStatus:
            row[status.value] = self.count_for(status)
        row["TimeTaken"] = format_day_timespan(self.time_taken)
        return row


_STATUS_FIELDS = {
    DeploymentStatus.UNDEFINED: "undefined",
    DeploymentStatus.NOT_DEPLOYED: "not_deployed",
    DeploymentStatus.IN_PROGRESS: "in_progress",
    DeploymentStatus.SUCCEEDED: "succeeded",
    DeploymentStatus.PARTIALLY_SUCCEEDED: "partially_succeeded",
    DeploymentStatus.FAILED: "failed",
}


@dataclass
class AggregationResult:
    """
    Per-day rows in date order followed by exactly one Total row.
    """

    rows: list[AggregationRow]

    def __post_init__(self) -> None:
        if not self.rows:
            raise ValueError("AggregationResult requires at least the Total row")

    @property
    def daily_rows(self) -> list[AggregationRow]:
        return self.rows[:-1]

    @property
    def total(self) -> AggregationRow:
        return self.rows[-1]

    def to_list(self) -> list[dict[str, Any]]:
        return [row.to_dict() for row in self.rows]
