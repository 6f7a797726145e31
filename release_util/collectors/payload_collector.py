"""
Saved Payload Collector

Serves deployments from a payload saved earlier (for example the output of
`release-util errors ... > errors.json`, or an export from another tool)
instead of querying the release service.

The payload is either a JSON array of deployment entries or a warning
text starting with "**Warning**", which is passed through unchanged.
"""

from datetime import datetime, timezone
from pathlib import Path

from ..core.logging_config import get_logger
from ..domain.deployment import DeploymentRecord
from ..domain.payload import FetchResult

logger = get_logger(__name__)


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def started_between(record: DeploymentRecord, start: datetime, end: datetime) -> bool:
    """
    True when the record started inside [start, end]; never-started records are excluded.

    If any of the three times is naive, all of them are compared as naive
    UTC times.
    """
    if record.started_on is None:
        return False
    started_on = record.started_on
    if None in (started_on.tzinfo, start.tzinfo, end.tzinfo):
        started_on, start, end = (_as_naive_utc(v) for v in (started_on, start, end))
    return start <= started_on <= end


class PayloadCollector:
    """
    Deployment source backed by a raw payload.

    Provides the same fetch methods as ReleaseCollector. Records are
    served in payload order; a payload is assumed to already hold the
    deployments the command reports on.

    Raises:
        PayloadError: On first fetch, if the payload is neither a warning nor valid deployment JSON
    """

    def __init__(self, payload: str):
        self.payload = payload

    @classmethod
    def from_file(cls, path: Path) -> "PayloadCollector":
        logger.info(f"Reading deployments from {path}")
        return cls(path.read_text(encoding="utf-8-sig"))

    def _load(self) -> FetchResult:
        return FetchResult.from_payload(self.payload)

    def _select(self, errors_only: bool, start: datetime | None = None, end: datetime | None = None) -> FetchResult:
        loaded = self._load()
        if not loaded.ok:
            return loaded
        records = loaded.records
        if errors_only:
            records = [r for r in records if r.status.is_error]
        if start is not None and end is not None:
            records = [r for r in records if started_between(r, start, end)]
        return FetchResult.success(records)

    def fetch_errors(self, top_count: int) -> FetchResult:
        return self._select(errors_only=True)

    def fetch_errors_in_range(self, start: datetime, end: datetime) -> FetchResult:
        return self._select(errors_only=True, start=start, end=end)

    def fetch_stats(self, top_count: int) -> FetchResult:
        return self._select(errors_only=False)

    def fetch_stats_in_range(self, start: datetime, end: datetime) -> FetchResult:
        return self._select(errors_only=False, start=start, end=end)
