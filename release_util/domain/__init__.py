"""
Domain Models - Type-safe data structures for release deployments

This package contains the dataclasses the reports work with:
    - deployment: DeploymentStatus, DeploymentRecord, DateRange, FilterCriteria,
      AggregationRow, AggregationResult
    - constants: query defaults and report labels

Usage:
    from release_util.domain import DeploymentRecord, DeploymentStatus

    if record.status.is_error:
        print(f"{record.release_name} failed in {record.environment_name}")
"""

from .deployment import (
    AggregationResult,
    AggregationRow,
    DateRange,
    DeploymentRecord,
    DeploymentStatus,
    FilterCriteria,
    from_json,
)
from .payload import FetchResult, PayloadError

__all__ = [
    "AggregationResult",
    "AggregationRow",
    "DateRange",
    "DeploymentRecord",
    "DeploymentStatus",
    "FilterCriteria",
    "from_json",
    "FetchResult",
    "PayloadError",
]
