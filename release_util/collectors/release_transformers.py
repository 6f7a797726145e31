"""
Release Management SDK Transformers

Converts SDK Deployment objects into DeploymentRecord domain models.

The SDK returns msrest models with snake_case attributes:
    deployment.release.name              -> release_name
    deployment.release_environment.name  -> environment_name
    deployment.started_on                -> started_on (None if never started)
    deployment.deployment_status         -> status ("succeeded", "partiallySucceeded", ...)
    deployment.completed_on - started_on -> time_taken

Usage:
    from release_util.collectors.release_transformers import DeploymentTransformer

    records = DeploymentTransformer.transform_deployments(response.value)
"""

from datetime import datetime, timedelta
from typing import Any

from ..domain.deployment import DeploymentRecord, DeploymentStatus
from ..utils.datetime_utils import UNSET_TIMESTAMP_YEAR, parse_ado_timestamp


def _as_datetime(value: Any) -> datetime | None:
    """Accept SDK datetimes or raw ISO strings; map the unset sentinel to None."""
    if value is None:
        return None
    if isinstance(value, str):
        return parse_ado_timestamp(value)
    if value.year == UNSET_TIMESTAMP_YEAR:
        return None
    return value


def _name_of(reference: Any) -> str:
    return getattr(reference, "name", None) or ""


class DeploymentTransformer:
    """
    Transform SDK deployments to domain records.
    """

    @staticmethod
    def time_taken(started_on: datetime | None, completed_on: datetime | None) -> timedelta:
        """
        Elapsed time of a deployment attempt.

        Zero when the attempt has not started or not finished yet, or when
        the service reports a completion before the start.
        """
        if started_on is None or completed_on is None:
            return timedelta(0)
        elapsed = completed_on - started_on
        return elapsed if elapsed > timedelta(0) else timedelta(0)

    @staticmethod
    def transform_deployment(deployment: Any) -> DeploymentRecord:
        """
        Transform one SDK Deployment into a DeploymentRecord.

        Raises:
            ValueError: If the deployment status is not a known status
        """
        started_on = _as_datetime(getattr(deployment, "started_on", None))
        completed_on = _as_datetime(getattr(deployment, "completed_on", None))

        return DeploymentRecord(
            release_name=_name_of(getattr(deployment, "release", None)),
            environment_name=_name_of(getattr(deployment, "release_environment", None)),
            started_on=started_on,
            status=DeploymentStatus.parse(getattr(deployment, "deployment_status", None)),
            time_taken=DeploymentTransformer.time_taken(started_on, completed_on),
        )

    @staticmethod
    def transform_deployments(deployments: list[Any] | None) -> list[DeploymentRecord]:
        """Transform a page of SDK deployments, keeping service order."""
        return [DeploymentTransformer.transform_deployment(d) for d in deployments or []]
