"""
Pytest configuration and shared fixtures

Provides common test fixtures for deployment records and release payloads.
"""

import json
from datetime import datetime, timedelta

import pytest

from release_util.domain.deployment import DeploymentRecord, DeploymentStatus

# ===== Domain Model Fixtures =====


@pytest.fixture
def make_record():
    """Factory for DeploymentRecord with sensible defaults"""

    def _make(
        release_name="Release-1",
        environment_name="Production",
        started_on=datetime(2023, 1, 2, 9, 0, 0),
        status=DeploymentStatus.SUCCEEDED,
        time_taken=timedelta(minutes=10),
    ):
        return DeploymentRecord(
            release_name=release_name,
            environment_name=environment_name,
            started_on=started_on,
            status=status,
            time_taken=time_taken,
        )

    return _make


@pytest.fixture
def worked_example_records(make_record):
    """Three deployments over two days (1h + 2h on Jan 2, 3h on Jan 3)"""
    return [
        make_record(
            started_on=datetime(2023, 1, 2, 8, 0), status=DeploymentStatus.SUCCEEDED, time_taken=timedelta(hours=1)
        ),
        make_record(
            started_on=datetime(2023, 1, 2, 17, 30), status=DeploymentStatus.FAILED, time_taken=timedelta(hours=2)
        ),
        make_record(
            started_on=datetime(2023, 1, 3, 11, 15), status=DeploymentStatus.SUCCEEDED, time_taken=timedelta(hours=3)
        ),
    ]


@pytest.fixture
def mixed_records(make_record):
    """Deployments across releases, environments and statuses, newest first"""
    return [
        make_record("Release-3", "Production", datetime(2023, 3, 5, 10, 0), DeploymentStatus.FAILED),
        make_record("Release-3", "QA", datetime(2023, 3, 5, 9, 0), DeploymentStatus.SUCCEEDED),
        make_record("Release-2", "Production", datetime(2023, 3, 4, 10, 0), DeploymentStatus.PARTIALLY_SUCCEEDED),
        make_record("Release-2", "QA", datetime(2023, 3, 4, 9, 0), DeploymentStatus.SUCCEEDED),
        make_record("Release-1", "Production", None, DeploymentStatus.NOT_DEPLOYED, timedelta(0)),
        make_record("Release-1", "QA", datetime(2023, 3, 3, 9, 0), DeploymentStatus.FAILED),
    ]


# ===== Payload Fixtures =====


@pytest.fixture
def deployment_entries():
    """Deployment entries as the release service serializes them"""
    return [
        {
            "ReleaseName": "Release-7",
            "EnvironmentName": "Production",
            "StartedOn": "2023-01-02T10:00:00Z",
            "Status": "Failed",
            "TimeTaken": "00:20:00",
        },
        {
            "ReleaseName": "Release-7",
            "EnvironmentName": "QA",
            "StartedOn": "2023-01-02T08:00:00Z",
            "Status": "Succeeded",
            "TimeTaken": "00:05:30",
        },
        {
            "ReleaseName": "Release-6",
            "EnvironmentName": "Production",
            "StartedOn": "0001-01-01T00:00:00",
            "Status": "NotDeployed",
            "TimeTaken": "00:00:00",
        },
    ]


@pytest.fixture
def deployment_payload(deployment_entries):
    """Raw JSON payload text"""
    return json.dumps(deployment_entries)


@pytest.fixture
def payload_file(tmp_path, deployment_payload):
    """Saved payload on disk"""
    path = tmp_path / "deployments.json"
    path.write_text(deployment_payload, encoding="utf-8")
    return path
