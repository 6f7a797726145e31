"""
Tests for release service payload handling (FetchResult, parse_records)
"""

import json

import pytest

from release_util.domain.deployment import DeploymentStatus
from release_util.domain.payload import FetchResult, PayloadError, as_warning, is_warning, parse_records


class TestWarningMarker:
    """Test warning detection by prefix"""

    def test_is_warning(self):
        assert is_warning("**Warning** Unable to authenticate") is True
        assert is_warning("[]") is False
        assert is_warning("Note: **Warning** later in the text") is False

    def test_as_warning_adds_marker(self):
        assert as_warning("Something went wrong.") == "**Warning** Something went wrong."

    def test_as_warning_keeps_existing_marker(self):
        assert as_warning("**Warning** Already marked.") == "**Warning** Already marked."


class TestFetchResult:
    """Test FetchResult construction"""

    def test_success(self, make_record):
        records = [make_record(), make_record(release_name="Release-2")]
        result = FetchResult.success(records)

        assert result.ok is True
        assert result.warning is None
        assert result.records == records

    def test_failure(self):
        result = FetchResult.failure("No release definition found named 'X' in project 'Y'.")

        assert result.ok is False
        assert result.records == []
        assert result.warning == "**Warning** No release definition found named 'X' in project 'Y'."

    def test_from_payload_records(self, deployment_payload):
        result = FetchResult.from_payload(deployment_payload)

        assert result.ok is True
        assert [r.release_name for r in result.records] == ["Release-7", "Release-7", "Release-6"]

    def test_from_payload_warning_is_verbatim(self):
        """Test warning payloads are kept exactly and never parsed"""
        payload = "**Warning** Could not find release definition: {not json"
        result = FetchResult.from_payload(payload)

        assert result.ok is False
        assert result.warning == payload

    def test_from_payload_malformed_raises(self):
        with pytest.raises(PayloadError, match="not valid JSON"):
            FetchResult.from_payload("<html>Service Unavailable</html>")


class TestParseRecords:
    """Test parse_records validation"""

    def test_empty_array(self):
        assert parse_records("[]") == []

    def test_keeps_payload_order(self, deployment_entries):
        records = parse_records(json.dumps(deployment_entries))

        assert [r.environment_name for r in records] == ["Production", "QA", "Production"]
        assert records[2].status is DeploymentStatus.NOT_DEPLOYED

    def test_non_array_document(self):
        with pytest.raises(PayloadError, match="must be a JSON array"):
            parse_records('{"ReleaseName": "Release-1"}')

    def test_invalid_entry_reports_index(self, deployment_entries):
        entries = deployment_entries + [dict(deployment_entries[0], Status="Exploded")]

        with pytest.raises(PayloadError, match="index 3"):
            parse_records(json.dumps(entries))

    def test_non_object_entry(self):
        with pytest.raises(PayloadError, match="index 0"):
            parse_records("[42]")
