"""
Tests for the errors/stats report pipelines
"""

import json
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from release_util.domain.payload import FetchResult
from release_util.reports.commands import ReportRequest, run_errors, run_stats


@pytest.fixture
def source(mixed_records):
    """Deployment source returning mixed_records from every fetch method"""
    mock_source = MagicMock()
    for name in ("fetch_errors", "fetch_errors_in_range", "fetch_stats", "fetch_stats_in_range"):
        getattr(mock_source, name).return_value = FetchResult.success(mixed_records)
    return mock_source


class TestReportRequest:
    """Test ReportRequest defaults"""

    def test_defaults(self):
        request = ReportRequest()

        assert request.top_count == 100
        assert request.date_range is None
        assert request.criteria.release_name is None

    def test_invalid_top_count_fails_before_fetching(self, source):
        with pytest.raises(ValueError, match="positive integer"):
            run_errors(source, ReportRequest(top_count=0))

        source.fetch_errors.assert_not_called()


class TestRunErrors:
    """Test the errors pipeline"""

    def test_fetches_top_without_range(self, source):
        run_errors(source, ReportRequest(top_count=25))

        source.fetch_errors.assert_called_once_with(25)
        source.fetch_errors_in_range.assert_not_called()

    def test_fetches_range_when_given(self, source):
        run_errors(source, ReportRequest(date_range=["2023-03-01", "2023-03-31"]))

        source.fetch_errors_in_range.assert_called_once_with(datetime(2023, 3, 1), datetime(2023, 3, 31))
        source.fetch_errors.assert_not_called()

    def test_filters_and_formats(self, source):
        text = run_errors(source, ReportRequest(top_count=4, environment_name="Production"))
        data = json.loads(text)

        assert [(d["ReleaseName"], d["Status"]) for d in data] == [
            ("Release-3", "Failed"),
            ("Release-2", "PartiallySucceeded"),
        ]

    def test_empty_result_is_empty_array(self, source):
        assert run_errors(source, ReportRequest(release_name="Release-99")) == "[]"

    def test_missing_range_bound_skips_service(self, source):
        result = run_errors(source, ReportRequest(date_range=["2023-03-01"]))

        assert result == "**Warning** Must provide two dates when using the date range option."
        source.fetch_errors_in_range.assert_not_called()

    def test_invalid_start_date(self, source):
        result = run_errors(source, ReportRequest(date_range=["soon", "2023-03-31"]))
        assert result == "**Warning** Invalid start date supplied to date range option."

    def test_invalid_end_date(self, source):
        result = run_errors(source, ReportRequest(date_range=["2023-03-01", "later"]))
        assert result == "**Warning** Invalid end date supplied to date range option."

    def test_service_warning_is_verbatim(self, source):
        """Test filters are not applied to a warning payload"""
        warning = "**Warning** Unable to authenticate to 'https://dev.azure.com/contoso'. Check that ADO_PAT is valid."
        source.fetch_errors.return_value = FetchResult(warning=warning)

        assert run_errors(source, ReportRequest(release_name="Release-1")) == warning


class TestRunStats:
    """Test the stats pipeline"""

    def test_worked_example(self, worked_example_records):
        source = MagicMock()
        source.fetch_stats.return_value = FetchResult.success(worked_example_records)

        data = json.loads(run_stats(source, ReportRequest()))

        assert [(row["Date"], row["Succeeded"], row["Failed"], row["TimeTaken"]) for row in data] == [
            ("01-02-2023", 1, 1, "00.03:00:00"),
            ("01-03-2023", 1, 0, "00.03:00:00"),
            ("Total", 2, 1, "00.06:00:00"),
        ]

    def test_filters_apply_before_aggregation(self, source):
        data = json.loads(run_stats(source, ReportRequest(release_name="Release-1")))

        assert [row["Date"] for row in data] == ["Not started", "03-03-2023", "Total"]
        assert data[-1]["NotDeployed"] == 1
        assert data[-1]["Failed"] == 1

    def test_range_uses_stats_source(self, source):
        run_stats(source, ReportRequest(date_range=["2023-03-01", "2023-03-31", "extra"]))

        source.fetch_stats_in_range.assert_called_once_with(datetime(2023, 3, 1), datetime(2023, 3, 31))
        source.fetch_errors_in_range.assert_not_called()

    def test_empty_collection_yields_total_only(self, source):
        source.fetch_stats.return_value = FetchResult.success([])
        data = json.loads(run_stats(source, ReportRequest()))

        assert len(data) == 1
        assert data[0]["Date"] == "Total"

    def test_range_warning_is_returned(self, source):
        result = run_stats(source, ReportRequest(date_range=[]))

        assert result == "**Warning** Must provide two dates when using the date range option."
        source.fetch_stats.assert_not_called()
