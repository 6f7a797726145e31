"""
Report Pipelines - errors and stats views of release deployments

    - date_range: --date-range validation
    - filters: top-N truncation and release/environment filters
    - stats: per-day outcome tally with a Total row
    - formatter: indented JSON output
    - commands: end-to-end errors/stats pipelines

Usage:
    from release_util.reports import ReportRequest, run_stats

    print(run_stats(collector, ReportRequest(top_count=50, environment_name="Production")))
"""

from .commands import ReportRequest, run_errors, run_stats

__all__ = ["ReportRequest", "run_errors", "run_stats"]
