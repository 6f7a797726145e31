#!/usr/bin/env python3
"""
Application Constants

Centralized constants for release queries and report output.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ReleaseQueryConfig:
    """
    Release query constants.

    Attributes:
        DEFAULT_TOP_COUNT: Number of deployments considered when --top is not given
        WARNING_MARKER: Prefix that marks a payload as a warning instead of data
        RETRY_ATTEMPTS: Attempts for transient release service failures
        RETRY_BACKOFF_SECONDS: Initial backoff between attempts (doubles each retry)
        PAGE_SIZE: Deployments requested per release service call
        MAX_PAGES: Safety limit on pages fetched for one command (50 pages)

    Example:
        >>> release_query.DEFAULT_TOP_COUNT
        100
    """

    DEFAULT_TOP_COUNT: int = 100
    """Number of deployments considered when --top is not given"""

    WARNING_MARKER: str = "**Warning**"
    """Prefix that marks a payload as a warning instead of data"""

    RETRY_ATTEMPTS: int = 3
    """Attempts for transient release service failures"""

    RETRY_BACKOFF_SECONDS: float = 1.0
    """Initial backoff between attempts"""

    PAGE_SIZE: int = 100
    """Deployments requested per release service call"""

    MAX_PAGES: int = 50
    """Safety limit on pages fetched for one command"""


@dataclass(frozen=True)
class StatsReportConfig:
    """
    Stats report labels and formats.

    Attributes:
        DATE_FORMAT: strftime format for per-day row labels (MM-dd-yyyy)
        NOT_STARTED_LABEL: Label for deployments that never started
        TOTAL_LABEL: Label for the grand total row
        JSON_INDENT: Indentation of the emitted JSON document
    """

    DATE_FORMAT: str = "%m-%d-%Y"
    NOT_STARTED_LABEL: str = "Not started"
    TOTAL_LABEL: str = "Total"
    JSON_INDENT: int = 2


release_query = ReleaseQueryConfig()
stats_report = StatsReportConfig()
