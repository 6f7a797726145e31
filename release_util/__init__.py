"""
ReleaseUtil - deployment errors and stats for release definitions.

Queries the release service for the deployments of one release definition
and prints either the failed deployments or a per-day outcome summary.
"""

__version__ = "1.0.0"
