"""
Data Collectors - Fetch deployment data from the release service

This package contains:
    - ado_connection: authenticated SDK connection and ReleaseClient
    - release_transformers: SDK Deployment -> DeploymentRecord
    - release_collector: errors/stats fetches returning FetchResult
"""

__all__ = []
