"""
Deployment filter pipeline: top-N truncation followed by equality filters.
"""

from collections.abc import Sequence

from ..domain.deployment import DeploymentRecord, FilterCriteria


def truncate(records: Sequence[DeploymentRecord], top_count: int) -> list[DeploymentRecord]:
    """Keep the first top_count records in received order."""
    return list(records[:top_count])


def filter_records(records: Sequence[DeploymentRecord], criteria: FilterCriteria) -> list[DeploymentRecord]:
    """
    Apply FilterCriteria to a fetched deployment collection.

    Truncation to top_count happens first, on the unfiltered collection.
    The release and environment filters then narrow that window, so fewer
    than top_count records can come back even when more matches exist
    further down the collection.

    Args:
        records: Deployments in the order the release service returned them
        criteria: Filters to apply

    Returns:
        Matching deployments in original order (possibly empty)
    """
    filtered = truncate(records, criteria.top_count)

    if criteria.release_name is not None:
        filtered = [r for r in filtered if r.release_name == criteria.release_name]

    if criteria.environment_name is not None:
        filtered = [r for r in filtered if r.environment_name == criteria.environment_name]

    return filtered
