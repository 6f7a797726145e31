"""
Result formatter - renders report output as indented JSON.
"""

import json
from collections.abc import Sequence
from typing import Any

from ..domain.constants import stats_report
from ..domain.deployment import AggregationResult, DeploymentRecord


def _dump(document: Any) -> str:
    return json.dumps(document, indent=stats_report.JSON_INDENT, ensure_ascii=False)


def format_records(records: Sequence[DeploymentRecord]) -> str:
    """Render a deployment list in the release service payload shape."""
    return _dump([record.to_dict() for record in records])


def format_stats(result: AggregationResult) -> str:
    """Render stats rows, Total row last."""
    return _dump(result.to_list())

