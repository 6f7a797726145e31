"""
Release service payloads - data or warning.

The release service either returns deployments or tells us why it could
not (bad credentials, unknown release definition, ...). FetchResult makes
that explicit instead of passing around a string that may start with
"**Warning**".
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from ..utils.error_handling import log_and_raise
from .constants import release_query
from .deployment import DeploymentRecord, from_json

logger = logging.getLogger(__name__)


class PayloadError(Exception):
    """Raised when a non-warning payload is not a valid deployment list."""

    pass


def is_warning(payload: str) -> bool:
    return payload.startswith(release_query.WARNING_MARKER)


def as_warning(message: str) -> str:
    """Prefix a message with the warning marker unless it already has it."""
    if is_warning(message):
        return message
    return f"{release_query.WARNING_MARKER} {message}"


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of one release service call.

    Attributes:
        records: Deployments in service order (empty on failure)
        warning: Warning text to print verbatim, or None on success
    """

    records: list[DeploymentRecord] = field(default_factory=list)
    warning: str | None = None

    @property
    def ok(self) -> bool:
        return self.warning is None

    @classmethod
    def success(cls, records: list[DeploymentRecord]) -> "FetchResult":
        return cls(records=list(records))

    @classmethod
    def failure(cls, message: str) -> "FetchResult":
        return cls(warning=as_warning(message))

    @classmethod
    def from_payload(cls, payload: str) -> "FetchResult":
        """
        Build a result from a raw textual payload.

        Warning payloads are detected by prefix before any parsing is
        attempted and are kept verbatim.

        Raises:
            PayloadError: If the payload is neither a warning nor a valid deployment list
        """
        if is_warning(payload):
            return cls(warning=payload)
        return cls.success(parse_records(payload))


def parse_records(payload: str) -> list[DeploymentRecord]:
    """
    Parse a JSON array of deployment entries.

    Raises:
        PayloadError: On invalid JSON, a non-array document or an invalid entry
    """
    try:
        data: Any = json.loads(payload)
    except json.JSONDecodeError as e:
        log_and_raise(
            logger,
            PayloadError(f"Release service payload is not valid JSON: {e}"),
            context={"payload_length": len(payload)},
            error_type="Payload parsing",
        )

    if not isinstance(data, list):
        log_and_raise(
            logger,
            PayloadError(f"Release service payload must be a JSON array, got {type(data).__name__}"),
            context={"payload_type": type(data).__name__},
            error_type="Payload parsing",
        )

    records = []
    for index, entry in enumerate(data):
        try:
            records.append(from_json(entry))
        except (KeyError, ValueError, TypeError) as e:
            log_and_raise(
                logger,
                PayloadError(f"Invalid deployment entry at index {index}: {e!r}"),
                context={"index": index},
                error_type="Payload parsing",
            )
    return records
