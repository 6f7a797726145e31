#!/usr/bin/env python3
"""
Release Deployment Collector

Fetches deployments of one release definition from the release service:
- errors: deployments that failed or partially succeeded
- stats: every deployment attempt

Each fetch returns a FetchResult. Expected upstream problems (bad
credentials, unknown release definition, service errors) come back as
warning results; connection failures are retried and then raised.

No request is made until the first fetch, so option problems such as an
invalid --date-range are reported before the service is contacted.

Read-only operation - does not modify any release data.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from azure.devops.exceptions import AzureDevOpsAuthenticationError, AzureDevOpsServiceError
from msrest.exceptions import ClientRequestError

from ..core.logging_config import get_logger, log_with_context
from ..domain.constants import release_query
from ..domain.deployment import DeploymentRecord
from ..domain.payload import FetchResult
from ..utils.error_handling import log_and_return_default, with_retry
from .ado_connection import get_ado_connection, get_release_client
from .release_transformers import DeploymentTransformer

logger = get_logger(__name__)

T = TypeVar("T")


class ReleaseServiceUnavailable(Exception):
    """Raised when the release service cannot be reached."""

    pass


def _service_call_context(operation: Callable[..., Any], **kwargs: Any) -> dict[str, Any]:
    call_context: dict[str, Any] = {"operation": getattr(operation, "__name__", repr(operation))}
    for key in ("project", "definition_id", "continuation_token"):
        if kwargs.get(key) is not None:
            call_context[key] = kwargs[key]
    return call_context


@with_retry(
    max_attempts=release_query.RETRY_ATTEMPTS,
    backoff_seconds=release_query.RETRY_BACKOFF_SECONDS,
    exceptions=(ReleaseServiceUnavailable,),
    context=_service_call_context,
)
def call_release_service(operation: Callable[..., T], **kwargs: Any) -> T:
    """
    Call a release service operation, retrying connection-level failures.

    Authentication and service errors (HTTP error responses) are not retried.
    """
    try:
        return operation(**kwargs)
    except (AzureDevOpsAuthenticationError, AzureDevOpsServiceError):
        raise
    except ClientRequestError as e:
        raise ReleaseServiceUnavailable(str(e)) from e


class ReleaseCollector:
    """
    Deployment source for one release definition.

    Args:
        project_collection_url: Collection URL the client connects to
        project_name: Project that owns the release definition
        release_definition_name: Release definition to report on
        release_client: SDK ReleaseClient to use instead of connecting on first fetch
    """

    def __init__(
        self,
        project_collection_url: str,
        project_name: str,
        release_definition_name: str,
        release_client: Any = None,
    ):
        self.project_collection_url = project_collection_url
        self.project_name = project_name
        self.release_definition_name = release_definition_name
        self.release_client = release_client

    def fetch_errors(self, top_count: int) -> FetchResult:
        """Most recent failed or partially succeeded deployments, at most top_count."""
        return self._fetch(limit=top_count, errors_only=True)

    def fetch_errors_in_range(self, start: datetime, end: datetime) -> FetchResult:
        """Failed or partially succeeded deployments started between start and end."""
        return self._fetch(errors_only=True, min_started_time=start, max_started_time=end)

    def fetch_stats(self, top_count: int) -> FetchResult:
        """Most recent deployments of any status, at most top_count."""
        return self._fetch(limit=top_count)

    def fetch_stats_in_range(self, start: datetime, end: datetime) -> FetchResult:
        """Deployments of any status started between start and end."""
        return self._fetch(min_started_time=start, max_started_time=end)

    def client(self) -> Any:
        """
        The ReleaseClient, connecting on first use.

        Raises:
            ConfigurationError: If the URL or ADO_PAT is missing or invalid
            AzureDevOpsAuthenticationError: If the collection rejects ADO_PAT
        """
        if self.release_client is None:
            connection = get_ado_connection(self.project_collection_url)
            self.release_client = call_release_service(get_release_client, connection=connection)
        return self.release_client

    def find_release_definition(self) -> Any | None:
        """
        Look up the release definition by name (case-insensitive, like the service).

        Returns:
            SDK ReleaseDefinition, or None if the project has no definition with that name
        """
        definitions = call_release_service(
            self.client().get_release_definitions,
            project=self.project_name,
            search_text=self.release_definition_name,
            is_exact_name_match=True,
        )

        wanted = self.release_definition_name.casefold()
        for definition in definitions or []:
            if (definition.name or "").casefold() == wanted:
                return definition
        return None

    def _fetch(
        self,
        limit: int | None = None,
        errors_only: bool = False,
        min_started_time: datetime | None = None,
        max_started_time: datetime | None = None,
    ) -> FetchResult:
        context = {
            "project": self.project_name,
            "release_definition": self.release_definition_name,
            "errors_only": errors_only,
        }

        try:
            definition = self.find_release_definition()
            if definition is None:
                return FetchResult.failure(
                    f"No release definition found named '{self.release_definition_name}' "
                    f"in project '{self.project_name}'."
                )

            records = self._query_deployments(definition.id, limit, errors_only, min_started_time, max_started_time)

        except AzureDevOpsAuthenticationError as e:
            return log_and_return_default(
                logger,
                e,
                context=context,
                default_value=FetchResult.failure(
                    f"Unable to authenticate to '{self.project_collection_url}'. Check that ADO_PAT is valid."
                ),
                error_type="Release service authentication",
            )
        except AzureDevOpsServiceError as e:
            return log_and_return_default(
                logger,
                e,
                context=context,
                default_value=FetchResult.failure(f"Release service error: {e}"),
                error_type="Release service query",
            )

        log_with_context(logger, "info", "Deployments fetched", deployment_count=len(records), **context)
        return FetchResult.success(records)

    def _query_deployments(
        self,
        definition_id: int,
        limit: int | None,
        errors_only: bool,
        min_started_time: datetime | None,
        max_started_time: datetime | None,
    ) -> list[DeploymentRecord]:
        """
        Page through deployments, newest deployment id first.

        The SDK returns each page as a plain list and drops the service's
        continuation header, so the next page is requested with the oldest
        deployment id seen as continuation_token. Ids already collected are
        skipped, whichever side of that bound the service includes.

        Stops once limit records are kept, a page comes back short or holds
        nothing new, or MAX_PAGES is reached.
        """
        client = self.client()
        page_size = release_query.PAGE_SIZE
        if limit is not None and not errors_only:
            page_size = min(limit, page_size)

        records: list[DeploymentRecord] = []
        seen_ids: set[int] = set()
        continuation_token = None

        for page in range(1, release_query.MAX_PAGES + 1):
            deployments = (
                call_release_service(
                    client.get_deployments,
                    project=self.project_name,
                    definition_id=definition_id,
                    query_order="descending",
                    top=page_size,
                    continuation_token=continuation_token,
                    min_started_time=min_started_time,
                    max_started_time=max_started_time,
                )
                or []
            )

            fresh = [d for d in deployments if d.id not in seen_ids]
            seen_ids.update(d.id for d in fresh)

            page_records = DeploymentTransformer.transform_deployments(fresh)
            if errors_only:
                page_records = [r for r in page_records if r.status.is_error]
            records.extend(page_records)

            logger.debug(f"Page {page}: {len(deployments)} deployments, {len(records)} kept so far")

            if limit is not None and len(records) >= limit:
                break
            if len(deployments) < page_size or not fresh:
                break
            continuation_token = min(d.id for d in fresh)
        else:
            logger.warning(f"Stopped paging deployments after {release_query.MAX_PAGES} pages")

        return records[:limit] if limit is not None else records
