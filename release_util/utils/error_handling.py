"""
Error handling helpers for the release collectors and payload parsing.

    log_and_return_default() - expected upstream failure: log it, hand back a fallback
                               (usually a warning FetchResult)
    log_and_raise()          - unexpected failure: log it with context, then raise
    with_retry()             - retry transient release service failures with backoff

Every log call carries the same structured fields (error_type,
exception_class, context) so JSON logs can be filtered per failure kind.
"""

import functools
import logging
import sys
import time
from collections.abc import Callable
from typing import Any, NoReturn, TypeVar

T = TypeVar("T")

RetryContext = Callable[..., dict[str, Any]]


def _failure_fields(error: BaseException, context: dict[str, Any], error_type: str) -> dict[str, Any]:
    return {
        "error_type": error_type,
        "exception_class": type(error).__name__,
        "context": context,
    }


def log_and_return_default(
    logger: logging.Logger,
    error: Exception,
    context: dict[str, Any],
    default_value: Any = None,
    error_type: str = "Operation",
) -> Any:
    """
    Log an expected failure at WARNING and return default_value.

    Example:
        except AzureDevOpsAuthenticationError as e:
            return log_and_return_default(
                logger, e,
                context={"project": project},
                default_value=FetchResult.failure("Unable to authenticate ..."),
                error_type="Release service authentication",
            )
    """
    logger.warning(f"{error_type} failed: {error}", extra=_failure_fields(error, context, error_type))
    return default_value


def log_and_raise(
    logger: logging.Logger,
    error: Exception,
    context: dict[str, Any],
    error_type: str = "Operation",
) -> NoReturn:
    """
    Log an unexpected failure at ERROR and raise it.

    When called from an except block the exception being handled is logged
    with its traceback and becomes the raised error's __context__.

    Example:
        except json.JSONDecodeError as e:
            log_and_raise(logger, PayloadError(str(e)), {"payload_length": len(payload)}, "Payload parsing")
    """
    handling = sys.exc_info()[1] is not None
    logger.error(
        f"{error_type} failed: {error}",
        exc_info=handling,
        extra=_failure_fields(error, context, error_type),
    )
    raise error


def with_retry(
    max_attempts: int = 3,
    backoff_seconds: float = 1.0,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    context: RetryContext | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator that retries a call on the given exceptions, doubling the wait each time.

    Args:
        max_attempts: Total attempts, at least 1
        backoff_seconds: Wait after the first failure
        exceptions: Exception types worth retrying; anything else propagates at once
        context: Builds log context from the call's arguments (e.g. which
            release service operation and project is being retried)

    Raises:
        ValueError: If max_attempts is less than 1

    Example:
        @with_retry(max_attempts=3, exceptions=(ReleaseServiceUnavailable,),
                    context=lambda operation, **kwargs: {"operation": operation.__name__})
        def call_release_service(operation, **kwargs): ...
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            call_context = context(*args, **kwargs) if context else {}

            for attempt in range(1, max_attempts):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    wait_time = backoff_seconds * 2 ** (attempt - 1)
                    logger.warning(
                        f"{func.__name__} failed (attempt {attempt}/{max_attempts}), "
                        f"retrying in {wait_time:.1f}s: {e}",
                        extra={
                            **_failure_fields(e, call_context, "Retry"),
                            "attempt": attempt,
                            "wait_time": wait_time,
                        },
                    )
                    time.sleep(wait_time)

            try:
                return func(*args, **kwargs)
            except exceptions as e:
                logger.error(
                    f"{func.__name__} failed after {max_attempts} attempts: {e}",
                    extra={**_failure_fields(e, call_context, "Retry"), "attempt": max_attempts},
                )
                raise

        return wrapper

    return decorator
