"""Opt-in retry for transient transport failures.

The client never retries on its own. Callers that want retries wrap their
calls with the decorator returned by :func:`transport_retry`.

Example:
    >>> @transport_retry(attempts=5)
    ... def fetch_services():
    ...     return client.services.list_all()
"""

from __future__ import annotations

from typing import Any

import structlog
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from kong_admin.exceptions import KongCancelledError, KongConnectionError

logger = structlog.get_logger()


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "retrying_kong_request",
        attempt=retry_state.attempt_number,
        error=str(error),
    )


def transport_retry(attempts: int = 3, max_wait: float = 10.0) -> Any:
    """Create a retry decorator for transport errors.

    Only :class:`KongConnectionError` is retried; cancellation and every
    HTTP-level error propagate immediately.

    Args:
        attempts: Maximum number of attempts, including the first one.
        max_wait: Upper bound of the exponential backoff in seconds.

    Returns:
        A tenacity retry decorator configured with exponential backoff.
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")
    return retry(
        retry=(
            retry_if_exception_type(KongConnectionError)
            & retry_if_not_exception_type(KongCancelledError)
        ),
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=1, max=max_wait),
        before_sleep=_log_retry,
        reraise=True,
    )
