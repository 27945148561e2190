"""Retry policy with linear backoff for transport calls."""

from typing import Any, Protocol

import httpx
from tenacity import (
    retry_if_exception,
    retry_if_result,
    stop_after_attempt,
    wait_incrementing,
)

# Connectivity-class failures: timeouts, DNS / connect failures, dropped connections.
# asyncio's TimeoutError comes from the per-attempt resource timeout.
RETRYABLE_TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
    TimeoutError,
)


class _HasStatus(Protocol):
    status_code: int


def is_retryable_status(response: _HasStatus) -> bool:
    """Only server errors are considered transient."""
    return 500 <= response.status_code <= 599


def is_retryable_transport_error(error: BaseException) -> bool:
    return isinstance(error, RETRYABLE_TRANSPORT_ERRORS)


def linear_backoff_config(max_retries: int, retry_delay: float) -> dict[str, Any]:
    """
    Build tenacity keyword arguments for the transport retry loop.

    Attempt n (1-based) that fails waits ``retry_delay * n`` before the next one,
    so the defaults (3 retries, 1s) wait 1s, 2s, then 3s.

    Args:
        max_retries: Retries allowed after the first attempt
        retry_delay: Base delay in seconds

    Returns:
        Keyword arguments for ``tenacity.AsyncRetrying``
    """
    return {
        "stop": stop_after_attempt(max_retries + 1),
        "wait": wait_incrementing(start=retry_delay, increment=retry_delay),
        "retry": retry_if_exception(is_retryable_transport_error) | retry_if_result(is_retryable_status),
    }
