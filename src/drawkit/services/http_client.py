"""Pooled async HTTP transport with bounded linear-backoff retries."""

import asyncio
import json
import logging
from contextlib import contextmanager
from typing import Any, Awaitable, Callable, Iterator, Mapping, NamedTuple

import httpx
from tenacity import AsyncRetrying, RetryCallState

from drawkit.models.config import HttpClientConfig
from drawkit.models.errors import NetworkError
from drawkit.services.retry_service import linear_backoff_config

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]


class HttpResponse(NamedTuple):
    """Body and status of the attempt that ended the call."""

    body: bytes
    status_code: int
    headers: dict[str, str]
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299


class HttpClient:
    """
    Reusable async HTTP client.

    One instance owns one pooled ``httpx.AsyncClient`` and may be shared by any
    number of concurrent calls. POST retries server errors and connectivity
    failures; GET never retries.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFunc | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Timeouts, retry bound and pool sizing (defaults if omitted)
            transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
            sleep: Awaitable used between retries (defaults to ``asyncio.sleep``)
        """
        self.config = config or HttpClientConfig()
        self._sleep = sleep or asyncio.sleep
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.request_timeout),
            limits=httpx.Limits(
                max_connections=self.config.max_connections,
                max_keepalive_connections=self.config.max_keepalive_connections,
            ),
            headers={"User-Agent": self.config.user_agent},
            transport=transport,
        )
        self._inflight: set[asyncio.Task] = set()
        self._closed = False

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    @property
    def closed(self) -> bool:
        return self._closed

    async def aclose(self) -> None:
        """Cancel in-flight calls and release pooled connections."""
        if self._closed:
            return
        self._closed = True

        current = asyncio.current_task()
        pending = [task for task in self._inflight if task is not current and not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            logger.debug(f"[HttpClient] Cancelled {len(pending)} in-flight request(s) on close")

        await self._client.aclose()

    async def post(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: bytes = b"",
    ) -> HttpResponse:
        """
        Send a POST request, retrying transient failures.

        2xx and 4xx responses return immediately. 5xx responses and
        connectivity errors are retried up to ``max_retries`` times, waiting
        ``retry_delay * n`` before retry n. When retries run out a 5xx response
        is returned as-is while a connectivity error raises NetworkError.

        Raises:
            NetworkError: Transport failure after retries, or client closed
            asyncio.CancelledError: The calling task was cancelled
        """
        self._ensure_open("POST", url)

        request_headers = dict(headers or {})
        if not any(name.lower() == "content-type" for name in request_headers):
            request_headers["Content-Type"] = "application/json"

        attempts = 0

        async def send_once() -> HttpResponse:
            nonlocal attempts
            attempts += 1
            return await self._send("POST", url, request_headers, body, attempts)

        retrying = AsyncRetrying(
            **linear_backoff_config(self.config.max_retries, self.config.retry_delay),
            sleep=self._sleep,
            before_sleep=self._log_retry,
            retry_error_callback=self._on_retries_exhausted,
        )

        with self._track_inflight():
            try:
                response = await retrying(send_once)
            except NetworkError as e:
                e.details.setdefault("method", "POST")
                e.details.setdefault("url", url)
                raise
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                # Not a connectivity-class failure, so it was never retried
                logger.error(f"[HttpClient] POST {url} failed: {e!r}")
                raise NetworkError(
                    f"POST request failed: {e}",
                    details={"method": "POST", "url": url, "attempts": attempts},
                    original_exception=e,
                ) from e

        return response._replace(attempts=attempts)

    async def post_json(
        self,
        url: str,
        payload: Any,
        headers: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        """Serialize ``payload`` as JSON and POST it."""
        request_headers = {
            name: value for name, value in (headers or {}).items() if name.lower() != "content-type"
        }
        request_headers["Content-Type"] = "application/json"
        body = json.dumps(payload).encode("utf-8")
        return await self.post(url, headers=request_headers, body=body)

    async def get(self, url: str, headers: Mapping[str, str] | None = None) -> HttpResponse:
        """
        Send a GET request without retries.

        Raises:
            NetworkError: Transport failure or any non-2xx status
            asyncio.CancelledError: The calling task was cancelled
        """
        self._ensure_open("GET", url)

        with self._track_inflight():
            try:
                response = await self._send("GET", url, dict(headers or {}), None, 1)
            except (httpx.HTTPError, httpx.InvalidURL, TimeoutError) as e:
                raise NetworkError(
                    f"GET request failed: {e!r}",
                    details={"method": "GET", "url": url},
                    original_exception=e,
                ) from e

        if not response.ok:
            raise NetworkError(
                f"HTTP {response.status_code}",
                details={"method": "GET", "url": url, "status_code": response.status_code},
            )
        return response

    async def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None,
        attempt: int,
    ) -> HttpResponse:
        """One attempt: cancellation check, bounded send, cancellation check."""
        self._raise_if_cancelled()
        logger.debug(f"[HttpClient] {method} {url} (attempt {attempt})")

        async with asyncio.timeout(self.config.resource_timeout):
            response = await self._client.request(method, url, headers=headers, content=body)

        self._raise_if_cancelled()
        logger.debug(f"[HttpClient] {method} {url} -> {response.status_code} bytes={len(response.content)}")
        return HttpResponse(
            body=response.content,
            status_code=response.status_code,
            headers=dict(response.headers),
            attempts=attempt,
        )

    def _ensure_open(self, method: str, url: str) -> None:
        if self._closed:
            raise NetworkError("HTTP client is closed", details={"method": method, "url": url})

    @contextmanager
    def _track_inflight(self) -> Iterator[None]:
        task = asyncio.current_task()
        if task is not None:
            self._inflight.add(task)
        try:
            yield
        finally:
            if task is not None:
                self._inflight.discard(task)

    @staticmethod
    def _raise_if_cancelled() -> None:
        task = asyncio.current_task()
        if task is not None and task.cancelling():
            raise asyncio.CancelledError()

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        if outcome is None:
            return
        if outcome.failed:
            cause = repr(outcome.exception())
        else:
            cause = f"HTTP {outcome.result().status_code}"
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            f"[HttpClient] Attempt {retry_state.attempt_number} failed ({cause}), retrying in {delay:.1f}s"
        )

    @staticmethod
    def _on_retries_exhausted(retry_state: RetryCallState) -> HttpResponse:
        outcome = retry_state.outcome
        attempts = retry_state.attempt_number
        if outcome.failed:
            error = outcome.exception()
            logger.error(f"[HttpClient] Giving up after {attempts} attempts: {error!r}")
            raise NetworkError(
                f"Request failed after {attempts} attempts: {error!r}",
                details={"attempts": attempts},
                original_exception=error,
            ) from error

        response = outcome.result()
        logger.warning(f"[HttpClient] Giving up after {attempts} attempts with HTTP {response.status_code}")
        return response
