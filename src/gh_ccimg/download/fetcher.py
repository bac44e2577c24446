# ABOUTME: Concurrent image downloader with size, timeout and content-type guards
# ABOUTME: Fixed-width asyncio worker pool, tenacity backoff retries and cooperative cancellation

import asyncio
import contextlib
from collections.abc import Iterable

import httpx
from pydantic import BaseModel, ConfigDict, model_validator

from gh_ccimg.download.errors import (
    EmptyResponseError,
    FetchCancelledError,
    FetchError,
    FileTooLargeError,
    HTTPStatusFetchError,
    RequestBuildError,
    TransientFetchError,
)
from gh_ccimg.download.progress import NoOpReporter, ProgressReporter
from gh_ccimg.download.validator import validate_content_type
from gh_ccimg.utils.retry import backoff_retrying

USER_AGENT = "gh-ccimg/1.0"

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 0.5
DEFAULT_MAX_DELAY = 10.0

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

RETRYABLE_ERROR_SIGNATURES = (
    "connection refused",
    "connection reset",
    "timeout",
    "timed out",
    "temporary failure",
    "network is unreachable",
    "no such host",
    "name or service not known",
)


class FetchResult(BaseModel):
    """Outcome of downloading one URL: either data or an error, never both."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    url: str
    data: bytes | None = None
    content_type: str = ""
    size: int = 0
    error: Exception | None = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> "FetchResult":
        if self.error is None and not self.data:
            raise ValueError("a successful fetch result must carry data")
        if self.error is not None and self.data:
            raise ValueError("a failed fetch result must not carry data")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, url: str, data: bytes, content_type: str) -> "FetchResult":
        return cls(url=url, data=data, content_type=content_type, size=len(data))

    @classmethod
    def failure(cls, url: str, error: Exception) -> "FetchResult":
        return cls(url=url, error=error)


def _describe(exc: BaseException) -> str:
    text = str(exc)
    return text if text else type(exc).__name__


def is_retryable_error(exc: BaseException) -> bool:
    """Whether a transport-level failure looks transient."""
    if isinstance(exc, httpx.TimeoutException):
        return True
    error_str = str(exc).lower()
    return any(signature in error_str for signature in RETRYABLE_ERROR_SIGNATURES)


def is_retryable_status(status_code: int) -> bool:
    """Whether an HTTP status is worth retrying (rate limiting and gateway/server errors)."""
    return status_code in RETRYABLE_STATUS_CODES


class Fetcher:
    """Downloads image URLs concurrently.

    Each URL goes through up to ``max_retries + 1`` attempts. Transient failures
    (connection errors, timeouts, 429/5xx, interrupted reads) back off
    exponentially between attempts; validation failures (content type, size,
    other 4xx) end the attempt loop immediately.
    """

    def __init__(
        self,
        max_size: int,
        timeout: float,
        concurrency: int,
        *,
        reporter: ProgressReporter | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")

        self.max_size = max_size
        self.timeout = timeout
        self.concurrency = concurrency
        self.reporter: ProgressReporter = reporter or NoOpReporter()
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self._transport = transport

    def set_reporter(self, reporter: ProgressReporter) -> None:
        self.reporter = reporter

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        )

    async def fetch_concurrent(
        self, urls: Iterable[str], cancel_event: asyncio.Event | None = None
    ) -> list[FetchResult]:
        """Download every URL and return exactly one result per input URL.

        Results arrive in completion order; correlate them by ``FetchResult.url``.
        Setting ``cancel_event`` turns queued URLs into cancellation results and
        interrupts requests already in flight.
        """
        urls = list(urls)
        if not urls:
            return []

        self.reporter.start(len(urls))
        try:
            work: asyncio.Queue[str] = asyncio.Queue()
            for url in urls:
                work.put_nowait(url)
            done: asyncio.Queue[FetchResult] = asyncio.Queue()

            async with self._client() as client:
                workers = [
                    asyncio.create_task(self._worker(client, work, done, cancel_event))
                    for _ in range(min(self.concurrency, len(urls)))
                ]
                results: list[FetchResult] = []
                try:
                    while len(results) < len(urls):
                        result = await done.get()
                        results.append(result)
                        self.reporter.update(len(results), result.url, result.ok, result.error)
                finally:
                    for worker in workers:
                        worker.cancel()
                    await asyncio.gather(*workers, return_exceptions=True)
            return results
        finally:
            self.reporter.finish()

    async def fetch_single(self, url: str, cancel_event: asyncio.Event | None = None) -> FetchResult:
        """Download one URL with the same guards and retries as a batch."""
        async with self._client() as client:
            return await self._fetch_with_cancel(client, url, cancel_event)

    async def _worker(
        self,
        client: httpx.AsyncClient,
        work: asyncio.Queue[str],
        done: asyncio.Queue[FetchResult],
        cancel_event: asyncio.Event | None,
    ) -> None:
        while True:
            try:
                url = work.get_nowait()
            except asyncio.QueueEmpty:
                return

            if cancel_event is not None and cancel_event.is_set():
                result = FetchResult.failure(url, FetchCancelledError("download cancelled before start"))
            else:
                try:
                    result = await self._fetch_with_cancel(client, url, cancel_event)
                except Exception as exc:  # noqa: BLE001 - every URL must yield a result
                    result = FetchResult.failure(url, FetchError(f"unexpected download failure: {_describe(exc)}"))
            done.put_nowait(result)

    async def _fetch_with_cancel(
        self, client: httpx.AsyncClient, url: str, cancel_event: asyncio.Event | None
    ) -> FetchResult:
        if cancel_event is None:
            return await self._fetch(client, url)
        if cancel_event.is_set():
            return FetchResult.failure(url, FetchCancelledError("download cancelled before start"))

        fetch_task = asyncio.create_task(self._fetch(client, url))
        cancel_task = asyncio.create_task(cancel_event.wait())
        try:
            await asyncio.wait({fetch_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            fetch_task.cancel()
            raise
        finally:
            cancel_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await cancel_task

        if fetch_task.done():
            return fetch_task.result()

        fetch_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await fetch_task
        return FetchResult.failure(url, FetchCancelledError("download cancelled while in progress"))

    async def _fetch(self, client: httpx.AsyncClient, url: str) -> FetchResult:
        retrying = backoff_retrying(
            max_retries=self.max_retries,
            base_delay=self.base_delay,
            max_delay=self.max_delay,
            retry_on=TransientFetchError,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    data, content_type = await self._attempt(client, url, attempt.retry_state.attempt_number)
        except FetchError as exc:
            return FetchResult.failure(url, exc)
        return FetchResult.success(url, data, content_type)

    async def _attempt(self, client: httpx.AsyncClient, url: str, attempt_number: int) -> tuple[bytes, str]:
        """Perform one GET; raise TransientFetchError to request another attempt."""
        try:
            request = client.build_request("GET", url)
        except (httpx.InvalidURL, ValueError) as exc:
            raise RequestBuildError(f"failed to create request: {_describe(exc)}") from exc

        try:
            async with asyncio.timeout(self.timeout):
                return await self._exchange(client, request, attempt_number)
        except TimeoutError as exc:
            raise TransientFetchError(
                f"request timed out after {self.timeout}s (after {attempt_number} attempts)"
            ) from exc

    async def _exchange(
        self, client: httpx.AsyncClient, request: httpx.Request, attempt_number: int
    ) -> tuple[bytes, str]:
        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as exc:
            message = f"HTTP request failed after {attempt_number} attempts: {_describe(exc)}"
            if is_retryable_error(exc):
                raise TransientFetchError(message) from exc
            raise FetchError(message) from exc

        try:
            if response.status_code != httpx.codes.OK:
                message = f"HTTP {response.status_code}: {response.reason_phrase} (after {attempt_number} attempts)"
                if is_retryable_status(response.status_code):
                    raise TransientFetchError(message)
                raise HTTPStatusFetchError(message, response.status_code)

            content_type = response.headers.get("content-type", "")
            validate_content_type(content_type)

            declared = response.headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > self.max_size:
                raise FileTooLargeError(f"file too large: {declared} bytes (max {self.max_size})")

            data = await self._read_limited(response, attempt_number)
        finally:
            await response.aclose()

        if not data:
            raise EmptyResponseError("empty response body")
        return data, content_type

    async def _read_limited(self, response: httpx.Response, attempt_number: int) -> bytes:
        buffer = bytearray()
        try:
            async for chunk in response.aiter_bytes():
                buffer.extend(chunk)
                if len(buffer) > self.max_size:
                    raise FileTooLargeError(f"file too large: over {self.max_size} bytes (max {self.max_size})")
        except httpx.HTTPError as exc:
            raise TransientFetchError(
                f"failed to read response body after {attempt_number} attempts: {_describe(exc)}"
            ) from exc
        return bytes(buffer)
