from __future__ import annotations

import asyncio
import json
import math
from collections.abc import Awaitable, Callable, Coroutine
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from logging import getLogger
from typing import (
    TYPE_CHECKING,
    Any,
    TypedDict,
    Unpack,
)

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as HishelCacheResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient

from cratedigger.config.http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
    ShouldCacheHook,
)

if TYPE_CHECKING:
    import threading
    from types import TracebackType

    from httpx._client import UseClientDefault
    from httpx._types import (
        AuthTypes,
        CookieTypes,
        HeaderTypes,
        QueryParamTypes,
        RequestContent,
        RequestData,
        RequestExtensions,
        RequestFiles,
        TimeoutTypes,
        URLTypes,
    )

__all__ = [
    "CacheConfig",
    "ExecutorError",
    "ExhaustedRetriesError",
    "RateLimit",
    "RequestCancelledError",
    "ResilienceConfig",
    "ResilientClient",
    "ResilientSession",
    "RetryPolicy",
    "parse_retry_after",
]

log = getLogger(__name__)

Sleeper = Callable[[float], Awaitable[None]]


class ExecutorError(httpx.HTTPError):
    """Base class for requests the executor gave up on."""


class ExhaustedRetriesError(ExecutorError):
    """Raised when every attempt of a request failed at the transport level."""

    def __init__(self, message: str, *, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


class RequestCancelledError(ExecutorError):
    """Raised when a stop was requested while a request was being retried."""


class RequestOptions(TypedDict, total=False):
    content: RequestContent | None
    data: RequestData | None
    files: RequestFiles | None
    json: object
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    cookies: CookieTypes | None
    auth: AuthTypes | UseClientDefault | None
    follow_redirects: bool | UseClientDefault
    timeout: TimeoutTypes | UseClientDefault
    extensions: RequestExtensions | None


class AsyncClientOptions(TypedDict, total=False):
    base_url: str
    timeout: TimeoutTypes
    headers: HeaderTypes
    transport: httpx.AsyncBaseTransport


def parse_retry_after(value: str | None, *, now: datetime | None = None) -> float | None:
    """Return the wait a ``Retry-After`` header asks for, in seconds."""

    if value is None or not value.strip():
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        pass
    else:
        return None if math.isnan(seconds) else max(seconds, 0.0)
    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=UTC)
    current = now or datetime.now(UTC)
    return max((retry_at - current).total_seconds(), 0.0)


class ResilientClient:
    """Async HTTP client that retries with exponential backoff.

    Throttled responses (HTTP 429) are handled apart from other failures:
    the server's ``Retry-After`` is honoured, every wait is clamped to
    ``RetryPolicy.rate_limit_wait_cap``, and throttling never uses up the
    retry budget. Any other non-2xx response is retried ``max_retries`` times
    and the last response is returned for the caller to inspect. Only
    transport errors on the final attempt raise :class:`ExhaustedRetriesError`.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleeper | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )
        self._sleep_override = sleep
        self._cancel_event = cancel_event

        storage, policy = _build_cache_components(config.cache)

        headers = dict(config.default_headers) if config.default_headers else None

        client_kwargs: AsyncClientOptions = {"timeout": config.timeout_seconds}
        if config.base_url is not None:
            client_kwargs["base_url"] = config.base_url
        if headers is not None:
            client_kwargs["headers"] = headers
        if transport is not None:
            client_kwargs["transport"] = transport

        if storage is not None:
            self._client = AsyncCacheClient(**client_kwargs, storage=storage, policy=policy)
        else:
            self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        async def do_request() -> httpx.Response:
            return await self._client.request(method, url, **kwargs)

        return await self._execute(do_request, description=f"{method} {url}")

    async def request_once(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        """Issue a single attempt, bypassing the retry loop."""

        async def do_request() -> httpx.Response:
            return await self._client.request(method, url, **kwargs)

        return await self._send(do_request)

    async def get(
        self,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def _execute(
        self,
        func: Callable[[], Awaitable[httpx.Response]],
        *,
        description: str,
    ) -> httpx.Response:
        policy = self.config.retry
        attempt = 0
        throttles = 0
        while attempt <= policy.max_retries:
            self._raise_if_cancelled(description)
            try:
                response = await self._send(func)
            except policy.retry_on_exceptions as exc:
                if attempt >= policy.max_retries:
                    raise ExhaustedRetriesError(
                        f"{self.config.name}: {description} failed after "
                        f"{attempt + 1} attempts: {exc}",
                        attempts=attempt + 1,
                    ) from exc
                delay = policy.backoff_delay(attempt)
                log.warning(
                    "%s: %s raised %s; retrying in %.1fs (attempt %s/%s)",
                    self.config.name,
                    description,
                    type(exc).__name__,
                    delay,
                    attempt + 1,
                    policy.max_retries,
                )
                await self._sleep(delay)
                attempt += 1
                continue

            if response.status_code == policy.throttle_status:
                suggested = parse_retry_after(response.headers.get("Retry-After"))
                delay = policy.throttle_delay(suggested, throttles)
                throttles += 1
                log.info(
                    "%s: rate limited on %s; waiting %.1fs",
                    self.config.name,
                    description,
                    delay,
                )
                await self._sleep(delay)
                continue
            throttles = 0

            if response.is_success or attempt >= policy.max_retries:
                return response

            delay = policy.backoff_delay(attempt)
            log.warning(
                "%s: %s returned HTTP %s; retrying in %.1fs (attempt %s/%s)",
                self.config.name,
                description,
                response.status_code,
                delay,
                attempt + 1,
                policy.max_retries,
            )
            await self._sleep(delay)
            attempt += 1

        raise ExhaustedRetriesError(
            f"{self.config.name}: {description} exhausted {policy.max_retries} retries",
            attempts=attempt,
        )

    async def _send(self, func: Callable[[], Awaitable[httpx.Response]]) -> httpx.Response:
        if self._limiter is None:
            return await func()
        async with self._limiter:
            return await func()

    async def _sleep(self, seconds: float) -> None:
        if self._sleep_override is not None:
            await self._sleep_override(seconds)
        elif self._cancel_event is not None:
            await asyncio.to_thread(self._cancel_event.wait, seconds)
        else:
            await asyncio.sleep(seconds)

    def _raise_if_cancelled(self, description: str) -> None:
        if self._cancel_event is not None and self._cancel_event.is_set():
            raise RequestCancelledError(f"{self.config.name}: {description} cancelled")


class ResilientSession:
    """Blocking facade over one long-lived :class:`ResilientClient`.

    The import loop is synchronous; this keeps a single event loop (and so a
    single connection pool, rate limiter and cache) alive across its calls.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self.config = config
        self._client_factory = client_factory or ResilientClient
        self._runner: asyncio.Runner | None = None
        self._client: ResilientClient | None = None

    def __enter__(self) -> ResilientSession:
        self._runner = asyncio.Runner()
        self._client = self._client_factory(self.config)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def client(self) -> ResilientClient:
        if self._client is None:
            raise RuntimeError("ResilientSession used outside its context")
        return self._client

    def run[T](self, coro: Coroutine[Any, Any, T]) -> T:
        if self._runner is None:
            coro.close()
            raise RuntimeError("ResilientSession used outside its context")
        return self._runner.run(coro)

    def close(self) -> None:
        if self._runner is None:
            return
        try:
            if self._client is not None:
                self._runner.run(self._client.aclose())
        finally:
            self._runner.close()
            self._runner = None
            self._client = None


class _ShouldCacheResponseFilter(BaseFilter[HishelCacheResponse]):
    """Hishel response filter that delegates to a simple JSON predicate."""

    def __init__(self, predicate: ShouldCacheHook) -> None:
        self._predicate = predicate

    def needs_body(self) -> bool:
        return True

    def apply(self, item: HishelCacheResponse, body: bytes | None) -> bool:  # noqa: ARG002
        if body is None:
            return False
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return False
        return bool(self._predicate(payload))


def _build_cache_components(
    config: CacheConfig | None,
) -> tuple[AsyncSqliteStorage | None, FilterPolicy | None]:
    if config is None or not config.enabled:
        return None, None

    if config.backend not in {"sqlite", "memory"}:
        msg = f"Unsupported cache backend: {config.backend}"
        raise ValueError(msg)

    if config.backend == "sqlite":
        if config.sqlite_path is None:
            raise ValueError("sqlite cache backend requires sqlite_path")
        database_path = config.sqlite_path
    else:
        database_path = ":memory:"
    storage = AsyncSqliteStorage(
        database_path=database_path,
        default_ttl=config.default_ttl_seconds,
        refresh_ttl_on_access=config.refresh_ttl_on_access,
    )

    policy: FilterPolicy | None = None
    if config.should_cache is not None:
        policy = FilterPolicy(response_filters=[_ShouldCacheResponseFilter(config.should_cache)])

    return storage, policy
