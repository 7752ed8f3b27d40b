"""Configuration types for resilient HTTP clients."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

ShouldCacheHook = Callable[[object], bool]

DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_BACKOFF_SECONDS = 5.0
DEFAULT_RATE_LIMIT_WAIT_CAP_SECONDS = 120.0


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Bounded retry with exponential backoff and capped throttle waits.

    ``max_retries`` bounds retries of non-throttling failures only; HTTP 429
    responses are retried until they stop, each wait clamped to
    ``rate_limit_wait_cap``.
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    initial_backoff: float = DEFAULT_INITIAL_BACKOFF_SECONDS
    rate_limit_wait_cap: float = DEFAULT_RATE_LIMIT_WAIT_CAP_SECONDS
    throttle_status: int = 429
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (httpx.TransportError,)

    def backoff_delay(self, attempt: int) -> float:
        return self.initial_backoff * (2**attempt)

    def throttle_delay(self, suggested: float | None, consecutive_throttles: int) -> float:
        delay = suggested if suggested is not None else self.backoff_delay(consecutive_throttles)
        return min(max(delay, 0.0), self.rate_limit_wait_cap)


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class CacheConfig:
    enabled: bool = True
    backend: Literal["sqlite", "memory"] = "memory"
    sqlite_path: str | None = None
    default_ttl_seconds: float | None = None
    refresh_ttl_on_access: bool = True
    should_cache: ShouldCacheHook | None = None


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = field(default_factory=CacheConfig)
    default_headers: Mapping[str, str] | None = None
