"""Spotify configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_float_env, optional_int_env, require_env_vars
from .http_resilience import (
    DEFAULT_INITIAL_BACKOFF_SECONDS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RATE_LIMIT_WAIT_CAP_SECONDS,
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
    ShouldCacheHook,
)
from .storage import StorageConfig, get_storage_config

SPOTIFY_API_BASE_URL = "https://api.spotify.com/v1"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_TIMEOUT_SECONDS = 15.0
ARTIST_LOOKUP_TTL_SECONDS = 7 * 24 * 60 * 60
DEFAULT_PAGE_SIZE = 50


@dataclass(frozen=True)
class SpotifyConfig:
    client_id: str
    client_secret: str
    resilience: ResilienceConfig
    token_url: str = SPOTIFY_TOKEN_URL
    listing_page_size: int = DEFAULT_PAGE_SIZE
    search_page_size: int = DEFAULT_PAGE_SIZE


def get_retry_policy() -> RetryPolicy:
    return RetryPolicy(
        max_retries=optional_int_env("CRATEDIGGER_MAX_RETRIES", DEFAULT_MAX_RETRIES),
        initial_backoff=optional_float_env(
            "CRATEDIGGER_INITIAL_BACKOFF", DEFAULT_INITIAL_BACKOFF_SECONDS
        ),
        rate_limit_wait_cap=optional_float_env(
            "CRATEDIGGER_RATE_LIMIT_WAIT_CAP", DEFAULT_RATE_LIMIT_WAIT_CAP_SECONDS
        ),
    )


def get_spotify_config(
    *,
    resilience: ResilienceConfig | None = None,
    cache_predicate: ShouldCacheHook | None = None,
    storage: StorageConfig | None = None,
) -> SpotifyConfig:
    values = require_env_vars(("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET"))
    if resilience is None:
        storage_config = storage or get_storage_config()
        resilience = ResilienceConfig(
            name="spotify",
            base_url=SPOTIFY_API_BASE_URL,
            timeout_seconds=SPOTIFY_TIMEOUT_SECONDS,
            retry=get_retry_policy(),
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            cache=CacheConfig(
                backend="sqlite",
                sqlite_path=str(storage_config.http_cache_path),
                default_ttl_seconds=ARTIST_LOOKUP_TTL_SECONDS,
                should_cache=cache_predicate,
            ),
        )
    return SpotifyConfig(
        client_id=values["SPOTIFY_CLIENT_ID"],
        client_secret=values["SPOTIFY_CLIENT_SECRET"],
        resilience=resilience,
    )
