"""Application configuration helpers."""

from __future__ import annotations

from .corpus import CorpusConfig, load_corpus
from .env import optional_float_env, optional_int_env, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .ingest import IngestConfig, get_ingest_config
from .spotify import SpotifyConfig, get_retry_policy, get_spotify_config
from .storage import StorageConfig, get_database_uri, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "CorpusConfig",
    "IngestConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SpotifyConfig",
    "StorageConfig",
    "get_database_uri",
    "get_ingest_config",
    "get_retry_policy",
    "get_spotify_config",
    "get_storage_config",
    "load_corpus",
    "optional_float_env",
    "optional_int_env",
    "require_env_vars",
]
