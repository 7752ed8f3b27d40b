"""Shared fixtures for Spotify adapter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from cratedigger.adapters.http_resilience import ResilientClient, ResilientSession
from cratedigger.adapters.spotify import SpotifyCatalogClient, SpotifyCredentialManager
from cratedigger.config.http_resilience import ResilienceConfig, RetryPolicy
from cratedigger.config.spotify import SPOTIFY_API_BASE_URL, SpotifyConfig
from tests.helpers.spotify import MutableClock, RecordingSleep, SpotifyHarness

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def spotify_config() -> SpotifyConfig:
    return SpotifyConfig(
        client_id="client-id",
        client_secret="client-secret",
        resilience=ResilienceConfig(
            name="spotify",
            base_url=SPOTIFY_API_BASE_URL,
            retry=RetryPolicy(max_retries=1, initial_backoff=1.0),
            cache=None,
        ),
    )


@pytest.fixture
def harness() -> SpotifyHarness:
    return SpotifyHarness()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock()


@pytest.fixture
def session(
    spotify_config: SpotifyConfig, harness: SpotifyHarness, sleep: RecordingSleep
) -> Iterator[ResilientSession]:
    def factory(config: ResilienceConfig) -> ResilientClient:
        return ResilientClient(config, transport=httpx.MockTransport(harness), sleep=sleep)

    with ResilientSession(spotify_config.resilience, client_factory=factory) as opened:
        yield opened


@pytest.fixture
def credentials(
    spotify_config: SpotifyConfig, session: ResilientSession, clock: MutableClock
) -> SpotifyCredentialManager:
    return SpotifyCredentialManager(config=spotify_config, session=session, clock=clock)


@pytest.fixture
def catalog(
    spotify_config: SpotifyConfig,
    session: ResilientSession,
    credentials: SpotifyCredentialManager,
) -> SpotifyCatalogClient:
    return SpotifyCatalogClient(config=spotify_config, session=session, credentials=credentials)
