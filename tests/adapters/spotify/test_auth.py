from __future__ import annotations

import base64
from datetime import timedelta
from typing import TYPE_CHECKING
from urllib.parse import parse_qs

import httpx
import pytest

from cratedigger.domain.ports.catalog import AuthenticationError
from tests.helpers.spotify import token_response

if TYPE_CHECKING:
    from cratedigger.adapters.spotify import SpotifyCredentialManager
    from tests.helpers.spotify import MutableClock, RecordingSleep, SpotifyHarness


def test_obtain_posts_client_credentials(
    credentials: SpotifyCredentialManager,
    harness: SpotifyHarness,
    clock: MutableClock,
) -> None:
    credential = credentials.obtain()

    assert credential.access_token == "BQD-token"
    assert credential.expires_at == clock.now + timedelta(seconds=3600)
    assert credentials.current is credential

    (request,) = harness.token_requests
    assert request.method == "POST"
    assert str(request.url) == "https://accounts.spotify.com/api/token"
    expected = base64.b64encode(b"client-id:client-secret").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert parse_qs(request.content.decode()) == {"grant_type": ["client_credentials"]}


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(401, json={"error": "invalid_client"}),
        httpx.Response(503),
        httpx.Response(200, content=b"<html>maintenance</html>"),
        httpx.Response(200, json={"token_type": "Bearer"}),
        httpx.Response(200, json={"access_token": "  ", "expires_in": 3600}),
        httpx.Response(200, json=["not", "an", "object"]),
    ],
)
def test_unusable_token_response_raises(
    credentials: SpotifyCredentialManager,
    harness: SpotifyHarness,
    sleep: RecordingSleep,
    response: httpx.Response,
) -> None:
    harness.token_responses = [response]

    with pytest.raises(AuthenticationError):
        credentials.obtain()

    assert len(harness.token_requests) == 1
    assert sleep.delays == []
    assert credentials.current is None


def test_transport_failure_raises_authentication_error(
    credentials: SpotifyCredentialManager, harness: SpotifyHarness
) -> None:
    harness.token_responses = [httpx.ConnectError("connection refused")]

    with pytest.raises(AuthenticationError):
        credentials.obtain()


def test_bearer_token_is_reused_until_close_to_expiry(
    credentials: SpotifyCredentialManager,
    harness: SpotifyHarness,
    clock: MutableClock,
) -> None:
    harness.token_responses = [token_response("first"), token_response("second")]

    assert credentials.bearer_token() == "first"
    clock.advance(3000)
    assert credentials.bearer_token() == "first"
    clock.advance(560)
    assert credentials.bearer_token() == "second"
    assert len(harness.token_requests) == 2


def test_obtain_always_fetches_a_new_token(
    credentials: SpotifyCredentialManager, harness: SpotifyHarness
) -> None:
    harness.token_responses = [token_response("first"), token_response("second")]

    credentials.obtain()
    credentials.obtain()

    assert credentials.bearer_token() == "second"
    assert len(harness.token_requests) == 2
