"""Client-credentials token handling for the Spotify Web API."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from logging import getLogger
from typing import TYPE_CHECKING, cast

import httpx

from cratedigger.domain.model import Credential
from cratedigger.domain.ports.catalog import AuthenticationError

from .schema import TokenResponse

if TYPE_CHECKING:
    from cratedigger.adapters.http_resilience import ResilientSession
    from cratedigger.config.spotify import SpotifyConfig

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SpotifyCredentialManager:
    """Obtain and hold the application's bearer token.

    Token requests are made exactly once per call, without the executor's
    retry loop; any failure is an :class:`AuthenticationError`.
    """

    def __init__(
        self,
        *,
        config: SpotifyConfig,
        session: ResilientSession,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._session = session
        self._clock = clock
        self._credential: Credential | None = None

    @property
    def current(self) -> Credential | None:
        return self._credential

    def obtain(self) -> Credential:
        credential = self._session.run(self._request_token())
        self._credential = credential
        return credential

    def bearer_token(self) -> str:
        """Return a usable access token, obtaining a new one when it expired."""

        credential = self._credential
        if credential is None or credential.is_expired(now=self._clock()):
            credential = self.obtain()
        return credential.access_token

    async def _request_token(self) -> Credential:
        try:
            response = await self._session.client.request_once(
                "POST",
                self._config.token_url,
                data={"grant_type": "client_credentials"},
                auth=httpx.BasicAuth(self._config.client_id, self._config.client_secret),
            )
        except httpx.HTTPError as exc:
            raise AuthenticationError(f"Spotify token request failed: {exc}") from exc

        if not response.is_success:
            raise AuthenticationError(
                f"Spotify token endpoint returned HTTP {response.status_code}"
            )

        try:
            payload = TokenResponse.model_validate(response.json())
        except ValueError as exc:
            raise AuthenticationError("Spotify token response was not understood") from exc

        if not payload.access_token.strip():
            raise AuthenticationError("Spotify token response carried an empty access token")

        expires_at = None
        if payload.expires_in is not None:
            expires_at = self._clock() + timedelta(seconds=payload.expires_in)
        log.info("Obtained Spotify access token (expires in %ss)", payload.expires_in)
        return Credential(access_token=payload.access_token, expires_at=expires_at)


if TYPE_CHECKING:
    from cratedigger.domain.ports.catalog import CredentialSource

    _credential_check: CredentialSource = SpotifyCredentialManager(
        config=cast("SpotifyConfig", object()),
        session=cast("ResilientSession", object()),
    )
