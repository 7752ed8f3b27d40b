"""Catalog lookups against the Spotify Web API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

import httpx
from pydantic import BaseModel, ValidationError

from .schema import AlbumSearchResponse, AlbumsPage, ArtistSearchResponse, SpotifyAlbum
from .translator import translate_albums, translate_artist

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cratedigger.adapters.http_resilience import ResilientSession
    from cratedigger.config.spotify import SpotifyConfig
    from cratedigger.domain.model import CandidateRelease, CatalogEntity

    from .auth import SpotifyCredentialManager

log = getLogger(__name__)

SEARCH_PATH = "search"
ARTIST_ALBUMS_PATH = "artists/{artist_id}/albums"


class SpotifyPayloadError(ValueError):
    """Raised when a Spotify response body does not have the expected shape."""


def should_cache_payload(payload: object) -> bool:
    """Cache artist lookups that found someone; album listings change."""

    if not isinstance(payload, dict):
        return False
    artists = cast("dict[str, object]", payload).get("artists")
    if not isinstance(artists, dict):
        return False
    return bool(cast("dict[str, object]", artists).get("items"))


class SpotifyCatalogClient:
    """Best-effort catalog client.

    Upstream failures are logged and reported as ``None`` or an empty list.
    :class:`~cratedigger.domain.ports.catalog.AuthenticationError` raised while
    obtaining a token is left to propagate.
    """

    def __init__(
        self,
        *,
        config: SpotifyConfig,
        session: ResilientSession,
        credentials: SpotifyCredentialManager,
    ) -> None:
        self._config = config
        self._session = session
        self._credentials = credentials

    def resolve_entity(self, name: str) -> CatalogEntity | None:
        payload = self._fetch(
            ArtistSearchResponse,
            SEARCH_PATH,
            params={"q": name, "type": "artist", "limit": 1},
            context=f"artist {name!r}",
        )
        if payload is None:
            return None
        for artist in payload.artists.items:
            if artist is not None:
                return translate_artist(artist)
        log.info("No Spotify artist found for %r", name)
        return None

    def list_children(self, entity_id: str) -> list[CandidateRelease]:
        payload = self._fetch(
            AlbumsPage,
            ARTIST_ALBUMS_PATH.format(artist_id=entity_id),
            params={"include_groups": "album", "limit": self._config.listing_page_size},
            context=f"albums of artist {entity_id}",
        )
        if payload is None:
            return []
        return translate_albums(
            _validate_albums(payload.items, context=f"albums of artist {entity_id}")
        )

    def search_free_text(self, query: str) -> list[CandidateRelease]:
        payload = self._fetch(
            AlbumSearchResponse,
            SEARCH_PATH,
            params={"q": query, "type": "album", "limit": self._config.search_page_size},
            context=f"album search {query!r}",
        )
        if payload is None:
            return []
        albums = _validate_albums(payload.albums.items, context=f"album search {query!r}")
        return translate_albums(albums)

    def _fetch[ModelT: BaseModel](
        self,
        model: type[ModelT],
        path: str,
        *,
        params: dict[str, str | int],
        context: str,
    ) -> ModelT | None:
        token = self._credentials.bearer_token()
        try:
            return self._session.run(self._get(model, path, params=params, token=token))
        except httpx.HTTPError as exc:
            log.warning("Spotify request for %s failed: %s", context, exc)
        except SpotifyPayloadError as exc:
            log.warning("Spotify response for %s was not understood: %s", context, exc)
        return None

    async def _get[ModelT: BaseModel](
        self,
        model: type[ModelT],
        path: str,
        *,
        params: dict[str, str | int],
        token: str,
    ) -> ModelT:
        response = await self._session.client.get(
            path,
            params=params,
            headers={"Authorization": f"Bearer {token}"},
        )
        response.raise_for_status()
        try:
            raw_payload = response.json()
        except ValueError as exc:
            raise SpotifyPayloadError("response body is not JSON") from exc
        if not isinstance(raw_payload, dict):
            raise SpotifyPayloadError("response body is not a JSON object")
        try:
            return model.model_validate(cast("dict[str, Any]", raw_payload))
        except ValidationError as exc:
            raise SpotifyPayloadError(str(exc)) from exc


def _validate_albums(
    items: Iterable[dict[str, Any] | None], *, context: str
) -> list[SpotifyAlbum]:
    albums: list[SpotifyAlbum] = []
    for item in items:
        if item is None:
            continue
        try:
            albums.append(SpotifyAlbum.model_validate(item))
        except ValidationError as exc:
            log.warning(
                "Spotify album %s in %s was not understood: %s", item.get("id"), context, exc
            )
    return albums


if TYPE_CHECKING:
    from cratedigger.domain.ports.catalog import CatalogClient

    _client_check: CatalogClient = SpotifyCatalogClient(
        config=cast("SpotifyConfig", object()),
        session=cast("ResilientSession", object()),
        credentials=cast("SpotifyCredentialManager", object()),
    )
