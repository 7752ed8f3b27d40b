"""Translate Spotify payloads into domain records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cratedigger.domain.model import (
    CandidateArtist,
    CandidateImage,
    CandidateRelease,
    CatalogEntity,
    ReleaseType,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import SpotifyAlbum, SpotifyArtist


def translate_artist(artist: SpotifyArtist) -> CatalogEntity:
    return CatalogEntity(external_id=artist.id, name=artist.name)


def translate_album(album: SpotifyAlbum) -> CandidateRelease:
    return CandidateRelease(
        external_id=album.id,
        title=album.name,
        artists=tuple(
            CandidateArtist(external_id=artist.id, name=artist.name) for artist in album.artists
        ),
        images=tuple(CandidateImage(url=image.url, width=image.width) for image in album.images),
        release_date=album.release_date,
        release_type=ReleaseType.parse(album.album_type),
        total_tracks=album.total_tracks,
        external_url=album.external_urls.spotify,
    )


def translate_albums(albums: Iterable[SpotifyAlbum | None]) -> list[CandidateRelease]:
    return [translate_album(album) for album in albums if album is not None]
