from __future__ import annotations

from cratedigger.adapters.spotify import translate_album, translate_albums
from cratedigger.adapters.spotify.schema import SpotifyAlbum
from cratedigger.domain.model import CandidateArtist, ReleaseType
from tests.helpers.spotify import album_payload


def test_translate_album_keeps_catalog_fields() -> None:
    album = SpotifyAlbum.model_validate(album_payload("1B8FkQRpbDlUnDjKMEVBnh"))

    candidate = translate_album(album)

    assert candidate.external_id == "1B8FkQRpbDlUnDjKMEVBnh"
    assert candidate.title == "Talking Book"
    assert candidate.release_type is ReleaseType.ALBUM
    assert candidate.total_tracks == 10
    assert candidate.release_date == "1972-10-27"
    assert candidate.external_url == "https://open.spotify.com/album/1B8FkQRpbDlUnDjKMEVBnh"
    assert candidate.artists == (
        CandidateArtist(external_id="7guDJrEfX3qb6FEbdPA5qi", name="Stevie Wonder"),
    )
    assert [image.width for image in candidate.images] == [300, 640, 64]


def test_unknown_album_type_maps_to_other() -> None:
    payload = album_payload(album_type="appears_on")
    payload["external_urls"] = {}

    candidate = translate_album(SpotifyAlbum.model_validate(payload))

    assert candidate.release_type is ReleaseType.OTHER
    assert candidate.external_url is None


def test_translate_albums_drops_missing_entries() -> None:
    albums = [SpotifyAlbum.model_validate(album_payload("a1")), None]

    assert [candidate.external_id for candidate in translate_albums(albums)] == ["a1"]
