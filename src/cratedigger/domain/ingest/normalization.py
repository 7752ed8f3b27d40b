"""Derive persisted album fields from a candidate release."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from cratedigger.domain.model import Album, CoverArt

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cratedigger.domain.model import CandidateImage, CandidateRelease

SPOTIFY_ALBUM_URL = "https://open.spotify.com/album/{id}"
ARTIST_SEPARATOR = ", "

_RELEASE_DATE_PATTERN = re.compile(r"^(?P<year>\d{4})(?:-(?P<month>\d{2})(?:-(?P<day>\d{2}))?)?$")


def derive_cover_art(images: Iterable[CandidateImage]) -> CoverArt:
    """Map images, widest first, onto large/medium/small by position."""

    ordered = sorted(images, key=lambda image: image.width or 0, reverse=True)
    urls = [image.url for image in ordered[:3]]
    urls.extend([None] * (3 - len(urls)))
    return CoverArt(large=urls[0], medium=urls[1], small=urls[2])


def parse_release_date(value: str | None, *, default: datetime) -> datetime:
    """Parse a ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD`` date, else ``default``."""

    if not value:
        return default
    match = _RELEASE_DATE_PATTERN.match(value.strip())
    if match is None:
        return default
    try:
        return datetime(
            int(match["year"]),
            int(match["month"] or 1),
            int(match["day"] or 1),
            tzinfo=UTC,
        )
    except ValueError:
        return default


def build_album(candidate: CandidateRelease, *, now: datetime | None = None) -> Album:
    timestamp = now or datetime.now(UTC)
    cover_art = derive_cover_art(candidate.images)
    primary = candidate.artists[0] if candidate.artists else None
    return Album(
        spotify_id=candidate.external_id,
        title=candidate.title,
        artist_name=ARTIST_SEPARATOR.join(artist.name for artist in candidate.artists),
        artist_spotify_id=primary.external_id if primary else None,
        cover_art_url=cover_art.large,
        cover_art_url_large=cover_art.large,
        cover_art_url_medium=cover_art.medium,
        cover_art_url_small=cover_art.small,
        release_date=parse_release_date(candidate.release_date, default=timestamp),
        genres=[],
        total_tracks=candidate.total_tracks,
        spotify_url=candidate.external_url or SPOTIFY_ALBUM_URL.format(id=candidate.external_id),
        imported_at=timestamp,
    )
