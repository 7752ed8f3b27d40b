"""Catalog records: upstream candidates, credentials and the persisted album."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from .enums import ReleaseType


@dataclass(frozen=True, slots=True)
class Credential:
    """Bearer token for the catalog API."""

    access_token: str
    expires_at: datetime | None = None

    def is_expired(self, *, now: datetime | None = None, leeway: timedelta | None = None) -> bool:
        if self.expires_at is None:
            return False
        current = now or datetime.now(UTC)
        margin = leeway if leeway is not None else timedelta(seconds=60)
        return current >= self.expires_at - margin


@dataclass(frozen=True, slots=True)
class CatalogEntity:
    external_id: str
    name: str


@dataclass(frozen=True, slots=True)
class CandidateArtist:
    external_id: str | None
    name: str


@dataclass(frozen=True, slots=True)
class CandidateImage:
    url: str
    width: int | None = None


@dataclass(frozen=True, slots=True)
class CandidateRelease:
    """A release as the catalog describes it, not yet validated or stored."""

    external_id: str
    title: str
    artists: tuple[CandidateArtist, ...] = ()
    images: tuple[CandidateImage, ...] = ()
    release_date: str | None = None
    release_type: ReleaseType = ReleaseType.ALBUM
    total_tracks: int = 0
    external_url: str | None = None


@dataclass(frozen=True, slots=True)
class CoverArt:
    large: str | None = None
    medium: str | None = None
    small: str | None = None


@dataclass(eq=False)
class Album:
    """Durable album row, keyed by ``spotify_id``."""

    spotify_id: str
    title: str
    artist_name: str
    release_date: datetime
    total_tracks: int
    spotify_url: str
    artist_spotify_id: str | None = None
    cover_art_url: str | None = None
    cover_art_url_large: str | None = None
    cover_art_url_medium: str | None = None
    cover_art_url_small: str | None = None
    genres: list[str] = field(default_factory=list[str])
    imported_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __repr__(self) -> str:
        return f"Album(spotify_id={self.spotify_id!r}, title={self.title!r})"
