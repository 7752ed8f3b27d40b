"""Minimal Pydantic models for the Spotify Web API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SpotifyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class TokenResponse(SpotifyBaseModel):
    access_token: str
    token_type: str | None = None
    expires_in: int | None = None


class SpotifyImage(SpotifyBaseModel):
    url: str
    width: int | None = None
    height: int | None = None


class SpotifyExternalUrls(SpotifyBaseModel):
    spotify: str | None = None


class SpotifyArtist(SpotifyBaseModel):
    id: str
    name: str


class SpotifyAlbum(SpotifyBaseModel):
    id: str
    name: str
    album_type: str | None = None
    total_tracks: int = 0
    release_date: str | None = None
    release_date_precision: str | None = None
    artists: list[SpotifyArtist] = Field(default_factory=list["SpotifyArtist"])
    images: list[SpotifyImage] = Field(default_factory=list["SpotifyImage"])
    external_urls: SpotifyExternalUrls = Field(default_factory=SpotifyExternalUrls)


class SpotifyPage(SpotifyBaseModel):
    href: str | None = None
    limit: int | None = None
    next: str | None = None
    offset: int | None = None
    previous: str | None = None
    total: int | None = None


class AlbumsPage(SpotifyPage):
    # raw entries, validated per album by the client;
    # search results occasionally contain null entries
    items: list[dict[str, Any] | None] = Field(default_factory=list["dict[str, Any] | None"])


class ArtistsPage(SpotifyPage):
    items: list[SpotifyArtist | None] = Field(default_factory=list["SpotifyArtist | None"])


class AlbumSearchResponse(SpotifyBaseModel):
    albums: AlbumsPage = Field(default_factory=AlbumsPage)


class ArtistSearchResponse(SpotifyBaseModel):
    artists: ArtistsPage = Field(default_factory=ArtistsPage)
