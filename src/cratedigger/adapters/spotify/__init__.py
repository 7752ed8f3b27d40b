"""Spotify adapter package."""

from __future__ import annotations

from .auth import SpotifyCredentialManager
from .client import SpotifyCatalogClient, SpotifyPayloadError, should_cache_payload
from .schema import SpotifyAlbum, SpotifyArtist
from .translator import translate_album, translate_albums, translate_artist

__all__ = [
    "SpotifyAlbum",
    "SpotifyArtist",
    "SpotifyCatalogClient",
    "SpotifyCredentialManager",
    "SpotifyPayloadError",
    "should_cache_payload",
    "translate_album",
    "translate_albums",
    "translate_artist",
]
