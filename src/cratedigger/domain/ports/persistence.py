"""Ports for persisting imported albums."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cratedigger.domain.model import Album


class StorageError(RuntimeError):
    """Raised by repositories when the backing store rejects an operation."""


class DuplicateAlbumError(StorageError):
    """Raised when an album with the same external id already exists."""


@runtime_checkable
class AlbumRepository(Protocol):
    """Persistence contract for albums. No update or delete is offered."""

    def count(self) -> int: ...

    def find_by_external_id(self, spotify_id: str) -> Album | None: ...

    def create(self, album: Album) -> Album: ...
