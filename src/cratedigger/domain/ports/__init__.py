"""Domain ports (protocols implemented by adapters)."""

from __future__ import annotations

from .catalog import AuthenticationError, CatalogClient, CredentialSource
from .persistence import AlbumRepository, DuplicateAlbumError, StorageError
from .unit_of_work import AlbumRepositories, AlbumUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "AlbumRepositories",
    "AlbumRepository",
    "AlbumUnitOfWork",
    "AuthenticationError",
    "CatalogClient",
    "CredentialSource",
    "DuplicateAlbumError",
    "RepositoryCollection",
    "StorageError",
    "UnitOfWork",
]
