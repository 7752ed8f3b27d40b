"""SQLAlchemy adapter package for cratedigger."""

from __future__ import annotations

from .mappings import album_table, mapper_registry, start_mappers
from .repositories import SqlAlchemyAlbumRepository
from .unit_of_work import SqlAlchemyAlbumUnitOfWork, is_started, shutdown, startup

__all__ = [
    "SqlAlchemyAlbumRepository",
    "SqlAlchemyAlbumUnitOfWork",
    "album_table",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
