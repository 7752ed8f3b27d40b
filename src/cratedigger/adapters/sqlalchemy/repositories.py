"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from cratedigger.adapters.sqlalchemy.mappings import album_table
from cratedigger.domain.model import Album
from cratedigger.domain.ports.persistence import DuplicateAlbumError, StorageError

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class SqlAlchemyAlbumRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def count(self) -> int:
        stmt = select(func.count()).select_from(album_table)
        try:
            return int(self.session.execute(stmt).scalar_one())
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not count albums: {exc}") from exc

    def find_by_external_id(self, spotify_id: str) -> Album | None:
        stmt = select(Album).where(album_table.c.spotify_id == spotify_id)
        try:
            return self.session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not look up album {spotify_id}: {exc}") from exc

    def create(self, album: Album) -> Album:
        self.session.add(album)
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise DuplicateAlbumError(f"Album {album.spotify_id} already exists") from exc
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not store album {album.spotify_id}: {exc}") from exc
        return album


if TYPE_CHECKING:
    from cratedigger.domain.ports.persistence import AlbumRepository

    _session_stub = cast("Session", object())
    _repo_check: AlbumRepository = SqlAlchemyAlbumRepository(_session_stub)
