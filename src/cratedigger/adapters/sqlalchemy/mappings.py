"""SQLAlchemy mapping metadata for imported albums."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import Any, cast

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)

from cratedigger.domain.model import Album

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class GenreList(TypeDecorator[list[str]]):
    """Store a list of genre names as a JSON array."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: list[str] | None, dialect: Dialect) -> str:
        _ = dialect
        return json.dumps(list(value or []))

    def process_result_value(self, value: str | None, dialect: Dialect) -> list[str]:
        _ = dialect
        if not value:
            return []
        loaded = cast("list[Any]", json.loads(value))
        return [str(item) for item in loaded]


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

album_table = Table(
    "album",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("spotify_id", String, nullable=False),
    Column("title", String, nullable=False),
    Column("artist_name", String, nullable=False),
    Column("artist_spotify_id", String, nullable=True),
    Column("release_date", UTCDateTime(), nullable=False),
    Column("total_tracks", Integer, nullable=False),
    Column("spotify_url", String, nullable=False),
    Column("cover_art_url", String, nullable=True),
    Column("cover_art_url_large", String, nullable=True),
    Column("cover_art_url_medium", String, nullable=True),
    Column("cover_art_url_small", String, nullable=True),
    Column("genres", GenreList(), nullable=False),
    Column("imported_at", UTCDateTime(), nullable=False),
    UniqueConstraint("spotify_id"),
    Index("ix_album_imported_at", "imported_at"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the album model."""

    log.info("Starting SQLAlchemy mappers")
    mapper_registry.map_imperatively(Album, album_table)
    return mapper_registry
