"""create album table

Revision ID: 3f1c2a9d7b04
Revises:
Create Date: 2026-09-02 18:41:07.512309

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "3f1c2a9d7b04"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "album",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("spotify_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("artist_name", sa.String(), nullable=False),
        sa.Column("artist_spotify_id", sa.String(), nullable=True),
        sa.Column("release_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("total_tracks", sa.Integer(), nullable=False),
        sa.Column("spotify_url", sa.String(), nullable=False),
        sa.Column("cover_art_url", sa.String(), nullable=True),
        sa.Column("cover_art_url_large", sa.String(), nullable=True),
        sa.Column("cover_art_url_medium", sa.String(), nullable=True),
        sa.Column("cover_art_url_small", sa.String(), nullable=True),
        sa.Column("genres", sa.Text(), nullable=False),
        sa.Column("imported_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_album"),
        sa.UniqueConstraint("spotify_id", name="uq_album_spotify_id"),
    )
    op.create_index("ix_album_imported_at", "album", ["imported_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_album_imported_at", table_name="album")
    op.drop_table("album")
