"""Initial schema: users, albums

Revision ID: 0001
Revises: None
Create Date: 2026-10-19 00:00:00
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def _table_exists(name: str) -> bool:
    conn = op.get_bind()
    result = conn.execute(
        sa.text("SELECT 1 FROM sqlite_master WHERE type='table' AND name=:n"),
        {"n": name},
    )
    return result.fetchone() is not None


def upgrade() -> None:
    # Guarded so the migration also applies to databases built by init_db().
    if not _table_exists("users"):
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("username", sa.String(), nullable=False),
            sa.Column("root_path", sa.String(), nullable=False),
        )
        op.create_index("ix_users_username", "users", ["username"], unique=True)

    if not _table_exists("albums"):
        op.create_table(
            "albums",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("title", sa.String(), nullable=False),
            sa.Column("path", sa.String(), nullable=False),
            sa.Column(
                "owner_id",
                sa.Integer(),
                sa.ForeignKey("users.id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column(
                "parent_album_id",
                sa.Integer(),
                sa.ForeignKey("albums.id", ondelete="CASCADE"),
                nullable=True,
            ),
            sa.UniqueConstraint("owner_id", "path", name="uq_albums_owner_path"),
        )
        op.create_index("ix_albums_path", "albums", ["path"])


def downgrade() -> None:
    op.drop_table("albums")
    op.drop_table("users")
