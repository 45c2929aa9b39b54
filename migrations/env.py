"""Alembic migration environment.

``albumscan.migrations`` hands over an open connection to the album database
through ``config.attributes``; running plain ``alembic`` falls back to the
module engine.
"""

from __future__ import annotations

from alembic import context
from sqlmodel import SQLModel

from albumscan import models as _models  # noqa: F401

target_metadata = SQLModel.metadata


def _configure_and_run(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=True,  # SQLite cannot ALTER most constraints in place
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connection = context.config.attributes.get("connection")
    if connection is not None:
        _configure_and_run(connection)
        return

    from albumscan.database import get_engine

    with get_engine().begin() as conn:
        _configure_and_run(conn)


if context.is_offline_mode():
    raise RuntimeError("Offline migration mode is not supported. Run without --sql.")
else:
    run_migrations_online()
