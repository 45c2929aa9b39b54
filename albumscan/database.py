"""Database connection and session management using SQLModel."""

from __future__ import annotations

from typing import Generator, Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from .config import DATA_DIR

DB_PATH = DATA_DIR / "library.db"
SQLITE_URL = f"sqlite:///{DB_PATH}"

# check_same_thread=False: scans for different users may run on different threads
engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})


def make_engine(url: str) -> Engine:
    """Create an engine configured the same way as the module default."""
    return create_engine(url, connect_args={"check_same_thread": False})


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def init_db(target: Optional[Engine] = None) -> None:
    """Create database tables."""
    # Import models to ensure they are registered with SQLModel.metadata
    from . import models  # noqa: F401

    target = target or engine

    with target.connect() as conn:
        conn.exec_driver_sql("PRAGMA journal_mode=WAL;")
        conn.exec_driver_sql("PRAGMA foreign_keys=ON;")

    SQLModel.metadata.create_all(target)


def reset_database() -> None:
    """Delete the database file and recreate it."""
    engine.dispose()
    if DB_PATH.exists():
        DB_PATH.unlink()
    init_db()


def get_engine() -> Engine:
    """Return the global engine instance."""
    return engine
