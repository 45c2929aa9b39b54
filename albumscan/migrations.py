"""Schema upgrades for the album database.

Tables are first created by ``init_db`` (create_all). Revision 0001 is
written to tolerate that, so upgrading a fresh database only records the
version row. Later revisions change the schema for real.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional

from alembic import command as alembic_command
from alembic.config import Config as AlembicConfig
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Engine

from .config import PROJECT_ROOT
from .logging_config import get_logger

logger = get_logger(__name__)

MIGRATIONS_DIR = PROJECT_ROOT / "migrations"


def _alembic_cfg() -> AlembicConfig:
    cfg = AlembicConfig()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    return cfg


def _sqlite_file(engine: Engine) -> Optional[Path]:
    database = engine.url.database
    if engine.url.get_backend_name() != "sqlite" or not database or database == ":memory:":
        return None
    return Path(database)


def head_revision() -> str:
    return ScriptDirectory.from_config(_alembic_cfg()).get_current_head() or "unknown"


def current_revision(engine: Engine) -> Optional[str]:
    """Revision recorded in the album database, None if never upgraded."""
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def backup_database(engine: Engine) -> Optional[Path]:
    """Copy the album database next to itself as ``<name>.bak``."""
    db_file = _sqlite_file(engine)
    if db_file is None or not db_file.exists():
        return None
    backup = db_file.with_name(db_file.name + ".bak")
    shutil.copy2(db_file, backup)
    logger.info(f"Backed up {db_file.name} -> {backup.name}")
    return backup


def upgrade_database(engine: Engine, backup: bool = True) -> str:
    """Bring the album database to head and return the new revision."""
    current = current_revision(engine)
    head = head_revision()
    if current == head:
        return head

    if backup and current is not None:
        backup_database(engine)

    logger.info(f"Migrating album database {current} -> {head}")
    cfg = _alembic_cfg()
    with engine.begin() as conn:
        cfg.attributes["connection"] = conn
        alembic_command.upgrade(cfg, "head")
    return head
