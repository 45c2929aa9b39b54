"""Album discovery for a single user.

Walks the user's root directory breadth-first, upserts every directory that
holds photos (directly or below it) as an album, links each album to its
parent, and finally removes albums that disappeared from disk.

A scan never aborts half-way: read and storage failures are recorded, the
affected subtree is skipped, and the rest of the tree is still scanned.
"""

from __future__ import annotations

import dataclasses
import os
import stat
from pathlib import Path
from typing import Iterator, List, NamedTuple, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from .config import AlbumscanConfig
from .containment import directory_contains_photos
from .database import get_engine
from .errors import RowDecodeError, ScanError, ScanErrorKind
from .filesystem import list_entries, should_skip
from .logging_config import get_logger
from .models import AlbumRecord, User
from .notifications import Notifier
from .reconcile import delete_old_user_albums
from .repository import AlbumRepository
from .scanner_cache import AlbumScannerCache
from .traversal import walk_breadth_first

logger = get_logger(__name__)


class ScanItem(NamedTuple):
    path: Path
    parent_album_id: Optional[int] = None


@dataclasses.dataclass
class ScanResult:
    albums: List[AlbumRecord] = dataclasses.field(default_factory=list)
    errors: List[ScanError] = dataclasses.field(default_factory=list)
    added: int = 0

    @property
    def failed(self) -> bool:
        """True if the scan could not start at all."""
        return any(error.fatal for error in self.errors)

    def __iter__(self) -> Iterator:
        yield self.albums
        yield self.errors


def _check_root(user: User) -> Optional[ScanError]:
    root = Path(user.root_path)
    try:
        st = root.stat()
    except FileNotFoundError:
        return ScanError(
            ScanErrorKind.ROOT_MISSING,
            f"Photo directory for user '{user.username}' does not exist",
            path=root,
        )
    except OSError as exc:
        return ScanError(
            ScanErrorKind.ROOT_UNREADABLE,
            f"Could not read photo directory for user '{user.username}'",
            path=root,
            cause=exc,
        )

    if not stat.S_ISDIR(st.st_mode) or not os.access(root, os.R_OK | os.X_OK):
        return ScanError(
            ScanErrorKind.ROOT_UNREADABLE,
            f"Could not read photo directory for user '{user.username}'",
            path=root,
        )
    return None


def scan_user(
    user: User,
    cache: AlbumScannerCache,
    config: Optional[AlbumscanConfig] = None,
    *,
    engine: Optional[Engine] = None,
    notifier: Optional[Notifier] = None,
) -> ScanResult:
    """Find all albums below user.root_path and sync them to the database.

    :param user: Owner of the scan; its id, username and root_path are used.
    :param cache: Shared containment cache, one per process.
    :param config: Loaded configuration (ignore patterns, cache root).
    :param engine: Database engine, defaults to the module engine.
    :param notifier: Receives every recorded error as a notification.
    :return: Albums found (in discovery order) and all recorded errors.
    """
    config = config or AlbumscanConfig()
    engine = engine or get_engine()
    notifier = notifier or Notifier()
    ignore_patterns = tuple(config.scanner.ignore_patterns)

    result = ScanResult()

    def record(error: ScanError) -> None:
        result.errors.append(error)
        notifier.scanner_error(str(error))

    root_error = _check_root(user)
    if root_error is not None:
        record(root_error)
        return result

    root = Path(user.root_path)
    logger.info(f"[SCAN] {user.username}: {root}")

    with Session(engine) as session:
        repo = AlbumRepository(session)

        def upsert(item: ScanItem) -> Optional[AlbumRecord]:
            step = "insert album into database"
            try:
                inserted = repo.insert_album_ignore(
                    title=item.path.name or str(item.path),
                    parent_album_id=item.parent_album_id,
                    owner_id=user.id,
                    path=item.path,
                )
                step = "get album from database"
                album = repo.get_album_by_path(user.id, item.path)
                if album is None:
                    raise RowDecodeError("album row missing after insert")
                step = "commit database transaction"
                repo.commit()
            except (SQLAlchemyError, RowDecodeError) as exc:
                repo.rollback()
                record(ScanError(ScanErrorKind.STORAGE, step, path=item.path, cause=exc))
                return None

            if inserted:
                result.added += 1
            return album

        def visit(item: ScanItem) -> List[ScanItem]:
            try:
                entries = list_entries(item.path)
            except OSError as exc:
                record(ScanError(ScanErrorKind.DIRECTORY_READ, "read directory", path=item.path, cause=exc))
                return []

            logger.debug(f"Scanning directory: {item.path}")
            album = upsert(item)
            if album is None:
                return []
            result.albums.append(album)

            children = []
            for entry in entries:
                if not entry.is_dir or should_skip(entry.name, ignore_patterns):
                    continue
                if directory_contains_photos(
                    entry.path,
                    cache,
                    ignore_patterns=ignore_patterns,
                    notifier=notifier,
                ):
                    children.append(ScanItem(entry.path, album.id))
            return children

        walk_breadth_first(ScanItem(root), visit)

    result.errors.extend(
        delete_old_user_albums(
            result.albums,
            user,
            engine=engine,
            cache_root=config.cache_root,
            notifier=notifier,
        )
    )

    logger.info(
        f"[SCAN] {user.username}: {len(result.albums)} albums "
        f"({result.added} new), {len(result.errors)} errors"
    )
    return result
