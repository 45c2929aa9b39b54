"""Remove albums that no longer exist on disk.

Rows are deleted and committed first; cache folders are only removed once
that commit succeeded. A folder that cannot be removed is reported but does
not bring the row back.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from .errors import RowDecodeError, ScanError, ScanErrorKind
from .filesystem import remove_tree
from .logging_config import get_logger
from .models import AlbumRecord, User
from .notifications import Notification, Notifier
from .repository import AlbumRepository

logger = get_logger(__name__)


def album_cache_dir(cache_root: Path, album_id: int) -> Path:
    return Path(cache_root) / str(album_id)


def delete_old_user_albums(
    scanned_albums: Sequence[AlbumRecord],
    user: User,
    *,
    engine: Engine,
    cache_root: Path,
    notifier: Optional[Notifier] = None,
) -> List[ScanError]:
    """Delete the user's albums whose path was not part of this scan.

    An empty scan result deletes nothing: it is far more likely to come from
    a failed read than from a library that was emptied on purpose.
    """
    if not scanned_albums:
        return []

    notifier = notifier or Notifier()
    errors: List[ScanError] = []

    def record(error: ScanError) -> None:
        errors.append(error)
        notifier.scanner_error(str(error))

    scanned_paths = {album.path for album in scanned_albums}

    with Session(engine) as session:
        repo = AlbumRepository(session)

        try:
            stale_ids = repo.find_stale_album_ids(user.id, scanned_paths)
        except (SQLAlchemyError, RowDecodeError) as exc:
            repo.rollback()
            record(ScanError(ScanErrorKind.RECONCILE, "get albums to be deleted from database", cause=exc))
            return errors

        if not stale_ids:
            return errors

        try:
            repo.delete_albums(stale_ids)
            repo.commit()
        except SQLAlchemyError as exc:
            repo.rollback()
            record(ScanError(ScanErrorKind.RECONCILE, "delete old albums from database", cause=exc))
            return errors

    for album_id in stale_ids:
        cache_path = album_cache_dir(cache_root, album_id)
        try:
            remove_tree(cache_path)
        except OSError as exc:
            record(ScanError(ScanErrorKind.CACHE_REMOVAL, "delete unused cache folder", path=cache_path, cause=exc))

    logger.info(f"[-] Removed {len(stale_ids)} albums for {user.username} not found on disk")
    notifier.broadcast(
        Notification(
            header="Deleted old albums",
            content=f"Deleted {len(stale_ids)} albums that were not found on disk",
            positive=True,
            timeout=3000,
        )
    )
    return errors
