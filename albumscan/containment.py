"""Decide whether a directory, or anything below it, holds a photo.

Answers are memoized in an ``AlbumScannerCache`` so overlapping queries
(sibling directories, rescans, other users sharing a tree) skip the walk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .filesystem import list_entries, should_skip
from .logging_config import get_logger
from .media import is_path_image
from .notifications import Notifier
from .scanner_cache import AlbumScannerCache
from .traversal import walk_breadth_first

logger = get_logger(__name__)


def directory_contains_photos(
    root_path: Path,
    cache: AlbumScannerCache,
    *,
    ignore_patterns: Iterable[str] = (),
    notifier: Optional[Notifier] = None,
    is_image: Callable[[Path], bool] = is_path_image,
) -> bool:
    """Return True if root_path or any non-hidden descendant contains an image.

    Never raises. An unreadable directory is reported and yields False
    without caching anything, since its contents are unknown.
    """
    cached = cache.lookup(root_path)
    if cached is not None:
        return cached

    root_path = Path(root_path)
    ignore_patterns = tuple(ignore_patterns)
    scanned: List[Path] = []
    found = False

    def visit(dir_path: Path) -> Optional[List[Path]]:
        nonlocal found

        try:
            entries = list_entries(dir_path)
        except OSError as exc:
            message = f"Could not read directory: {dir_path}: {exc}"
            if notifier is not None:
                notifier.scanner_error(message)
            else:
                logger.error(message)
            return None

        scanned.append(dir_path)
        subdirs = []
        for entry in entries:
            if entry.is_dir:
                if not should_skip(entry.name, ignore_patterns):
                    subdirs.append(entry.path)
            elif is_image(entry.path):
                cache.insert_subtree(dir_path, root_path, True)
                found = True
                return None
        return subdirs

    exhausted = walk_breadth_first(root_path, visit)
    if found:
        return True

    if exhausted:
        for dir_path in scanned:
            cache.insert(dir_path, False)

    return False
