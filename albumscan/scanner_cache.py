"""Process-wide memo of which directories contain photos.

One instance is created per process and handed to every scan. Entries are
never evicted; a later scan simply overwrites them.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Dict, Optional, Union

PathLike = Union[str, Path]


class AlbumScannerCache:
    """Thread-safe mapping of directory path -> "contains photos"."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._contains_photos: Dict[Path, bool] = {}

    def lookup(self, path: PathLike) -> Optional[bool]:
        """Return the memoized answer for path, or None if unknown."""
        with self._lock:
            return self._contains_photos.get(Path(path))

    def insert(self, path: PathLike, contains_photos: bool) -> None:
        with self._lock:
            self._contains_photos[Path(path)] = contains_photos

    def insert_subtree(
        self, directory_path: PathLike, root_path: PathLike, contains_photos: bool
    ) -> None:
        """Record a result for directory_path and each ancestor up to root_path.

        A photo found deep inside a walk answers every directory between it
        and the root that started the walk, the root included. If
        directory_path is not below root_path the chain stops at the
        filesystem anchor.
        """
        current = Path(directory_path)
        root = Path(root_path)

        with self._lock:
            while True:
                self._contains_photos[current] = contains_photos
                if current == root or current.parent == current:
                    break
                current = current.parent

    def clear(self) -> None:
        with self._lock:
            self._contains_photos.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._contains_photos)
