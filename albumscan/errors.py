"""Error types for albumscan.

Scans never raise once the root path has been validated. Failures are
collected as ``ScanError`` values and returned next to whatever was scanned.
"""

from __future__ import annotations

import dataclasses
import enum
from pathlib import Path
from typing import Optional


class AlbumscanError(Exception):
    """Base class for exceptions raised by albumscan."""


class RowDecodeError(AlbumscanError):
    """Raised when a database row does not decode into the expected record."""


class ScanErrorKind(str, enum.Enum):
    ROOT_MISSING = "root_missing"
    ROOT_UNREADABLE = "root_unreadable"
    DIRECTORY_READ = "directory_read"
    STORAGE = "storage"
    RECONCILE = "reconcile"
    CACHE_REMOVAL = "cache_removal"

    @property
    def fatal(self) -> bool:
        return self in (ScanErrorKind.ROOT_MISSING, ScanErrorKind.ROOT_UNREADABLE)


@dataclasses.dataclass(frozen=True)
class ScanError:
    kind: ScanErrorKind
    message: str
    path: Optional[Path] = None
    cause: Optional[BaseException] = dataclasses.field(default=None, compare=False)

    @property
    def fatal(self) -> bool:
        return self.kind.fatal

    def __str__(self) -> str:
        text = self.message
        if self.path is not None:
            text = f"{text} ({self.path})"
        if self.cause is not None:
            text = f"{text}: {self.cause}"
        return text
