"""Thin filesystem layer used by both walkers and the reconciler."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Iterable, List, NamedTuple


class Entry(NamedTuple):
    name: str
    path: Path
    is_dir: bool


def list_entries(directory: Path) -> List[Entry]:
    """Return the entries of a directory in the order the OS lists them.

    Symlinks are reported as plain files so walks never follow them.
    Raises OSError if the directory cannot be read.
    """
    with os.scandir(directory) as it:
        return [
            Entry(item.name, Path(directory) / item.name, item.is_dir(follow_symlinks=False))
            for item in it
        ]


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def should_skip(name: str, ignore_patterns: Iterable[str]) -> bool:
    """Hidden entries and names listed in the ignore patterns are skipped."""
    return is_hidden(name) or name in ignore_patterns


def remove_tree(path: Path) -> bool:
    """Remove a directory tree. Returns False if it did not exist.

    Any other OSError propagates to the caller.
    """
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return False
    return True
