"""Config management for albumscan.

Reads `config.ini` from DATA_DIR (beside main.py unless overridden).
The photo cache root may also come from the PHOTO_CACHE environment variable,
which always wins over the config file.
"""

from __future__ import annotations

import configparser
import dataclasses
import os
import pathlib
import sys
from typing import Optional

from .logging_config import get_logger

logger = get_logger(__name__)


def _get_project_root() -> pathlib.Path:
    if getattr(sys, "frozen", False):
        return pathlib.Path(sys.executable).resolve().parent
    return pathlib.Path(__file__).resolve().parents[1]


PROJECT_ROOT = _get_project_root()

# DATA_DIR holds all persistent state (config.ini, library.db, albumscan.log).
DATA_DIR = pathlib.Path(os.environ.get("DATA_DIR", str(PROJECT_ROOT)))
DEFAULT_CONFIG_PATH = DATA_DIR / "config.ini"

DEFAULT_CACHE_ROOT = "./photo_cache"
DEFAULT_IGNORE_PATTERNS = ("@eaDir", ".DS_Store", "Thumbs.db")


def photo_cache_root(fallback: str = DEFAULT_CACHE_ROOT) -> pathlib.Path:
    """Return the cache root, honouring the PHOTO_CACHE environment variable."""
    return pathlib.Path(os.environ.get("PHOTO_CACHE") or fallback)


@dataclasses.dataclass
class ScannerConfig:
    ignore_patterns: tuple[str, ...] = DEFAULT_IGNORE_PATTERNS


@dataclasses.dataclass
class CacheConfig:
    root: str = DEFAULT_CACHE_ROOT


@dataclasses.dataclass
class AlbumscanConfig:
    scanner: ScannerConfig = dataclasses.field(default_factory=ScannerConfig)
    cache: CacheConfig = dataclasses.field(default_factory=CacheConfig)

    @property
    def cache_root(self) -> pathlib.Path:
        return photo_cache_root(self.cache.root)

    @property
    def database_path(self) -> pathlib.Path:
        return DATA_DIR / "library.db"


def _split_list(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


def load_config(config_path: Optional[pathlib.Path] = None) -> AlbumscanConfig:
    """Load configuration from config.ini.

    Defaults to `config.ini` in DATA_DIR.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    parser = configparser.ConfigParser()
    parser.read(path)

    scanner = ScannerConfig(
        ignore_patterns=_split_list(
            parser.get(
                "scanner",
                "ignore_patterns",
                fallback=",".join(DEFAULT_IGNORE_PATTERNS),
            )
        ),
    )
    cache = CacheConfig(
        root=parser.get("cache", "root", fallback=DEFAULT_CACHE_ROOT).strip()
        or DEFAULT_CACHE_ROOT,
    )

    return AlbumscanConfig(scanner=scanner, cache=cache)


def write_default_config(
    config_path: Optional[pathlib.Path] = None,
    cache_root: str = DEFAULT_CACHE_ROOT,
) -> pathlib.Path:
    """Write a config.ini with default settings and return its path."""
    path = config_path or DEFAULT_CONFIG_PATH

    parser = configparser.ConfigParser()
    parser["scanner"] = {
        "ignore_patterns": ",".join(DEFAULT_IGNORE_PATTERNS),
    }
    parser["cache"] = {
        "root": cache_root,
    }

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as handle:
        parser.write(handle)

    logger.debug(f"Wrote default config to {path}")
    return path


_cached_config: Optional[AlbumscanConfig] = None


def get_config() -> AlbumscanConfig:
    """Return the cached config singleton. Loads from disk on first call."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reset_config_cache() -> None:
    """Clear the cached config (useful for tests)."""
    global _cached_config
    _cached_config = None
