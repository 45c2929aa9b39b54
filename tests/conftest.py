import io
import struct
import zlib
from pathlib import Path

import pytest
from PIL import Image
from sqlmodel import Session

from albumscan.config import AlbumscanConfig, CacheConfig, ScannerConfig
from albumscan.database import init_db, make_engine
from albumscan.repository import UserRepository


def _png_bytes() -> bytes:
    img = Image.new("RGB", (8, 8), color="blue")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def make_photo():
    """Write a real tiny PNG at the given path, creating parent folders."""
    data = _png_bytes()

    def _make(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _make


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))


@pytest.fixture
def make_oversized_png():
    """Write a PNG whose header claims 100000x100000 pixels, over Pillow's bomb limit."""
    header = struct.pack(">IIBBBBB", 100000, 100000, 8, 2, 0, 0, 0)
    data = (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b""))
        + _png_chunk(b"IEND", b"")
    )

    def _make(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _make


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'library.db'}")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def make_user(engine):
    def _make(name: str, root: Path):
        with Session(engine) as session:
            return UserRepository(session).add_user(name, root)

    return _make


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.delenv("PHOTO_CACHE", raising=False)
    return AlbumscanConfig(
        scanner=ScannerConfig(),
        cache=CacheConfig(root=str(tmp_path / "photo_cache")),
    )
