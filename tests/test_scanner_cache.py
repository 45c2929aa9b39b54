"""Tests for the containment memo."""

import threading
from pathlib import Path

from albumscan.scanner_cache import AlbumScannerCache


def test_lookup_unknown_returns_none():
    cache = AlbumScannerCache()
    assert cache.lookup("/photos/2023") is None


def test_insert_and_overwrite():
    cache = AlbumScannerCache()
    cache.insert("/photos/2023", False)
    assert cache.lookup(Path("/photos/2023")) is False

    cache.insert(Path("/photos/2023"), True)
    assert cache.lookup("/photos/2023") is True
    assert len(cache) == 1


def test_insert_subtree_marks_chain_up_to_root():
    cache = AlbumScannerCache()
    cache.insert_subtree("/photos/2023/trip/day1", "/photos/2023", True)

    assert cache.lookup("/photos/2023/trip/day1") is True
    assert cache.lookup("/photos/2023/trip") is True
    assert cache.lookup("/photos/2023") is True
    assert cache.lookup("/photos") is None


def test_insert_subtree_outside_root_stops_at_anchor():
    cache = AlbumScannerCache()
    cache.insert_subtree("/a/b", "/elsewhere", False)

    assert cache.lookup("/a/b") is False
    assert cache.lookup("/a") is False
    assert cache.lookup("/") is False
    assert len(cache) == 3


def test_clear():
    cache = AlbumScannerCache()
    cache.insert("/x", True)
    cache.clear()
    assert cache.lookup("/x") is None


def test_concurrent_inserts():
    cache = AlbumScannerCache()

    def worker(offset: int) -> None:
        for i in range(200):
            cache.insert(f"/photos/{offset}/{i}", i % 2 == 0)
            cache.lookup(f"/photos/{offset}/{i}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == 8 * 200
    assert cache.lookup("/photos/3/10") is True
    assert cache.lookup("/photos/3/11") is False
