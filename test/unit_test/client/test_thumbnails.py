"""Tests for the in-memory thumbnail cache."""

import asyncio
import threading

from lockin.client.thumbnails import ThumbnailCache, read_file


class CountingLoader:
    """Loader serving fixed bytes per path and counting reads."""

    def __init__(self, files):
        self.files = files
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, path):
        with self._lock:
            self.calls.append(path)
        return self.files.get(path)


class TestThumbnailCache:
    async def test_miss_then_hit(self):
        loader = CountingLoader({"/a.jpg": b"aaa"})
        cache = ThumbnailCache(loader=loader)

        assert await cache.thumbnail("/a.jpg") == b"aaa"
        assert await cache.thumbnail("/a.jpg") == b"aaa"

        assert loader.calls == ["/a.jpg"]
        assert "/a.jpg" in cache
        assert cache.total_cost == 3

    async def test_missing_file_is_not_cached(self):
        loader = CountingLoader({})
        cache = ThumbnailCache(loader=loader)

        assert await cache.thumbnail("/missing.jpg") is None
        assert await cache.thumbnail("/missing.jpg") is None

        assert len(cache) == 0
        assert loader.calls == ["/missing.jpg", "/missing.jpg"]

    async def test_concurrent_requests_share_one_read(self):
        loader = CountingLoader({"/a.jpg": b"aaa"})
        cache = ThumbnailCache(loader=loader)

        results = await asyncio.gather(*(cache.thumbnail("/a.jpg") for _ in range(5)))

        assert results == [b"aaa"] * 5
        assert loader.calls == ["/a.jpg"]

    async def test_count_limit_evicts_least_recently_used(self):
        loader = CountingLoader({"/a": b"a", "/b": b"b", "/c": b"c"})
        cache = ThumbnailCache(count_limit=2, loader=loader)

        await cache.thumbnail("/a")
        await cache.thumbnail("/b")
        await cache.thumbnail("/a")
        await cache.thumbnail("/c")

        assert "/a" in cache
        assert "/b" not in cache
        assert "/c" in cache

    async def test_cost_limit(self):
        loader = CountingLoader({"/a": b"x" * 6, "/b": b"y" * 6})
        cache = ThumbnailCache(total_cost_limit=10, loader=loader)

        await cache.prefetch(["/a", "/b"])

        assert len(cache) == 1
        assert "/b" in cache
        assert cache.total_cost == 6

    async def test_remove_and_clear(self):
        loader = CountingLoader({"/a": b"aa", "/b": b"bbb"})
        cache = ThumbnailCache(loader=loader)
        await cache.prefetch(["/a", "/b"])

        cache.remove("/a")
        assert "/a" not in cache
        assert cache.total_cost == 3

        cache.clear_all()
        assert len(cache) == 0
        assert cache.total_cost == 0

    async def test_accepts_path_objects(self, tmp_path):
        image = tmp_path / "thumb.jpg"
        image.write_bytes(b"jpeg")
        cache = ThumbnailCache()

        assert await cache.thumbnail(image) == b"jpeg"
        assert str(image) in cache


class TestReadFile:
    def test_reads_existing_file(self, tmp_path):
        image = tmp_path / "thumb.jpg"
        image.write_bytes(b"data")

        assert read_file(str(image)) == b"data"

    def test_missing_file(self, tmp_path):
        assert read_file(str(tmp_path / "missing.jpg")) is None

    def test_directory_is_not_a_thumbnail(self, tmp_path):
        assert read_file(str(tmp_path)) is None
