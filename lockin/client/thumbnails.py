"""
In-memory thumbnail cache.

Thumbnails are read from disk off the event loop, kept in least-recently-used
order and bounded by entry count and total byte size. Concurrent requests for
the same path share one disk read.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections import OrderedDict
from typing import Callable, Dict, Iterable, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_COUNT_LIMIT = 100
DEFAULT_TOTAL_COST_LIMIT = 50 * 1024 * 1024

PathLike = Union[str, "os.PathLike[str]"]
Loader = Callable[[str], Optional[bytes]]


def read_file(path: str) -> Optional[bytes]:
    """Read a thumbnail file, returning None when it is missing or unreadable."""
    if not os.path.isfile(path):
        return None
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError as e:
        logger.warning(f"Could not read thumbnail {path}: {e}")
        return None


class ThumbnailCache:
    """LRU byte cache keyed by file path.

    Args:
        count_limit: Maximum number of cached thumbnails.
        total_cost_limit: Maximum total size in bytes of cached thumbnails.
        loader: Blocking function reading a path; runs in a worker thread.
    """

    def __init__(
        self,
        *,
        count_limit: int = DEFAULT_COUNT_LIMIT,
        total_cost_limit: int = DEFAULT_TOTAL_COST_LIMIT,
        loader: Loader = read_file,
    ) -> None:
        self.count_limit = count_limit
        self.total_cost_limit = total_cost_limit
        self._loader = loader
        self._entries: "OrderedDict[str, bytes]" = OrderedDict()
        self._total_cost = 0
        self._loading: Dict[str, "asyncio.Task[Optional[bytes]]"] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return os.fspath(path) in self._entries  # type: ignore[arg-type]

    @property
    def total_cost(self) -> int:
        return self._total_cost

    async def thumbnail(self, path: PathLike) -> Optional[bytes]:
        """Return the cached thumbnail bytes for ``path``, loading them on a miss."""
        key = os.fspath(path)
        cached = self._entries.get(key)
        if cached is not None:
            self._entries.move_to_end(key)
            return cached

        task = self._loading.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key))
            self._loading[key] = task
        try:
            return await asyncio.shield(task)
        finally:
            if task.done() and self._loading.get(key) is task:
                del self._loading[key]

    async def _load(self, key: str) -> Optional[bytes]:
        data = await asyncio.to_thread(self._loader, key)
        if data is not None:
            self._store(key, data)
        return data

    def _store(self, key: str, data: bytes) -> None:
        previous = self._entries.pop(key, None)
        if previous is not None:
            self._total_cost -= len(previous)
        self._entries[key] = data
        self._total_cost += len(data)
        while self._entries and (
            len(self._entries) > self.count_limit or self._total_cost > self.total_cost_limit
        ):
            evicted_key, evicted = self._entries.popitem(last=False)
            self._total_cost -= len(evicted)
            logger.debug(f"Evicted thumbnail {evicted_key}")

    async def prefetch(self, paths: Iterable[PathLike]) -> None:
        """Warm the cache for ``paths``, one at a time."""
        for path in paths:
            await self.thumbnail(path)

    def remove(self, path: PathLike) -> None:
        data = self._entries.pop(os.fspath(path), None)
        if data is not None:
            self._total_cost -= len(data)

    def clear_all(self) -> None:
        """Forget every cached thumbnail and in-flight load."""
        self._entries.clear()
        self._total_cost = 0
        self._loading.clear()
