"""In-process response cache."""

import time
from collections.abc import Callable
from typing import Any

from src.modules.news.domain.cache import CacheEntry


class InMemoryCacheStore:
    """Dict-backed CacheStore living as long as the process.

    Entries are replaced with a single assignment, so readers never observe a
    half-written entry; concurrent writers for one key resolve last-write-wins.
    """

    def __init__(self, clock: Callable[[], float] | None = None):
        """初始化缓存。

        Args:
            clock: 返回当前时间（秒）的函数，测试中可注入可控时钟
        """
        self._clock = clock or time.time
        self._entries: dict[str, CacheEntry] = {}

    def now(self) -> float:
        return self._clock()

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def put(self, key: str, value: Any) -> CacheEntry:
        entry = CacheEntry(value=value, stored_at=self._clock())
        self._entries[key] = entry
        return entry

    @staticmethod
    def is_valid(entry: CacheEntry, ttl: float, now: float) -> bool:
        return now - entry.stored_at < ttl

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
