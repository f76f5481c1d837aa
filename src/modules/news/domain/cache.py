"""Response cache domain models and port."""

import hashlib
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class CacheEntry:
    """A cached upstream payload and the time it was stored."""

    value: Any
    stored_at: float

    def age(self, now: float) -> float:
        return now - self.stored_at


class CacheStore(Protocol):
    """Port for the key -> timestamped value store.

    Writes replace the whole entry; there is no eviction, stale entries stay
    until the next write for the same key.
    """

    def get(self, key: str) -> CacheEntry | None: ...

    def put(self, key: str, value: Any) -> CacheEntry: ...

    def is_valid(self, entry: CacheEntry, ttl: float, now: float) -> bool: ...

    def now(self) -> float: ...

    def clear(self) -> None: ...

    def __len__(self) -> int: ...


class CacheKeys:
    """Cache key naming."""

    # news:{endpoint}:{sha256 of canonical params}
    NEWS_PREFIX = "news"

    @staticmethod
    def canonicalize(params: Mapping[str, Any]) -> str:
        """Serialize params with sorted keys so insertion order never matters."""
        return json.dumps(
            dict(params),
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            default=str,
        )

    @classmethod
    def news(cls, endpoint: str, params: Mapping[str, Any]) -> str:
        """Build the cache key for one upstream request.

        Args:
            endpoint: upstream path, e.g. ``/top-headlines``
            params: outgoing parameters without the credential

        Returns:
            ``news:top-headlines:<hex digest>``
        """
        digest = hashlib.sha256(cls.canonicalize(params).encode("utf-8")).hexdigest()
        return f"{cls.NEWS_PREFIX}:{endpoint.strip('/')}:{digest}"
