"""Time-bounded cache for ranked search responses."""

from collections import OrderedDict
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from food_search.domain.foods import NormalizedFoodResult


class SearchCache(Protocol):
    """Cache interface for ranked result lists."""

    def get(self, key: str) -> list[NormalizedFoodResult] | None:
        """Return cached results if present and not expired."""

    def set(
        self, key: str, results: list[NormalizedFoodResult], ttl_seconds: int
    ) -> None:
        """Store results with a TTL in seconds."""


def search_cache_key(mode: str, query: str, limit: int) -> str:
    """Build the cache key for one search request."""
    return f"food-search:{mode}:{query.strip().lower()}:{limit}"


@dataclass
class _CacheEntry:
    results: tuple[NormalizedFoodResult, ...]
    expires_at: datetime


class InMemorySearchCache(SearchCache):
    """Per-process cache that evicts the oldest entry when full."""

    def __init__(self, max_entries: int = 512) -> None:
        self.max_entries = max_entries
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()

    def get(self, key: str) -> list[NormalizedFoodResult] | None:
        """Return cached results unless they have expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return list(entry.results)

    def set(
        self, key: str, results: list[NormalizedFoodResult], ttl_seconds: int
    ) -> None:
        """Store results, dropping the oldest entries beyond ``max_entries``."""
        if ttl_seconds <= 0:
            return
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(results=tuple(results), expires_at=expires_at)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
