"""TTL cache for category recipe lists."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from mealvista.domain.recipes import RawRecipe


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class CacheEntry:
    """Recipes stored for a key together with their fetch time."""

    key: str
    data: list[RawRecipe]
    stored_at: datetime


class RecipeCache(Protocol):
    """Cache interface for recipe lists keyed by category."""

    def get(self, key: str) -> CacheEntry | None:
        """Return a fresh entry for the key, if any."""

    def set(self, key: str, data: list[RawRecipe]) -> CacheEntry:
        """Store recipes for the key with a fresh timestamp."""

    def fresh_entries(self) -> list[CacheEntry]:
        """Return every entry that has not expired."""

    def lock(self, key: str) -> asyncio.Lock:
        """Return the lock serializing fetches for the key."""


class InMemoryRecipeCache(RecipeCache):
    """In-process recipe cache with a fixed TTL.

    Stale entries are not evicted; they are ignored on read and replaced by
    the next successful fetch for the same key.
    """

    def __init__(
        self,
        ttl_seconds: int = 3600,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry if it is younger than the TTL."""
        entry = self._entries.get(key)
        if entry is None or not self._is_fresh(entry):
            return None
        return entry

    def set(self, key: str, data: list[RawRecipe]) -> CacheEntry:
        """Replace the entry for the key."""
        entry = CacheEntry(key=key, data=list(data), stored_at=self._clock())
        self._entries[key] = entry
        return entry

    def fresh_entries(self) -> list[CacheEntry]:
        """Return all entries still within the TTL."""
        return [entry for entry in self._entries.values() if self._is_fresh(entry)]

    def lock(self, key: str) -> asyncio.Lock:
        """Return the per-key lock, creating it on first use."""
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.stored_at < self._ttl
