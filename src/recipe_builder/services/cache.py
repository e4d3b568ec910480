"""Per-calculation cache for remote nutrition lookups."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from recipe_builder.domain.nutrition import NutritionPer100g

Fetch = Callable[[], Awaitable[NutritionPer100g | None]]


@dataclass
class LookupCache:
    """Remembers remote lookup outcomes, including misses, for one calculation.

    Instances are created per recipe calculation and discarded afterwards.
    A per-key lock keeps concurrent ingredient tasks from fetching the same
    key twice.
    """

    _entries: dict[str, NutritionPer100g | None] = field(default_factory=dict)
    _locks: dict[str, asyncio.Lock] = field(default_factory=dict)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    async def get_or_fetch(self, key: str, fetch: Fetch) -> NutritionPer100g | None:
        """Return the cached outcome for key, calling fetch at most once."""
        if key in self._entries:
            return self._entries[key]
        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            if key not in self._entries:
                self._entries[key] = await fetch()
            return self._entries[key]
