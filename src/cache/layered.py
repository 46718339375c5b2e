"""Two-tier resolution cache: in-process LRU over a persistent record store."""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from cache.memory import MemoryTier
from cache.stats import CacheStats
from contract.models import CacheEntry

if TYPE_CHECKING:
    from collections.abc import Callable

    from cache.persistent import PersistentTier
    from contract.models import Overrides, Resolved, Unresolved

logger = logging.getLogger(__name__)


class MultiLayerCache:
    """Memoizes resolution results keyed by request fingerprint.

    A hit from either tier is honored only when its freshness token equals
    the installation's current token. Persistent hits are promoted into the
    memory tier. Writes go to both tiers, negative results included.
    """

    def __init__(
        self,
        memory: MemoryTier | None = None,
        persistent: PersistentTier | None = None,
    ) -> None:
        self.memory = memory or MemoryTier()
        self.persistent = persistent
        self._lock = threading.Lock()
        self._counters = {
            "memory_hits": 0,
            "persistent_hits": 0,
            "misses": 0,
            "stale_discards": 0,
            "writes": 0,
        }

    def _count(self, name: str) -> None:
        with self._lock:
            self._counters[name] += 1

    def get(self, fingerprint: str, freshness_token: str) -> Resolved | Unresolved | None:
        entry = self.memory.get(fingerprint)
        if entry is not None:
            if entry.freshness_token == freshness_token:
                self._count("memory_hits")
                return entry.result
            self.memory.discard(fingerprint)
            self._count("stale_discards")
            logger.debug("discarded stale memory entry %s", fingerprint)

        if self.persistent is not None:
            entry = self.persistent.get(fingerprint)
            if entry is not None:
                if entry.freshness_token == freshness_token:
                    self.memory.put(entry)
                    self._count("persistent_hits")
                    return entry.result
                self._count("stale_discards")
                logger.debug("ignored stale persistent entry %s", fingerprint)

        self._count("misses")
        return None

    def put(
        self,
        fingerprint: str,
        result: Resolved | Unresolved,
        freshness_token: str,
        *,
        installation_root: str,
        overrides: Overrides = (),
    ) -> CacheEntry:
        entry = CacheEntry(
            fingerprint=fingerprint,
            installation_root=installation_root,
            overrides=overrides,
            freshness_token=freshness_token,
            created_at=time.time(),
            result=result,
        )
        self.memory.put(entry)
        if self.persistent is not None:
            self.persistent.put(entry)
        self._count("writes")
        return entry

    def clear(self) -> int:
        removed = self.memory.clear()
        if self.persistent is not None:
            removed += self.persistent.clear()
        logger.info("cache cleared (%d entries)", removed)
        return removed

    def invalidate_installation(
        self, installation_root: str, token_for: Callable[[Overrides], str]
    ) -> int:
        removed = self.memory.invalidate_installation(installation_root, token_for)
        if self.persistent is not None:
            removed += self.persistent.invalidate_installation(
                installation_root, token_for
            )
        logger.info(
            "invalidated %d stale entries for %s", removed, installation_root
        )
        return removed

    def stats(self) -> CacheStats:
        with self._lock:
            counters = dict(self._counters)
        return CacheStats(memory_entries=len(self.memory), **counters)


__all__ = ["MultiLayerCache"]
