"""Bounded in-process cache tier."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from contract.models import CacheEntry, Overrides

DEFAULT_MAX_ENTRIES = 4096


class MemoryTier:
    """LRU map of fingerprint -> CacheEntry guarded by a lock."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            msg = "max_entries must be at least 1"
            raise ValueError(msg)
        self.max_entries = max_entries
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, fingerprint: str) -> CacheEntry | None:
        with self._lock:
            entry = self._entries.get(fingerprint)
            if entry is not None:
                self._entries.move_to_end(fingerprint)
            return entry

    def put(self, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[entry.fingerprint] = entry
            self._entries.move_to_end(entry.fingerprint)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def discard(self, fingerprint: str) -> None:
        with self._lock:
            self._entries.pop(fingerprint, None)

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def invalidate_installation(
        self, installation_root: str, token_for: Callable[[Overrides], str]
    ) -> int:
        """Drop entries of ``installation_root`` whose token is not current.

        ``token_for`` maps an entry's overrides to the installation's current
        freshness token under those overrides.
        """
        with self._lock:
            stale = [
                fingerprint
                for fingerprint, entry in self._entries.items()
                if entry.installation_root == installation_root
                and entry.freshness_token != token_for(entry.overrides)
            ]
            for fingerprint in stale:
                del self._entries[fingerprint]
            return len(stale)


__all__ = ["DEFAULT_MAX_ENTRIES", "MemoryTier"]
