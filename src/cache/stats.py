"""Counters describing cache effectiveness."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class CacheStats:
    memory_hits: int = 0
    persistent_hits: int = 0
    misses: int = 0
    stale_discards: int = 0
    writes: int = 0
    memory_entries: int = 0

    @property
    def hits(self) -> int:
        return self.memory_hits + self.persistent_hits

    @property
    def hit_ratio(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = asdict(self)
        payload["hits"] = self.hits
        payload["hit_ratio"] = self.hit_ratio
        return payload


__all__ = ["CacheStats"]
