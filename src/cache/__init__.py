"""Multi-layer cache for resolution results."""

from cache.layered import MultiLayerCache
from cache.memory import DEFAULT_MAX_ENTRIES, MemoryTier
from cache.persistent import PersistentTier
from cache.stats import CacheStats

__all__ = [
    "DEFAULT_MAX_ENTRIES",
    "CacheStats",
    "MemoryTier",
    "MultiLayerCache",
    "PersistentTier",
]
