"""Default construction of a ``ResolutionService`` from configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cache.layered import MultiLayerCache
from cache.memory import MemoryTier
from cache.persistent import PersistentTier
from recovery.heuristics import build_heuristics
from recovery.manager import ErrorRecoveryManager
from resolution.freshness import FreshnessTracker
from resolution.service import ResolutionService
from rules.config import ResolverConfig, resolve_cache_dir
from scan.filesystem import LocalFilesystem
from scan.validator import PathValidator
from strategies.registry import default_registry

if TYPE_CHECKING:
    from pathlib import Path


def create_resolution_service(
    config: ResolverConfig | None = None,
    *,
    project_root: Path | None = None,
    fs: LocalFilesystem | None = None,
    use_cache: bool = True,
) -> ResolutionService:
    """Wire the default registry, validator, recovery and cache.

    Args:
        config: Resolver configuration (defaults when omitted)
        project_root: Root the configured cache_dir is relative to; the
            persistent tier is disabled when omitted
        fs: Filesystem probe shared by validator, recovery and freshness
        use_cache: Build the service without any cache when False
    """
    if config is None:
        config = ResolverConfig()
    if fs is None:
        fs = LocalFilesystem()

    validator = PathValidator(fs)
    recovery = ErrorRecoveryManager(
        validator,
        build_heuristics(
            config.recovery.heuristics,
            container_dirs=config.recovery.container_dirs,
        ),
    )

    cache: MultiLayerCache | None = None
    if use_cache:
        persistent = None
        if config.persistent_cache and project_root is not None:
            persistent = PersistentTier(resolve_cache_dir(project_root, config.cache_dir))
        cache = MultiLayerCache(MemoryTier(config.memory_entries), persistent)

    return ResolutionService(
        registry=default_registry(config.disabled_strategies),
        validator=validator,
        recovery=recovery,
        freshness=FreshnessTracker(fs),
        cache=cache,
    )


__all__ = ["create_resolution_service"]
