"""Configuration for extension path resolution."""

from rules.config import (
    CONFIG_FILENAME,
    ConfigError,
    RecoveryConfig,
    ResolverConfig,
    load_config,
    resolve_cache_dir,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "RecoveryConfig",
    "ResolverConfig",
    "load_config",
    "resolve_cache_dir",
]
