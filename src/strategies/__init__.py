"""Candidate strategies for extension path resolution."""

from strategies.base import (
    CandidateStrategy,
    extension_config_root,
    vendor_root,
    web_root,
)
from strategies.classic import (
    ClassicConventionStrategy,
    ClassicOverrideStrategy,
    LegacyClassicStrategy,
)
from strategies.managed import CorePackageStrategy, ManagerPackageStrategy
from strategies.registry import (
    DEFAULT_STRATEGY_NAMES,
    StrategyRegistry,
    default_registry,
)
from strategies.system import LegacySysextStrategy

__all__ = [
    "DEFAULT_STRATEGY_NAMES",
    "CandidateStrategy",
    "ClassicConventionStrategy",
    "ClassicOverrideStrategy",
    "CorePackageStrategy",
    "LegacyClassicStrategy",
    "LegacySysextStrategy",
    "ManagerPackageStrategy",
    "StrategyRegistry",
    "default_registry",
    "extension_config_root",
    "vendor_root",
    "web_root",
]
