"""Stable contract surface for extension path resolution.

Analyzers import requests and results from here; everything else in the
core is an implementation detail behind ``resolution.ResolutionService``.
"""

from contract.errors import InvalidRequestError, StrategyConflictError
from contract.layout import (
    CACHE_SCHEMA_VERSION,
    EXTENSION_CONFIG_ROOT,
    MOUNT_POINTS,
    VENDOR_ROOT,
    WEB_ROOT,
)
from contract.models import (
    Attempt,
    CacheEntry,
    Candidate,
    ExtensionCategory,
    ExtensionIdentity,
    Resolved,
    ResolutionRequest,
    ResolutionResult,
    Unresolved,
    ValidationVerdict,
)

__all__ = [
    "CACHE_SCHEMA_VERSION",
    "EXTENSION_CONFIG_ROOT",
    "MOUNT_POINTS",
    "VENDOR_ROOT",
    "WEB_ROOT",
    "Attempt",
    "CacheEntry",
    "Candidate",
    "ExtensionCategory",
    "ExtensionIdentity",
    "InvalidRequestError",
    "Resolved",
    "ResolutionRequest",
    "ResolutionResult",
    "StrategyConflictError",
    "Unresolved",
    "ValidationVerdict",
]
