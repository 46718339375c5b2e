"""Extension path resolution facade."""

from resolution.fingerprint import compute_fingerprint
from resolution.freshness import FreshnessTracker
from resolution.service import ResolutionService, build_request
from resolution.wiring import create_resolution_service

__all__ = [
    "FreshnessTracker",
    "ResolutionService",
    "build_request",
    "compute_fingerprint",
    "create_resolution_service",
]
