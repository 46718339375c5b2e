"""Error recovery heuristics for unresolved extensions."""

from recovery.heuristics import (
    DEFAULT_HEURISTIC_ORDER,
    CaseInsensitiveHeuristic,
    ContainerScanHeuristic,
    ManagerNameHeuristic,
    build_heuristics,
)
from recovery.manager import ErrorRecoveryManager, classify_failure

__all__ = [
    "DEFAULT_HEURISTIC_ORDER",
    "CaseInsensitiveHeuristic",
    "ContainerScanHeuristic",
    "ErrorRecoveryManager",
    "ManagerNameHeuristic",
    "build_heuristics",
    "classify_failure",
]
