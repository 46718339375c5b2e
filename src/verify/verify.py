"""Determinism verification for extension path resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from resolution.wiring import create_resolution_service

if TYPE_CHECKING:
    from contract.models import ResolutionRequest, Resolved, Unresolved
    from rules.config import ResolverConfig
    from scan.filesystem import LocalFilesystem


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    first: Resolved | Unresolved
    second: Resolved | Unresolved

    @property
    def differences(self) -> tuple[str, ...]:
        if self.ok:
            return ()
        first = self.first.model_dump(mode="json")
        second = self.second.model_dump(mode="json")
        return tuple(
            f"{key}: {first.get(key)!r} != {second.get(key)!r}"
            for key in sorted(set(first) | set(second))
            if first.get(key) != second.get(key)
        )


def verify_determinism(
    request: ResolutionRequest,
    *,
    config: ResolverConfig | None = None,
    fs: LocalFilesystem | None = None,
) -> DeterminismResult:
    """Verify that resolving ``request`` is deterministic.

    Resolves the request twice, each time with a freshly wired service and
    no cache, and compares the two results field by field (path, strategy,
    failure kind and the full attempt trail).

    Args:
        request: Request to resolve.
        config: Resolver configuration; strategies and heuristics follow it.
        fs: Filesystem probe shared by both runs.

    Returns:
        DeterminismResult with ok status and both results.
    """
    results = [
        create_resolution_service(config, fs=fs, use_cache=False).resolve(request)
        for _ in range(2)
    ]
    first, second = results
    return DeterminismResult(ok=first == second, first=first, second=second)
