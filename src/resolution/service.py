"""Resolution service: the single entry point analyzers call."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from contract.errors import InvalidRequestError
from contract.models import (
    Attempt,
    ExtensionCategory,
    ExtensionIdentity,
    Resolved,
    ResolutionRequest,
    Unresolved,
)
from resolution.fingerprint import compute_fingerprint

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from cache.layered import MultiLayerCache
    from cache.stats import CacheStats
    from contract.models import Overrides
    from recovery.manager import ErrorRecoveryManager
    from resolution.freshness import FreshnessTracker
    from scan.validator import PathValidator
    from strategies.registry import StrategyRegistry

logger = logging.getLogger(__name__)


def build_request(
    key: str,
    installation_root: str,
    *,
    manager_name: str | None = None,
    category: ExtensionCategory | str = ExtensionCategory.LOCAL,
    overrides: Mapping[str, str] | None = None,
) -> ResolutionRequest:
    """Build a request, turning validation problems into ``InvalidRequestError``."""
    try:
        return ResolutionRequest(
            extension=ExtensionIdentity(
                key=key, manager_name=manager_name, category=category
            ),
            installation_root=installation_root,
            overrides=dict(overrides or {}),
        )
    except (ValidationError, TypeError) as exc:
        msg = f"Invalid resolution request for {key!r}: {exc}"
        raise InvalidRequestError(msg) from exc


def _require_request(request: Any) -> ResolutionRequest:
    if not isinstance(request, ResolutionRequest):
        msg = f"Expected a ResolutionRequest, got {type(request).__name__}"
        raise InvalidRequestError(msg)
    return request


class ResolutionService:
    """Orchestrates cache lookup, strategy candidates, validation and recovery.

    ``resolve`` never raises for an extension that cannot be found; that
    outcome is an ``Unresolved`` result. Only malformed requests raise
    ``InvalidRequestError``.

    The service holds no per-request state. Two concurrent misses for the
    same fingerprint both probe and both write an identical result.
    """

    def __init__(
        self,
        *,
        registry: StrategyRegistry,
        validator: PathValidator,
        recovery: ErrorRecoveryManager,
        freshness: FreshnessTracker,
        cache: MultiLayerCache | None = None,
    ) -> None:
        self.registry = registry
        self.validator = validator
        self.recovery = recovery
        self.freshness = freshness
        self.cache = cache

    def resolve(self, request: ResolutionRequest) -> Resolved | Unresolved:
        request = _require_request(request)
        fingerprint = compute_fingerprint(request)
        token = self.freshness.token_for(request)

        if self.cache is not None:
            cached = self.cache.get(fingerprint, token)
            if cached is not None:
                logger.debug("cache hit for %s (%s)", request.key, fingerprint[:12])
                return cached

        result = self._resolve_uncached(request)

        if self.cache is not None:
            self.cache.put(
                fingerprint,
                result,
                token,
                installation_root=request.installation_root,
                overrides=request.overrides,
            )
        return result

    def _resolve_uncached(self, request: ResolutionRequest) -> Resolved | Unresolved:
        attempts: list[Attempt] = []
        for candidate in self.registry.candidates_for(request):
            verdict = self.validator.validate(candidate.path, request.category)
            attempts.append(Attempt(candidate=candidate, verdict=verdict))
            if verdict.usable:
                logger.info(
                    "resolved %s at %s via %s",
                    request.key,
                    candidate.path,
                    candidate.strategy,
                )
                return Resolved(
                    path=candidate.path,
                    strategy=candidate.strategy,
                    attempts=tuple(attempts),
                )

        logger.debug(
            "no usable candidate for %s after %d attempts, starting recovery",
            request.key,
            len(attempts),
        )
        return self.recovery.recover(request, attempts)

    def resolve_many(
        self, requests: Iterable[ResolutionRequest]
    ) -> list[Resolved | Unresolved]:
        return [self.resolve(request) for request in requests]

    def diagnostics(self, request: ResolutionRequest) -> tuple[Attempt, ...]:
        """Return the full attempted-candidate trail for ``request``."""
        return self.resolve(request).attempts

    def invalidate(self, installation_root: str) -> int:
        """Drop cached entries of an installation whose manifests changed.

        Each entry is compared against the current token computed under the
        overrides it was resolved with.
        """
        if self.cache is None:
            return 0
        root = build_request("_", installation_root).installation_root
        tokens: dict[Overrides, str] = {}

        def token_for(overrides: Overrides) -> str:
            if overrides not in tokens:
                anchor = build_request("_", root, overrides=dict(overrides))
                tokens[overrides] = self.freshness.token_for(anchor)
            return tokens[overrides]

        return self.cache.invalidate_installation(root, token_for)

    def clear_cache(self) -> int:
        if self.cache is None:
            return 0
        return self.cache.clear()

    def stats(self) -> CacheStats | None:
        return self.cache.stats() if self.cache is not None else None


__all__ = ["ResolutionService", "build_request"]
