"""Ordered registry of candidate strategies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract.errors import StrategyConflictError
from contract.models import Candidate
from strategies.classic import (
    ClassicConventionStrategy,
    ClassicOverrideStrategy,
    LegacyClassicStrategy,
)
from strategies.managed import CorePackageStrategy, ManagerPackageStrategy
from strategies.system import LegacySysextStrategy

if TYPE_CHECKING:
    from collections.abc import Iterable

    from contract.models import ResolutionRequest
    from strategies.base import CandidateStrategy

logger = logging.getLogger(__name__)


def _sort_key(strategy: CandidateStrategy) -> tuple[int, str]:
    # Descending priority, then name for a stable order among equals.
    return (-strategy.priority, strategy.name)


class StrategyRegistry:
    """Holds strategies in descending priority and collects their candidates.

    Candidates from *all* strategies are returned so the caller can skip a
    malformed high-priority candidate and still use a lower-priority one.
    """

    def __init__(self, strategies: Iterable[CandidateStrategy] = ()) -> None:
        self._strategies: tuple[CandidateStrategy, ...] = ()
        for strategy in strategies:
            self.register(strategy)

    def register(self, strategy: CandidateStrategy) -> None:
        if strategy.name in self.names():
            msg = f"Strategy with name '{strategy.name}' is already registered"
            raise StrategyConflictError(msg)

        self._strategies = tuple(
            sorted((*self._strategies, strategy), key=_sort_key)
        )
        logger.debug(
            "registered strategy %s (priority %d)", strategy.name, strategy.priority
        )

    @property
    def strategies(self) -> tuple[CandidateStrategy, ...]:
        return self._strategies

    def names(self) -> list[str]:
        return [strategy.name for strategy in self._strategies]

    def candidates_for(self, request: ResolutionRequest) -> list[Candidate]:
        """Return every proposed candidate in priority order, without duplicates."""
        seen: set[str] = set()
        candidates: list[Candidate] = []
        for strategy in self._strategies:
            for path in strategy.propose(request):
                if path in seen:
                    continue
                seen.add(path)
                candidates.append(
                    Candidate(path=path, strategy=strategy.name, priority=strategy.priority)
                )
        return candidates

    def capabilities(self) -> dict[str, object]:
        return {
            "strategy_count": len(self._strategies),
            "strategies": [
                {"name": strategy.name, "priority": strategy.priority}
                for strategy in self._strategies
            ],
        }


DEFAULT_STRATEGIES: tuple[type[CandidateStrategy], ...] = (
    ClassicOverrideStrategy,
    ManagerPackageStrategy,
    ClassicConventionStrategy,
    CorePackageStrategy,
    LegacyClassicStrategy,
    LegacySysextStrategy,
)

DEFAULT_STRATEGY_NAMES = frozenset(cls.name for cls in DEFAULT_STRATEGIES)


def default_registry(disabled: Iterable[str] = ()) -> StrategyRegistry:
    """Build a registry with the built-in strategies minus ``disabled`` names."""
    skip = set(disabled)
    unknown = skip - DEFAULT_STRATEGY_NAMES
    if unknown:
        msg = f"Unknown strategy names: {', '.join(sorted(unknown))}"
        raise ValueError(msg)
    return StrategyRegistry(cls() for cls in DEFAULT_STRATEGIES if cls.name not in skip)


__all__ = [
    "DEFAULT_STRATEGIES",
    "DEFAULT_STRATEGY_NAMES",
    "StrategyRegistry",
    "default_registry",
]
