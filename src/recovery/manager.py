"""Error recovery for requests whose strategy candidates all failed."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract.models import Attempt, Candidate, Resolved, Unresolved
from recovery.heuristics import build_heuristics

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contract.models import FailureKind, ResolutionRequest
    from recovery.heuristics import RecoveryHeuristic
    from scan.validator import PathValidator

logger = logging.getLogger(__name__)


def classify_failure(attempts: Sequence[Attempt], recovered: int) -> FailureKind:
    """Pick the failure kind reported for an exhausted resolution."""
    if any(attempt.verdict.status == "malformed" for attempt in attempts):
        return "malformed"
    if recovered:
        return "recovery_exhausted"
    return "not_found"


class ErrorRecoveryManager:
    """Applies ordered heuristics and stops at the first usable candidate.

    Absence is a normal outcome: when every heuristic fails the manager
    returns ``Unresolved`` carrying the whole trail instead of raising.
    """

    def __init__(
        self,
        validator: PathValidator,
        heuristics: Sequence[RecoveryHeuristic] | None = None,
    ) -> None:
        self.validator = validator
        self.heuristics = list(heuristics) if heuristics is not None else build_heuristics()

    def recover(
        self, request: ResolutionRequest, exhausted: Sequence[Attempt]
    ) -> Resolved | Unresolved:
        attempts = list(exhausted)
        tried = {attempt.candidate.path for attempt in attempts}
        recovered = 0

        for heuristic in self.heuristics:
            try:
                proposals = heuristic.propose(request, tuple(attempts), self.validator.fs)
            except OSError as exc:
                logger.warning(
                    "recovery heuristic %s failed for %s: %s",
                    heuristic.name,
                    request.key,
                    exc,
                )
                continue

            for path in proposals:
                if path in tried:
                    continue
                tried.add(path)
                recovered += 1
                candidate = Candidate(path=path, strategy=heuristic.strategy_name)
                verdict = self.validator.validate(path, request.category)
                attempts.append(Attempt(candidate=candidate, verdict=verdict))
                if verdict.usable:
                    logger.info(
                        "recovered %s at %s via %s",
                        request.key,
                        path,
                        heuristic.strategy_name,
                    )
                    return Resolved(
                        path=path,
                        strategy=heuristic.strategy_name,
                        attempts=tuple(attempts),
                    )

        failure = classify_failure(attempts, recovered)
        logger.info(
            "could not resolve %s (%s, %d candidates)", request.key, failure, len(attempts)
        )
        return Unresolved(failure=failure, attempts=tuple(attempts))


__all__ = ["ErrorRecoveryManager", "classify_failure"]
