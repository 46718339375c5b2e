"""Value models for extension path resolution.

Requests, candidates, verdicts and results are frozen pydantic models so a
produced result can be shared across threads and serialized verbatim into the
persistent cache tier.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from contract.layout import CACHE_SCHEMA_VERSION, MOUNT_POINTS, RECOVERY_PREFIX

VerdictStatus = Literal["usable", "absent", "malformed"]
FailureKind = Literal["not_found", "malformed", "recovery_exhausted"]
Overrides = tuple[tuple[str, str], ...]

_RELATIVE_SEGMENTS = frozenset({".", ".."})


def normalize_overrides(v: object) -> Overrides:
    """Sorted (mount point, path) pairs for recognized mount points only.

    Accepts a mapping or an iterable of pairs; other keys and blank paths
    are ignored.
    """
    if v is None:
        return ()
    if isinstance(v, Mapping):
        items = list(v.items())
    elif isinstance(v, (list, tuple)):
        try:
            items = [(name, path) for name, path in v]
        except (TypeError, ValueError) as exc:
            msg = "overrides must be a mapping of mount point -> path"
            raise ValueError(msg) from exc
    else:
        msg = "overrides must be a mapping of mount point -> path"
        raise ValueError(msg)
    return tuple(
        sorted(
            (str(name), str(path))
            for name, path in items
            if name in MOUNT_POINTS and path is not None and str(path).strip()
        )
    )


class ExtensionCategory(str, Enum):
    """Where an extension comes from within an installation."""

    SYSTEM = "system"
    LOCAL = "local"
    MANAGED = "managed"


class ExtensionIdentity(BaseModel):
    """Stable identity of an extension."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    manager_name: str | None = None
    category: ExtensionCategory = ExtensionCategory.LOCAL

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "extension key must be a non-empty string"
            raise ValueError(msg)
        if "/" in v or "\\" in v:
            msg = f"extension key must not contain path separators: {v!r}"
            raise ValueError(msg)
        if v in _RELATIVE_SEGMENTS:
            msg = f"extension key must not be a relative path segment: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("manager_name")
    @classmethod
    def validate_manager_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip().strip("/")
        if not v:
            return None
        parts = v.split("/")
        if (
            len(parts) != 2
            or "\\" in v
            or any(not part.strip() or part in _RELATIVE_SEGMENTS for part in parts)
        ):
            msg = f"manager name must have the form vendor/package: {v!r}"
            raise ValueError(msg)
        return v


class ResolutionRequest(BaseModel):
    """A single "where are extension X's files" question."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    extension: ExtensionIdentity
    installation_root: str
    overrides: Overrides = ()

    @field_validator("installation_root")
    @classmethod
    def validate_installation_root(cls, v: str) -> str:
        v = str(v).strip()
        if not v:
            msg = "installation_root must be a non-empty path"
            raise ValueError(msg)
        return os.path.normpath(os.path.abspath(os.path.expanduser(v)))

    @field_validator("overrides", mode="before")
    @classmethod
    def validate_overrides(cls, v: object) -> Overrides:
        """Keep recognized mount points only; other keys are ignored."""
        return normalize_overrides(v)

    @property
    def key(self) -> str:
        return self.extension.key

    @property
    def category(self) -> ExtensionCategory:
        return self.extension.category

    def override(self, mount_point: str) -> str | None:
        return dict(self.overrides).get(mount_point)

    def override_map(self) -> dict[str, str]:
        return dict(self.overrides)


class Candidate(BaseModel):
    """An absolute path proposed by one strategy."""

    model_config = ConfigDict(frozen=True)

    path: str
    strategy: str
    priority: int = 0


class ValidationVerdict(BaseModel):
    """Outcome of validating one candidate path."""

    model_config = ConfigDict(frozen=True)

    status: VerdictStatus
    path: str
    reason: str | None = None

    @property
    def usable(self) -> bool:
        return self.status == "usable"

    @classmethod
    def ok(cls, path: str) -> ValidationVerdict:
        return cls(status="usable", path=path)

    @classmethod
    def absent(cls, path: str, reason: str = "path does not exist") -> ValidationVerdict:
        return cls(status="absent", path=path, reason=reason)

    @classmethod
    def malformed(cls, path: str, reason: str) -> ValidationVerdict:
        return cls(status="malformed", path=path, reason=reason)


class Attempt(BaseModel):
    """A candidate together with the verdict it received."""

    model_config = ConfigDict(frozen=True)

    candidate: Candidate
    verdict: ValidationVerdict


class Resolved(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["resolved"] = "resolved"
    path: str
    strategy: str
    attempts: tuple[Attempt, ...] = ()

    @property
    def via_recovery(self) -> bool:
        return self.strategy.startswith(RECOVERY_PREFIX)


class Unresolved(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["unresolved"] = "unresolved"
    failure: FailureKind = "not_found"
    attempts: tuple[Attempt, ...] = ()

    @property
    def attempted_candidates(self) -> tuple[Candidate, ...]:
        return tuple(attempt.candidate for attempt in self.attempts)

    @property
    def reasons(self) -> tuple[str, ...]:
        return tuple(
            f"{attempt.verdict.path}: {attempt.verdict.reason or attempt.verdict.status}"
            for attempt in self.attempts
        )


ResolutionResult = Annotated[Resolved | Unresolved, Field(discriminator="status")]

RESULT_ADAPTER: TypeAdapter[Resolved | Unresolved] = TypeAdapter(ResolutionResult)


class CacheEntry(BaseModel):
    """One persisted resolution outcome."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = Field(default=CACHE_SCHEMA_VERSION)
    fingerprint: str
    installation_root: str
    overrides: Overrides = ()
    freshness_token: str
    created_at: float
    result: ResolutionResult


__all__ = [
    "RESULT_ADAPTER",
    "Attempt",
    "CacheEntry",
    "Candidate",
    "ExtensionCategory",
    "ExtensionIdentity",
    "FailureKind",
    "Overrides",
    "Resolved",
    "ResolutionRequest",
    "ResolutionResult",
    "Unresolved",
    "ValidationVerdict",
    "VerdictStatus",
    "normalize_overrides",
]
