from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from cache.memory import DEFAULT_MAX_ENTRIES
from contract.layout import MOUNT_POINTS
from recovery.heuristics import DEFAULT_HEURISTIC_ORDER, HEURISTICS
from strategies.registry import DEFAULT_STRATEGY_NAMES

CONFIG_FILENAME = "extpath.toml"


class RecoveryConfig(BaseModel):
    """Configuration for the error recovery pass."""

    model_config = ConfigDict(extra="forbid")

    heuristics: list[str] = Field(
        default_factory=lambda: list(DEFAULT_HEURISTIC_ORDER),
        description="Recovery heuristics in the order they are attempted",
    )
    container_dirs: list[str] = Field(
        default_factory=list,
        description=(
            "Extra directories (relative to the installation root) scanned "
            "one level deep for extension manifests"
        ),
    )

    @field_validator("heuristics")
    @classmethod
    def validate_heuristics(cls, v: list[str]) -> list[str]:
        unknown = [name for name in v if name not in HEURISTICS]
        if unknown:
            msg = (
                f"Unknown recovery heuristics: {', '.join(unknown)}. "
                f"Valid heuristics: {', '.join(sorted(HEURISTICS))}"
            )
            raise ValueError(msg)
        if len(set(v)) != len(v):
            msg = "recovery heuristics must not repeat"
            raise ValueError(msg)
        return v


class ResolverConfig(BaseModel):
    """Configuration for extension path resolution."""

    model_config = ConfigDict(extra="forbid")

    cache_dir: str = Field(
        default=".extpath-cache",
        description="Directory for persistent cache records",
    )
    persistent_cache: bool = Field(
        default=True,
        description="Keep resolution results across runs",
    )
    memory_entries: int = Field(
        default=DEFAULT_MAX_ENTRIES,
        ge=1,
        description="Maximum entries held by the in-process cache tier",
    )
    overrides: dict[str, str] = Field(
        default_factory=dict,
        description="Default mount point overrides: mount point -> path",
    )
    disabled_strategies: list[str] = Field(
        default_factory=list,
        description="Built-in strategies that must not propose candidates",
    )
    recovery: RecoveryConfig = Field(
        default_factory=RecoveryConfig,
        description="Error recovery heuristics",
    )

    @field_validator("overrides", mode="before")
    @classmethod
    def validate_overrides(cls, v: Any) -> Any:
        """Reject unknown mount points and non-string paths from the TOML table."""
        if v is None:
            return {}

        if not isinstance(v, dict):
            msg = "overrides must be a mapping of mount point -> path"
            raise TypeError(msg)

        for name, path in v.items():
            if not isinstance(name, str) or not isinstance(path, str):
                msg = "overrides must be a mapping of str -> str"
                raise TypeError(msg)
            if name not in MOUNT_POINTS:
                msg = (
                    f"Invalid mount point '{name}'. "
                    f"Valid mount points: {', '.join(sorted(MOUNT_POINTS))}"
                )
                raise ValueError(msg)

        return v

    @field_validator("disabled_strategies")
    @classmethod
    def validate_disabled_strategies(cls, v: list[str]) -> list[str]:
        unknown = [name for name in v if name not in DEFAULT_STRATEGY_NAMES]
        if unknown:
            msg = (
                f"Unknown strategies: {', '.join(unknown)}. "
                f"Valid strategies: {', '.join(sorted(DEFAULT_STRATEGY_NAMES))}"
            )
            raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Raised when extpath.toml exists but holds invalid TOML or settings."""


def resolve_cache_dir(root: Path, cache_dir: str) -> Path:
    """Return the absolute directory that holds persistent cache records.

    Cache records are always kept below the project that owns the config, so
    ``cache_dir`` has to be a non-empty relative path. Home-relative, absolute
    and `..`-escaping values raise ``ConfigError``; symlinks are resolved
    before the containment check.
    """
    if not cache_dir or cache_dir.startswith("~") or Path(cache_dir).is_absolute():
        msg = f"cache_dir must be a non-empty path relative to the project: {cache_dir!r}"
        raise ConfigError(msg)

    try:
        project = Path(root).resolve()
        records_dir = (project / cache_dir).resolve()
    except OSError as exc:
        msg = f"Cannot resolve cache_dir {cache_dir!r}: {exc}"
        raise ConfigError(msg) from exc

    if not records_dir.is_relative_to(project):
        msg = f"cache_dir {cache_dir!r} points outside {project}"
        raise ConfigError(msg)

    return records_dir


def load_config(root: Path) -> ResolverConfig:
    """Read ``extpath.toml`` from ``root``; defaults apply when the file is absent."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ResolverConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ResolverConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
