"""Secondary heuristics applied once every strategy candidate has failed.

Unlike strategies, heuristics may probe the filesystem (list directories,
read manifests) to propose candidates. Proposed paths are validated by the
recovery manager with the same validator as regular candidates.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, ClassVar, Protocol

from contract.layout import (
    CLASSIC_EXT_SUBDIR,
    KNOWN_EXTENSION_CONTAINERS,
    MANIFEST_MARKER,
    RECOVERY_PREFIX,
)
from scan.manifest import (
    ManifestError,
    declared_extension_key,
    declared_package_name,
    read_json_object,
)
from strategies.base import extension_config_root, vendor_root, web_root
from utils import child_path, join_mount, key_from_manager_name

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contract.models import Attempt, ResolutionRequest
    from scan.filesystem import DirEntry, LocalFilesystem

logger = logging.getLogger(__name__)


class RecoveryHeuristic(Protocol):
    name: ClassVar[str]

    @property
    def strategy_name(self) -> str: ...

    def propose(
        self,
        request: ResolutionRequest,
        attempts: Sequence[Attempt],
        fs: LocalFilesystem,
    ) -> list[str]: ...


def _list_dirs(fs: LocalFilesystem, path: str) -> list[DirEntry]:
    if not fs.is_dir(path):
        return []
    try:
        return [entry for entry in fs.list_dir(path) if entry.is_dir]
    except OSError as exc:
        logger.debug("cannot list %s: %s", path, exc)
        return []


class _Heuristic:
    name: ClassVar[str] = ""

    @property
    def strategy_name(self) -> str:
        return RECOVERY_PREFIX + self.name


class CaseInsensitiveHeuristic(_Heuristic):
    """Match absent candidates against siblings that differ only in case."""

    name: ClassVar[str] = "case-insensitive"

    def propose(
        self,
        request: ResolutionRequest,
        attempts: Sequence[Attempt],
        fs: LocalFilesystem,
    ) -> list[str]:
        listings: dict[str, list[DirEntry]] = {}
        paths: list[str] = []
        for attempt in attempts:
            if attempt.verdict.status != "absent":
                continue
            parent, base = os.path.split(attempt.candidate.path)
            if parent not in listings:
                listings[parent] = _list_dirs(fs, parent)
            wanted = base.casefold()
            paths.extend(
                entry.path
                for entry in listings[parent]
                if entry.name != base and entry.name.casefold() == wanted
            )
        return paths


class ManagerNameHeuristic(_Heuristic):
    """Retry with paths derived from the dependency-manager name."""

    name: ClassVar[str] = "manager-name"

    def propose(
        self,
        request: ResolutionRequest,
        attempts: Sequence[Attempt],
        fs: LocalFilesystem,
    ) -> list[str]:
        manager_name = request.extension.manager_name
        if not manager_name:
            return []

        paths = [child_path(vendor_root(request), *manager_name.split("/"))]
        derived_key = key_from_manager_name(manager_name)
        if derived_key and derived_key != request.key:
            paths.extend(
                [
                    child_path(extension_config_root(request), derived_key),
                    child_path(web_root(request), CLASSIC_EXT_SUBDIR, derived_key),
                    child_path(
                        request.installation_root, CLASSIC_EXT_SUBDIR, derived_key
                    ),
                ]
            )
        return paths


class ContainerScanHeuristic(_Heuristic):
    """Scan known container directories for a manifest naming the extension."""

    name: ClassVar[str] = "container-scan"

    def __init__(self, container_dirs: Sequence[str] = ()) -> None:
        self.container_dirs = tuple(container_dirs)

    def containers(self, request: ResolutionRequest, fs: LocalFilesystem) -> list[str]:
        root = request.installation_root
        ordered = [
            extension_config_root(request),
            child_path(web_root(request), CLASSIC_EXT_SUBDIR),
            *(join_mount(root, rel) for rel in KNOWN_EXTENSION_CONTAINERS),
            *(join_mount(root, rel) for rel in self.container_dirs),
            *(entry.path for entry in _list_dirs(fs, vendor_root(request))),
        ]
        return list(dict.fromkeys(ordered))

    def _declares(self, request: ResolutionRequest, manifest: dict[str, object]) -> bool:
        if declared_extension_key(manifest) == request.key:
            return True
        manager_name = request.extension.manager_name
        return manager_name is not None and declared_package_name(manifest) == manager_name

    def propose(
        self,
        request: ResolutionRequest,
        attempts: Sequence[Attempt],
        fs: LocalFilesystem,
    ) -> list[str]:
        paths: list[str] = []
        for container in self.containers(request, fs):
            for entry in _list_dirs(fs, container):
                manifest_path = child_path(entry.path, MANIFEST_MARKER)
                if not fs.is_file(manifest_path):
                    continue
                try:
                    manifest = read_json_object(fs, manifest_path)
                except (OSError, ManifestError) as exc:
                    logger.debug("skipping %s: %s", manifest_path, exc)
                    continue
                if self._declares(request, manifest):
                    paths.append(entry.path)
        return paths


HEURISTICS: dict[str, type[_Heuristic]] = {
    CaseInsensitiveHeuristic.name: CaseInsensitiveHeuristic,
    ManagerNameHeuristic.name: ManagerNameHeuristic,
    ContainerScanHeuristic.name: ContainerScanHeuristic,
}

DEFAULT_HEURISTIC_ORDER = (
    CaseInsensitiveHeuristic.name,
    ManagerNameHeuristic.name,
    ContainerScanHeuristic.name,
)


def build_heuristics(
    names: Sequence[str] = DEFAULT_HEURISTIC_ORDER,
    *,
    container_dirs: Sequence[str] = (),
) -> list[RecoveryHeuristic]:
    """Instantiate heuristics by name, keeping the given order."""
    heuristics: list[RecoveryHeuristic] = []
    for name in names:
        if name not in HEURISTICS:
            msg = f"Unknown recovery heuristic: {name!r}. Available: {sorted(HEURISTICS)}"
            raise ValueError(msg)
        if name == ContainerScanHeuristic.name:
            heuristics.append(ContainerScanHeuristic(container_dirs))
        else:
            heuristics.append(HEURISTICS[name]())  # type: ignore[arg-type]
    return heuristics


__all__ = [
    "DEFAULT_HEURISTIC_ORDER",
    "HEURISTICS",
    "CaseInsensitiveHeuristic",
    "ContainerScanHeuristic",
    "ManagerNameHeuristic",
    "RecoveryHeuristic",
    "build_heuristics",
]
