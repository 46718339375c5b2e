"""Candidate strategy protocol and mount-point helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Protocol

from contract.layout import (
    CLASSIC_EXT_SUBDIR,
    DEFAULT_VENDOR_DIR,
    DEFAULT_WEB_DIR,
    EXTENSION_CONFIG_ROOT,
    VENDOR_ROOT,
    WEB_ROOT,
)
from utils import join_mount

if TYPE_CHECKING:
    from contract.models import ResolutionRequest


class CandidateStrategy(Protocol):
    """One installation layout convention.

    Implementations are pure functions of the request: they build path
    strings and never touch the filesystem.
    """

    name: ClassVar[str]
    priority: ClassVar[int]

    def propose(self, request: ResolutionRequest) -> list[str]: ...


def web_root(request: ResolutionRequest) -> str:
    return join_mount(
        request.installation_root, request.override(WEB_ROOT) or DEFAULT_WEB_DIR
    )


def vendor_root(request: ResolutionRequest) -> str:
    return join_mount(
        request.installation_root, request.override(VENDOR_ROOT) or DEFAULT_VENDOR_DIR
    )


def extension_config_root(request: ResolutionRequest) -> str:
    """Directory holding classic extension folders, override first."""
    configured = request.override(EXTENSION_CONFIG_ROOT)
    if configured:
        return join_mount(request.installation_root, configured)
    return join_mount(web_root(request), CLASSIC_EXT_SUBDIR)


__all__ = [
    "CandidateStrategy",
    "extension_config_root",
    "vendor_root",
    "web_root",
]
