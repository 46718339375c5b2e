"""Strategies for classic (typo3conf/ext) extension directories."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from contract.layout import CLASSIC_EXT_SUBDIR, EXTENSION_CONFIG_ROOT
from strategies.base import web_root
from utils import child_path, join_mount

if TYPE_CHECKING:
    from contract.models import ResolutionRequest


class ClassicOverrideStrategy:
    """Caller-supplied extension-config root, e.g. ``app/web/typo3conf/ext``."""

    name: ClassVar[str] = "classic-override-strategy"
    priority: ClassVar[int] = 100

    def propose(self, request: ResolutionRequest) -> list[str]:
        configured = request.override(EXTENSION_CONFIG_ROOT)
        if not configured:
            return []
        base = join_mount(request.installation_root, configured)
        return [child_path(base, request.key)]


class ClassicConventionStrategy:
    """``<web-root>/typo3conf/ext/<key>`` with ``public`` as the default web root."""

    name: ClassVar[str] = "classic-convention-strategy"
    priority: ClassVar[int] = 60

    def propose(self, request: ResolutionRequest) -> list[str]:
        return [child_path(web_root(request), CLASSIC_EXT_SUBDIR, request.key)]


class LegacyClassicStrategy:
    """Non-composer installations keep typo3conf directly below the root."""

    name: ClassVar[str] = "legacy-classic-strategy"
    priority: ClassVar[int] = 40

    def propose(self, request: ResolutionRequest) -> list[str]:
        return [child_path(request.installation_root, CLASSIC_EXT_SUBDIR, request.key)]


__all__ = [
    "ClassicConventionStrategy",
    "ClassicOverrideStrategy",
    "LegacyClassicStrategy",
]
