"""Strategy for system extensions shipped inside a source installation."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from contract.layout import LEGACY_SYSEXT_DIRS
from contract.models import ExtensionCategory
from utils import child_path

if TYPE_CHECKING:
    from contract.models import ResolutionRequest


class LegacySysextStrategy:
    name: ClassVar[str] = "legacy-sysext-strategy"
    priority: ClassVar[int] = 30

    def propose(self, request: ResolutionRequest) -> list[str]:
        if request.category is not ExtensionCategory.SYSTEM:
            return []
        return [
            child_path(request.installation_root, sysext_dir, request.key)
            for sysext_dir in LEGACY_SYSEXT_DIRS
        ]


__all__ = ["LegacySysextStrategy"]
