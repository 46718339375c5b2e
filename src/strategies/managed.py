"""Strategies for dependency-manager (composer) package directories."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from contract.layout import CORE_PACKAGE_PREFIX, CORE_PACKAGE_VENDOR
from contract.models import ExtensionCategory
from strategies.base import vendor_root
from utils import child_path, hyphenate_key

if TYPE_CHECKING:
    from contract.models import ResolutionRequest


class ManagerPackageStrategy:
    """``<vendor-root>/<vendor>/<package>`` from the known package name."""

    name: ClassVar[str] = "manager-package-strategy"
    priority: ClassVar[int] = 80

    def propose(self, request: ResolutionRequest) -> list[str]:
        manager_name = request.extension.manager_name
        if not manager_name:
            return []
        return [child_path(vendor_root(request), *manager_name.split("/"))]


class CorePackageStrategy:
    """System extensions installed as ``typo3/cms-<key>`` packages."""

    name: ClassVar[str] = "core-package-strategy"
    priority: ClassVar[int] = 50

    def propose(self, request: ResolutionRequest) -> list[str]:
        if request.category is not ExtensionCategory.SYSTEM:
            return []
        base = child_path(vendor_root(request), CORE_PACKAGE_VENDOR)
        paths = [child_path(base, CORE_PACKAGE_PREFIX + request.key)]
        hyphenated = hyphenate_key(request.key)
        if hyphenated != request.key:
            paths.append(child_path(base, CORE_PACKAGE_PREFIX + hyphenated))
        return paths


__all__ = ["CorePackageStrategy", "ManagerPackageStrategy"]
