"""Shared path utilities for the resolution core."""

from __future__ import annotations

import os
from pathlib import Path


def join_mount(root: str | Path, value: str | Path) -> str:
    """Anchor a mount-point value on the installation root.

    Args:
        root: Absolute installation root
        value: Relative or absolute directory (e.g. "app/web" or "/srv/vendor")

    Returns:
        Normalized absolute path string.

    Examples:
        >>> join_mount("/site", "app/web/typo3conf/ext")
        '/site/app/web/typo3conf/ext'
        >>> join_mount("/site", "/opt/vendor")
        '/opt/vendor'
        >>> join_mount("/site", "web/../public")
        '/site/public'
    """
    value_str = str(value).replace("\\", "/")
    if os.path.isabs(value_str):
        return os.path.normpath(value_str)
    return os.path.normpath(os.path.join(str(root), value_str))


def child_path(base: str | Path, *parts: str) -> str:
    """Join path segments below ``base`` and normalize the result."""
    return os.path.normpath(os.path.join(str(base), *parts))


def hyphenate_key(key: str) -> str:
    """Convert an extension key to its package-name spelling."""
    return key.replace("_", "-")


def key_from_manager_name(manager_name: str) -> str:
    """Derive a classic extension key from a dependency-manager name.

    Examples:
        >>> key_from_manager_name("georgringer/news")
        'news'
        >>> key_from_manager_name("cpsit/cps-shortnr")
        'cps_shortnr'
    """
    package = manager_name.rstrip("/").rsplit("/", 1)[-1]
    return package.replace("-", "_")
