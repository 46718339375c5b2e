"""Derive mount-point overrides from an installation's composer.json."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from contract.layout import MANIFEST_MARKER, VENDOR_ROOT, WEB_ROOT
from scan.filesystem import LocalFilesystem
from scan.manifest import ManifestError, read_json_object

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def _string_at(data: dict[str, object], *keys: str) -> str | None:
    node: object = data
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    if isinstance(node, str) and node.strip():
        return node.strip()
    return None


def overrides_from_manifest(
    installation_root: str | Path, fs: LocalFilesystem | None = None
) -> dict[str, str]:
    """Read ``web-dir`` and ``vendor-dir`` from the root manifest.

    Returns an override map suitable for ``ResolutionRequest.overrides``. A
    missing manifest yields an empty map; an unreadable or invalid one also
    yields an empty map and logs a warning.
    """
    fs = fs or LocalFilesystem()
    manifest_path = os.path.join(str(installation_root), MANIFEST_MARKER)
    if not fs.is_file(manifest_path):
        return {}

    try:
        manifest = read_json_object(fs, manifest_path)
    except (OSError, ManifestError) as exc:
        logger.warning("cannot derive overrides from %s: %s", manifest_path, exc)
        return {}

    overrides: dict[str, str] = {}
    web_dir = _string_at(manifest, "extra", "typo3/cms", "web-dir")
    if web_dir is not None:
        overrides[WEB_ROOT] = web_dir
    vendor_dir = _string_at(manifest, "config", "vendor-dir")
    if vendor_dir is not None:
        overrides[VENDOR_ROOT] = vendor_dir
    return overrides


__all__ = ["overrides_from_manifest"]
