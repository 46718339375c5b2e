"""Helpers for reading dependency-manager manifests (composer.json)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson

if TYPE_CHECKING:
    from scan.filesystem import LocalFilesystem


class ManifestError(ValueError):
    """Raised when a manifest exists but does not hold a JSON object."""


def read_json_object(fs: LocalFilesystem, path: str) -> dict[str, Any]:
    """Read ``path`` and return its top-level JSON object.

    Raises:
        OSError: If the file cannot be read.
        ManifestError: If the content is not valid JSON or not an object.
    """
    raw = fs.read_bytes(path)
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        msg = f"invalid JSON in {path}: {exc}"
        raise ManifestError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} does not contain a JSON object"
        raise ManifestError(msg)
    return data


def declared_extension_key(manifest: dict[str, Any]) -> str | None:
    """Return ``extra."typo3/cms"."extension-key"`` when present."""
    extra = manifest.get("extra")
    if not isinstance(extra, dict):
        return None
    cms = extra.get("typo3/cms")
    if not isinstance(cms, dict):
        return None
    key = cms.get("extension-key")
    return key if isinstance(key, str) and key else None


def declared_package_name(manifest: dict[str, Any]) -> str | None:
    name = manifest.get("name")
    return name if isinstance(name, str) and name else None


__all__ = [
    "ManifestError",
    "declared_extension_key",
    "declared_package_name",
    "read_json_object",
]
