"""Candidate path validation.

Validation failures are data: every outcome, including permission errors,
is returned as a ``ValidationVerdict`` so one unreadable candidate never
aborts a resolution.
"""

from __future__ import annotations

import logging

from contract.layout import LEGACY_MARKER, MANIFEST_MARKER
from contract.models import ExtensionCategory, ValidationVerdict
from scan.filesystem import LocalFilesystem
from scan.manifest import ManifestError, read_json_object

logger = logging.getLogger(__name__)

# Accepted marker files per category, in preference order.
CATEGORY_MARKERS: dict[ExtensionCategory, tuple[str, ...]] = {
    ExtensionCategory.LOCAL: (LEGACY_MARKER,),
    ExtensionCategory.SYSTEM: (MANIFEST_MARKER, LEGACY_MARKER),
    ExtensionCategory.MANAGED: (MANIFEST_MARKER, LEGACY_MARKER),
}


class PathValidator:
    """Classifies candidate paths as usable, absent or malformed."""

    def __init__(self, fs: LocalFilesystem | None = None) -> None:
        self.fs = fs or LocalFilesystem()

    def validate(self, path: str, category: ExtensionCategory) -> ValidationVerdict:
        """Validate ``path`` as an extension directory of ``category``.

        Checks, in order: existence, directory type, non-empty content and
        the category-specific marker files.
        """
        try:
            verdict = self._validate(path, category)
        except OSError as exc:
            verdict = ValidationVerdict.malformed(path, f"unreadable: {exc}")

        logger.debug(
            "validated %s as %s (%s)", path, verdict.status, verdict.reason or "ok"
        )
        return verdict

    def _validate(self, path: str, category: ExtensionCategory) -> ValidationVerdict:
        if not self.fs.exists(path):
            return ValidationVerdict.absent(path)

        if not self.fs.is_dir(path):
            return ValidationVerdict.malformed(path, "exists but is not a directory")

        entries = {entry.name: entry for entry in self.fs.list_dir(path)}
        if not entries:
            return ValidationVerdict.malformed(path, "directory is empty")

        markers = CATEGORY_MARKERS[category]
        manifest_problem: str | None = None
        for marker in markers:
            entry = entries.get(marker)
            if entry is None or entry.is_dir:
                continue
            if marker == MANIFEST_MARKER:
                try:
                    read_json_object(self.fs, entry.path)
                except ManifestError as exc:
                    manifest_problem = str(exc)
                    continue
            return ValidationVerdict.ok(path)

        if manifest_problem is not None:
            return ValidationVerdict.malformed(path, manifest_problem)

        expected = ", ".join(markers)
        return ValidationVerdict.malformed(
            path, f"missing extension marker (expected one of: {expected})"
        )


__all__ = ["CATEGORY_MARKERS", "PathValidator"]
