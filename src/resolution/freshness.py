"""Freshness tokens summarizing an installation's manifest state."""

from __future__ import annotations

import hashlib
import os
from typing import TYPE_CHECKING

from contract.layout import ROOT_MANIFESTS, VENDOR_MANIFEST, WEB_MANIFEST
from scan.filesystem import LocalFilesystem
from strategies.base import vendor_root, web_root
from utils import child_path

if TYPE_CHECKING:
    from contract.models import ResolutionRequest


class FreshnessTracker:
    """Computes tokens from manifest ``stat`` data only (no directory probes)."""

    def __init__(self, fs: LocalFilesystem | None = None) -> None:
        self.fs = fs or LocalFilesystem()

    def manifest_paths(self, request: ResolutionRequest) -> list[str]:
        root = request.installation_root
        paths = [child_path(root, rel) for rel in ROOT_MANIFESTS]
        paths.append(child_path(web_root(request), WEB_MANIFEST))
        paths.append(child_path(vendor_root(request), VENDOR_MANIFEST))
        return list(dict.fromkeys(paths))

    def token_for(self, request: ResolutionRequest) -> str:
        digest = hashlib.sha256()
        root = request.installation_root
        for path in self.manifest_paths(request):
            label = os.path.relpath(path, root)
            stat = self.fs.stat(path)
            if stat is None:
                digest.update(f"{label}:missing\n".encode())
            else:
                digest.update(f"{label}:{stat.mtime_ns}:{stat.size}\n".encode())
        return digest.hexdigest()


__all__ = ["FreshnessTracker"]
