"""Filesystem probe used by the validator, recovery and freshness tokens.

Every blocking filesystem call of the resolution core goes through a
``LocalFilesystem`` instance so tests can substitute an instrumented subclass.
Directory probes are ``exists``, ``is_dir``, ``is_file``, ``is_symlink`` and
``list_dir``; ``stat`` and ``read_bytes`` read manifest metadata and content.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class FileStat:
    mtime_ns: int
    size: int


@dataclass(frozen=True)
class DirEntry:
    name: str
    path: str
    is_dir: bool


class LocalFilesystem:
    """Thin wrapper over ``os`` for the probes the core needs."""

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_symlink(self, path: str) -> bool:
        return os.path.islink(path)

    def list_dir(self, path: str) -> list[DirEntry]:
        """List a directory, sorted by name for deterministic iteration.

        Raises:
            OSError: If the directory cannot be read.
        """
        entries: list[DirEntry] = []
        with os.scandir(path) as it:
            for entry in it:
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    is_dir = False
                entries.append(DirEntry(name=entry.name, path=entry.path, is_dir=is_dir))
        entries.sort(key=lambda e: e.name)
        return entries

    def stat(self, path: str) -> FileStat | None:
        try:
            result = os.stat(path)
        except OSError:
            return None
        return FileStat(mtime_ns=result.st_mtime_ns, size=result.st_size)

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as handle:
            return handle.read()


__all__ = ["DirEntry", "FileStat", "LocalFilesystem"]
