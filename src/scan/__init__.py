"""Filesystem probing and candidate validation."""

from scan.filesystem import DirEntry, FileStat, LocalFilesystem
from scan.manifest import ManifestError, read_json_object
from scan.validator import PathValidator

__all__ = [
    "DirEntry",
    "FileStat",
    "LocalFilesystem",
    "ManifestError",
    "PathValidator",
    "read_json_object",
]
