"""Cross-run cache tier: one JSON record per fingerprint.

Records are written to a temporary file in the cache directory and moved
into place with ``os.replace``, so concurrent writers of the same fingerprint
never leave a partially written record behind. Anything unreadable is a miss.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError

from contract.layout import CACHE_SCHEMA_VERSION
from contract.models import CacheEntry

if TYPE_CHECKING:
    from collections.abc import Callable

    from contract.models import Overrides

logger = logging.getLogger(__name__)

RECORD_SUFFIX = ".json"


class PersistentTier:
    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _record_path(self, fingerprint: str) -> Path:
        return self.directory / f"{fingerprint}{RECORD_SUFFIX}"

    def _load(self, path: Path) -> CacheEntry | None:
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("cannot read cache record %s: %s", path, exc)
            return None

        try:
            payload = orjson.loads(raw)
        except orjson.JSONDecodeError as exc:
            logger.debug("ignoring corrupt cache record %s: %s", path, exc)
            return None

        if not isinstance(payload, dict):
            logger.debug("ignoring cache record %s: not an object", path)
            return None
        if payload.get("schema_version") != CACHE_SCHEMA_VERSION:
            logger.debug("ignoring cache record %s: schema version mismatch", path)
            return None

        try:
            return CacheEntry.model_validate(payload)
        except ValidationError as exc:
            logger.debug("ignoring invalid cache record %s: %s", path, exc)
            return None

    def get(self, fingerprint: str) -> CacheEntry | None:
        entry = self._load(self._record_path(fingerprint))
        if entry is not None and entry.fingerprint != fingerprint:
            return None
        return entry

    def put(self, entry: CacheEntry) -> bool:
        """Write ``entry`` as a whole record. Returns False when the write failed."""
        target = self._record_path(entry.fingerprint)
        payload = orjson.dumps(
            entry.model_dump(mode="json"),
            option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
        )
        tmp_name: str | None = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{entry.fingerprint[:16]}.", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            os.replace(tmp_name, target)
        except OSError as exc:
            logger.warning("failed to write cache record %s: %s", target, exc)
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            return False
        return True

    def record_paths(self) -> list[Path]:
        if not self.directory.is_dir():
            return []
        return sorted(self.directory.glob(f"*{RECORD_SUFFIX}"))

    def clear(self) -> int:
        removed = 0
        for path in self.record_paths():
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            removed += 1
        return removed

    def invalidate_installation(
        self, installation_root: str, token_for: Callable[[Overrides], str]
    ) -> int:
        """Remove records of ``installation_root`` whose token is not current.

        Unreadable records are removed as well since they can never be hits.
        """
        removed = 0
        for path in self.record_paths():
            entry = self._load(path)
            if entry is not None and (
                entry.installation_root != installation_root
                or entry.freshness_token == token_for(entry.overrides)
            ):
                continue
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            removed += 1
        return removed


__all__ = ["RECORD_SUFFIX", "PersistentTier"]
