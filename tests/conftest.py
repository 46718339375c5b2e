from __future__ import annotations

from collections import Counter
from pathlib import Path

import pytest

from scan.filesystem import LocalFilesystem


class CountingFilesystem(LocalFilesystem):
    """Counts directory calls; ``stat`` and file reads are not counted."""

    def __init__(self) -> None:
        self.calls: Counter[str] = Counter()

    @property
    def directory_calls(self) -> int:
        return sum(self.calls.values())

    def reset(self) -> None:
        self.calls.clear()

    def exists(self, path: str) -> bool:
        self.calls["exists"] += 1
        return super().exists(path)

    def is_dir(self, path: str) -> bool:
        self.calls["is_dir"] += 1
        return super().is_dir(path)

    def is_file(self, path: str) -> bool:
        self.calls["is_file"] += 1
        return super().is_file(path)

    def is_symlink(self, path: str) -> bool:
        self.calls["is_symlink"] += 1
        return super().is_symlink(path)

    def list_dir(self, path: str):
        self.calls["list_dir"] += 1
        return super().list_dir(path)


def make_local_extension(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    (path / "ext_emconf.php").write_text("<?php\n$EM_CONF[$_EXTKEY] = [];\n", encoding="utf-8")
    return path


def make_managed_extension(path: Path, *, name: str, key: str | None = None) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    extra = f', "extra": {{"typo3/cms": {{"extension-key": "{key}"}}}}' if key else ""
    (path / "composer.json").write_text(
        f'{{"name": "{name}", "type": "typo3-cms-extension"{extra}}}\n',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def counting_fs() -> CountingFilesystem:
    return CountingFilesystem()


@pytest.fixture
def site(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    root.mkdir()
    (root / "composer.json").write_text('{"name": "acme/site"}\n', encoding="utf-8")
    return root
