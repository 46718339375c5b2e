from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from discovery.manifest import overrides_from_manifest

if TYPE_CHECKING:
    from pathlib import Path

    import pytest


def test_reads_web_and_vendor_dirs(tmp_path: Path) -> None:
    (tmp_path / "composer.json").write_text(
        """
{
    "name": "acme/site",
    "config": {"vendor-dir": "libs"},
    "extra": {"typo3/cms": {"web-dir": "app/web"}}
}
""",
        encoding="utf-8",
    )

    assert overrides_from_manifest(tmp_path) == {
        "web-root": "app/web",
        "vendor-root": "libs",
    }


def test_missing_manifest_yields_no_overrides(tmp_path: Path) -> None:
    assert overrides_from_manifest(tmp_path) == {}


def test_manifest_without_settings_yields_no_overrides(tmp_path: Path) -> None:
    (tmp_path / "composer.json").write_text(
        '{"extra": {"typo3/cms": {"web-dir": ""}}, "config": []}',
        encoding="utf-8",
    )

    assert overrides_from_manifest(tmp_path) == {}


def test_invalid_manifest_logs_warning(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / "composer.json").write_text("{", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="discovery.manifest"):
        assert overrides_from_manifest(tmp_path) == {}

    assert "cannot derive overrides" in caplog.text
