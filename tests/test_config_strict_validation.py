from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import ConfigError, load_config, resolve_cache_dir


def _write_config(project_root: Path, toml_content: str) -> None:
    (project_root / "extpath.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.cache_dir == ".extpath-cache"
    assert config.persistent_cache is True
    assert config.memory_entries == 4096
    assert config.recovery.heuristics == [
        "case-insensitive",
        "manager-name",
        "container-scan",
    ]


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_recovery_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[recovery]
bogus = true
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "cache_dir = ")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "toml_content",
    [
        '[overrides]\nwebroot = "app/web"',
        'disabled_strategies = ["no-such-strategy"]',
        '[recovery]\nheuristics = ["guess"]',
        '[recovery]\nheuristics = ["manager-name", "manager-name"]',
        "memory_entries = 0",
    ],
)
def test_invalid_values_rejected(tmp_path: Path, toml_content: str) -> None:
    _write_config(tmp_path, toml_content)

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
cache_dir = "build/extpath"
persistent_cache = false
memory_entries = 16
disabled_strategies = ["legacy-sysext-strategy"]

[overrides]
web-root = "app/web"
extension-config-root = "app/web/typo3conf/ext"

[recovery]
heuristics = ["container-scan"]
container_dirs = ["packages"]
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.cache_dir == "build/extpath"
    assert config.persistent_cache is False
    assert config.memory_entries == 16
    assert config.disabled_strategies == ["legacy-sysext-strategy"]
    assert config.overrides == {
        "web-root": "app/web",
        "extension-config-root": "app/web/typo3conf/ext",
    }
    assert config.recovery.heuristics == ["container-scan"]
    assert config.recovery.container_dirs == ["packages"]


@pytest.mark.parametrize("cache_dir", ["", "~/cache", "../outside", "/abs/cache"])
def test_resolve_cache_dir_rejects_unsafe_paths(tmp_path: Path, cache_dir: str) -> None:
    with pytest.raises(ConfigError):
        resolve_cache_dir(tmp_path, cache_dir)


def test_resolve_cache_dir_stays_within_root(tmp_path: Path) -> None:
    assert resolve_cache_dir(tmp_path, ".extpath-cache") == (
        tmp_path.resolve() / ".extpath-cache"
    )
