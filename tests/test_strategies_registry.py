from __future__ import annotations

import os
from typing import ClassVar

import pytest

from contract.errors import StrategyConflictError
from contract.models import Candidate, ExtensionCategory, ExtensionIdentity, ResolutionRequest
from strategies.classic import ClassicOverrideStrategy
from strategies.managed import CorePackageStrategy, ManagerPackageStrategy
from strategies.registry import DEFAULT_STRATEGY_NAMES, StrategyRegistry, default_registry
from strategies.system import LegacySysextStrategy

pytestmark = pytest.mark.skipif(
    os.name == "nt",
    reason="Expected paths use POSIX separators.",
)


def _request(
    key: str = "news",
    *,
    root: str = "/site",
    manager_name: str | None = None,
    category: ExtensionCategory = ExtensionCategory.LOCAL,
    overrides: dict[str, str] | None = None,
) -> ResolutionRequest:
    return ResolutionRequest(
        extension=ExtensionIdentity(key=key, manager_name=manager_name, category=category),
        installation_root=root,
        overrides=overrides or {},
    )


class _Fixed:
    def __init__(self, name: str, priority: int, paths: list[str]) -> None:
        self.name = name
        self.priority = priority
        self._paths = paths

    def propose(self, request: ResolutionRequest) -> list[str]:
        return list(self._paths)


def test_default_registry_orders_by_descending_priority() -> None:
    registry = default_registry()

    assert registry.names() == [
        "classic-override-strategy",
        "manager-package-strategy",
        "classic-convention-strategy",
        "core-package-strategy",
        "legacy-classic-strategy",
        "legacy-sysext-strategy",
    ]
    assert set(registry.names()) == DEFAULT_STRATEGY_NAMES


def test_equal_priorities_break_ties_by_name() -> None:
    registry = StrategyRegistry(
        [_Fixed("zeta", 10, []), _Fixed("alpha", 10, []), _Fixed("top", 20, [])]
    )

    assert registry.names() == ["top", "alpha", "zeta"]


def test_duplicate_name_is_rejected() -> None:
    registry = StrategyRegistry([_Fixed("one", 10, [])])

    with pytest.raises(StrategyConflictError, match="already registered"):
        registry.register(_Fixed("one", 99, []))

    assert registry.names() == ["one"]


def test_overridden_extension_config_root_candidates() -> None:
    request = _request(overrides={"extension-config-root": "app/web/typo3conf/ext"})

    candidates = default_registry().candidates_for(request)

    assert candidates == [
        Candidate(
            path="/site/app/web/typo3conf/ext/news",
            strategy="classic-override-strategy",
            priority=100,
        ),
        Candidate(
            path="/site/public/typo3conf/ext/news",
            strategy="classic-convention-strategy",
            priority=60,
        ),
        Candidate(
            path="/site/typo3conf/ext/news",
            strategy="legacy-classic-strategy",
            priority=40,
        ),
    ]


def test_candidates_are_deduplicated_first_proposer_wins() -> None:
    registry = StrategyRegistry(
        [
            _Fixed("low", 1, ["/a", "/b"]),
            _Fixed("high", 5, ["/b", "/c"]),
        ]
    )

    candidates = registry.candidates_for(_request())

    assert [(c.path, c.strategy) for c in candidates] == [
        ("/b", "high"),
        ("/c", "high"),
        ("/a", "low"),
    ]


def test_default_web_root_is_public() -> None:
    candidates = default_registry().candidates_for(_request())

    assert [c.path for c in candidates] == [
        "/site/public/typo3conf/ext/news",
        "/site/typo3conf/ext/news",
    ]


def test_absolute_override_is_used_verbatim() -> None:
    request = _request(overrides={"extension-config-root": "/srv/shared/ext"})

    assert ClassicOverrideStrategy().propose(request) == ["/srv/shared/ext/news"]


def test_manager_package_strategy_uses_vendor_root() -> None:
    request = _request(
        manager_name="georgringer/news",
        category=ExtensionCategory.MANAGED,
        overrides={"vendor-root": "libs"},
    )

    assert ManagerPackageStrategy().propose(request) == ["/site/libs/georgringer/news"]
    assert ManagerPackageStrategy().propose(_request()) == []


def test_system_strategies_only_apply_to_system_extensions() -> None:
    system = _request("fluid_styled_content", category=ExtensionCategory.SYSTEM)
    local = _request("fluid_styled_content")

    assert CorePackageStrategy().propose(system) == [
        "/site/vendor/typo3/cms-fluid_styled_content",
        "/site/vendor/typo3/cms-fluid-styled-content",
    ]
    assert LegacySysextStrategy().propose(system) == [
        "/site/typo3/sysext/fluid_styled_content",
        "/site/typo3_src/typo3/sysext/fluid_styled_content",
    ]
    assert CorePackageStrategy().propose(local) == []
    assert LegacySysextStrategy().propose(local) == []


def test_default_registry_can_disable_strategies() -> None:
    registry = default_registry(["legacy-classic-strategy"])

    assert "legacy-classic-strategy" not in registry.names()
    with pytest.raises(ValueError, match="Unknown strategy names"):
        default_registry(["no-such-strategy"])


def test_capabilities_lists_strategies_in_order() -> None:
    capabilities = default_registry().capabilities()

    assert capabilities["strategy_count"] == 6
    assert capabilities["strategies"][0] == {
        "name": "classic-override-strategy",
        "priority": 100,
    }


class _Custom:
    name: ClassVar[str] = "custom-strategy"
    priority: ClassVar[int] = 70

    def propose(self, request: ResolutionRequest) -> list[str]:
        return [f"/custom/{request.key}"]


def test_custom_strategy_slots_into_priority_order() -> None:
    registry = default_registry()
    registry.register(_Custom())

    assert registry.names().index("custom-strategy") == 2
