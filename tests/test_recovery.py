from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from contract.models import Attempt, Candidate, ValidationVerdict
from recovery.heuristics import (
    DEFAULT_HEURISTIC_ORDER,
    ContainerScanHeuristic,
    ManagerNameHeuristic,
    build_heuristics,
)
from recovery.manager import ErrorRecoveryManager, classify_failure
from resolution.service import build_request
from scan.filesystem import LocalFilesystem
from scan.validator import PathValidator

from conftest import make_local_extension, make_managed_extension

if TYPE_CHECKING:
    from pathlib import Path

    from contract.models import ResolutionRequest


def _attempt(path: str, status: str) -> Attempt:
    return Attempt(
        candidate=Candidate(path=path, strategy="s"),
        verdict=ValidationVerdict(status=status, path=path),  # type: ignore[arg-type]
    )


def test_classify_failure() -> None:
    absent = _attempt("/a", "absent")
    malformed = _attempt("/b", "malformed")

    assert classify_failure([absent], recovered=0) == "not_found"
    assert classify_failure([absent], recovered=2) == "recovery_exhausted"
    assert classify_failure([absent, malformed], recovered=2) == "malformed"


def test_build_heuristics_keeps_order_and_rejects_unknown() -> None:
    names = [h.name for h in build_heuristics()]

    assert names == list(DEFAULT_HEURISTIC_ORDER)
    assert [h.name for h in build_heuristics(["container-scan", "case-insensitive"])] == [
        "container-scan",
        "case-insensitive",
    ]
    with pytest.raises(ValueError, match="Unknown recovery heuristic"):
        build_heuristics(["guess"])


def test_manager_name_heuristic_derives_classic_key(site: Path) -> None:
    request = build_request("shortnr", str(site), manager_name="cpsit/cps-shortnr")

    paths = ManagerNameHeuristic().propose(request, (), LocalFilesystem())

    assert paths == [
        str(site / "vendor" / "cpsit" / "cps-shortnr"),
        str(site / "public" / "typo3conf" / "ext" / "cps_shortnr"),
        str(site / "typo3conf" / "ext" / "cps_shortnr"),
    ]


def test_container_scan_uses_configured_dirs(site: Path) -> None:
    make_managed_extension(
        site / "packages" / "local_news",
        name="acme/news-fork",
        key="news",
    )
    make_managed_extension(site / "packages" / "blog", name="t3g/blog", key="blog")
    request = build_request("news", str(site), category="managed")

    assert ContainerScanHeuristic().propose(request, (), LocalFilesystem()) == []
    assert ContainerScanHeuristic(["packages"]).propose(
        request, (), LocalFilesystem()
    ) == [str(site / "packages" / "local_news")]


def test_container_scan_matches_manager_name(site: Path) -> None:
    make_managed_extension(site / "vendor" / "acme" / "forked", name="acme/news")
    request = build_request("news", str(site), manager_name="acme/news")

    paths = ContainerScanHeuristic().propose(request, (), LocalFilesystem())

    assert paths == [str(site / "vendor" / "acme" / "forked")]


def test_container_scan_skips_broken_manifests(site: Path) -> None:
    broken = site / "typo3conf" / "ext" / "news"
    broken.mkdir(parents=True)
    (broken / "composer.json").write_text("{", encoding="utf-8")
    request = build_request("news", str(site), category="managed")

    assert ContainerScanHeuristic().propose(request, (), LocalFilesystem()) == []


class _Exploding:
    name = "exploding"
    strategy_name = "recovery-exploding"

    def propose(self, request: ResolutionRequest, attempts, fs) -> list[str]:
        raise PermissionError("denied")


class _Fixed:
    name = "fixed"
    strategy_name = "recovery-fixed"

    def __init__(self, paths: list[str]) -> None:
        self.paths = paths

    def propose(self, request: ResolutionRequest, attempts, fs) -> list[str]:
        return list(self.paths)


def test_manager_skips_tried_paths_and_failing_heuristics(site: Path) -> None:
    tried = str(site / "typo3conf" / "ext" / "news")
    usable = str(make_local_extension(site / "elsewhere" / "news"))
    manager = ErrorRecoveryManager(
        PathValidator(), [_Exploding(), _Fixed([tried, usable])]
    )
    request = build_request("news", str(site))

    result = manager.recover(request, [_attempt(tried, "absent")])

    assert result.status == "resolved"
    assert result.strategy == "recovery-fixed"
    assert [a.candidate.path for a in result.attempts] == [tried, usable]


def test_manager_reports_exhausted_recovery(site: Path) -> None:
    manager = ErrorRecoveryManager(PathValidator(), [_Fixed([str(site / "nope")])])
    request = build_request("news", str(site))

    result = manager.recover(request, [_attempt(str(site / "a"), "absent")])

    assert result.status == "unresolved"
    assert result.failure == "recovery_exhausted"
    assert len(result.attempts) == 2
