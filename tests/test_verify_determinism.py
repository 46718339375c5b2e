from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from contract.models import Resolved
from resolution.service import build_request
from verify.verify import verify_determinism

from conftest import make_local_extension

if TYPE_CHECKING:
    from pathlib import Path


def test_verify_determinism_on_real_layout(site: Path) -> None:
    make_local_extension(site / "typo3conf" / "ext" / "news")

    result = verify_determinism(build_request("news", str(site)))

    assert result.ok
    assert result.first == result.second
    assert result.differences == ()


def test_verify_determinism_reports_differences(
    site: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    outcomes = iter(
        [
            Resolved(path="/a", strategy="legacy-classic-strategy"),
            Resolved(path="/b", strategy="legacy-classic-strategy"),
        ]
    )

    class _FakeService:
        def resolve(self, request: object) -> Resolved:
            return next(outcomes)

    def _fake_create(config=None, *, fs=None, use_cache=True) -> _FakeService:
        assert use_cache is False
        return _FakeService()

    monkeypatch.setattr("verify.verify.create_resolution_service", _fake_create)

    result = verify_determinism(build_request("news", str(site)))

    assert not result.ok
    assert result.differences == ("path: '/a' != '/b'",)
