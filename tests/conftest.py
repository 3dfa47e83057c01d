"""Shared pytest fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from aiolimiter import AsyncLimiter

from commitsight.clients.http import RequestContext
from commitsight.clients.quota import QuotaGovernor
from commitsight.settings import Settings
from commitsight.storage import ProfileStore
from tests.factories import FakeClock

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def request_context() -> RequestContext:
    return RequestContext(
        limiter=AsyncLimiter(1000, 1),
        governor=QuotaGovernor(window_limit=10_000, window_seconds=60.0),
    )


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Settings:
    for name in ("GITHUB_TOKEN", "ANTHROPIC_API_KEY", "COMMITSIGHT_GITHUB_TOKEN", "COMMITSIGHT_ANTHROPIC_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    return Settings(
        _env_file=None,
        github_token="ghp_test",
        anthropic_api_key="sk-ant-test",
        database_path=tmp_path / "commitsight.db",
    )


@pytest.fixture
def store(tmp_path: Path) -> Iterator[ProfileStore]:
    profile_store = ProfileStore(tmp_path / "profiles.db")
    yield profile_store
    profile_store.close()
