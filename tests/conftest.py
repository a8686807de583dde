"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _clear_governance_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "GITHUB_TOKEN",
        "SLACK_TOKEN",
        "GOVERNANCE_USER_AGENT",
        "GITHUB_API_BASE",
        "SLACK_API_BASE",
        "GOVERNANCE_HTTP_TIMEOUT_SECONDS",
        "GITHUB_MAX_CONCURRENCY",
        "SLACK_MAX_CONCURRENCY",
    ):
        monkeypatch.delenv(key, raising=False)
