"""Validator configuration: credentials, endpoints and concurrency bounds.

Config: GITHUB_TOKEN (optional), SLACK_TOKEN (required for Slack checks),
GOVERNANCE_USER_AGENT, GITHUB_API_BASE, SLACK_API_BASE,
GOVERNANCE_HTTP_TIMEOUT_SECONDS, GITHUB_MAX_CONCURRENCY, SLACK_MAX_CONCURRENCY.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_USER_AGENT = "Governance-Validator"
DEFAULT_GITHUB_API_BASE = "https://api.github.com"
DEFAULT_SLACK_API_BASE = "https://slack.com/api"


def _env_str(name: str) -> Optional[str]:
    return (os.getenv(name) or "").strip() or None


def _env_int(name: str, default: int, lo: int, hi: int) -> int:
    raw = (os.getenv(name) or str(default)).strip()
    try:
        value = int(raw)
    except ValueError:
        value = default
    return max(lo, min(value, hi))


def _env_float(name: str, default: float, lo: float, hi: float) -> float:
    raw = (os.getenv(name) or str(default)).strip()
    try:
        value = float(raw)
    except ValueError:
        value = default
    return max(lo, min(value, hi))


@dataclass(frozen=True)
class ValidatorConfig:
    github_token: Optional[str] = None
    slack_token: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT
    github_api_base: str = DEFAULT_GITHUB_API_BASE
    slack_api_base: str = DEFAULT_SLACK_API_BASE
    timeout_seconds: float = 20.0
    github_max_concurrency: int = 8
    slack_max_concurrency: int = 4

    @classmethod
    def from_env(cls) -> ValidatorConfig:
        return cls(
            github_token=_env_str("GITHUB_TOKEN"),
            slack_token=_env_str("SLACK_TOKEN"),
            user_agent=_env_str("GOVERNANCE_USER_AGENT") or DEFAULT_USER_AGENT,
            github_api_base=(_env_str("GITHUB_API_BASE") or DEFAULT_GITHUB_API_BASE).rstrip("/"),
            slack_api_base=(_env_str("SLACK_API_BASE") or DEFAULT_SLACK_API_BASE).rstrip("/"),
            timeout_seconds=_env_float("GOVERNANCE_HTTP_TIMEOUT_SECONDS", 20.0, 1.0, 120.0),
            github_max_concurrency=_env_int("GITHUB_MAX_CONCURRENCY", 8, 1, 64),
            slack_max_concurrency=_env_int("SLACK_MAX_CONCURRENCY", 4, 1, 64),
        )
