"""GitHub user lookup client.

Async wrapper over `GET /users/{username}` with:
- optional token auth (unauthenticated requests are still attempted)
- status-code classification into exists / absent / unknown
- a single attempt per user; no retry or rate-limit sleeping
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

import httpx

from governance.models.identity import LookupOutcome
from governance.services.validator_config import DEFAULT_GITHUB_API_BASE, DEFAULT_USER_AGENT


def classify_github_status(status_code: int) -> LookupOutcome:
    if status_code == 200:
        return LookupOutcome.exists()
    if status_code == 404:
        return LookupOutcome.absent()
    if status_code == 403:
        return LookupOutcome.unknown("Rate limit exceeded or access forbidden")
    return LookupOutcome.unknown(f"Unexpected status {status_code}")


class GitHubUserClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        token: Optional[str] = None,
        base_url: str = DEFAULT_GITHUB_API_BASE,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    def user_url(self, username: str) -> str:
        return f"{self._base_url}/users/{quote(username, safe='')}"

    async def check_user(self, username: str) -> LookupOutcome:
        """Classify a GitHub username. Transport errors propagate to the caller."""
        r = await self._client.get(self.user_url(username), headers=self._headers)
        return classify_github_status(r.status_code)
