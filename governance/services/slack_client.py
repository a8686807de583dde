"""Slack member / channel lookup client.

Slack answers HTTP 200 for most failures and reports the real outcome in the
body: `{"ok": true, ...}` or `{"ok": false, "error": "<code>"}`. Bodies are
decoded into one of three variants (SlackOk, SlackApiError, SlackUnparseable)
before classification.

ID prefixes select the endpoint: `U...` -> users.info, `C...`/`G...` ->
conversations.info. Anything else is malformed and never sent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from governance.models.identity import LookupOutcome
from governance.services.validator_config import DEFAULT_SLACK_API_BASE

USER_PREFIX = "U"
CHANNEL_PREFIXES = ("C", "G")

MISSING_TOKEN_REASON = "SLACK_TOKEN is not set"
MALFORMED_ID_REASON = "Malformed Slack ID (expected U, C or G prefix)"

_ABSENT_CODES = {"user_not_found", "channel_not_found"}
_UNKNOWN_REASONS = {
    "ratelimited": "Rate limited by Slack",
    "invalid_auth": "Slack authentication failed",
}


@dataclass(frozen=True)
class SlackOk:
    pass


@dataclass(frozen=True)
class SlackApiError:
    code: str


@dataclass(frozen=True)
class SlackUnparseable:
    reason: str


SlackResponse = Union[SlackOk, SlackApiError, SlackUnparseable]


@dataclass(frozen=True)
class SlackLookupTarget:
    endpoint: str
    param: str


def lookup_target(slack_id: str) -> Optional[SlackLookupTarget]:
    """Endpoint + query parameter for an ID, or None when the prefix is unknown."""
    if slack_id.startswith(USER_PREFIX):
        return SlackLookupTarget(endpoint="users.info", param="user")
    if slack_id.startswith(CHANNEL_PREFIXES):
        return SlackLookupTarget(endpoint="conversations.info", param="channel")
    return None


def decode_slack_response(payload: Any) -> SlackResponse:
    if not isinstance(payload, dict):
        return SlackUnparseable("Response body is not a JSON object")
    ok = payload.get("ok")
    if ok is True:
        return SlackOk()
    if ok is False:
        code = payload.get("error")
        if isinstance(code, str) and code:
            return SlackApiError(code)
        return SlackUnparseable("Error response without an error code")
    return SlackUnparseable("Response is missing the 'ok' flag")


def classify_slack_response(response: SlackResponse) -> LookupOutcome:
    if isinstance(response, SlackOk):
        return LookupOutcome.exists()
    if isinstance(response, SlackApiError):
        if response.code in _ABSENT_CODES:
            return LookupOutcome.absent()
        reason = _UNKNOWN_REASONS.get(response.code)
        if reason is not None:
            return LookupOutcome.unknown(reason)
        return LookupOutcome.unknown(f"Slack API error: {response.code}")
    if isinstance(response, SlackUnparseable):
        return LookupOutcome.unknown(f"Unexpected Slack response: {response.reason}")
    raise TypeError(f"unhandled Slack response variant: {type(response).__name__}")


class SlackIdentityClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        token: Optional[str],
        base_url: str = DEFAULT_SLACK_API_BASE,
    ) -> None:
        self._client = client
        self._token = token
        self._base_url = base_url.rstrip("/")

    async def check_id(self, slack_id: str) -> LookupOutcome:
        """Classify a member or channel ID. Transport errors propagate to the caller."""
        if not self._token:
            return LookupOutcome.unknown(MISSING_TOKEN_REASON)
        target = lookup_target(slack_id)
        if target is None:
            return LookupOutcome.unknown(MALFORMED_ID_REASON)

        r = await self._client.get(
            f"{self._base_url}/{target.endpoint}",
            params={target.param: slack_id},
            headers={"Authorization": f"Bearer {self._token}"},
        )
        if r.status_code != 200:
            return LookupOutcome.unknown(f"Unexpected status {r.status_code}")
        try:
            payload = r.json()
        except ValueError:
            return classify_slack_response(SlackUnparseable("Response body is not JSON"))
        return classify_slack_response(decode_slack_response(payload))
