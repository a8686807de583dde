"""External identity verification: GitHub usernames and Slack member/channel IDs.

Every check is an independent asyncio task. Tasks share one httpx.AsyncClient
and are gated per service by a semaphore, so at most `max_concurrency` requests
are in flight at once. Results are collected in completion order. A lookup that
raises is recorded as an unknown outcome for that check only; the batch always
yields one result per submitted check.

Confirmed-absent identities become ValidationErrors; unknown outcomes become
ValidationWarnings.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable

import httpx

from governance.adapters.entity_store import EntityStore
from governance.models.entities import Contributor, EntityKey, Team
from governance.models.identity import (
    IdentityCheck,
    IdentityCheckResult,
    IdentityService,
    IdentityStatus,
    LookupOutcome,
)
from governance.models.validation import ValidationError, ValidationWarning
from governance.services.github_client import GitHubUserClient
from governance.services.slack_client import USER_PREFIX, SlackIdentityClient
from governance.services.validator_config import ValidatorConfig

logger = logging.getLogger(__name__)

Lookup = Callable[[IdentityCheck], Awaitable[LookupOutcome]]
Findings = tuple[list[ValidationError], list[ValidationWarning]]


async def _run_one(check: IdentityCheck, lookup: Lookup, gate: asyncio.Semaphore) -> IdentityCheckResult:
    async with gate:
        try:
            outcome = await lookup(check)
        except httpx.HTTPError as exc:
            outcome = LookupOutcome.unknown(f"Request failed: {exc.__class__.__name__}: {exc}")
        except Exception as exc:
            outcome = LookupOutcome.unknown(f"{exc.__class__.__name__}: {exc}")
    if outcome.status is IdentityStatus.UNKNOWN:
        logger.debug("%s check for %s inconclusive: %s", check.service.value, check.identity, outcome.reason)
    return IdentityCheckResult(check=check, outcome=outcome)


async def run_checks(
    checks: Iterable[IdentityCheck],
    lookup: Lookup,
    max_concurrency: int,
) -> list[IdentityCheckResult]:
    """Run every check concurrently with a bounded number in flight.

    Returns results in completion order, one per check.
    """
    gate = asyncio.Semaphore(max(1, int(max_concurrency)))
    tasks = [asyncio.ensure_future(_run_one(check, lookup, gate)) for check in checks]
    results: list[IdentityCheckResult] = []
    for fut in asyncio.as_completed(tasks):
        results.append(await fut)
    return results


def github_checks(contributors: dict[EntityKey, Contributor]) -> list[IdentityCheck]:
    return [
        IdentityCheck(file=key.file_path, service=IdentityService.GITHUB, identity=c.github_username)
        for key, c in contributors.items()
    ]


def slack_checks(contributors: dict[EntityKey, Contributor], teams: dict[EntityKey, Team]) -> list[IdentityCheck]:
    out = [
        IdentityCheck(file=key.file_path, service=IdentityService.SLACK, identity=c.slack_member_id)
        for key, c in contributors.items()
    ]
    for key, team in teams.items():
        for channel_id in team.slack_channel_ids:
            out.append(IdentityCheck(file=key.file_path, service=IdentityService.SLACK, identity=channel_id))
    return out


def _absent_message(check: IdentityCheck) -> str:
    if check.service is IdentityService.GITHUB:
        return f"GitHub user does not exist: {check.identity}"
    if check.identity.startswith(USER_PREFIX):
        return f"Slack member ID does not exist: {check.identity}"
    return f"Slack channel ID does not exist: {check.identity}"


def _unknown_message(check: IdentityCheck, reason: str) -> str:
    if check.service is IdentityService.GITHUB:
        return f"Failed to check GitHub user {check.identity}: {reason}"
    return f"Failed to check Slack ID {check.identity}: {reason}"


def results_to_findings(results: Iterable[IdentityCheckResult]) -> Findings:
    errors: list[ValidationError] = []
    warnings: list[ValidationWarning] = []
    for result in results:
        check, outcome = result.check, result.outcome
        if outcome.status is IdentityStatus.ABSENT:
            errors.append(ValidationError(file=check.file, message=_absent_message(check)))
        elif outcome.status is IdentityStatus.UNKNOWN:
            warnings.append(ValidationWarning(file=check.file, message=_unknown_message(check, outcome.reason)))
    return errors, warnings


class IdentityVerifier:
    """Checks contributor and team identities against GitHub and Slack."""

    def __init__(self, config: ValidatorConfig, client: httpx.AsyncClient) -> None:
        self._config = config
        self._github = GitHubUserClient(
            client,
            token=config.github_token,
            base_url=config.github_api_base,
            user_agent=config.user_agent,
        )
        self._slack = SlackIdentityClient(client, token=config.slack_token, base_url=config.slack_api_base)

    async def _github_lookup(self, check: IdentityCheck) -> LookupOutcome:
        return await self._github.check_user(check.identity)

    async def _slack_lookup(self, check: IdentityCheck) -> LookupOutcome:
        return await self._slack.check_id(check.identity)

    async def verify_github_users(self, contributors: dict[EntityKey, Contributor]) -> Findings:
        checks = github_checks(contributors)
        logger.info(
            "Validating %d GitHub user(s) (max %d in flight)...",
            len(checks),
            self._config.github_max_concurrency,
        )
        results = await run_checks(checks, self._github_lookup, self._config.github_max_concurrency)
        return results_to_findings(results)

    async def verify_slack_ids(
        self,
        contributors: dict[EntityKey, Contributor],
        teams: dict[EntityKey, Team],
    ) -> Findings:
        checks = slack_checks(contributors, teams)
        if not self._config.slack_token:
            logger.warning("SLACK_TOKEN is not set; %d Slack check(s) will be inconclusive", len(checks))
        logger.info(
            "Validating %d Slack ID(s) (max %d in flight)...",
            len(checks),
            self._config.slack_max_concurrency,
        )
        results = await run_checks(checks, self._slack_lookup, self._config.slack_max_concurrency)
        return results_to_findings(results)

    async def verify_all(self, store: EntityStore) -> Findings:
        gh_errors, gh_warnings = await self.verify_github_users(store.contributors)
        slack_errors, slack_warnings = await self.verify_slack_ids(store.contributors, store.teams)
        return gh_errors + slack_errors, gh_warnings + slack_warnings


async def verify_identities(store: EntityStore, config: ValidatorConfig) -> Findings:
    """Open one shared HTTP client for the run and verify every identity."""
    async with httpx.AsyncClient(timeout=config.timeout_seconds) as client:
        verifier = IdentityVerifier(config, client)
        return await verifier.verify_all(store)
