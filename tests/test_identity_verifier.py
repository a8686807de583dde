"""Tests for concurrent external identity verification."""

from __future__ import annotations

import asyncio

import httpx
import pytest
import respx
from governance_factories import contributor, make_store
from httpx import Response

from governance.models.entities import Team
from governance.models.identity import (
    IdentityCheck,
    IdentityCheckResult,
    IdentityService,
    IdentityStatus,
    LookupOutcome,
)
from governance.services.identity_verifier import (
    IdentityVerifier,
    github_checks,
    results_to_findings,
    run_checks,
    slack_checks,
)
from governance.services.report_service import build_report
from governance.services.validator_config import ValidatorConfig


def _checks(n: int) -> list[IdentityCheck]:
    return [
        IdentityCheck(file=f"contributors/user{i}.toml", service=IdentityService.GITHUB, identity=f"user{i}")
        for i in range(n)
    ]


@pytest.mark.asyncio
async def test_run_checks_isolates_failing_lookups() -> None:
    async def lookup(check: IdentityCheck) -> LookupOutcome:
        await asyncio.sleep(0)
        index = int(check.identity.removeprefix("user"))
        if index % 3 == 0:
            raise RuntimeError("lookup exploded")
        if index % 3 == 1:
            raise httpx.ReadTimeout("too slow")
        return LookupOutcome.exists()

    results = await run_checks(_checks(12), lookup, max_concurrency=4)

    assert len(results) == 12
    unknown = [r for r in results if r.outcome.status is IdentityStatus.UNKNOWN]
    assert len(unknown) == 8
    assert any("lookup exploded" in r.outcome.reason for r in unknown)
    assert any("ReadTimeout" in r.outcome.reason for r in unknown)


@pytest.mark.asyncio
async def test_run_checks_bounds_in_flight_lookups() -> None:
    in_flight = 0
    peak = 0

    async def lookup(check: IdentityCheck) -> LookupOutcome:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.001)
        in_flight -= 1
        return LookupOutcome.exists()

    results = await run_checks(_checks(20), lookup, max_concurrency=3)

    assert len(results) == 20
    assert 1 <= peak <= 3


@pytest.mark.asyncio
async def test_run_checks_returns_results_in_completion_order() -> None:
    delays = {"user0": 0.03, "user1": 0.0, "user2": 0.01}

    async def lookup(check: IdentityCheck) -> LookupOutcome:
        await asyncio.sleep(delays[check.identity])
        return LookupOutcome.exists()

    results = await run_checks(_checks(3), lookup, max_concurrency=3)

    assert [r.check.identity for r in results] == ["user1", "user2", "user0"]


@pytest.mark.asyncio
async def test_run_checks_with_no_checks() -> None:
    async def lookup(check: IdentityCheck) -> LookupOutcome:
        raise AssertionError("should not be called")

    assert await run_checks([], lookup, max_concurrency=2) == []


def test_slack_checks_cover_contributors_and_team_channels() -> None:
    store = make_store(
        contributors={"alice": contributor("alice", slack="U1")},
        teams={"core": Team(name="core", slack_channel_ids=["C1", "G2"])},
    )

    checks = slack_checks(store.contributors, store.teams)

    assert sorted((c.file, c.identity) for c in checks) == [
        ("contributors/alice.toml", "U1"),
        ("teams/core.toml", "C1"),
        ("teams/core.toml", "G2"),
    ]
    assert [c.identity for c in github_checks(store.contributors)] == ["alice"]


def test_results_to_findings_maps_outcomes() -> None:
    checks = _checks(3)
    results = [
        IdentityCheckResult(check=checks[0], outcome=LookupOutcome.exists()),
        IdentityCheckResult(check=checks[1], outcome=LookupOutcome.absent()),
        IdentityCheckResult(check=checks[2], outcome=LookupOutcome.unknown("Rate limit exceeded")),
    ]

    errors, warnings = results_to_findings(results)

    assert [e.message for e in errors] == ["GitHub user does not exist: user1"]
    assert [w.message for w in warnings] == ["Failed to check GitHub user user2: Rate limit exceeded"]


@pytest.mark.asyncio
@respx.mock
async def test_verify_github_users_classifies_each_contributor() -> None:
    respx.get("https://api.github.com/users/alice").mock(return_value=Response(200, json={}))
    respx.get("https://api.github.com/users/ghost404").mock(return_value=Response(404, json={}))
    respx.get("https://api.github.com/users/limited").mock(return_value=Response(403, json={}))
    respx.get("https://api.github.com/users/flaky").mock(side_effect=httpx.ConnectError("refused"))
    store = make_store(
        contributors={
            "alice": contributor("alice"),
            "ghost404": contributor("ghost404"),
            "limited": contributor("limited"),
            "flaky": contributor("flaky"),
        }
    )

    async with httpx.AsyncClient() as client:
        errors, warnings = await IdentityVerifier(ValidatorConfig(), client).verify_github_users(store.contributors)

    assert [(e.file, e.message) for e in errors] == [
        ("contributors/ghost404.toml", "GitHub user does not exist: ghost404")
    ]
    assert sorted(w.file for w in warnings) == ["contributors/flaky.toml", "contributors/limited.toml"]


@pytest.mark.asyncio
async def test_missing_slack_token_warns_per_check_without_errors() -> None:
    store = make_store(teams={"core": Team(name="core", slack_channel_ids=["C0123"])})

    async with httpx.AsyncClient() as client:
        verifier = IdentityVerifier(ValidatorConfig(slack_token=None), client)
        errors, warnings = await verifier.verify_slack_ids(store.contributors, store.teams)

    assert errors == []
    assert len(warnings) == 1
    assert warnings[0].file == "teams/core.toml"
    assert "SLACK_TOKEN" in warnings[0].message

    report = build_report(store, errors, warnings)
    assert report.valid is True
    assert report.stats.total_warnings == 1


@pytest.mark.asyncio
@respx.mock
async def test_verify_slack_ids_reports_absent_member_and_channel() -> None:
    respx.get("https://slack.com/api/users.info", params={"user": "U404"}).mock(
        return_value=Response(200, json={"ok": False, "error": "user_not_found"})
    )
    respx.get("https://slack.com/api/conversations.info", params={"channel": "C404"}).mock(
        return_value=Response(200, json={"ok": False, "error": "channel_not_found"})
    )
    respx.get("https://slack.com/api/conversations.info", params={"channel": "G200"}).mock(
        return_value=Response(200, json={"ok": False, "error": "ratelimited"})
    )
    store = make_store(
        contributors={"alice": contributor("alice", slack="U404")},
        teams={"core": Team(name="core", slack_channel_ids=["C404", "G200", "Z1"])},
    )

    async with httpx.AsyncClient() as client:
        verifier = IdentityVerifier(ValidatorConfig(slack_token="xoxb-test"), client)
        errors, warnings = await verifier.verify_slack_ids(store.contributors, store.teams)

    assert sorted(e.message for e in errors) == [
        "Slack channel ID does not exist: C404",
        "Slack member ID does not exist: U404",
    ]
    assert sorted(w.message for w in warnings) == [
        "Failed to check Slack ID G200: Rate limited by Slack",
        "Failed to check Slack ID Z1: Malformed Slack ID (expected U, C or G prefix)",
    ]


@pytest.mark.asyncio
@respx.mock
async def test_repeated_channel_id_is_checked_once() -> None:
    route = respx.get("https://slack.com/api/conversations.info", params={"channel": "C1"}).mock(
        return_value=Response(200, json={"ok": False, "error": "channel_not_found"})
    )
    store = make_store(teams={"core": Team(name="core", slack_channel_ids=["C1", "C1"])})

    async with httpx.AsyncClient() as client:
        verifier = IdentityVerifier(ValidatorConfig(slack_token="xoxb-test"), client)
        errors, warnings = await verifier.verify_slack_ids(store.contributors, store.teams)

    assert route.call_count == 1
    assert [e.message for e in errors] == ["Slack channel ID does not exist: C1"]
    assert warnings == []


@pytest.mark.asyncio
@respx.mock
async def test_ghost_user_invalidates_containing_file() -> None:
    respx.get("https://api.github.com/users/ghost404").mock(return_value=Response(404, json={}))
    store = make_store(contributors={"ghost404": contributor("ghost404")})

    async with httpx.AsyncClient() as client:
        errors, warnings = await IdentityVerifier(ValidatorConfig(), client).verify_github_users(store.contributors)

    report = build_report(store, errors, warnings)

    assert len(errors) == 1
    assert report.valid is False
    assert report.files["contributors/ghost404.toml"].valid is False
