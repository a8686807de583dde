from __future__ import annotations

import pytest

from governance.services.commit_message import CommitMessageError, parse_conventional_commit


def test_parses_type_scope_and_description() -> None:
    commit = parse_conventional_commit("fix(api): handle edge case in login flow\n")

    assert commit.type == "fix"
    assert commit.scope == "api"
    assert commit.description == "handle edge case in login flow"
    assert commit.breaking is False
    assert commit.body is None


def test_breaking_marker_and_body() -> None:
    commit = parse_conventional_commit("feat!: drop legacy teams\n\nTeams now require a slack channel.\n")

    assert commit.breaking is True
    assert commit.body == "Teams now require a slack channel."


def test_breaking_change_footer() -> None:
    commit = parse_conventional_commit("refactor: rename fields\n\nBREAKING CHANGE: github is now github-username\n")

    assert commit.breaking is True


def test_ignores_git_comment_lines() -> None:
    commit = parse_conventional_commit("# Please enter the commit message\ndocs: update readme\n# trailing comment\n")

    assert commit.type == "docs"


@pytest.mark.parametrize(
    "message",
    [
        "",
        "# only comments\n",
        "add user authentication",
        "feat:missing space",
        "feat(): empty scope",
        "feat: header\nbody without blank line",
    ],
)
def test_rejects_non_conventional_messages(message: str) -> None:
    with pytest.raises(CommitMessageError):
        parse_conventional_commit(message)
