"""Conventional Commit header check for commit-msg hooks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_HEADER_RE = re.compile(
    r"^(?P<type>[A-Za-z]+)(?:\((?P<scope>[^()\r\n]+)\))?(?P<breaking>!)?: (?P<description>\S.*)$"
)

USAGE_HINT = "\n".join(
    [
        "Expected format: <type>[optional scope]: <description>",
        "Examples:",
        "  feat: add user authentication",
        "  fix(api): handle edge case in login flow",
    ]
)


class CommitMessageError(ValueError):
    pass


@dataclass(frozen=True)
class ConventionalCommit:
    type: str
    scope: Optional[str]
    breaking: bool
    description: str
    body: Optional[str] = None


def _strip_comments(message: str) -> list[str]:
    # git leaves '#' lines in the message file until after the hook runs
    return [line for line in message.splitlines() if not line.startswith("#")]


def parse_conventional_commit(message: str) -> ConventionalCommit:
    lines = _strip_comments(message)
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        raise CommitMessageError("empty commit message")

    header = lines[0].rstrip()
    m = _HEADER_RE.match(header)
    if not m:
        raise CommitMessageError(f"header does not follow Conventional Commits: {header!r}")

    rest = lines[1:]
    if rest and rest[0].strip():
        raise CommitMessageError("body must be separated from the header by a blank line")
    body = "\n".join(rest).strip() or None

    breaking = bool(m.group("breaking")) or bool(body and re.search(r"^BREAKING[ -]CHANGE: ", body, re.M))
    return ConventionalCommit(
        type=m.group("type").lower(),
        scope=m.group("scope"),
        breaking=breaking,
        description=m.group("description").strip(),
        body=body,
    )
