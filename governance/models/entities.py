"""Governance entity models: contributors, teams, repos and their storage keys.

Records are loaded once from `contributors/*.toml`, `teams/*.toml` and
`repos/*.toml` and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EntityKind(str, Enum):
    CONTRIBUTOR = "contributor"
    TEAM = "team"
    REPO = "repo"


ENTITY_DIRECTORIES: dict[EntityKind, str] = {
    EntityKind.CONTRIBUTOR: "contributors",
    EntityKind.TEAM: "teams",
    EntityKind.REPO: "repos",
}


@dataclass(frozen=True)
class EntityKey:
    """Storage key of an entity: its kind plus the file stem it was loaded from.

    Kind participates in equality, so a team and a repo sharing a name are
    distinct keys.
    """

    kind: EntityKind
    name: str

    def __str__(self) -> str:
        return self.name

    @property
    def scoped_id(self) -> str:
        return f"{self.kind.value}:{self.name}"

    @property
    def file_path(self) -> str:
        """Path the record occupies relative to the workspace root."""
        return f"{ENTITY_DIRECTORIES[self.kind]}/{self.name}.toml"


def contributor_key(name: str) -> EntityKey:
    return EntityKey(kind=EntityKind.CONTRIBUTOR, name=name)


def team_key(name: str) -> EntityKey:
    return EntityKey(kind=EntityKind.TEAM, name=name)


def repo_key(name: str) -> EntityKey:
    return EntityKey(kind=EntityKind.REPO, name=name)


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class Contributor(_Record):
    name: str
    github_username: str = Field(alias="github-username")
    slack_member_id: str = Field(alias="slack-member-id")


class Team(_Record):
    name: str
    members: list[str] = Field(default_factory=list)
    repos: list[str] = Field(default_factory=list)
    slack_channel_ids: list[str] = Field(default_factory=list, alias="slack-channel-ids")

    @field_validator("members", "repos", "slack_channel_ids")
    @classmethod
    def _drop_repeats(cls, values: list[str]) -> list[str]:
        # references are sets; keep first-seen order
        return list(dict.fromkeys(values))


class Repo(_Record):
    # website vs. websites exclusivity is not enforced
    name: str
    website: Optional[str] = None
    websites: Optional[list[str]] = None
    description: Optional[str] = None
