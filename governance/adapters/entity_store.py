"""Entity store + TOML loader.

Reads `contributors/*.toml`, `teams/*.toml` and `repos/*.toml` under a
workspace root. Each record is keyed by the file stem it was loaded from, not
by the name declared inside it; the structural checker compares the two.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from governance.models.entities import (
    ENTITY_DIRECTORIES,
    Contributor,
    EntityKey,
    EntityKind,
    Repo,
    Team,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class EntityLoadError(RuntimeError):
    """A record file could not be read or parsed. Fatal for the run."""

    def __init__(self, path: Path, kind: EntityKind, cause: str) -> None:
        super().__init__(f"Failed to load {kind.value} file {path}: {cause}")
        self.path = path
        self.kind = kind


def load_from_dir(root: Path, kind: EntityKind, model: type[RecordT]) -> dict[EntityKey, RecordT]:
    directory = root / ENTITY_DIRECTORIES[kind]
    out: dict[EntityKey, RecordT] = {}
    if not directory.is_dir():
        logger.debug("No %s directory at %s", kind.value, directory)
        return out

    for path in sorted(directory.glob("*.toml")):
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise EntityLoadError(path, kind, f"read failed: {exc}") from exc
        except tomllib.TOMLDecodeError as exc:
            raise EntityLoadError(path, kind, f"invalid TOML: {exc}") from exc
        try:
            record = model.model_validate(data)
        except SchemaValidationError as exc:
            raise EntityLoadError(path, kind, f"invalid record: {exc}") from exc
        out[EntityKey(kind=kind, name=path.stem)] = record
    return out


def load_contributors(root: Path) -> dict[EntityKey, Contributor]:
    return load_from_dir(root, EntityKind.CONTRIBUTOR, Contributor)


def load_teams(root: Path) -> dict[EntityKey, Team]:
    return load_from_dir(root, EntityKind.TEAM, Team)


def load_repos(root: Path) -> dict[EntityKey, Repo]:
    return load_from_dir(root, EntityKind.REPO, Repo)


class EntityStore:
    """In-memory, read-only view over the loaded governance records."""

    def __init__(
        self,
        contributors: dict[EntityKey, Contributor] | None = None,
        teams: dict[EntityKey, Team] | None = None,
        repos: dict[EntityKey, Repo] | None = None,
    ) -> None:
        self.contributors: dict[EntityKey, Contributor] = dict(contributors or {})
        self.teams: dict[EntityKey, Team] = dict(teams or {})
        self.repos: dict[EntityKey, Repo] = dict(repos or {})

    @classmethod
    def load(cls, root: Path) -> EntityStore:
        store = cls(
            contributors=load_contributors(root),
            teams=load_teams(root),
            repos=load_repos(root),
        )
        logger.info(
            "Loaded %d contributor(s), %d team(s), %d repo(s) from %s",
            len(store.contributors),
            len(store.teams),
            len(store.repos),
            root,
        )
        return store

    def keys(self) -> list[EntityKey]:
        return [*self.contributors, *self.teams, *self.repos]

    def has_contributor(self, name: str) -> bool:
        return EntityKey(kind=EntityKind.CONTRIBUTOR, name=name) in self.contributors

    def has_repo(self, name: str) -> bool:
        return EntityKey(kind=EntityKind.REPO, name=name) in self.repos
