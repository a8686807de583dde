"""Offline governance checks: file naming and cross-entity references."""

from __future__ import annotations

import logging

from governance.adapters.entity_store import EntityStore
from governance.models.validation import ValidationError

logger = logging.getLogger(__name__)


def validate_file_names(store: EntityStore) -> list[ValidationError]:
    """One error per entity whose file stem differs from the identity it declares.

    Contributors are named after their GitHub username; teams and repos after
    their `name` field.
    """
    logger.info("Validating file names...")
    errors: list[ValidationError] = []

    for key, contributor in store.contributors.items():
        if key.name != contributor.github_username:
            errors.append(
                ValidationError(
                    file=key.file_path,
                    message=(
                        f"Contributor file name '{key.name}' doesn't match "
                        f"GitHub username '{contributor.github_username}'"
                    ),
                )
            )

    for key, team in store.teams.items():
        if key.name != team.name:
            errors.append(
                ValidationError(
                    file=key.file_path,
                    message=f"Team file name '{key.name}' doesn't match team name '{team.name}'",
                )
            )

    for key, repo in store.repos.items():
        if key.name != repo.name:
            errors.append(
                ValidationError(
                    file=key.file_path,
                    message=f"Repo file name '{key.name}' doesn't match repo name '{repo.name}'",
                )
            )

    return errors


def validate_cross_references(store: EntityStore) -> list[ValidationError]:
    """One error per team member or team repo that names no loaded record."""
    logger.info("Validating cross-references...")
    errors: list[ValidationError] = []

    for team_key, team in store.teams.items():
        for member in team.members:
            if not store.has_contributor(member):
                errors.append(
                    ValidationError(
                        file=team_key.file_path,
                        message=f"Team '{team_key.name}' references non-existent contributor: {member}",
                    )
                )
        for repo in team.repos:
            if not store.has_repo(repo):
                errors.append(
                    ValidationError(
                        file=team_key.file_path,
                        message=f"Team '{team_key.name}' references non-existent repo: {repo}",
                    )
                )

    return errors
