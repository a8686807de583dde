"""Graph data for visualizing governance membership.

Three views over the same records:
- default: contributors + teams, team-member links
- teamsRepos: teams + repos, team-repo links
- contributorsRepos: contributors + repos, linked through shared teams
"""

from __future__ import annotations

from typing import Any

from governance.adapters.entity_store import EntityStore
from governance.models.entities import EntityKey, contributor_key, repo_key

Node = dict[str, Any]
Link = dict[str, str]


def _node(node_type: str, key: EntityKey, record) -> Node:
    return {"nodeType": node_type, "id": key.scoped_id, **record.model_dump(by_alias=True, exclude_none=True)}


def _link(source: EntityKey, target: EntityKey, link_type: str) -> Link:
    return {"source": source.scoped_id, "target": target.scoped_id, "linkType": link_type}


def _contributor_nodes(store: EntityStore) -> list[Node]:
    return [_node("Contributor", key, c) for key, c in store.contributors.items()]


def _team_nodes(store: EntityStore) -> list[Node]:
    return [_node("Team", key, t) for key, t in store.teams.items()]


def _repo_nodes(store: EntityStore) -> list[Node]:
    return [_node("Repo", key, r) for key, r in store.repos.items()]


def contributors_teams_graph(store: EntityStore) -> dict[str, list]:
    links = [
        _link(team_id, contributor_key(member), "team-member")
        for team_id, team in store.teams.items()
        for member in team.members
    ]
    return {"nodes": _contributor_nodes(store) + _team_nodes(store), "links": links}


def teams_repos_graph(store: EntityStore) -> dict[str, list]:
    links = [
        _link(team_id, repo_key(repo), "team-repo")
        for team_id, team in store.teams.items()
        for repo in team.repos
    ]
    return {"nodes": _team_nodes(store) + _repo_nodes(store), "links": links}


def contributors_repos_graph(store: EntityStore) -> dict[str, list]:
    repos_by_contributor: dict[str, set[str]] = {}
    for team in store.teams.values():
        for member in team.members:
            repos_by_contributor.setdefault(member, set()).update(team.repos)

    links = [
        _link(contributor_key(member), repo_key(repo), "contributor-repo")
        for member in sorted(repos_by_contributor)
        for repo in sorted(repos_by_contributor[member])
    ]
    return {"nodes": _contributor_nodes(store) + _repo_nodes(store), "links": links}


def build_graph_data(store: EntityStore) -> dict[str, dict[str, list]]:
    return {
        "default": contributors_teams_graph(store),
        "teamsRepos": teams_repos_graph(store),
        "contributorsRepos": contributors_repos_graph(store),
    }
