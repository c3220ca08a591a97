"""Fetch repositories and activity counters for a GitHub user."""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from .aggregator import filter_repositories, lowercase_trim
from .errors import InputError, UpstreamError
from .github.client import GitHubClient
from .models import ActivityCounters, Language, Repository, UserStats
from .rank import calculate_rank

logger = logging.getLogger(__name__)

GITHUB_USERNAME_RE = re.compile(r"^[a-z\d](?:[a-z\d]|-(?=[a-z\d])){0,38}$", re.IGNORECASE)

TOP_LANGUAGES_QUERY = """
query userInfo($login: String!) {
  user(login: $login) {
    repositories(ownerAffiliations: OWNER, isFork: false, first: 100) {
      nodes {
        name
        stargazers { totalCount }
        languages(first: 10, orderBy: {field: SIZE, direction: DESC}) {
          edges {
            size
            node { color name }
          }
        }
      }
    }
  }
}
"""

STATS_QUERY = """
query userInfo($login: String!) {
  user(login: $login) {
    name
    login
    contributionsCollection {
      totalCommitContributions
      restrictedContributionsCount
    }
    repositoriesContributedTo(first: 1, contributionTypes: [COMMIT, ISSUE, PULL_REQUEST, REPOSITORY]) {
      totalCount
    }
    pullRequests(first: 1) { totalCount }
    issues(first: 1) { totalCount }
    followers { totalCount }
    repositories(first: 100, ownerAffiliations: OWNER, isFork: false, orderBy: {direction: DESC, field: STARGAZERS}) {
      totalCount
      nodes {
        stargazers { totalCount }
        primaryLanguage { name color }
      }
    }
  }
}
"""


def _user(payload: dict[str, Any]) -> dict[str, Any]:
    errors = payload.get("errors")
    if errors:
        logger.error("GitHub query failed: %s", errors)
        raise UpstreamError(errors[0].get("message") or "Could not fetch user")
    user = (payload.get("data") or {}).get("user")
    if user is None:
        raise UpstreamError("Could not fetch user")
    return user


def _require_username(username: str | None) -> str:
    if not username:
        raise InputError("Invalid username")
    return username


def parse_repository(node: dict[str, Any]) -> Repository:
    edges = (node.get("languages") or {}).get("edges") or []
    return Repository(
        name=node["name"],
        languages=[
            Language(name=edge["node"]["name"], size=edge["size"], color=edge["node"].get("color"))
            for edge in edges
        ],
        stargazers=(node.get("stargazers") or {}).get("totalCount", 0),
    )


async def fetch_top_languages(
    client: GitHubClient,
    username: str,
    exclude_repo: list[str] | None = None,
) -> list[Repository]:
    """Fetch the user's own, non-fork repositories with their language sizes.

    Repositories matching an ``exclude_repo`` glob are dropped here.
    """
    username = _require_username(username)
    payload = await client.graphql(TOP_LANGUAGES_QUERY, {"login": username})
    nodes = _user(payload)["repositories"]["nodes"]
    repos = [parse_repository(node) for node in nodes]
    return filter_repositories(repos, exclude_repo or [])


async def fetch_total_commits(client: GitHubClient, username: str) -> int:
    """Count all commits authored by ``username``; 0 when the search fails."""
    if not GITHUB_USERNAME_RE.match(username):
        logger.warning("Invalid username %r, skipping commit search", username)
        return 0
    try:
        return await client.search_commits_count(username)
    except (httpx.HTTPError, UpstreamError) as exc:
        logger.warning("Commit search for %s failed: %s", username, exc)
        return 0


def language_slug(name: str) -> str:
    """``"Jupyter Notebook"`` -> ``"jupyter-notebook"``."""
    return "-".join(lowercase_trim(name).split())


def _primary_languages(nodes: list[dict[str, Any]]) -> list[Language]:
    unique: dict[str, Language] = {}
    for node in nodes:
        primary = node.get("primaryLanguage")
        if primary:
            unique[language_slug(primary["name"])] = Language(
                name=primary["name"], size=0, color=primary.get("color")
            )
    return list(unique.values())


async def fetch_stats(
    client: GitHubClient,
    username: str,
    count_private: bool = False,
    include_all_commits: bool = False,
) -> UserStats:
    username = _require_username(username)
    payload = await client.graphql(STATS_QUERY, {"login": username})
    user = _user(payload)

    extra_commits = 0
    if include_all_commits:
        extra_commits = await fetch_total_commits(client, username)

    contributions = user["contributionsCollection"]
    total_commits = contributions["totalCommitContributions"] + extra_commits
    if count_private:
        total_commits += contributions["restrictedContributionsCount"]

    repositories = user["repositories"]
    stats = UserStats(
        name=user.get("name") or user["login"],
        total_prs=user["pullRequests"]["totalCount"],
        total_commits=total_commits,
        total_issues=user["issues"]["totalCount"],
        total_stars=sum(node["stargazers"]["totalCount"] for node in repositories["nodes"]),
        contributed_to=user["repositoriesContributedTo"]["totalCount"],
        primary_languages=_primary_languages(repositories["nodes"]),
    )
    stats.rank = calculate_rank(
        ActivityCounters(
            total_repos=repositories["totalCount"],
            total_commits=stats.total_commits,
            contributions=stats.contributed_to,
            followers=user["followers"]["totalCount"],
            prs=stats.total_prs,
            issues=stats.total_issues,
            stargazers=stats.total_stars,
        )
    )
    return stats
