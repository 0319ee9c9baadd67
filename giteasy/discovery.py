"""Issue and repository discovery.

The issue search endpoint cannot rank by issue recency and owning-repo
popularity at once, so the "recent issues from popular repos" mode runs in
two stages:

  A. find well-starred beginner-friendly repositories
  B. search recent issues scoped to the top candidates, then rank them
     with the hybrid score

If either stage fails the engine quietly falls back to a plain single-stage
search sorted by ``updated``.
"""

from __future__ import annotations

import logging

from .async_client import AsyncGitHubClient, GitHubApiError
from .config import (
    BEGINNER_REPO_RESULTS,
    BEGINNER_REPOS,
    CANDIDATE_MIN_STARS,
    CANDIDATE_REPO_RESULTS,
    CURATED_LIMIT,
    DISCOVERY_MIN_STARS,
    ISSUE_RESULTS_LIMIT,
    ISSUE_SEARCH_CAP,
    MAX_COMMENTS_TWO_STAGE,
    MAX_REPO_FILTER,
    TWO_STAGE_ISSUE_RESULTS,
)
from .models import RawIssue, RepositoryRef, ScoredIssue, SearchFilters
from .queries import build_issue_query, build_repository_query
from .scoring import rank_scored, score_issue, sort_issues, sort_repositories
from .url_rules import split_full_name

log = logging.getLogger(__name__)


class DiscoveryEngine:
    """Turns search filters into ranked issue or repository lists."""

    def __init__(self, client: AsyncGitHubClient):
        self.client = client

    async def search(
        self, filters: SearchFilters,
    ) -> list[ScoredIssue] | list[RawIssue] | list[RepositoryRef]:
        if filters.scope == "repositories":
            return await self.search_beginner_repos(
                filters.language, filters.primary_sort, filters.secondary_sort,
            )
        return await self.search_issues(filters)

    async def search_issues(self, filters: SearchFilters) -> list[ScoredIssue] | list[RawIssue]:
        # Only this exact sort pair selects the two-stage strategy.
        if filters.primary_sort == "updated" and filters.secondary_sort == "stars":
            return await self.recent_issues_from_popular_repos(filters.language, filters.label)
        return await self.single_stage(
            filters.language, filters.label, filters.primary_sort, filters.secondary_sort,
        )

    async def single_stage(
        self,
        language: str | None = None,
        label: str | None = None,
        primary: str = "updated",
        secondary: str | None = None,
    ) -> list[RawIssue]:
        query = build_issue_query(language=language, label=label)
        issues = await self.client.search_issues(query, sort=primary, limit=ISSUE_SEARCH_CAP)
        return sort_issues(issues, primary, secondary)[:ISSUE_RESULTS_LIMIT]

    async def recent_issues_from_popular_repos(
        self, language: str | None = None, label: str | None = None,
    ) -> list[ScoredIssue] | list[RawIssue]:
        try:
            return await self._two_stage(language, label)
        except Exception as exc:
            log.warning("Two-stage search failed (%s); falling back to single-stage search", exc)
        return await self.single_stage(language, label, "updated")

    async def _two_stage(self, language: str | None, label: str | None) -> list[ScoredIssue]:
        # State A: candidate repositories
        repos = await self.client.search_repositories(
            build_repository_query(language, min_stars=CANDIDATE_MIN_STARS),
            sort="stars",
            limit=CANDIDATE_REPO_RESULTS,
        )
        candidates = repos[:MAX_REPO_FILTER]
        if not candidates:
            raise ValueError("no candidate repositories")

        # State B: recent issues scoped to the candidates
        query = build_issue_query(
            label=label,
            repositories=[r.full_name for r in candidates],
            max_comments=MAX_COMMENTS_TWO_STAGE,
        )
        issues = await self.client.search_issues(query, sort="updated", limit=TWO_STAGE_ISSUE_RESULTS)

        stars = {r.full_name.lower(): r.stars for r in repos}
        scored = [
            score_issue(issue, stars.get(issue.repository_full_name.lower(), 0))
            for issue in issues
        ]
        log.debug("Two-stage search: %d candidates, %d issues", len(candidates), len(scored))
        return rank_scored(scored)

    async def search_beginner_repos(
        self,
        language: str | None = None,
        primary: str = "stars",
        secondary: str | None = None,
    ) -> list[RepositoryRef]:
        repos = await self.client.search_repositories(
            build_repository_query(language, min_stars=DISCOVERY_MIN_STARS),
            sort=primary,
            limit=BEGINNER_REPO_RESULTS,
        )
        return sort_repositories(repos, primary, secondary)

    async def curated_repositories(self, limit: int = CURATED_LIMIT) -> list[RepositoryRef]:
        """Fetch the curated list one at a time, skipping unreachable repos."""
        repos: list[RepositoryRef] = []
        for full_name in BEGINNER_REPOS[:limit]:
            try:
                owner, name = split_full_name(full_name)
                repos.append(await self.client.get_repository(owner, name))
            except (GitHubApiError, ValueError) as exc:
                log.warning("Failed to fetch %s: %s", full_name, exc)
        return repos
