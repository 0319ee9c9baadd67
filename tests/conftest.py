from __future__ import annotations

import itertools

import pytest

from giteasy.async_client import GitHubApiError
from giteasy.models import Label, RawIssue, RepositoryRef

_ids = itertools.count(1)


def _issue(
    title: str = "Some issue",
    labels: tuple[str, ...] = (),
    repo: str = "octo/widgets",
    updated_at: str = "2024-01-01T00:00:00Z",
    created_at: str = "2024-01-01T00:00:00Z",
    reactions: int = 0,
    state: str = "open",
    number: int | None = None,
) -> RawIssue:
    n = next(_ids)
    return RawIssue(
        id=n,
        number=number or n,
        title=title,
        state=state,
        created_at=created_at,
        updated_at=updated_at,
        labels=tuple(Label(name=l) for l in labels),
        author="alice",
        repository_url=f"https://api.github.com/repos/{repo}",
        html_url=f"https://github.com/{repo}/issues/{number or n}",
        reactions=reactions,
    )


def _repo(full_name: str = "octo/widgets", stars: int = 1000, **kwargs) -> RepositoryRef:
    return RepositoryRef(id=kwargs.pop("id", next(_ids)), full_name=full_name, stars=stars, **kwargs)


@pytest.fixture
def make_issue():
    return _issue


@pytest.fixture
def make_repo():
    return _repo


class FakeClient:
    """Records calls and serves canned results instead of hitting GitHub."""

    def __init__(self, repo_results=None, issue_results=None, repo_issues=None, repositories=None):
        self.repo_results = repo_results if repo_results is not None else []
        self.issue_results = list(issue_results or [])
        self.repo_issues = repo_issues or {}
        self.repositories = repositories or {}
        self.calls: list[tuple] = []

    async def search_repositories(self, query, sort="stars", limit=50):
        self.calls.append(("search_repositories", query, sort, limit))
        if isinstance(self.repo_results, Exception):
            raise self.repo_results
        return list(self.repo_results)

    async def search_issues(self, query, sort="updated", limit=100):
        self.calls.append(("search_issues", query, sort, limit))
        result = self.issue_results.pop(0) if len(self.issue_results) > 1 else self.issue_results[0]
        if isinstance(result, Exception):
            raise result
        return list(result)

    async def list_repository_issues(self, owner, name, state="open"):
        full_name = f"{owner}/{name}"
        self.calls.append(("list_repository_issues", full_name))
        result = self.repo_issues[full_name]
        if isinstance(result, Exception):
            raise result
        return list(result)

    async def get_repository(self, owner, name):
        full_name = f"{owner}/{name}"
        self.calls.append(("get_repository", full_name))
        if full_name not in self.repositories:
            raise GitHubApiError("Not Found", status=404)
        return self.repositories[full_name]


@pytest.fixture
def fake_client_cls():
    return FakeClient
