"""Async GitHub REST client built on aiohttp.

One GET per logical operation. Failures are normalised into
``GitHubApiError``; nothing is retried here, callers decide how to degrade.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from .config import (
    ACCEPT,
    API,
    ISSUE_SEARCH_CAP,
    LIST_PER_PAGE,
    REPO_SEARCH_CAP,
    REPO_SORTS,
    REQUEST_TIMEOUT_S,
)
from .credentials import CredentialStore
from .models import RawIssue, RepositoryRef, User
from .queries import issue_sort_key, search_params

log = logging.getLogger(__name__)


class GitHubApiError(RuntimeError):
    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status

    @property
    def is_auth_failure(self) -> bool:
        return self.status == 401


class AsyncGitHubClient:
    """Thin async wrapper over the endpoints giteasy needs."""

    def __init__(
        self,
        credentials: CredentialStore | None = None,
        session: aiohttp.ClientSession | None = None,
        base_url: str = API,
        timeout: int = REQUEST_TIMEOUT_S,
    ):
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "AsyncGitHubClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self):
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    def _auth_headers(self) -> dict[str, str]:
        headers = {"Accept": ACCEPT}
        token = self.credentials.get() if self.credentials else None
        if token:
            headers["Authorization"] = f"token {token}"
        return headers

    @staticmethod
    async def _error_message(resp: aiohttp.ClientResponse) -> str:
        try:
            data = await resp.json(content_type=None)
        except (ValueError, aiohttp.ClientError):
            data = None
        if isinstance(data, dict) and isinstance(data.get("message"), str) and data["message"]:
            return data["message"]
        return f"HTTP {resp.status}"

    async def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        session = await self._ensure_session()
        url = f"{self.base_url}{path}"
        log.debug("GET %s %s", url, params or "")
        try:
            async with session.get(
                url,
                params=params,
                headers=self._auth_headers(),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as resp:
                if not 200 <= resp.status < 300:
                    message = await self._error_message(resp)
                    log.debug("GitHub %s -> %d: %s", path, resp.status, message)
                    raise GitHubApiError(message, status=resp.status)
                try:
                    return await resp.json(content_type=None)
                except ValueError as exc:
                    raise GitHubApiError(f"Malformed response from {path}", status=resp.status) from exc
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise GitHubApiError(str(exc) or exc.__class__.__name__) from exc

    async def _get_items(self, path: str, params: dict[str, str]) -> list[dict]:
        data = await self._get_json(path, params)
        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise GitHubApiError(f"Malformed search response from {path}")
        return data["items"]

    async def _get_list(self, path: str, params: dict[str, str]) -> list[dict]:
        data = await self._get_json(path, params)
        if not isinstance(data, list):
            raise GitHubApiError(f"Expected a list from {path}, got {type(data).__name__}")
        return data

    # ── User ─────────────────────────────────────────────────────

    async def get_current_user(self) -> User:
        data = await self._get_json("/user")
        if not isinstance(data, dict):
            raise GitHubApiError("Malformed response from /user")
        return User.from_api(data)

    async def list_user_repositories(self, username: str | None = None) -> list[RepositoryRef]:
        path = f"/users/{username}/repos" if username else "/user/repos"
        items = await self._get_list(path, {"sort": "updated", "per_page": str(LIST_PER_PAGE)})
        return [RepositoryRef.from_api(r) for r in items]

    # ── Repositories ─────────────────────────────────────────────

    async def get_repository(self, owner: str, name: str) -> RepositoryRef:
        data = await self._get_json(f"/repos/{owner}/{name}")
        if not isinstance(data, dict):
            raise GitHubApiError(f"Malformed response for {owner}/{name}")
        return RepositoryRef.from_api(data)

    async def list_repository_issues(self, owner: str, name: str, state: str = "open") -> list[RawIssue]:
        items = await self._get_list(
            f"/repos/{owner}/{name}/issues",
            {"state": state, "sort": "updated", "per_page": str(LIST_PER_PAGE)},
        )
        # This endpoint also returns pull requests.
        return [RawIssue.from_api(i) for i in items if "pull_request" not in i]

    async def search_repositories(
        self, query: str, sort: str = "stars", limit: int = REPO_SEARCH_CAP,
    ) -> list[RepositoryRef]:
        if sort not in REPO_SORTS:
            raise ValueError(f"Unsupported repository sort: {sort}")
        per_page = max(1, min(limit, REPO_SEARCH_CAP))
        items = await self._get_items("/search/repositories", search_params(query, sort, per_page))
        return [RepositoryRef.from_api(r) for r in items[:per_page]]

    # ── Issues ───────────────────────────────────────────────────

    async def search_issues(
        self, query: str, sort: str = "updated", limit: int = ISSUE_SEARCH_CAP,
    ) -> list[RawIssue]:
        per_page = max(1, min(limit, ISSUE_SEARCH_CAP))
        items = await self._get_items("/search/issues", search_params(query, issue_sort_key(sort), per_page))
        return [RawIssue.from_api(i) for i in items[:per_page]]
