"""Persistent monitored-repository set and wanted issue types."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .async_client import AsyncGitHubClient, GitHubApiError
from .config import DEFAULT_ISSUE_TYPES, ISSUE_CATEGORIES, WATCHLIST_PATH
from .models import RepositoryRef
from .url_rules import parse_repository_url

log = logging.getLogger(__name__)


class Watchlist:
    """Load / save / edit the JSON watchlist file."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else WATCHLIST_PATH
        self.repositories: tuple[RepositoryRef, ...] = ()
        self.issue_types: tuple[str, ...] = DEFAULT_ISSUE_TYPES
        self._load()

    # ── Persistence ─────────────────────────────────────────────

    def _load(self):
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text())
            self.repositories = tuple(RepositoryRef.from_dict(r) for r in data.get("repositories", []))
            self.issue_types = tuple(data.get("issue_types") or DEFAULT_ISSUE_TYPES)
        except (OSError, ValueError, TypeError) as exc:
            log.warning("Ignoring unreadable watchlist %s: %s", self.path, exc)

    def save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "repositories": [r.to_dict() for r in self.repositories],
            "issue_types": list(self.issue_types),
        }
        self.path.write_text(json.dumps(payload, indent=2))

    # ── Edits ───────────────────────────────────────────────────

    def add(self, repo: RepositoryRef) -> bool:
        if any(r.id == repo.id for r in self.repositories):
            return False
        self.repositories = self.repositories + (repo,)
        self.save()
        return True

    def remove(self, full_name: str) -> bool:
        kept = tuple(r for r in self.repositories if r.full_name.lower() != full_name.lower())
        if len(kept) == len(self.repositories):
            return False
        self.repositories = kept
        self.save()
        return True

    def set_issue_types(self, issue_types: list[str]) -> None:
        unknown = [t for t in issue_types if t not in ISSUE_CATEGORIES]
        if unknown:
            raise ValueError(f"Unknown issue type(s): {', '.join(unknown)}")
        self.issue_types = tuple(dict.fromkeys(issue_types))
        self.save()


async def add_custom_repository(
    client: AsyncGitHubClient,
    url: str,
    selected: tuple[RepositoryRef, ...],
) -> tuple[RepositoryRef, ...]:
    """Return ``selected`` plus the repository behind ``url``.

    Malformed URLs are rejected before any request is made; they, and
    fetch failures, leave the selection unchanged.
    """
    parsed = parse_repository_url(url)
    if not parsed:
        log.warning("Not a GitHub repository URL: %r", url)
        return selected
    owner, name = parsed
    try:
        repo = await client.get_repository(owner, name)
    except GitHubApiError as exc:
        log.warning("Failed to fetch repository %s/%s: %s", owner, name, exc)
        return selected
    if any(r.id == repo.id for r in selected):
        return selected
    return selected + (repo,)
