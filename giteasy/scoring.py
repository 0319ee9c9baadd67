from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Any

from .config import (
    POPULARITY_WEIGHT,
    RECENCY_HORIZON_DAYS,
    RECENCY_WEIGHT,
)
from .models import RawIssue, RepositoryRef, ScoredIssue

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def recency_score(updated_at: str | None, now: datetime | None = None) -> float:
    ts = parse_timestamp(updated_at)
    if ts is None:
        return 0.0
    now = now or datetime.now(timezone.utc)
    days = (now - ts).total_seconds() / 86400
    return max(0.0, RECENCY_HORIZON_DAYS - days)


def popularity_score(stars: int) -> float:
    # log10 keeps a 100k-star repo from drowning out a 1k-star one.
    return math.log10(max(1, stars)) * 10


def hybrid_score(issue: RawIssue, repo_stars: int, now: datetime | None = None) -> float:
    return (
        RECENCY_WEIGHT * recency_score(issue.updated_at, now)
        + POPULARITY_WEIGHT * popularity_score(repo_stars)
    )


def score_issue(issue: RawIssue, repo_stars: int, now: datetime | None = None) -> ScoredIssue:
    return ScoredIssue(issue=issue, repository_stars=repo_stars, score=hybrid_score(issue, repo_stars, now))


def rank_scored(scored: Iterable[ScoredIssue]) -> list[ScoredIssue]:
    return sorted(scored, key=lambda s: s.score, reverse=True)


# ── Primary / secondary sort composition ─────────────────────

def _timestamp_key(value: str) -> datetime:
    return parse_timestamp(value) or _EPOCH


ISSUE_SORT_KEYS: dict[str, Callable[[RawIssue], Any]] = {
    "stars": lambda i: i.reactions,
    "updated": lambda i: _timestamp_key(i.updated_at),
    "created": lambda i: _timestamp_key(i.created_at),
}

REPO_SORT_KEYS: dict[str, Callable[[RepositoryRef], Any]] = {
    "stars": lambda r: r.stars,
    "updated": lambda r: _timestamp_key(r.updated_at),
    "forks": lambda r: r.forks,
}


def _composite(keys: dict[str, Callable], primary: str, secondary: str | None) -> Callable:
    if primary not in keys:
        raise ValueError(f"Unknown sort key: {primary}")
    first = keys[primary]
    if not secondary or secondary == primary:
        return first
    if secondary not in keys:
        raise ValueError(f"Unknown sort key: {secondary}")
    second = keys[secondary]
    return lambda item: (first(item), second(item))


def sort_issues(issues: Iterable[RawIssue], primary: str, secondary: str | None = None) -> list[RawIssue]:
    """Descending by ``primary``; ``secondary`` only breaks ties.

    Without a secondary key, ties keep the order the platform returned.
    """
    return sorted(issues, key=_composite(ISSUE_SORT_KEYS, primary, secondary), reverse=True)


def sort_repositories(
    repos: Iterable[RepositoryRef], primary: str, secondary: str | None = None,
) -> list[RepositoryRef]:
    return sorted(repos, key=_composite(REPO_SORT_KEYS, primary, secondary), reverse=True)
