"""Search query construction for the GitHub search endpoints."""

from __future__ import annotations

from collections.abc import Iterable

from .config import (
    BEGINNER_TOPICS,
    DEFAULT_LABEL,
    DISCOVERY_MIN_STARS,
    MAX_COMMENTS,
    MAX_QUERY_LENGTH,
    MAX_REPO_FILTER,
    MIN_COMMENTS,
)

BASE_ISSUE_PREDICATE = "is:issue is:open"


def _qualifier(key: str, value: str) -> str:
    value = value.strip().strip('"')
    if any(ch.isspace() for ch in value):
        return f'{key}:"{value}"'
    return f"{key}:{value}"


def label_clause(label: str | None) -> str:
    value = (label or "").strip().strip('"') or DEFAULT_LABEL
    return f'label:"{value}"'


def language_clause(language: str | None) -> str | None:
    if not language or not language.strip():
        return None
    return _qualifier("language", language)


def quality_filter(max_comments: int = MAX_COMMENTS) -> str:
    return f"comments:>={MIN_COMMENTS} comments:<={max_comments}"


def topic_clause(topics: Iterable[str] = BEGINNER_TOPICS) -> str:
    return " OR ".join(f"topic:{t}" for t in topics)


def repository_filter(
    names: Iterable[str],
    limit: int = MAX_REPO_FILTER,
    budget: int = MAX_QUERY_LENGTH,
) -> str:
    """OR'd ``repo:`` clause over the top ``limit`` names.

    Names are dropped from the tail until the clause fits in ``budget``
    characters; at least one name is kept.
    """
    picked: list[str] = []
    for name in names:
        name = name.strip()
        if name and name not in picked:
            picked.append(name)
        if len(picked) >= limit:
            break
    if not picked:
        return ""

    def render(items: list[str]) -> str:
        return "(" + " OR ".join(f"repo:{n}" for n in items) + ")"

    clause = render(picked)
    while len(picked) > 1 and len(clause) > budget:
        picked.pop()
        clause = render(picked)
    return clause


def build_issue_query(
    language: str | None = None,
    label: str | None = None,
    repositories: Iterable[str] = (),
    max_comments: int = MAX_COMMENTS,
) -> str:
    parts = [BASE_ISSUE_PREDICATE, label_clause(label)]
    lang = language_clause(language)
    if lang:
        parts.append(lang)
    repos = repository_filter(
        repositories,
        budget=MAX_QUERY_LENGTH - len(" ".join(parts)) - len(quality_filter(max_comments)) - 2,
    )
    if repos:
        parts.append(repos)
    parts.append(quality_filter(max_comments))
    return " ".join(parts)


def build_repository_query(language: str | None = None, min_stars: int = DISCOVERY_MIN_STARS) -> str:
    parts = [topic_clause()]
    lang = language_clause(language)
    if lang:
        parts.append(lang)
    parts.append(f"stars:>{min_stars}")
    return " ".join(parts)


def issue_sort_key(intent: str) -> str:
    # Issues have no star count; reactions is the closest popularity signal.
    return "reactions" if intent == "stars" else intent


def search_params(query: str, sort: str, per_page: int) -> dict[str, str]:
    return {
        "q": query,
        "sort": sort,
        "order": "desc",
        "per_page": str(per_page),
    }
