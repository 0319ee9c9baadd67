"""Rule-based issue classification: category, priority and difficulty.

Every rule is a case-insensitive substring check over the label names
and the title. Categories are decided by one ordered table, first match
wins:

1. beginner-signal labels (good first issue, docs, beginner, help wanted)
2. topical labels (feature ... typo)
3. the same topics guessed from the title, only if no label matched
4. ``other``

Label evidence therefore always beats title evidence, and a beginner
label beats everything else, including ``bug``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .config import BEGINNER_LABELS
from .models import Classification, ClassifiedIssue, RawIssue, RepositoryRef


def _any(texts: tuple[str, ...], terms: tuple[str, ...]) -> bool:
    return any(term in t for t in texts for term in terms)


@dataclass(frozen=True)
class _Evidence:
    labels: tuple[str, ...]
    title: str

    @classmethod
    def of(cls, issue: RawIssue) -> "_Evidence":
        return cls(
            labels=tuple(name.lower() for name in issue.label_names),
            title=(issue.title or "").lower(),
        )

    @property
    def beginner_signal(self) -> bool:
        return _any(self.labels, BEGINNER_LABELS)


Rule = Callable[[_Evidence], bool]


def _labels(*terms: str) -> Rule:
    return lambda ev: _any(ev.labels, terms)


def _title(*terms: str) -> Rule:
    return lambda ev: _any((ev.title,), terms)


CATEGORY_RULES: tuple[tuple[str, Rule], ...] = (
    ("good-first-issue", _labels("good first issue", "good-first-issue")),
    ("documentation", _labels("documentation", "docs")),
    ("beginner-friendly", _labels(
        "beginner", "easy", "starter", "newcomer", "first-timers-only",
        "low-hanging-fruit", "junior-job",
    )),
    ("help-wanted", _labels("help wanted", "up-for-grabs")),

    ("feature", _labels("feature", "new feature")),
    ("performance", _labels("performance", "optimization")),
    ("ui-ux", _labels("ui", "ux", "design")),
    ("testing", _labels("test", "testing")),
    ("refactoring", _labels("refactor", "cleanup")),
    ("accessibility", _labels("accessibility", "a11y")),
    ("api", _labels("api")),
    ("database", _labels("database", "db")),
    ("deployment", _labels("deploy", "ci", "cd")),
    ("security", _labels("security", "vulnerability")),
    ("bug", _labels("bug", "fix")),
    ("enhancement", _labels("enhancement")),
    ("typo", _labels("typo", "spelling")),

    ("feature", _title("add ", "implement")),
    ("performance", _title("optimize", "performance")),
    ("ui-ux", _title("ui", "design")),
    ("testing", _title("test")),
    ("refactoring", _title("refactor", "cleanup")),
    ("accessibility", _title("accessibility")),
    ("api", _title("api")),
    ("database", _title("database")),
    ("deployment", _title("deploy")),
    ("bug", _title("bug", "error")),
    ("enhancement", _title("feature")),
)

_HIGH_PRIORITY = ("critical", "urgent", "high")
_MEDIUM_PRIORITY = ("medium", "important")

_BEGINNER_DIFFICULTY = (
    "good first issue", "beginner", "easy", "starter", "first-timers-only",
    "documentation", "typo",
)
_ADVANCED_LABELS = ("advanced", "complex", "architecture", "performance", "security")
_ADVANCED_TITLE = ("refactor", "optimize")


def categorize(issue: RawIssue) -> str:
    ev = _Evidence.of(issue)
    for category, rule in CATEGORY_RULES:
        if rule(ev):
            return category
    return "other"


def priority(issue: RawIssue) -> str:
    ev = _Evidence.of(issue)
    # Beginner issues are learning material, never urgent.
    if ev.beginner_signal:
        return "low"
    if _any(ev.labels, _HIGH_PRIORITY):
        return "high"
    if _any(ev.labels, _MEDIUM_PRIORITY):
        return "medium"
    return "low"


def difficulty(issue: RawIssue) -> str:
    ev = _Evidence.of(issue)
    if _any(ev.labels, _BEGINNER_DIFFICULTY):
        return "beginner"
    if _any(ev.labels, _ADVANCED_LABELS) or _any((ev.title,), _ADVANCED_TITLE):
        return "advanced"
    return "intermediate"


def classify(issue: RawIssue) -> Classification:
    return Classification(
        category=categorize(issue),
        priority=priority(issue),
        difficulty=difficulty(issue),
    )


def classify_issue(issue: RawIssue, repository: str | None = None) -> ClassifiedIssue:
    c = classify(issue)
    return ClassifiedIssue(
        issue=issue,
        repository=repository or issue.repository_full_name,
        category=c.category,
        priority=c.priority,
        difficulty=c.difficulty,
    )


_TOPIC_BADGES = (
    ("good-first-issue", "Good First Issue"),
    ("beginner-friendly", "Beginner Friendly"),
    ("hacktoberfest", "Hacktoberfest"),
    ("documentation", "Docs"),
)


def repository_badges(repo: RepositoryRef) -> list[str]:
    topics = set(repo.topics)
    return [badge for topic, badge in _TOPIC_BADGES if topic in topics]
