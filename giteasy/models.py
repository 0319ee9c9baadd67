from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from .config import BEGINNER_CATEGORIES, NOTIFICATION_LIMIT
from .url_rules import repo_full_name_from_api_url


@dataclass(frozen=True)
class Label:
    name: str
    color: str = ""


@dataclass(frozen=True)
class RepositoryRef:
    id: int
    full_name: str
    stars: int = 0
    open_issues: int = 0
    language: str | None = None
    private: bool = False
    topics: tuple[str, ...] = ()
    description: str = ""
    forks: int = 0
    updated_at: str = ""
    html_url: str = ""

    @property
    def owner(self) -> str:
        return self.full_name.partition("/")[0]

    @property
    def name(self) -> str:
        return self.full_name.partition("/")[2]

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RepositoryRef":
        full_name = data.get("full_name") or ""
        return cls(
            id=int(data.get("id") or 0),
            full_name=full_name,
            stars=max(0, int(data.get("stargazers_count") or 0)),
            open_issues=int(data.get("open_issues_count") or 0),
            language=data.get("language"),
            private=bool(data.get("private", False)),
            topics=tuple(data.get("topics") or ()),
            description=data.get("description") or "",
            forks=int(data.get("forks_count") or 0),
            updated_at=data.get("updated_at") or "",
            html_url=data.get("html_url") or f"https://github.com/{full_name}",
        )

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["topics"] = list(self.topics)
        return payload

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RepositoryRef":
        data = dict(data)
        data["topics"] = tuple(data.get("topics") or ())
        return cls(**data)


@dataclass(frozen=True)
class RawIssue:
    id: int
    number: int
    title: str
    body: str = ""
    state: str = "open"
    created_at: str = ""
    updated_at: str = ""
    labels: tuple[Label, ...] = ()
    author: str = ""
    repository_url: str = ""
    html_url: str = ""
    comments: int = 0
    assignee: str | None = None
    reactions: int = 0

    @property
    def label_names(self) -> tuple[str, ...]:
        return tuple(label.name for label in self.labels)

    @property
    def repository_full_name(self) -> str:
        return repo_full_name_from_api_url(self.repository_url)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RawIssue":
        labels = []
        for item in data.get("labels") or ():
            # The API allows bare label strings in some payloads.
            if isinstance(item, str):
                labels.append(Label(name=item))
            elif isinstance(item, dict):
                labels.append(Label(name=item.get("name") or "", color=item.get("color") or ""))
        assignee = data.get("assignee") or None
        return cls(
            id=int(data.get("id") or 0),
            number=int(data.get("number") or 0),
            title=data.get("title") or "",
            body=data.get("body") or "",
            state=data.get("state") or "open",
            created_at=data.get("created_at") or "",
            updated_at=data.get("updated_at") or "",
            labels=tuple(labels),
            author=(data.get("user") or {}).get("login", ""),
            repository_url=data.get("repository_url") or "",
            html_url=data.get("html_url") or "",
            comments=int(data.get("comments") or 0),
            assignee=assignee.get("login") if isinstance(assignee, dict) else assignee,
            reactions=int((data.get("reactions") or {}).get("total_count") or 0),
        )


@dataclass(frozen=True)
class Classification:
    category: str
    priority: str
    difficulty: str


@dataclass(frozen=True)
class ClassifiedIssue:
    issue: RawIssue
    repository: str
    category: str
    priority: str
    difficulty: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.issue.id,
            "number": self.issue.number,
            "title": self.issue.title,
            "repository": self.repository,
            "url": self.issue.html_url,
            "state": self.issue.state,
            "created_at": self.issue.created_at,
            "updated_at": self.issue.updated_at,
            "author": self.issue.author,
            "labels": list(self.issue.label_names),
            "comments": self.issue.comments,
            "assignee": self.issue.assignee,
            "category": self.category,
            "priority": self.priority,
            "difficulty": self.difficulty,
        }


@dataclass(frozen=True)
class ScoredIssue:
    issue: RawIssue
    repository_stars: int
    score: float


@dataclass(frozen=True)
class User:
    login: str
    id: int = 0
    name: str = ""
    email: str = ""
    public_repos: int = 0
    avatar_url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "User":
        return cls(
            login=data.get("login") or "",
            id=int(data.get("id") or 0),
            name=data.get("name") or "",
            email=data.get("email") or "",
            public_repos=int(data.get("public_repos") or 0),
            avatar_url=data.get("avatar_url") or "",
        )


@dataclass(frozen=True)
class SearchFilters:
    language: str | None = None
    label: str | None = None
    scope: str = "issues"  # issues | repositories
    primary_sort: str = "updated"
    secondary_sort: str | None = None


@dataclass(frozen=True)
class AggregationResult:
    issues: tuple[ClassifiedIssue, ...]
    refreshed_at: datetime
    failed: tuple[str, ...] = field(default_factory=tuple)

    def open_issues(self) -> list[ClassifiedIssue]:
        return sorted(
            (i for i in self.issues if i.issue.state == "open"),
            key=lambda i: i.issue.created_at,
            reverse=True,
        )

    def beginner_friendly(self) -> list[ClassifiedIssue]:
        return [i for i in self.open_issues() if i.category in BEGINNER_CATEGORIES]

    def notifications(self, limit: int = NOTIFICATION_LIMIT) -> list[ClassifiedIssue]:
        return self.beginner_friendly()[:limit]
