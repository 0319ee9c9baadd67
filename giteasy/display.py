"""Rich terminal output for issues and repositories."""

from __future__ import annotations

import json
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .classifier import classify, repository_badges
from .models import AggregationResult, ClassifiedIssue, RawIssue, RepositoryRef, ScoredIssue, User

console = Console()

_LEVEL_COLORS = {
    "low": "green", "medium": "yellow", "high": "red",
    "beginner": "green", "intermediate": "yellow", "advanced": "red",
}


def _level(value: str) -> Text:
    return Text(value, style=_LEVEL_COLORS.get(value, "white"))


def _date(ts: str) -> str:
    return ts[:10] if ts else "-"


def display_user(user: User):
    name = f" ({user.name})" if user.name else ""
    console.print(f"[green]Signed in as[/green] [bold cyan]{user.login}[/bold cyan]{name}")


def display_issues(issues: list[RawIssue] | list[ScoredIssue], title: str = "Beginner-Friendly Issues"):
    """Table of search results; scored results get a score column."""
    if not issues:
        console.print("[yellow]No matching issues found. Try another language or label.[/yellow]")
        return

    scored = isinstance(issues[0], ScoredIssue)
    table = Table(title=title, box=box.ROUNDED, show_lines=False)
    table.add_column("#", width=4, justify="right")
    table.add_column("Repository", style="cyan", max_width=30)
    table.add_column("Issue", max_width=50)
    table.add_column("Type", width=16)
    table.add_column("Difficulty", width=12)
    table.add_column("Comments", justify="right", width=8)
    table.add_column("Updated", width=10)
    if scored:
        table.add_column("Stars", justify="right", width=8)
        table.add_column("Score", justify="right", width=6)

    for n, item in enumerate(issues, 1):
        issue = item.issue if scored else item
        c = classify(issue)
        row = [
            str(n),
            issue.repository_full_name,
            f"#{issue.number}: {issue.title[:45]}",
            c.category,
            _level(c.difficulty),
            str(issue.comments),
            _date(issue.updated_at),
        ]
        if scored:
            row += [f"{item.repository_stars:,}", f"{item.score:.1f}"]
        table.add_row(*row)

    console.print()
    console.print(table)
    console.print(f"\n[green]Found {len(issues)} issues.[/green]")


def display_repositories(repos: list[RepositoryRef], title: str = "Beginner-Friendly Repositories"):
    if not repos:
        console.print("[yellow]No repositories found.[/yellow]")
        return

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("#", width=4, justify="right")
    table.add_column("Repository", style="cyan", max_width=35)
    table.add_column("Language", width=12)
    table.add_column("Stars", justify="right", width=8)
    table.add_column("Open issues", justify="right", width=11)
    table.add_column("Badges")

    for n, r in enumerate(repos, 1):
        table.add_row(
            str(n),
            r.full_name,
            r.language or "Unknown",
            f"{r.stars:,}",
            str(r.open_issues),
            ", ".join(repository_badges(r)),
        )
    console.print()
    console.print(table)


def display_aggregation(result: AggregationResult):
    table = Table(
        title=f"Watched Issues (refreshed {result.refreshed_at:%H:%M:%S} UTC)",
        box=box.ROUNDED,
    )
    table.add_column("Repository", style="cyan", max_width=30)
    table.add_column("Issue", max_width=50)
    table.add_column("Type", width=16)
    table.add_column("Priority", width=8)
    table.add_column("Difficulty", width=12)
    table.add_column("Created", width=10)

    for item in result.open_issues():
        table.add_row(
            item.repository,
            f"#{item.issue.number}: {item.issue.title[:45]}",
            item.category,
            _level(item.priority),
            _level(item.difficulty),
            _date(item.issue.created_at),
        )
    console.print()
    console.print(table)

    fresh = result.notifications()
    if fresh:
        console.print(f"[bold green]{len(fresh)} beginner-friendly issue(s):[/bold green]")
        for item in fresh:
            console.print(f"  • {item.repository}#{item.issue.number} {item.issue.title}  [dim]{item.issue.html_url}[/dim]")
    if result.failed:
        console.print(f"[yellow]Could not fetch: {', '.join(result.failed)}[/yellow]")


def export_json(items: list[ClassifiedIssue], filepath: str):
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps([i.to_dict() for i in items], indent=2), encoding="utf-8")
    console.print(f"\nResults exported to [cyan]{filepath}[/cyan]")
