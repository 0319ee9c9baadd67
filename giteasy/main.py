#!/usr/bin/env python3
"""giteasy CLI - find beginner-friendly GitHub issues."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from rich.logging import RichHandler

from . import auth
from .aggregator import IssueAggregator, RefreshScheduler
from .async_client import AsyncGitHubClient, GitHubApiError
from .classifier import classify_issue
from .config import (
    ISSUE_CATEGORIES,
    ISSUE_SORTS,
    POPULAR_LANGUAGES,
    REFRESH_INTERVAL_S,
    REPO_SORTS,
)
from .credentials import CredentialStore, MemoryBackend, TokenFile
from .discovery import DiscoveryEngine
from .display import (
    console,
    display_aggregation,
    display_issues,
    display_repositories,
    display_user,
    export_json,
)
from .models import ScoredIssue, SearchFilters
from .watchlist import Watchlist, add_custom_repository


def _credentials(args) -> CredentialStore:
    """Token priority: --token > GITHUB_TOKEN > saved token file."""
    token = args.token or os.environ.get("GITHUB_TOKEN")
    if token:
        return CredentialStore(MemoryBackend(token))
    return CredentialStore(TokenFile(args.token_file))


# ── Commands ─────────────────────────────────────────────────


async def cmd_login(args) -> int:
    store = CredentialStore(TokenFile(args.token_file))
    async with AsyncGitHubClient(store) as client:
        try:
            user = await auth.login(client, store, args.value)
        except GitHubApiError as exc:
            console.print(f"[red]Login failed: {exc}[/red]")
            return 1
    display_user(user)
    return 0


async def cmd_logout(args) -> int:
    auth.logout(CredentialStore(TokenFile(args.token_file)))
    console.print("[green]Signed out.[/green]")
    return 0


async def cmd_whoami(args) -> int:
    store = _credentials(args)
    async with AsyncGitHubClient(store) as client:
        try:
            user = await auth.restore_session(client, store)
        except GitHubApiError as exc:
            console.print(f"[red]Error: {exc}[/red]")
            return 1
    if user is None:
        console.print("[yellow]Not signed in. Use `giteasy login <token>`.[/yellow]")
        return 1
    display_user(user)
    return 0


async def cmd_search(args) -> int:
    filters = SearchFilters(
        language=args.language,
        label=args.label,
        primary_sort=args.sort,
        secondary_sort=args.then,
    )
    async with AsyncGitHubClient(_credentials(args)) as client:
        engine = DiscoveryEngine(client)
        try:
            results = await engine.search_issues(filters)
        except GitHubApiError as exc:
            console.print(f"[red]Error: {exc}[/red]")
            return 1

    display_issues(results[: args.top])
    if args.json:
        issues = [r.issue if isinstance(r, ScoredIssue) else r for r in results]
        export_json([classify_issue(i) for i in issues], args.json)
    return 0


async def cmd_repos(args) -> int:
    async with AsyncGitHubClient(_credentials(args)) as client:
        engine = DiscoveryEngine(client)
        try:
            if args.curated:
                repos = await engine.curated_repositories()
                title = "Curated Beginner-Friendly Repositories"
            elif args.mine or args.user:
                repos = await client.list_user_repositories(args.user)
                title = f"Repositories of {args.user or 'you'}"
            else:
                repos = await engine.search(SearchFilters(
                    language=args.language,
                    scope="repositories",
                    primary_sort=args.sort,
                    secondary_sort=args.then,
                ))
                title = "Beginner-Friendly Repositories"
        except GitHubApiError as exc:
            console.print(f"[red]Error: {exc}[/red]")
            return 1
    display_repositories(repos, title=title)
    return 0


async def cmd_watch(args) -> int:
    watchlist = Watchlist(args.watchlist)

    if args.action == "add":
        async with AsyncGitHubClient(_credentials(args)) as client:
            selected = watchlist.repositories
            for url in args.targets:
                selected = await add_custom_repository(client, url, selected)
        added = [r for r in selected if r not in watchlist.repositories]
        for repo in added:
            watchlist.add(repo)
            console.print(f"[green]Watching {repo.full_name}[/green]")
        if not added:
            console.print("[yellow]Nothing added.[/yellow]")
    elif args.action == "remove":
        for name in args.targets:
            if watchlist.remove(name):
                console.print(f"[green]Stopped watching {name}[/green]")
            else:
                console.print(f"[yellow]Not watched: {name}[/yellow]")
    elif args.action == "types":
        if args.targets:
            try:
                watchlist.set_issue_types(args.targets)
            except ValueError as exc:
                console.print(f"[red]{exc}[/red]")
                return 1
        console.print(f"Issue types: [cyan]{', '.join(watchlist.issue_types)}[/cyan]")
    else:
        display_repositories(list(watchlist.repositories), title="Watched Repositories")
        console.print(f"Issue types: [cyan]{', '.join(watchlist.issue_types)}[/cyan]")
    return 0


async def cmd_monitor(args) -> int:
    watchlist = Watchlist(args.watchlist)
    if not watchlist.repositories:
        console.print("[yellow]No watched repositories. Use `giteasy watch add <url>`.[/yellow]")
        return 1

    async with AsyncGitHubClient(_credentials(args)) as client:
        aggregator = IssueAggregator(client)
        if args.once:
            result = await aggregator.aggregate(watchlist.repositories, watchlist.issue_types)
            display_aggregation(result)
            return 0

        scheduler = RefreshScheduler(aggregator, display_aggregation, interval=args.interval)
        scheduler.schedule(watchlist.repositories, watchlist.issue_types)
        console.print(f"[dim]Refreshing every {args.interval:g}s. Ctrl-C to stop.[/dim]")
        try:
            while scheduler.running:
                await asyncio.sleep(args.interval)
                reloaded = Watchlist(args.watchlist)
                if scheduler.update(reloaded.repositories, reloaded.issue_types):
                    console.print("[dim]Watchlist changed, timer restarted.[/dim]")
        finally:
            await scheduler.aclose()
    return 0


COMMANDS = {
    "login": cmd_login,
    "logout": cmd_logout,
    "whoami": cmd_whoami,
    "search": cmd_search,
    "repos": cmd_repos,
    "watch": cmd_watch,
    "monitor": cmd_monitor,
}


# ── CLI entry point ──────────────────────────────────────────

_LANGUAGE_HELP = f"Repository language, e.g. {', '.join(POPULAR_LANGUAGES)}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="giteasy",
        description="Find beginner-friendly GitHub issues and keep an eye on them.",
    )
    parser.add_argument(
        "--token", default=None,
        help="GitHub token (or set GITHUB_TOKEN). Not saved; use `login` for that.",
    )
    parser.add_argument("--token-file", default=None, help="Where `login` stores the token")
    parser.add_argument("--watchlist", default=None, help="Watchlist JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("login", help="Validate and save a personal access token")
    p.add_argument("value", help="Personal access token")
    sub.add_parser("logout", help="Forget the saved token")
    sub.add_parser("whoami", help="Show the signed-in user")

    p = sub.add_parser("search", help="Search beginner-friendly issues")
    p.add_argument("--language", default=None, help=_LANGUAGE_HELP)
    p.add_argument("--label", default=None, help='Issue label (default: "good first issue")')
    p.add_argument("--sort", choices=ISSUE_SORTS, default="updated")
    p.add_argument(
        "--then", choices=ISSUE_SORTS, default=None,
        help="Secondary sort; `--sort updated --then stars` ranks recent issues from popular repos",
    )
    p.add_argument("--top", type=int, default=50)
    p.add_argument("--json", default=None, help="Export results to a JSON file")

    p = sub.add_parser("repos", help="Find beginner-friendly repositories")
    p.add_argument("--language", default=None, help=_LANGUAGE_HELP)
    p.add_argument("--sort", choices=REPO_SORTS, default="stars")
    p.add_argument("--then", choices=REPO_SORTS, default=None)
    p.add_argument("--curated", action="store_true", help="Show the curated list instead")
    p.add_argument("--mine", action="store_true", help="List your own repositories")
    p.add_argument("--user", default=None, help="List a user's public repositories")

    p = sub.add_parser("watch", help="Manage watched repositories")
    p.add_argument("action", choices=("add", "remove", "list", "types"))
    p.add_argument(
        "targets", nargs="*",
        help=f"Repository URLs / owner/name, or issue types ({', '.join(ISSUE_CATEGORIES)})",
    )

    p = sub.add_parser("monitor", help="Aggregate issues of watched repositories")
    p.add_argument("--interval", type=float, default=REFRESH_INTERVAL_S)
    p.add_argument("--once", action="store_true", help="Refresh once and exit")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    try:
        return asyncio.run(COMMANDS[args.command](args))
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
