"""Batched issue aggregation across a monitored repository set."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timezone

from .async_client import AsyncGitHubClient
from .classifier import classify_issue
from .config import BATCH_SIZE, ISSUES_PER_REPOSITORY, REFRESH_INTERVAL_S
from .models import AggregationResult, ClassifiedIssue, RepositoryRef
from .url_rules import split_full_name

log = logging.getLogger(__name__)


def batched(items: Sequence, size: int) -> list[Sequence]:
    if size < 1:
        raise ValueError("batch size must be positive")
    return [items[i:i + size] for i in range(0, len(items), size)]


class IssueAggregator:
    """Fetches, classifies and filters issues for many repositories.

    Repositories are processed in fixed-size batches: fetches inside a
    batch run concurrently, batches run one after another. A failing
    repository contributes nothing and never aborts the rest.
    """

    def __init__(
        self,
        client: AsyncGitHubClient,
        batch_size: int = BATCH_SIZE,
        per_repository: int = ISSUES_PER_REPOSITORY,
    ):
        self.client = client
        self.batch_size = batch_size
        self.per_repository = per_repository

    async def aggregate(
        self,
        repositories: Iterable[RepositoryRef],
        wanted_categories: Iterable[str],
    ) -> AggregationResult:
        repos = list(repositories)
        wanted = set(wanted_categories)
        collected: list[ClassifiedIssue] = []
        failed: list[str] = []

        for batch in batched(repos, self.batch_size):
            results = await asyncio.gather(*(self._fetch_repository(r) for r in batch))
            for repo, issues in zip(batch, results):
                if issues is None:
                    failed.append(repo.full_name)
                    continue
                collected.extend(issues)

        matching = tuple(i for i in collected if i.category in wanted)
        log.debug(
            "Aggregated %d repos: %d issues, %d matching, %d failed",
            len(repos), len(collected), len(matching), len(failed),
        )
        return AggregationResult(
            issues=matching,
            refreshed_at=datetime.now(timezone.utc),
            failed=tuple(failed),
        )

    async def _fetch_repository(self, repo: RepositoryRef) -> list[ClassifiedIssue] | None:
        """Classified issues for one repository, or None if the fetch failed."""
        try:
            owner, name = split_full_name(repo.full_name)
            issues = await self.client.list_repository_issues(owner, name)
        except Exception as exc:
            log.warning("Failed to fetch issues for %s: %s", repo.full_name, exc)
            return None
        return [classify_issue(i, repo.full_name) for i in issues[:self.per_repository]]


class RefreshScheduler:
    """Re-runs an aggregation on a fixed interval for a monitored set.

    ``schedule`` (re)starts the timer, ``update`` restarts it only when the
    monitored set changed, ``cancel`` tears it down. A cycle already in
    flight at teardown is allowed to finish; its result is dropped.
    ``aclose`` also waits for that cycle, so the client can be closed
    safely afterwards. A failing cycle is logged and the timer keeps going.
    """

    def __init__(
        self,
        aggregator: IssueAggregator,
        on_refresh: Callable[[AggregationResult], None],
        interval: float = REFRESH_INTERVAL_S,
    ):
        self.aggregator = aggregator
        self.on_refresh = on_refresh
        self.interval = interval
        self._task: asyncio.Task | None = None
        self._cycle: asyncio.Future | None = None
        self._generation = 0
        self._repositories: tuple[RepositoryRef, ...] = ()
        self._categories: frozenset[str] = frozenset()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, repositories: Iterable[RepositoryRef], categories: Iterable[str]) -> None:
        self.cancel()
        self._repositories = tuple(repositories)
        self._categories = frozenset(categories)
        if not self._repositories:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(self._generation))

    def update(self, repositories: Iterable[RepositoryRef], categories: Iterable[str]) -> bool:
        """Restart if the monitored set changed. Returns True when it did."""
        repos = tuple(repositories)
        cats = frozenset(categories)
        same = (
            {r.full_name for r in repos} == {r.full_name for r in self._repositories}
            and cats == self._categories
        )
        if same and (self.running or not repos):
            return False
        self.schedule(repos, cats)
        return True

    def cancel(self) -> None:
        self._generation += 1
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def aclose(self) -> None:
        """Cancel, then wait for a cycle still in flight to settle."""
        cycle = self._cycle
        self.cancel()
        if cycle is not None and not cycle.done():
            await asyncio.wait([cycle])

    async def _run(self, generation: int) -> None:
        while True:
            self._cycle = cycle = asyncio.ensure_future(
                self.aggregator.aggregate(self._repositories, self._categories)
            )
            try:
                result = await asyncio.shield(cycle)
            except asyncio.CancelledError:
                cycle.add_done_callback(_discard)
                raise
            except Exception as exc:
                log.warning("Refresh cycle failed: %s", exc)
            else:
                if generation == self._generation:
                    try:
                        self.on_refresh(result)
                    except Exception as exc:
                        log.warning("Refresh handler failed: %s", exc)
            await asyncio.sleep(self.interval)


def _discard(cycle: asyncio.Future) -> None:
    if not cycle.cancelled() and cycle.exception() is not None:
        log.warning("Discarded refresh cycle failed: %s", cycle.exception())
