"""Concurrent fetch of a user's commits across repositories."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from loguru import logger

from commitsight.analysis.progress import NullProgress
from commitsight.errors import CommitsightError
from commitsight.models.commit import CommitRecord, FileDiff
from commitsight.models.github import CommitStats
from commitsight.taxonomy import detect_language

if TYPE_CHECKING:
    from collections.abc import Sequence

    from commitsight.analysis.progress import ProgressReporter
    from commitsight.github.client import GitHubClient
    from commitsight.models.github import CommitDetail, Repository


class FetchStatus(StrEnum):
    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(slots=True)
class RepositoryFetch:
    """Outcome of fetching one repository's commits."""

    repository: Repository
    status: FetchStatus
    commits: list[CommitRecord] = field(default_factory=list)
    failed_commits: int = 0
    error: str | None = None


def prepare_commit(repository: Repository, detail: CommitDetail) -> CommitRecord:
    """Map a commit detail to a record, keeping only files that carry a patch."""

    files = tuple(
        FileDiff(
            filename=change.filename,
            language=detect_language(change.filename),
            diff=change.patch,
            additions=change.additions,
            deletions=change.deletions,
        )
        for change in detail.files or ()
        if change.patch is not None
    )
    return CommitRecord(
        sha=detail.sha,
        repository=repository.full_name,
        message=detail.commit.message,
        committed_at=detail.commit.author.date,
        stats=detail.stats or CommitStats(),
        files=files,
    )


class IngestionOrchestrator:
    """Fan out over repositories with bounded parallelism and fan the commits back in.

    Failures are contained per repository and per commit: a repository whose
    commit list cannot be fetched contributes nothing, and so does a commit whose
    detail cannot be fetched. Neither stops the other tasks.
    """

    def __init__(
        self,
        github: GitHubClient,
        *,
        concurrency: int = 5,
        max_commits_per_repo: int = 100,
        progress: ProgressReporter | None = None,
    ) -> None:
        self.github = github
        self.concurrency = concurrency
        self.max_commits_per_repo = max_commits_per_repo
        self.progress = progress or NullProgress()

    async def fetch_repository(self, repository: Repository, author: str) -> RepositoryFetch:
        owner, name = repository.owner.login, repository.name
        try:
            summaries = await self.github.list_commits(
                owner, name, author=author, max_commits=self.max_commits_per_repo
            )
        except CommitsightError as exc:
            logger.warning("Failed to fetch commits for {}: {}", repository.full_name, exc)
            return RepositoryFetch(repository, FetchStatus.ERROR, error=str(exc))

        outcome = RepositoryFetch(repository, FetchStatus.OK)
        for summary in summaries:
            try:
                detail = await self.github.get_commit(owner, name, summary.sha)
            except CommitsightError as exc:
                logger.debug("Failed to fetch commit {} in {}: {}", summary.sha[:7], repository.full_name, exc)
                outcome.failed_commits += 1
                continue
            if not detail.files:
                continue
            outcome.commits.append(prepare_commit(repository, detail))

        if not outcome.commits:
            outcome.status = FetchStatus.EMPTY
        return outcome

    async def run(self, repositories: Sequence[Repository], author: str) -> list[CommitRecord]:
        """Fetch commits authored by ``author`` across ``repositories``.

        Cross-repository order follows completion order.
        """

        sem = asyncio.Semaphore(self.concurrency)

        async def _bounded(repository: Repository) -> RepositoryFetch:
            async with sem:
                return await self.fetch_repository(repository, author)

        self.progress.start("Fetching commits", len(repositories))
        tasks = [asyncio.create_task(_bounded(repository)) for repository in repositories]
        commits: list[CommitRecord] = []
        counts = dict.fromkeys(FetchStatus, 0)
        try:
            for coro in asyncio.as_completed(tasks):
                outcome = await coro
                counts[outcome.status] += 1
                commits.extend(outcome.commits)
                self.progress.advance()
        finally:
            # an unexpected error must not leave sibling fetches running
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            self.progress.finish()

        logger.info(
            "Fetched {} commits from {} repositories ({} empty, {} failed)",
            len(commits),
            counts[FetchStatus.OK],
            counts[FetchStatus.EMPTY],
            counts[FetchStatus.ERROR],
        )
        return commits
