"""End-to-end analysis of one GitHub user."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from loguru import logger

from commitsight.analysis.aggregator import SkillAggregator
from commitsight.analysis.ingestion import IngestionOrchestrator
from commitsight.analysis.progress import NullProgress
from commitsight.analysis.rating import RatingEngine
from commitsight.errors import CommitsightError
from commitsight.llm.batcher import CommitBatcher
from commitsight.llm.prompts import AnalysisRequest
from commitsight.models.analysis import AnalysisContext
from commitsight.models.profile import UserProfile

if TYPE_CHECKING:
    from collections.abc import Sequence

    from commitsight.analysis.progress import ProgressReporter
    from commitsight.github.client import GitHubClient
    from commitsight.llm.batcher import Batch
    from commitsight.llm.provider import AnalysisProvider
    from commitsight.models.analysis import AnalysisResult
    from commitsight.models.commit import CommitRecord
    from commitsight.models.github import Repository
    from commitsight.models.skill import SkillRating
    from commitsight.settings import Settings
    from commitsight.storage.sqlite import ProfileStore


class AnalysisPipeline:
    """Fetch, batch, analyze, rate and persist one user's commit history."""

    def __init__(
        self,
        github: GitHubClient,
        provider: AnalysisProvider,
        store: ProfileStore,
        settings: Settings,
        *,
        progress: ProgressReporter | None = None,
        aggregator: SkillAggregator | None = None,
        rating_engine: RatingEngine | None = None,
    ) -> None:
        self.github = github
        self.provider = provider
        self.store = store
        self.settings = settings
        self.progress = progress or NullProgress()
        self.batcher = CommitBatcher(provider.max_context_tokens)
        self.aggregator = aggregator or SkillAggregator()
        self.rating_engine = rating_engine or RatingEngine()

    async def analyze_user(self, username: str) -> UserProfile:
        logger.info("Fetching GitHub profile for: {}", username)
        user = await self.github.get_user(username)
        repositories = await self.github.list_repositories(username)
        if not self.settings.include_forks:
            repositories = [r for r in repositories if not r.fork]
        logger.info("Found {} repositories to analyze", len(repositories))

        ingestion = IngestionOrchestrator(
            self.github,
            concurrency=self.settings.concurrency,
            max_commits_per_repo=self.settings.max_commits_per_repo,
            progress=self.progress,
        )
        commits = await ingestion.run(repositories, username)

        ratings: list[SkillRating] = []
        analyses: list[AnalysisResult] = []
        if commits:
            batches = self.batcher.create_batches(commits)
            logger.info("Created {} batches for analysis", len(batches))
            pairs = await self.analyze_batches(batches, repositories)
            analyses = [result for result, _ in pairs]
            aggregated = self.aggregator.aggregate(
                (result, commit) for result, batch in pairs for commit in batch
            )
            logger.info("Extracted {} unique skills", len(aggregated))
            ratings = self.rank(self.rating_engine.calculate_ratings(aggregated), username)
        else:
            logger.warning("No commits found for user {}", username)

        profile = UserProfile(
            user=user,
            repositories=repositories,
            total_commits_analyzed=len(commits),
            analysis_date=datetime.now(UTC),
            skills=ratings,
            summary=self.rating_engine.generate_summary(ratings, analyses),
        )
        self.store.save(profile)
        return profile

    async def analyze_batches(
        self, batches: Sequence[Batch], repositories: Sequence[Repository]
    ) -> list[tuple[AnalysisResult, Batch]]:
        """Send batches one at a time; a failed batch is logged and skipped."""

        by_name = {r.full_name: r for r in repositories}
        results: list[tuple[AnalysisResult, Batch]] = []
        self.progress.start(f"Analyzing with {self.provider.name}", len(batches))
        for index, batch in enumerate(batches, start=1):
            request = AnalysisRequest(commits=batch, context=self.context_for(batch[0], by_name))
            try:
                result = await self.provider.analyze(request)
            except CommitsightError as exc:
                logger.warning("Analysis failed for batch {}/{}: {}", index, len(batches), exc)
            else:
                results.append((result, batch))
            self.progress.advance()
        self.progress.finish()
        logger.info("Completed {} of {} analyses", len(results), len(batches))
        return results

    @staticmethod
    def context_for(commit: CommitRecord, repositories: dict[str, Repository]) -> AnalysisContext:
        repository = repositories.get(commit.repository)
        return AnalysisContext(
            repository_name=commit.repository,
            repository_description=repository.description if repository else None,
            primary_language=repository.language if repository else None,
        )

    def rank(self, ratings: list[SkillRating], username: str) -> list[SkillRating]:
        """Attach percentile ranks against other stored profiles."""

        return [
            rating.model_copy(
                update={
                    "percentile_rank": self.store.percentile(
                        rating.skill.name, rating.proficiency_score, exclude_username=username
                    )
                }
            )
            for rating in ratings
        ]
