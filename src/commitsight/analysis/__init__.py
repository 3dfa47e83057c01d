"""Ingestion, aggregation, rating and the end-to-end pipeline."""

from .aggregator import SkillAggregator
from .ingestion import FetchStatus, IngestionOrchestrator, RepositoryFetch, prepare_commit
from .pipeline import AnalysisPipeline
from .progress import NullProgress, ProgressReporter, RichProgressReporter
from .rating import RatingEngine, RatingWeights, classify_trend

__all__ = [
    "AnalysisPipeline",
    "FetchStatus",
    "IngestionOrchestrator",
    "NullProgress",
    "ProgressReporter",
    "RatingEngine",
    "RatingWeights",
    "RepositoryFetch",
    "RichProgressReporter",
    "SkillAggregator",
    "classify_trend",
    "prepare_commit",
]
