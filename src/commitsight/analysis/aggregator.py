"""Folding of per-batch analysis results into per-skill evidence."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from statistics import fmean
from typing import TYPE_CHECKING

from commitsight.models.skill import AggregatedSkill, SkillOccurrence
from commitsight.taxonomy import default_taxonomy

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from commitsight.models.analysis import AnalysisResult
    from commitsight.models.commit import CommitRecord
    from commitsight.taxonomy import SkillTaxonomy


@dataclass(frozen=True, slots=True)
class QualityAverages:
    testing_coverage: float
    documentation_quality: float
    code_quality: float


def domain_counts(analyses: Iterable[AnalysisResult]) -> Counter[str]:
    """Count case-folded domain tags across results, in first-seen order."""

    counts: Counter[str] = Counter()
    for analysis in analyses:
        counts.update(signal.strip().casefold() for signal in analysis.domain_signals)
    return counts


def quality_averages(analyses: Sequence[AnalysisResult]) -> QualityAverages | None:
    if not analyses:
        return None
    return QualityAverages(
        testing_coverage=fmean(a.quality_assessment.testing_coverage for a in analyses),
        documentation_quality=fmean(a.quality_assessment.documentation_quality for a in analyses),
        code_quality=fmean(a.quality_assessment.code_quality for a in analyses),
    )


class SkillAggregator:
    """Normalize skill mentions and bucket them by canonical identity."""

    def __init__(self, taxonomy: SkillTaxonomy | None = None) -> None:
        self.taxonomy = taxonomy or default_taxonomy()

    def aggregate(self, pairs: Iterable[tuple[AnalysisResult, CommitRecord]]) -> dict[str, AggregatedSkill]:
        buckets: dict[str, AggregatedSkill] = {}
        for analysis, commit in pairs:
            complexity = analysis.complexity_assessment.overall_score
            quality = analysis.quality_assessment.code_quality
            for mention in analysis.skills:
                key = self.taxonomy.normalize(mention.name)
                if key not in buckets:
                    category = self.taxonomy.categorize(mention.category)
                    buckets[key] = AggregatedSkill(self.taxonomy.get_or_create(mention.name, category))
                occurrence = SkillOccurrence(
                    commit_sha=commit.sha,
                    repository=commit.repository,
                    timestamp=commit.committed_at,
                    proficiency_signal=mention.proficiency_level,
                    confidence=mention.confidence,
                    lines_changed=commit.lines_changed,
                    evidence=tuple(mention.evidence),
                )
                buckets[key].add(occurrence, complexity=complexity, quality=quality)
        return buckets
