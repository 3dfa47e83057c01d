"""Skill scoring, trend classification and profile summary."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from statistics import fmean
from typing import TYPE_CHECKING

from commitsight.analysis.aggregator import domain_counts, quality_averages
from commitsight.models.profile import CodingStyle, ExperienceLevel, ProfileSummary, StrengthWeakness
from commitsight.models.skill import SkillCategory, SkillDomain, SkillEvidence, SkillRating, SkillTrend

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from commitsight.models.analysis import AnalysisResult
    from commitsight.models.skill import AggregatedSkill, SkillOccurrence

NEUTRAL_SCORE = 50.0

PROFICIENCY_LEVELS = {
    "expert": 95.0,
    "advanced": 80.0,
    "intermediate": 60.0,
    "beginner": 35.0,
}

DOMAIN_TAGS = {
    "frontend": SkillDomain.FRONTEND,
    "backend": SkillDomain.BACKEND,
    "fullstack": SkillDomain.FULL_STACK,
    "full-stack": SkillDomain.FULL_STACK,
    "mobile": SkillDomain.MOBILE,
    "devops": SkillDomain.DEVOPS,
    "ml": SkillDomain.MACHINE_LEARNING,
    "machine learning": SkillDomain.MACHINE_LEARNING,
    "data": SkillDomain.DATA_SCIENCE,
    "data science": SkillDomain.DATA_SCIENCE,
    "security": SkillDomain.SECURITY,
    "database": SkillDomain.DATABASE,
    "databases": SkillDomain.DATABASE,
    "cloud": SkillDomain.CLOUD,
    "embedded": SkillDomain.EMBEDDED,
    "systems": SkillDomain.SYSTEMS_PROGRAMMING,
}

STRONG_SCORE = 70
PRIMARY_LANGUAGE_SCORE = 40
GOOD_PATTERN_IMPACT = 0.3
BAD_PATTERN_IMPACT = -0.3
SUMMARY_LIMIT = 5

RECENT_WINDOW = timedelta(days=180)
OLDER_WINDOW = timedelta(days=365)

# (strong skills, mean score, years active) minimums, most senior first
EXPERIENCE_TIERS = (
    (ExperienceLevel.PRINCIPAL, 5, 70, 5),
    (ExperienceLevel.STAFF, 4, 65, 4),
    (ExperienceLevel.SENIOR, 3, 60, 2),
    (ExperienceLevel.MID, 1, 50, 1),
)


@dataclass(frozen=True, slots=True)
class RatingWeights:
    frequency: float = 0.15
    recency: float = 0.15
    complexity: float = 0.20
    quality: float = 0.20
    consistency: float = 0.10
    proficiency: float = 0.20


@dataclass(frozen=True, slots=True)
class SubScores:
    frequency: float
    recency: float
    complexity: float
    quality: float
    consistency: float
    proficiency: float

    def weighted(self, weights: RatingWeights) -> float:
        return (
            self.frequency * weights.frequency
            + self.recency * weights.recency
            + self.complexity * weights.complexity
            + self.quality * weights.quality
            + self.consistency * weights.consistency
            + self.proficiency * weights.proficiency
        )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def frequency_score(count: int) -> float:
    if count <= 0:
        return NEUTRAL_SCORE
    return min(math.log(count) + 1, 5) / 5 * 100


def recency_score(timestamps: Iterable[datetime], now: datetime) -> float:
    latest = max(timestamps, default=None)
    if latest is None:
        return NEUTRAL_SCORE
    days = max((now - latest).days, 0)
    return (1 - min(days / 365, 1)) * 100


def mean_scaled(scores: Sequence[float]) -> float:
    """Mean of 1-10 scores scaled to 0-100."""
    return fmean(scores) * 10 if scores else NEUTRAL_SCORE


def consistency_score(timestamps: Iterable[datetime]) -> float:
    ordered = sorted(timestamps)
    if len(ordered) < 2:
        return NEUTRAL_SCORE
    mean_gap = fmean((later - earlier).days for earlier, later in zip(ordered, ordered[1:]))
    return max((1 - min(mean_gap / 90, 1)) * 100, 0.0)


def proficiency_signal_score(occurrences: Iterable[SkillOccurrence]) -> float:
    total_weight = 0.0
    weighted = 0.0
    for occurrence in occurrences:
        level = PROFICIENCY_LEVELS.get(occurrence.proficiency_signal.strip().casefold(), NEUTRAL_SCORE)
        weighted += level * occurrence.confidence
        total_weight += occurrence.confidence
    if total_weight == 0:
        return NEUTRAL_SCORE
    return weighted / total_weight


def classify_trend(timestamps: Sequence[datetime], now: datetime) -> SkillTrend:
    if len(timestamps) <= 2:
        return SkillTrend.NEW

    recent_cutoff = now - RECENT_WINDOW
    older_cutoff = now - OLDER_WINDOW
    recent = sum(1 for ts in timestamps if ts > recent_cutoff)
    older = sum(1 for ts in timestamps if older_cutoff < ts <= recent_cutoff)

    if recent == 0 and older > 0:
        return SkillTrend.DORMANT
    if older > 0:
        ratio = recent / older
    else:
        ratio = 2.0 if recent > 0 else 1.0

    if ratio > 1.5:
        return SkillTrend.IMPROVING
    if ratio < 0.5:
        return SkillTrend.DECLINING
    return SkillTrend.STABLE


class RatingEngine:
    """Turn aggregated skill evidence into ratings and a profile summary.

    ``now`` pins the reference instant for recency and trend; it defaults to
    the wall clock at each call.
    """

    def __init__(self, weights: RatingWeights | None = None, *, now: datetime | None = None) -> None:
        self.weights = weights or RatingWeights()
        self._now = now

    def now(self) -> datetime:
        return self._now or datetime.now(UTC)

    def sub_scores(self, aggregated: AggregatedSkill, now: datetime) -> SubScores:
        timestamps = [o.timestamp for o in aggregated.occurrences]
        return SubScores(
            frequency=frequency_score(len(aggregated.occurrences)),
            recency=recency_score(timestamps, now),
            complexity=mean_scaled(aggregated.complexity_scores),
            quality=mean_scaled(aggregated.quality_scores),
            consistency=consistency_score(timestamps),
            proficiency=proficiency_signal_score(aggregated.occurrences),
        )

    def rate(self, aggregated: AggregatedSkill, now: datetime | None = None) -> SkillRating:
        now = now or self.now()
        timestamps = [o.timestamp for o in aggregated.occurrences]
        score = _round_half_up(self.sub_scores(aggregated, now).weighted(self.weights))
        count = len(aggregated.occurrences)
        return SkillRating(
            skill=aggregated.skill,
            proficiency_score=max(1, min(100, score)),
            confidence=min(count / 20, 1.0),
            evidence=SkillEvidence(
                commit_count=count,
                total_lines_changed=aggregated.total_lines,
                first_seen=min(timestamps, default=now),
                last_seen=max(timestamps, default=now),
                repositories=aggregated.repositories(),
            ),
            trend=classify_trend(timestamps, now),
        )

    def calculate_ratings(self, aggregated: Mapping[str, AggregatedSkill]) -> list[SkillRating]:
        now = self.now()
        ratings = [self.rate(bucket, now) for bucket in aggregated.values()]
        ratings.sort(key=lambda r: (-r.proficiency_score, r.skill.name.casefold()))
        return ratings

    def generate_summary(self, ratings: Sequence[SkillRating], analyses: Sequence[AnalysisResult]) -> ProfileSummary:
        return ProfileSummary(
            primary_languages=self.primary_languages(ratings),
            primary_domains=self.primary_domains(analyses),
            strengths=self.strengths(ratings, analyses),
            weaknesses=self.weaknesses(ratings, analyses),
            experience_level=self.experience_level(ratings),
            coding_style=self.coding_style(analyses),
        )

    def primary_languages(self, ratings: Sequence[SkillRating]) -> list[str]:
        languages = [
            r.skill.name
            for r in ratings
            if r.skill.category is SkillCategory.LANGUAGE and r.proficiency_score >= PRIMARY_LANGUAGE_SCORE
        ]
        return languages[:SUMMARY_LIMIT]

    def primary_domains(self, analyses: Sequence[AnalysisResult]) -> list[SkillDomain]:
        domains: list[SkillDomain] = []
        for tag, _ in domain_counts(analyses).most_common(3):
            domain = DOMAIN_TAGS.get(tag)
            if domain is not None and domain not in domains:
                domains.append(domain)
        return domains

    def strengths(self, ratings: Sequence[SkillRating], analyses: Sequence[AnalysisResult]) -> list[StrengthWeakness]:
        strengths = [
            StrengthWeakness(
                area=r.skill.name,
                description=f"Strong {r.skill.category} proficiency with {r.evidence.commit_count} commits",
                evidence=list(r.evidence.repositories),
                score=r.proficiency_score,
            )
            for r in ratings
            if r.proficiency_score >= STRONG_SCORE
        ]

        good_patterns = [p.name for a in analyses for p in a.patterns if p.quality_impact > GOOD_PATTERN_IMPACT]
        if good_patterns:
            strengths.append(
                StrengthWeakness(
                    area="Design Patterns",
                    description="Uses good design patterns and practices",
                    evidence=good_patterns,
                    score=75,
                )
            )

        averages = quality_averages(analyses)
        if averages is not None and averages.code_quality >= 7:
            strengths.append(
                StrengthWeakness(
                    area="Code Quality",
                    description=f"Consistently high code quality (avg: {averages.code_quality:.1f}/10)",
                    score=int(averages.code_quality * 10),
                )
            )

        strengths.sort(key=lambda s: s.score, reverse=True)
        return strengths[:SUMMARY_LIMIT]

    def weaknesses(self, ratings: Sequence[SkillRating], analyses: Sequence[AnalysisResult]) -> list[StrengthWeakness]:
        weaknesses: list[StrengthWeakness] = []

        # quality weaknesses need at least one analysis
        averages = quality_averages(analyses)
        if averages is not None:
            if averages.testing_coverage < 0.3:
                weaknesses.append(
                    StrengthWeakness(
                        area="Testing",
                        description=f"Low test coverage across commits ({averages.testing_coverage * 100:.0f}%)",
                        score=int(averages.testing_coverage * 100),
                    )
                )
            if averages.documentation_quality < 4:
                weaknesses.append(
                    StrengthWeakness(
                        area="Documentation",
                        description=f"Limited documentation quality (avg: {averages.documentation_quality:.1f}/10)",
                        score=int(averages.documentation_quality * 10),
                    )
                )

        for r in ratings:
            if r.trend is SkillTrend.DECLINING:
                weaknesses.append(
                    StrengthWeakness(
                        area=r.skill.name,
                        description=f"{r.skill.name} usage declining over time",
                        evidence=[f"Last used: {r.evidence.last_seen:%Y-%m-%d}"],
                        score=r.proficiency_score,
                    )
                )

        anti_patterns = [p.name for a in analyses for p in a.patterns if p.quality_impact < BAD_PATTERN_IMPACT]
        if anti_patterns:
            weaknesses.append(
                StrengthWeakness(
                    area="Code Patterns",
                    description="Some anti-patterns detected in code",
                    evidence=anti_patterns,
                    score=30,
                )
            )

        weaknesses.sort(key=lambda w: w.score)
        return weaknesses[:SUMMARY_LIMIT]

    def experience_level(self, ratings: Sequence[SkillRating]) -> ExperienceLevel:
        if not ratings:
            return ExperienceLevel.JUNIOR
        strong = sum(1 for r in ratings if r.proficiency_score >= STRONG_SCORE)
        mean_score = int(fmean(r.proficiency_score for r in ratings))
        earliest = min(r.evidence.first_seen for r in ratings)
        latest = max(r.evidence.last_seen for r in ratings)
        years = int((latest - earliest).days / 365)

        for level, min_strong, min_mean, min_years in EXPERIENCE_TIERS:
            if strong >= min_strong and mean_score >= min_mean and years >= min_years:
                return level
        return ExperienceLevel.JUNIOR

    def coding_style(self, analyses: Sequence[AnalysisResult]) -> CodingStyle:
        averages = quality_averages(analyses)
        if averages is None:
            return CodingStyle()
        return CodingStyle(
            writes_tests=averages.testing_coverage,
            documents_code=averages.documentation_quality / 10,
            follows_conventions=averages.code_quality / 10,
            refactors_regularly=any("refactor" in p.name.casefold() for a in analyses for p in a.patterns),
        )
