"""Tests for skill aggregation."""

from __future__ import annotations

import pytest

from commitsight.analysis.aggregator import SkillAggregator, domain_counts, quality_averages
from commitsight.models.analysis import ComplexityAssessment, QualityAssessment
from commitsight.models.github import CommitStats
from commitsight.models.skill import SkillCategory
from tests.factories import make_commit, make_mention, make_result


def test_aliases_and_case_merge_into_one_bucket() -> None:
    result = make_result(make_mention("Rust"), make_mention("rs"))
    commit = make_commit(sha="c1", stats=CommitStats(additions=30, deletions=5, total=35))

    buckets = SkillAggregator().aggregate([(result, commit)])

    assert list(buckets) == ["rust"]
    bucket = buckets["rust"]
    assert bucket.skill.category is SkillCategory.LANGUAGE
    assert len(bucket.occurrences) == 2
    assert bucket.total_lines == 70
    assert bucket.occurrences[0].lines_changed == 35
    assert bucket.occurrences[0].commit_sha == "c1"


def test_commit_scores_are_pushed_per_skill() -> None:
    result = make_result(
        make_mention("Python"),
        make_mention("Django", category="framework"),
        complexity_assessment=ComplexityAssessment(overall_score=8),
        quality_assessment=QualityAssessment(code_quality=4),
    )

    buckets = SkillAggregator().aggregate([(result, make_commit())])

    for key in ("python", "django"):
        assert buckets[key].complexity_scores == [8]
        assert buckets[key].quality_scores == [4]


def test_unknown_skill_keeps_reported_category_or_concept() -> None:
    result = make_result(make_mention("Tokio", category="library"), make_mention("CQRS", category="architecture"))

    buckets = SkillAggregator().aggregate([(result, make_commit())])

    assert buckets["tokio"].skill.category is SkillCategory.LIBRARY
    assert buckets["cqrs"].skill.category is SkillCategory.CONCEPT


def test_occurrence_carries_mention_and_commit_data() -> None:
    mention = make_mention("Go", proficiency_level="expert", confidence=0.95, evidence=["goroutines"])
    commit = make_commit(sha="g1", repository="octocat/svc")

    (occurrence,) = SkillAggregator().aggregate([(make_result(mention), commit)])["go"].occurrences

    assert occurrence.proficiency_signal == "expert"
    assert occurrence.confidence == 0.95
    assert occurrence.evidence == ("goroutines",)
    assert occurrence.repository == "octocat/svc"
    assert occurrence.timestamp == commit.committed_at


def test_domain_counts_are_case_folded() -> None:
    analyses = [
        make_result(domain_signals=["Backend", "devops"]),
        make_result(domain_signals=["backend"]),
    ]
    assert domain_counts(analyses) == {"backend": 2, "devops": 1}


def test_quality_averages() -> None:
    analyses = [
        make_result(
            quality_assessment=QualityAssessment(code_quality=8, testing_coverage=0.2, documentation_quality=3)
        ),
        make_result(
            quality_assessment=QualityAssessment(code_quality=6, testing_coverage=0.4, documentation_quality=5)
        ),
    ]
    averages = quality_averages(analyses)
    assert averages is not None
    assert averages.code_quality == 7
    assert averages.testing_coverage == pytest.approx(0.3)
    assert averages.documentation_quality == 4
    assert quality_averages([]) is None
