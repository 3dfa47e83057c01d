"""Pydantic models."""

from .analysis import (
    AnalysisContext,
    AnalysisResult,
    ComplexityAssessment,
    DetectedPattern,
    QualityAssessment,
    SkillMention,
)
from .commit import CommitRecord, FileDiff
from .github import CommitDetail, CommitStats, CommitSummary, FileChange, GitHubUser, Repository, RepositoryOwner
from .profile import CodingStyle, ExperienceLevel, ProfileSummary, StrengthWeakness, UserProfile
from .skill import (
    AggregatedSkill,
    Skill,
    SkillCategory,
    SkillDomain,
    SkillEvidence,
    SkillOccurrence,
    SkillRating,
    SkillTrend,
)

__all__ = [
    "AggregatedSkill",
    "AnalysisContext",
    "AnalysisResult",
    "CodingStyle",
    "CommitDetail",
    "CommitRecord",
    "CommitStats",
    "CommitSummary",
    "ComplexityAssessment",
    "DetectedPattern",
    "ExperienceLevel",
    "FileChange",
    "FileDiff",
    "GitHubUser",
    "ProfileSummary",
    "QualityAssessment",
    "Repository",
    "RepositoryOwner",
    "Skill",
    "SkillCategory",
    "SkillDomain",
    "SkillEvidence",
    "SkillMention",
    "SkillOccurrence",
    "SkillRating",
    "SkillTrend",
    "StrengthWeakness",
    "UserProfile",
]
