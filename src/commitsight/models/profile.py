"""Profile-level summary models."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from enum import StrEnum

from pydantic import BaseModel, Field

from commitsight.models.github import GitHubUser, Repository
from commitsight.models.skill import SkillDomain, SkillRating


class ExperienceLevel(StrEnum):
    JUNIOR = "Junior"
    MID = "Mid-Level"
    SENIOR = "Senior"
    STAFF = "Staff"
    PRINCIPAL = "Principal"


class StrengthWeakness(BaseModel):
    area: str
    description: str
    evidence: list[str] = Field(default_factory=list)
    score: int = Field(ge=0, le=100)


class CodingStyle(BaseModel):
    # Not derived from data yet; always reported as True.
    prefers_small_commits: bool = True
    writes_tests: float = 0.0
    documents_code: float = 0.0
    refactors_regularly: bool = False
    follows_conventions: float = 0.0


class ProfileSummary(BaseModel):
    primary_languages: list[str] = Field(default_factory=list)
    primary_domains: list[SkillDomain] = Field(default_factory=list)
    strengths: list[StrengthWeakness] = Field(default_factory=list)
    weaknesses: list[StrengthWeakness] = Field(default_factory=list)
    experience_level: ExperienceLevel = ExperienceLevel.JUNIOR
    coding_style: CodingStyle = Field(default_factory=CodingStyle)


class UserProfile(BaseModel):
    """Complete result of analyzing one user."""

    user: GitHubUser
    repositories: list[Repository] = Field(default_factory=list)
    total_commits_analyzed: int = 0
    analysis_date: datetime
    skills: list[SkillRating] = Field(default_factory=list)
    summary: ProfileSummary = Field(default_factory=ProfileSummary)
