"""Skill identity, evidence and rating models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class SkillCategory(StrEnum):
    LANGUAGE = "Language"
    FRAMEWORK = "Framework"
    LIBRARY = "Library"
    TOOL = "Tool"
    DOMAIN = "Domain"
    PRACTICE = "Practice"
    CONCEPT = "Concept"


class SkillDomain(StrEnum):
    FRONTEND = "Frontend"
    BACKEND = "Backend"
    FULL_STACK = "FullStack"
    MOBILE = "Mobile"
    DEVOPS = "DevOps"
    DATA_SCIENCE = "DataScience"
    MACHINE_LEARNING = "MachineLearning"
    SECURITY = "Security"
    DATABASE = "Database"
    CLOUD = "Cloud"
    EMBEDDED = "Embedded"
    SYSTEMS_PROGRAMMING = "SystemsProgramming"


class SkillTrend(StrEnum):
    IMPROVING = "Improving"
    STABLE = "Stable"
    DECLINING = "Declining"
    NEW = "New"
    DORMANT = "Dormant"


class Skill(BaseModel):
    """Canonical skill identity. ``id`` is the normalized slug."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: SkillCategory
    aliases: tuple[str, ...] = ()


class SkillOccurrence(BaseModel):
    """One commit's evidence for one skill."""

    model_config = ConfigDict(frozen=True)

    commit_sha: str
    repository: str
    timestamp: datetime
    proficiency_signal: str
    confidence: float = Field(ge=0.0, le=1.0)
    lines_changed: int = Field(default=0, ge=0)
    evidence: tuple[str, ...] = ()


@dataclass
class AggregatedSkill:
    """Evidence bucket for one canonical skill.

    ``complexity_scores`` and ``quality_scores`` get one entry per contributing
    commit, so a commit that evidences several skills is counted in each bucket.
    """

    skill: Skill
    occurrences: list[SkillOccurrence] = field(default_factory=list)
    total_lines: int = 0
    complexity_scores: list[float] = field(default_factory=list)
    quality_scores: list[float] = field(default_factory=list)

    def add(self, occurrence: SkillOccurrence, *, complexity: float, quality: float) -> None:
        self.occurrences.append(occurrence)
        self.total_lines += occurrence.lines_changed
        self.complexity_scores.append(complexity)
        self.quality_scores.append(quality)

    def repositories(self) -> list[str]:
        return sorted({occurrence.repository for occurrence in self.occurrences})


class SkillEvidence(BaseModel):
    commit_count: int = 0
    total_lines_changed: int = 0
    first_seen: datetime
    last_seen: datetime
    repositories: list[str] = Field(default_factory=list)


class SkillRating(BaseModel):
    """Final rating for one skill."""

    skill: Skill
    proficiency_score: int = Field(ge=1, le=100)
    confidence: float = Field(ge=0.0, le=1.0)
    evidence: SkillEvidence
    trend: SkillTrend
    percentile_rank: int | None = Field(default=None, ge=0, le=100)
