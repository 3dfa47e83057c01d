"""Structured output of the text-generation service."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class AnalysisContext(BaseModel):
    """Per-batch repository metadata attached to a generation request."""

    repository_name: str = ""
    repository_description: str | None = None
    primary_language: str | None = None


class SkillMention(BaseModel):
    """One skill reported for one analysis batch."""

    model_config = ConfigDict(extra="ignore")

    name: str
    category: str = "concept"
    proficiency_level: str = "intermediate"
    confidence: float = 0.5
    evidence: list[str] = Field(default_factory=list)

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return _clamp(value, 0.0, 1.0)


class DetectedPattern(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    pattern_type: str = Field(default="", alias="type")
    name: str
    description: str = ""
    quality_impact: float = 0.0

    @field_validator("quality_impact")
    @classmethod
    def _clamp_impact(cls, value: float) -> float:
        return _clamp(value, -1.0, 1.0)


class ComplexityAssessment(BaseModel):
    model_config = ConfigDict(extra="ignore")

    overall_score: float = 5
    algorithmic_complexity: float = 5
    architectural_complexity: float = 5
    reasoning: str = ""

    @field_validator("overall_score", "algorithmic_complexity", "architectural_complexity")
    @classmethod
    def _clamp_score(cls, value: float) -> float:
        return _clamp(value, 1.0, 10.0)


class QualityAssessment(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code_quality: float = 5
    testing_coverage: float = 0.0
    documentation_quality: float = 5
    error_handling: float = 5
    observations: list[str] = Field(default_factory=list)

    @field_validator("code_quality", "documentation_quality", "error_handling")
    @classmethod
    def _clamp_score(cls, value: float) -> float:
        return _clamp(value, 1.0, 10.0)

    @field_validator("testing_coverage")
    @classmethod
    def _clamp_coverage(cls, value: float) -> float:
        return _clamp(value, 0.0, 1.0)


class AnalysisResult(BaseModel):
    """Skills, patterns and assessments extracted from one batch of commits."""

    model_config = ConfigDict(extra="ignore")

    skills: list[SkillMention]
    patterns: list[DetectedPattern] = Field(default_factory=list)
    complexity_assessment: ComplexityAssessment = Field(default_factory=ComplexityAssessment)
    quality_assessment: QualityAssessment = Field(default_factory=QualityAssessment)
    domain_signals: list[str] = Field(default_factory=list)
    notable_aspects: list[str] = Field(default_factory=list)
