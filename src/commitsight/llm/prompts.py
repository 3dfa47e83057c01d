"""Prompt text for commit analysis requests."""

from __future__ import annotations

from dataclasses import dataclass

from commitsight.models.analysis import AnalysisContext
from commitsight.models.commit import CommitRecord  # noqa: TC001

MAX_FILE_DIFF_CHARS = 3_000

SYSTEM_PROMPT = """\
You are an expert software engineer and technical recruiter analyzing Git commit history.
Your task is to extract skills, expertise levels, and coding patterns from commit diffs.

You must respond with valid JSON matching this exact schema:
{
    "skills": [
        {
            "name": "string (e.g., 'Rust', 'React', 'PostgreSQL')",
            "category": "language|framework|library|tool|domain|practice|concept",
            "proficiency_level": "beginner|intermediate|advanced|expert",
            "confidence": 0.0-1.0,
            "evidence": ["string describing specific evidence from the code"]
        }
    ],
    "patterns": [
        {
            "type": "design_pattern|anti_pattern|testing|security|performance|documentation",
            "name": "string",
            "description": "string",
            "quality_impact": -1.0 to 1.0 (negative for bad, positive for good)
        }
    ],
    "complexity_assessment": {
        "overall_score": 1-10,
        "algorithmic_complexity": 1-10,
        "architectural_complexity": 1-10,
        "reasoning": "string explaining the assessment"
    },
    "quality_assessment": {
        "code_quality": 1-10,
        "testing_coverage": 0.0-1.0 (estimated based on test files/code),
        "documentation_quality": 1-10,
        "error_handling": 1-10,
        "observations": ["string observations about code quality"]
    },
    "domain_signals": ["frontend", "backend", "devops", "ml", "security", "mobile", "data", "systems"],
    "notable_aspects": ["string describing notable things about this developer's code"]
}

Guidelines:
- Be specific with skill names (e.g., "React" not just "JavaScript framework")
- Only report skills you have strong evidence for from the actual code
- Proficiency levels: beginner (basic usage), intermediate (competent), advanced (sophisticated patterns), expert (mastery)
- Consider code complexity, patterns, and best practices when assessing proficiency
- Domain signals help categorize what type of development this is"""


@dataclass(frozen=True, slots=True)
class AnalysisRequest:
    """One batch of commits plus the repository context it came from."""

    commits: tuple[CommitRecord, ...]
    context: AnalysisContext

    def to_prompt(self) -> str:
        header = f"Analyze the following {len(self.commits)} commit(s) from repository '{self.context.repository_name}'"
        if self.context.repository_description:
            header += f" ({self.context.repository_description})"
        parts = [header, ":\n\n"]

        for commit in self.commits:
            parts.append(f"## Commit: {commit.short_sha}\n")
            parts.append(f"Message: {commit.subject}\n")
            parts.append(f"Stats: +{commit.stats.additions} -{commit.stats.deletions}\n\n")
            for file in commit.files:
                title = f"### File: {file.filename}"
                if file.language:
                    title += f" ({file.language})"
                diff = file.diff
                if len(diff) > MAX_FILE_DIFF_CHARS:
                    diff = diff[:MAX_FILE_DIFF_CHARS] + "...\n[truncated]"
                parts.append(f"{title}\n```\n{diff}\n```\n\n")

        parts.append("\nProvide your analysis as JSON:\n")
        return "".join(parts)

    def estimate_tokens(self) -> int:
        chars = sum(
            len(c.message) + sum(len(f.filename) + len(f.diff) for f in c.files)
            for c in self.commits
        )
        return chars // 4
