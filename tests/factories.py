"""Shared test factory helpers for creating model instances."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import httpx

from commitsight.models.analysis import (
    AnalysisResult,
    ComplexityAssessment,
    DetectedPattern,
    QualityAssessment,
    SkillMention,
)
from commitsight.models.commit import CommitRecord, FileDiff
from commitsight.models.github import CommitStats, GitHubUser, Repository, RepositoryOwner
from commitsight.models.profile import ProfileSummary, UserProfile
from commitsight.models.skill import (
    Skill,
    SkillCategory,
    SkillEvidence,
    SkillOccurrence,
    SkillRating,
    SkillTrend,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


def make_user(login: str = "octocat", **overrides) -> GitHubUser:
    defaults = {
        "login": login,
        "id": 583231,
        "name": "The Octocat",
        "bio": "Mascot",
        "public_repos": 8,
        "created_at": datetime(2011, 1, 25, 18, 44, 36, tzinfo=UTC),
    }
    defaults.update(overrides)
    return GitHubUser(**defaults)


def make_repository(name: str = "hello", owner: str = "octocat", **overrides) -> Repository:
    defaults = {
        "id": abs(hash((owner, name))) % 1_000_000,
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": RepositoryOwner(login=owner),
        "description": f"The {name} repository",
        "language": "Rust",
    }
    defaults.update(overrides)
    return Repository(**defaults)


def make_file(filename: str = "src/lib.rs", diff: str = "+fn main() {}", **overrides) -> FileDiff:
    defaults = {"filename": filename, "language": "Rust", "diff": diff, "additions": 1, "deletions": 0}
    defaults.update(overrides)
    return FileDiff(**defaults)


def make_commit(sha: str = "a" * 40, repository: str = "octocat/hello", **overrides) -> CommitRecord:
    defaults = {
        "sha": sha,
        "repository": repository,
        "message": "Add feature\n\nLonger body",
        "committed_at": NOW - timedelta(days=10),
        "stats": CommitStats(additions=10, deletions=2, total=12),
        "files": (make_file(),),
    }
    defaults.update(overrides)
    return CommitRecord(**defaults)


def make_sized_commit(sha: str, tokens: int) -> CommitRecord:
    """Commit whose estimated cost is exactly ``tokens``."""
    chars = (tokens - 100) * 4
    return make_commit(sha=sha, message="m", files=(make_file(filename="a.rs", diff="x" * (chars - len("m") - 4)),))


def make_mention(name: str = "Rust", **overrides) -> SkillMention:
    defaults = {
        "name": name,
        "category": "language",
        "proficiency_level": "advanced",
        "confidence": 0.8,
        "evidence": ["Uses traits"],
    }
    defaults.update(overrides)
    return SkillMention(**defaults)


def make_result(*mentions: SkillMention, **overrides) -> AnalysisResult:
    defaults = {
        "skills": list(mentions) or [make_mention()],
        "patterns": [],
        "complexity_assessment": ComplexityAssessment(overall_score=6),
        "quality_assessment": QualityAssessment(code_quality=7, testing_coverage=0.5, documentation_quality=6),
        "domain_signals": ["backend"],
    }
    defaults.update(overrides)
    return AnalysisResult(**defaults)


def make_pattern(name: str, impact: float) -> DetectedPattern:
    return DetectedPattern(pattern_type="design_pattern", name=name, description=name, quality_impact=impact)


def make_occurrence(days_ago: float = 10, **overrides) -> SkillOccurrence:
    defaults = {
        "commit_sha": "a" * 40,
        "repository": "octocat/hello",
        "timestamp": NOW - timedelta(days=days_ago),
        "proficiency_signal": "intermediate",
        "confidence": 0.8,
        "lines_changed": 10,
    }
    defaults.update(overrides)
    return SkillOccurrence(**defaults)


def make_skill(name: str = "rust", category: SkillCategory = SkillCategory.LANGUAGE) -> Skill:
    return Skill(id=name.replace(" ", "_"), name=name, category=category)


def make_rating(name: str = "rust", score: int = 60, **overrides) -> SkillRating:
    defaults = {
        "skill": make_skill(name),
        "proficiency_score": score,
        "confidence": 0.5,
        "evidence": SkillEvidence(
            commit_count=3,
            total_lines_changed=120,
            first_seen=NOW - timedelta(days=400),
            last_seen=NOW - timedelta(days=5),
            repositories=["octocat/hello"],
        ),
        "trend": SkillTrend.STABLE,
    }
    defaults.update(overrides)
    return SkillRating(**defaults)


def make_profile(login: str = "octocat", *ratings: SkillRating, **overrides) -> UserProfile:
    defaults = {
        "user": make_user(login),
        "repositories": [make_repository(owner=login)],
        "total_commits_analyzed": 12,
        "analysis_date": NOW,
        "skills": list(ratings),
        "summary": ProfileSummary(primary_languages=["rust"]),
    }
    defaults.update(overrides)
    return UserProfile(**defaults)


class FakeClock:
    """Monotonic clock whose sleeps advance time instead of waiting."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def user_payload(login: str = "octocat") -> dict:
    return {
        "login": login,
        "id": 583231,
        "name": "The Octocat",
        "avatar_url": "https://avatars.githubusercontent.com/u/583231",
        "bio": None,
        "public_repos": 2,
        "followers": 10,
        "following": 0,
        "created_at": "2011-01-25T18:44:36Z",
    }


def repo_payload(name: str, owner: str = "octocat", *, fork: bool = False, language: str | None = "Rust") -> dict:
    return {
        "id": abs(hash((owner, name))) % 1_000_000,
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": {"login": owner},
        "description": f"{name} description",
        "language": language,
        "stargazers_count": 3,
        "forks_count": 1,
        "fork": fork,
        "created_at": "2020-01-01T00:00:00Z",
        "updated_at": "2025-05-01T00:00:00Z",
    }


def commit_summary_payload(sha: str, date: str = "2025-05-20T10:00:00Z") -> dict:
    return {
        "sha": sha,
        "commit": {"message": f"Commit {sha}", "author": {"name": "Octo", "email": "o@example.com", "date": date}},
    }


def commit_detail_payload(sha: str, files: list[dict] | None = None, date: str = "2025-05-20T10:00:00Z") -> dict:
    payload = commit_summary_payload(sha, date)
    payload["stats"] = {"additions": 5, "deletions": 1, "total": 6}
    payload["files"] = (
        files
        if files is not None
        else [{"filename": "src/main.rs", "status": "modified", "additions": 5, "deletions": 1, "patch": "+fn x() {}"}]
    )
    return payload


class FakeGitHubAPI:
    """Route table for an ``httpx.MockTransport`` standing in for the GitHub REST API.

    ``routes`` maps request paths to JSON payloads or to status codes.
    """

    def __init__(self, routes: dict[str, object]) -> None:
        self.routes = routes
        self.requests: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.url.path)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(route, int):
            return httpx.Response(route, json={"message": "error"})
        if isinstance(route, list):
            page = int(request.url.params.get("page", "1"))
            per_page = int(request.url.params.get("per_page", "100"))
            chunk = route[(page - 1) * per_page : page * per_page]
            headers = {}
            if page * per_page < len(route):
                headers["link"] = f'<{request.url.copy_set_param("page", page + 1)}>; rel="next"'
            return httpx.Response(200, json=chunk, headers=headers)
        return httpx.Response(200, json=route)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self), base_url="https://api.github.com")
