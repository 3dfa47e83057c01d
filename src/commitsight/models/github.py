"""GitHub API payload models."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field


class GitHubUser(BaseModel):
    """Public GitHub account."""

    model_config = ConfigDict(extra="ignore")

    login: str
    id: int
    name: str | None = None
    email: str | None = None
    avatar_url: str = ""
    bio: str | None = None
    company: str | None = None
    location: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    created_at: datetime


class RepositoryOwner(BaseModel):
    model_config = ConfigDict(extra="ignore")

    login: str


class Repository(BaseModel):
    """Repository owned by the analyzed user. Immutable once fetched."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    name: str
    full_name: str
    owner: RepositoryOwner
    description: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0
    fork: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CommitAuthor(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    email: str = ""
    date: datetime


class CommitDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str
    author: CommitAuthor


class CommitSummary(BaseModel):
    """Entry of the commit listing endpoint."""

    model_config = ConfigDict(extra="ignore")

    sha: str
    commit: CommitDetails


class CommitStats(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


class FileChange(BaseModel):
    """One file entry of a commit detail response."""

    model_config = ConfigDict(extra="ignore")

    filename: str
    status: str = "modified"
    additions: int = 0
    deletions: int = 0
    patch: str | None = None


class CommitDetail(BaseModel):
    """Full commit with stats and per-file patches."""

    model_config = ConfigDict(extra="ignore")

    sha: str
    commit: CommitDetails
    stats: CommitStats | None = None
    files: list[FileChange] | None = None
