"""Commit records prepared for analysis."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field

from commitsight.models.github import CommitStats


class FileDiff(BaseModel):
    """Unified diff of one file, tagged with its inferred language."""

    model_config = ConfigDict(frozen=True)

    filename: str
    language: str | None = None
    diff: str = ""
    additions: int = 0
    deletions: int = 0


class CommitRecord(BaseModel):
    """A fetched commit ready for batching. Read-only after creation.

    ``repository`` is the owning repository's full name.
    """

    model_config = ConfigDict(frozen=True)

    sha: str
    repository: str
    message: str
    committed_at: datetime
    stats: CommitStats = Field(default_factory=CommitStats)
    files: tuple[FileDiff, ...] = ()

    @property
    def lines_changed(self) -> int:
        return self.stats.additions + self.stats.deletions

    @property
    def short_sha(self) -> str:
        return self.sha[:8]

    @property
    def subject(self) -> str:
        """First line of the commit message."""
        lines = self.message.splitlines()
        return lines[0] if lines else ""
