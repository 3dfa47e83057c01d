"""Token-budget batching of commit records for generation requests."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

from loguru import logger

from commitsight.taxonomy import file_extension

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from commitsight.models.commit import CommitRecord, FileDiff

RESERVED_TOKENS = 4_000
CHARS_PER_TOKEN = 4
COMMIT_FORMAT_TOKENS = 100
COMMIT_OVERHEAD_CHARS = 200
FILE_OVERHEAD_CHARS = 50
TRUNCATION_MARKER = "\n... [truncated]"

_PRIORITY_GROUPS: tuple[tuple[int, frozenset[str]], ...] = (
    (100, frozenset({"rs", "py", "ts", "js", "go", "java", "cpp", "c", "rb", "swift", "kt"})),
    (90, frozenset({"tsx", "jsx", "vue", "svelte"})),
    (80, frozenset({"sql", "graphql"})),
    (50, frozenset({"yaml", "yml", "toml", "json"})),
    (30, frozenset({"md", "txt", "rst"})),
    (0, frozenset({"lock"})),
)
DEFAULT_PRIORITY = 40

Batch: TypeAlias = "tuple[CommitRecord, ...]"


def estimate_commit_tokens(commit: CommitRecord) -> int:
    chars = len(commit.message) + sum(len(f.filename) + len(f.diff) for f in commit.files)
    return chars // CHARS_PER_TOKEN + COMMIT_FORMAT_TOKENS


def file_priority(filename: str) -> int:
    ext = file_extension(filename)
    for weight, extensions in _PRIORITY_GROUPS:
        if ext in extensions:
            return weight
    return DEFAULT_PRIORITY


def truncate_files(files: Iterable[FileDiff], char_pool: int) -> tuple[FileDiff, ...]:
    """Fit ``files`` into ``char_pool`` characters, highest priority first.

    Each admitted file costs its filename plus a fixed overhead on top of its
    diff. A diff that does not fit is cut so that, with the marker appended, it
    uses exactly the space left. Files that cannot be admitted are dropped.
    """

    ordered = sorted(files, key=lambda f: file_priority(f.filename), reverse=True)
    used = 0
    kept: list[FileDiff] = []
    for file in ordered:
        overhead = len(file.filename) + FILE_OVERHEAD_CHARS
        available = char_pool - used - overhead
        if available <= 0:
            break
        if len(file.diff) > available:
            keep = available - len(TRUNCATION_MARKER)
            if keep <= 0:
                break
            file = file.model_copy(update={"diff": file.diff[:keep] + TRUNCATION_MARKER})
        used += overhead + len(file.diff)
        kept.append(file)
    return tuple(kept)


class CommitBatcher:
    """Greedy, order-preserving packer over a generation context budget."""

    def __init__(self, max_context_tokens: int, reserved_tokens: int = RESERVED_TOKENS) -> None:
        self.max_context_tokens = max_context_tokens
        self.reserved_tokens = reserved_tokens

    @property
    def available_tokens(self) -> int:
        return max(self.max_context_tokens - self.reserved_tokens, 0)

    def create_batches(self, commits: Sequence[CommitRecord]) -> list[Batch]:
        budget = self.available_tokens
        batches: list[Batch] = []
        current: list[CommitRecord] = []
        current_tokens = 0

        for commit in commits:
            tokens = estimate_commit_tokens(commit)
            if tokens > budget:
                if current:
                    batches.append(tuple(current))
                    current, current_tokens = [], 0
                logger.debug("Commit {} exceeds budget ({} > {} tokens), truncating", commit.short_sha, tokens, budget)
                batches.append((self.truncate_commit(commit, budget),))
                continue
            if current_tokens + tokens > budget and current:
                batches.append(tuple(current))
                current, current_tokens = [], 0
            current.append(commit)
            current_tokens += tokens

        if current:
            batches.append(tuple(current))
        return batches

    def truncate_commit(self, commit: CommitRecord, max_tokens: int) -> CommitRecord:
        char_pool = max_tokens * CHARS_PER_TOKEN - len(commit.message) - COMMIT_OVERHEAD_CHARS
        return commit.model_copy(update={"files": truncate_files(commit.files, char_pool)})
