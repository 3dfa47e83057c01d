"""Tests for token-budget batching."""

from __future__ import annotations

from commitsight.llm.batcher import (
    TRUNCATION_MARKER,
    CommitBatcher,
    estimate_commit_tokens,
    file_priority,
    truncate_files,
)
from tests.factories import make_commit, make_file, make_sized_commit


def _batcher(available: int) -> CommitBatcher:
    return CommitBatcher(max_context_tokens=available + 4000)


def test_estimate_commit_tokens() -> None:
    commit = make_commit(message="x" * 40, files=(make_file(filename="a.py", diff="y" * 36),))
    assert estimate_commit_tokens(commit) == (40 + 4 + 36) // 4 + 100


def test_make_sized_commit_matches_estimate() -> None:
    assert estimate_commit_tokens(make_sized_commit("c", 3000)) == 3000


def test_file_priority_order() -> None:
    assert file_priority("src/main.rs") == 100
    assert file_priority("App.tsx") == 90
    assert file_priority("schema.sql") == 80
    assert file_priority("config.yaml") == 50
    assert file_priority("README.md") == 30
    assert file_priority("Cargo.lock") == 0
    assert file_priority("Makefile") == 40
    assert file_priority("image.PNG") == 40


def test_available_tokens_subtracts_reservation() -> None:
    assert CommitBatcher(200_000).available_tokens == 196_000
    assert CommitBatcher(1_000).available_tokens == 0


def test_packs_greedily_in_order() -> None:
    commits = [make_sized_commit(f"c{i}", 3000) for i in range(1, 4)]
    batches = _batcher(6000).create_batches(commits)
    assert [[c.sha for c in b] for b in batches] == [["c1", "c2"], ["c3"]]


def test_pairs_that_overflow_budget_are_split() -> None:
    commits = [make_sized_commit(f"c{i}", 3000) for i in range(1, 4)]
    batches = _batcher(5000).create_batches(commits)
    assert [[c.sha for c in b] for b in batches] == [["c1"], ["c2"], ["c3"]]


def test_oversized_commit_gets_its_own_truncated_batch() -> None:
    small_a = make_sized_commit("a", 500)
    huge = make_commit(sha="h", message="big", files=(make_file(filename="big.rs", diff="z" * 40_000),))
    small_b = make_sized_commit("b", 500)

    batches = _batcher(2000).create_batches([small_a, huge, small_b])

    assert [[c.sha for c in b] for b in batches] == [["a"], ["h"], ["b"]]
    truncated = batches[1][0]
    assert truncated.files[0].diff.endswith(TRUNCATION_MARKER)
    assert len(truncated.files[0].diff) < 40_000


def test_batches_are_never_empty_and_preserve_order() -> None:
    sizes = [800, 1200, 300, 5000, 900, 900, 100, 2500]
    commits = [make_sized_commit(f"c{i}", size) for i, size in enumerate(sizes)]
    budget = 2000

    batches = _batcher(budget).create_batches(commits)

    assert all(batches)
    assert [c.sha for b in batches for c in b] == [c.sha for c in commits]
    for batch in batches:
        if len(batch) > 1:
            assert sum(estimate_commit_tokens(c) for c in batch) <= budget


def test_empty_input_yields_no_batches() -> None:
    assert _batcher(1000).create_batches([]) == []


def test_truncate_files_prefers_source_over_lockfiles() -> None:
    lock = make_file(filename="Cargo.lock", diff="l" * 3000)
    source = make_file(filename="main.rs", diff="r" * 500)

    kept = truncate_files([lock, source], 600)

    assert kept[0].filename == "main.rs"
    assert kept[0].diff == "r" * 500
    assert all(f.filename != "Cargo.lock" or len(f.diff) <= len(TRUNCATION_MARKER) + 1 for f in kept)


def test_truncate_files_cut_diff_fits_its_pool() -> None:
    source = make_file(filename="main.rs", diff="r" * 5000)
    pool = 1000

    (kept,) = truncate_files([source], pool)

    allotted = pool - len("main.rs") - 50
    assert kept.diff.endswith(TRUNCATION_MARKER)
    assert len(kept.diff) == allotted


def test_truncate_files_drops_files_once_pool_is_spent() -> None:
    files = [make_file(filename=f"f{i}.py", diff="p" * 400) for i in range(5)]
    kept = truncate_files(files, 1000)
    assert 0 < len(kept) < 5
    used = sum(len(f.filename) + 50 + len(f.diff) for f in kept)
    assert used <= 1000


def test_truncate_commit_keeps_identity() -> None:
    commit = make_commit(sha="keep", files=(make_file(diff="d" * 50_000),))
    truncated = _batcher(1000).truncate_commit(commit, 1000)
    assert truncated.sha == "keep"
    assert truncated.message == commit.message
    assert commit.files[0].diff == "d" * 50_000
