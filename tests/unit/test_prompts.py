"""Tests for prompt rendering."""

from __future__ import annotations

from commitsight.llm.prompts import MAX_FILE_DIFF_CHARS, SYSTEM_PROMPT, AnalysisRequest
from commitsight.models.analysis import AnalysisContext
from commitsight.models.github import CommitStats
from tests.factories import make_commit, make_file


def test_system_prompt_describes_schema() -> None:
    for key in ("skills", "patterns", "complexity_assessment", "quality_assessment", "domain_signals"):
        assert f'"{key}"' in SYSTEM_PROMPT


def test_to_prompt_renders_commits_and_files() -> None:
    commit = make_commit(
        sha="0123456789abcdef",
        message="Fix parser\n\nDetails here",
        stats=CommitStats(additions=7, deletions=3, total=10),
        files=(make_file(filename="src/parse.rs", diff="+let x = 1;"), make_file(filename="notes", language=None)),
    )
    request = AnalysisRequest(
        commits=(commit,),
        context=AnalysisContext(repository_name="octocat/hello", repository_description="A demo"),
    )

    prompt = request.to_prompt()

    assert prompt.startswith("Analyze the following 1 commit(s) from repository 'octocat/hello' (A demo):")
    assert "## Commit: 01234567\n" in prompt
    assert "Message: Fix parser\n" in prompt
    assert "Details here" not in prompt
    assert "Stats: +7 -3" in prompt
    assert "### File: src/parse.rs (Rust)\n```\n+let x = 1;\n```" in prompt
    assert "### File: notes\n" in prompt
    assert prompt.endswith("Provide your analysis as JSON:\n")


def test_to_prompt_caps_each_file_diff() -> None:
    commit = make_commit(files=(make_file(diff="q" * (MAX_FILE_DIFF_CHARS + 500)),))
    prompt = AnalysisRequest(commits=(commit,), context=AnalysisContext(repository_name="r")).to_prompt()
    assert "q" * MAX_FILE_DIFF_CHARS + "...\n[truncated]" in prompt
    assert "q" * (MAX_FILE_DIFF_CHARS + 1) not in prompt


def test_empty_description_is_omitted() -> None:
    context = AnalysisContext(repository_name="r", repository_description="")
    request = AnalysisRequest(commits=(make_commit(),), context=context)
    assert request.to_prompt().startswith("Analyze the following 1 commit(s) from repository 'r':")


def test_estimate_tokens() -> None:
    commit = make_commit(message="m" * 8, files=(make_file(filename="a.rs", diff="d" * 28),))
    request = AnalysisRequest(commits=(commit, commit), context=AnalysisContext())
    assert request.estimate_tokens() == 2 * (8 + 4 + 28) // 4
