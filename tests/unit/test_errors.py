"""Tests for the error taxonomy."""

from datetime import UTC, datetime

from commitsight.errors import (
    CommitsightError,
    ConfigError,
    GitHubAPIError,
    LLMAPIError,
    LLMRateLimitedError,
    NetworkError,
    RateLimitedError,
    RepositoryNotFoundError,
    ResponseParseError,
    RetryableStatusError,
    UserNotFoundError,
)


def test_retryable_flags() -> None:
    assert NetworkError("reset").retryable
    assert RateLimitedError(429).retryable
    assert RetryableStatusError(503).retryable
    assert LLMRateLimitedError("slow").retryable

    assert not ConfigError("missing").retryable
    assert not ResponseParseError("bad").retryable
    assert not GitHubAPIError("nope", 500).retryable
    assert not UserNotFoundError("ghost").retryable
    assert not LLMAPIError("down").retryable


def test_everything_is_a_commitsight_error() -> None:
    for error in (
        ConfigError("x"),
        NetworkError("x"),
        UserNotFoundError("x"),
        RepositoryNotFoundError("o/r"),
        LLMRateLimitedError("x"),
    ):
        assert isinstance(error, CommitsightError)


def test_not_found_errors_carry_status_and_name() -> None:
    user = UserNotFoundError("ghost")
    repo = RepositoryNotFoundError("octocat/gone")
    assert user.status_code == repo.status_code == 404
    assert str(user) == "User not found: ghost"
    assert str(repo) == "Repository not found: octocat/gone"
    assert repo.full_name == "octocat/gone"


def test_rate_limited_message_includes_reset() -> None:
    reset = datetime(2025, 6, 1, 12, tzinfo=UTC)
    assert str(RateLimitedError(403, reset)) == f"Rate limit exceeded (HTTP 403), resets at {reset.isoformat()}"
    assert str(RateLimitedError(429)) == "Rate limit exceeded (HTTP 429)"
    assert RateLimitedError(403, reset).reset_at == reset
