"""Error taxonomy.

Transient errors carry ``retryable = True``. Only the HTTP request seam acts on
that flag (see :func:`commitsight.clients.http.fetch_with_retry`); every other
layer treats errors as final.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003


class CommitsightError(Exception):
    """Base class for all commitsight failures."""

    retryable: bool = False


class ConfigError(CommitsightError):
    """Missing or invalid configuration, including credentials."""


class NetworkError(CommitsightError):
    """Transport-level failure talking to a remote service."""

    retryable = True


class ResponseParseError(CommitsightError):
    """A response body could not be decoded into the expected shape."""


class GitHubAPIError(CommitsightError):
    """Unsuccessful response from the GitHub API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UserNotFoundError(GitHubAPIError):
    """The requested GitHub user does not exist."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"User not found: {username}", status_code=404)


class RepositoryNotFoundError(GitHubAPIError):
    """The requested repository does not exist or is not visible."""

    def __init__(self, full_name: str) -> None:
        self.full_name = full_name
        super().__init__(f"Repository not found: {full_name}", status_code=404)


class RateLimitedError(GitHubAPIError):
    """GitHub rejected the call because the quota is exhausted."""

    retryable = True

    def __init__(self, status_code: int, reset_at: datetime | None = None) -> None:
        self.reset_at = reset_at
        suffix = f", resets at {reset_at.isoformat()}" if reset_at else ""
        super().__init__(f"Rate limit exceeded (HTTP {status_code}){suffix}", status_code=status_code)


class RetryableStatusError(GitHubAPIError):
    """Raised when a response has a retryable HTTP status code, so tenacity can retry."""

    retryable = True

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Retryable HTTP {status_code}", status_code=status_code)


class LLMAPIError(CommitsightError):
    """The text-generation service failed or returned nothing usable."""


class LLMRateLimitedError(LLMAPIError):
    """The text-generation service throttled the request."""

    retryable = True
