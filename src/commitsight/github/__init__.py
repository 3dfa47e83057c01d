"""GitHub API access."""

from .client import GitHubClient
from .paginator import fetch_pages

__all__ = ["GitHubClient", "fetch_pages"]
