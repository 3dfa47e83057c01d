"""GitHub REST API client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import quote

from loguru import logger
from pydantic import BaseModel, ValidationError

from commitsight.clients.http import RequestContext, decode_json, ensure_success, fetch_with_retry
from commitsight.errors import CommitsightError, RepositoryNotFoundError, ResponseParseError, UserNotFoundError
from commitsight.github.paginator import fetch_pages
from commitsight.models.github import CommitDetail, CommitSummary, GitHubUser, Repository

if TYPE_CHECKING:
    import httpx

REPOS_PER_PAGE = 100
COMMITS_PER_PAGE = 100

ModelT = TypeVar("ModelT", bound=BaseModel)


def _validate(model_type: type[ModelT], payload: Any, what: str) -> ModelT:
    try:
        return model_type.model_validate(payload)
    except ValidationError as exc:
        raise ResponseParseError(f"Unexpected payload for {what}: {exc.error_count()} errors") from exc


class GitHubClient:
    """Typed access to the GitHub endpoints the analysis needs.

    Every request goes through :func:`fetch_with_retry`, so all calls share one
    quota governor and one burst limiter.
    """

    def __init__(self, client: httpx.AsyncClient, ctx: RequestContext) -> None:
        self.client = client
        self.ctx = ctx

    async def get_user(self, username: str) -> GitHubUser:
        logger.info("Fetching user: {}", username)
        url = f"/users/{quote(username)}"
        response = await fetch_with_retry(self.client, self.ctx, url)
        if response.status_code == 404:
            raise UserNotFoundError(username)
        ensure_success(response, f"user {username}")
        return _validate(GitHubUser, decode_json(response, url), url)

    async def list_repositories(self, username: str) -> list[Repository]:
        logger.info("Fetching repositories for: {}", username)
        url = f"/users/{quote(username)}/repos?type=owner&sort=updated"
        raw = await fetch_pages(self.client, self.ctx, url, per_page=REPOS_PER_PAGE)
        return [_validate(Repository, item, url) for item in raw]

    async def list_commits(
        self,
        owner: str,
        repo: str,
        *,
        author: str | None = None,
        max_commits: int | None = None,
    ) -> list[CommitSummary]:
        url = f"/repos/{owner}/{repo}/commits"
        if author:
            url = f"{url}?author={quote(author)}"
        logger.debug("Fetching commits for: {}/{}", owner, repo)
        try:
            raw = await fetch_pages(self.client, self.ctx, url, per_page=COMMITS_PER_PAGE, max_items=max_commits)
        except CommitsightError as exc:
            if getattr(exc, "status_code", None) == 404:
                raise RepositoryNotFoundError(f"{owner}/{repo}") from exc
            raise
        return [_validate(CommitSummary, item, url) for item in raw]

    async def get_commit(self, owner: str, repo: str, sha: str) -> CommitDetail:
        url = f"/repos/{owner}/{repo}/commits/{sha}"
        logger.debug("Fetching commit diff: {}", sha[:7])
        response = await fetch_with_retry(self.client, self.ctx, url)
        ensure_success(response, f"commit {sha}")
        return _validate(CommitDetail, decode_json(response, url), url)
