"""HTTP client and resilience helpers for the GitHub API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import httpx
from aiolimiter import AsyncLimiter  # noqa: TC002
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from commitsight import __version__
from commitsight.clients.quota import QuotaGovernor
from commitsight.errors import (
    CommitsightError,
    GitHubAPIError,
    NetworkError,
    RateLimitedError,
    ResponseParseError,
    RetryableStatusError,
)

if TYPE_CHECKING:
    from commitsight.settings import Settings

GITHUB_API_VERSION = "2022-11-28"


@dataclass
class RequestContext:
    """Rate-limiting state shared by every call of one GitHub client."""

    limiter: AsyncLimiter
    governor: QuotaGovernor
    _limiter_loop_map: dict[int, AsyncLimiter] = field(default_factory=dict, repr=False, compare=False)

    def get_limiter(self) -> AsyncLimiter:
        """Return an AsyncLimiter bound to the current event loop."""

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return self.limiter

        loop_id = id(loop)
        if loop_id not in self._limiter_loop_map:
            self._limiter_loop_map[loop_id] = AsyncLimiter(self.limiter.max_rate, self.limiter.time_period)
        return self._limiter_loop_map[loop_id]


def build_request_context(settings: Settings) -> RequestContext:
    return RequestContext(
        limiter=AsyncLimiter(settings.rate_limit_per_second, 1),
        governor=QuotaGovernor(
            window_limit=settings.soft_limit_requests,
            window_seconds=settings.soft_limit_window_seconds,
        ),
    )


def _log_before_sleep(retry_state: RetryCallState) -> None:
    """Loguru-compatible before_sleep callback for tenacity."""
    if retry_state.next_action:
        sleep = retry_state.next_action.sleep
        logger.warning(
            "Retrying {} (attempt {}), sleeping {:.1f}s",
            retry_state.fn.__name__ if retry_state.fn else "unknown",
            retry_state.attempt_number,
            sleep,
        )


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, CommitsightError) and exc.retryable


async def create_http_client(
    settings: Settings,
    token: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create shared async client with GitHub defaults."""

    headers = {
        "User-Agent": f"commitsight/{__version__}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"

    return httpx.AsyncClient(
        transport=transport,
        base_url=settings.github_api_url,
        http2=True,
        timeout=httpx.Timeout(
            connect=5.0,
            read=settings.request_timeout,
            write=10.0,
            pool=10.0,
        ),
        limits=httpx.Limits(
            max_connections=max(10, settings.concurrency * 2),
            max_keepalive_connections=max(5, settings.concurrency),
            keepalive_expiry=30.0,
        ),
        headers=headers,
        follow_redirects=True,
    )


def _is_quota_exhausted(response: httpx.Response) -> bool:
    if response.status_code == 429:
        return True
    return response.status_code == 403 and response.headers.get("x-ratelimit-remaining") == "0"


def _reset_instant(response: httpx.Response) -> datetime | None:
    raw = response.headers.get("x-ratelimit-reset")
    if raw is None or not raw.isdigit():
        return None
    return datetime.fromtimestamp(int(raw), tz=UTC)


@retry(
    retry=retry_if_exception(_is_retryable),
    wait=wait_exponential(multiplier=1, min=1, max=30) + wait_random(0, 2),
    stop=stop_after_attempt(3),
    before_sleep=_log_before_sleep,
    reraise=True,
)
async def fetch_with_retry(client: httpx.AsyncClient, ctx: RequestContext, url: str) -> httpx.Response:
    """Quota-governed GET with retries on transient failures.

    Returns any non-retryable response unchanged; callers decide how to treat
    4xx statuses.
    """

    await ctx.governor.before_call()
    async with ctx.get_limiter():
        try:
            response = await client.get(url)
        except httpx.RequestError as exc:
            raise NetworkError(f"Request to {url} failed: {exc}") from exc
    ctx.governor.on_response(response.headers)

    if _is_quota_exhausted(response):
        status = response.status_code
        await response.aclose()
        raise RateLimitedError(status, reset_at=_reset_instant(response))
    if response.status_code in {408, 500, 502, 503, 504}:
        status = response.status_code
        await response.aclose()
        raise RetryableStatusError(status)
    return response


def ensure_success(response: httpx.Response, what: str) -> None:
    """Raise GitHubAPIError for any non-2xx response."""

    if response.is_success:
        return
    raise GitHubAPIError(
        f"Failed to fetch {what}: {response.status_code} - {response.text[:200]}",
        status_code=response.status_code,
    )


def decode_json(response: httpx.Response, what: str) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise ResponseParseError(f"Invalid JSON for {what}: {exc}") from exc
