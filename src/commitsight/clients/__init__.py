"""Network clients."""

from .http import RequestContext, build_request_context, create_http_client, fetch_with_retry
from .quota import QuotaGovernor, RateLimitState

__all__ = [
    "QuotaGovernor",
    "RateLimitState",
    "RequestContext",
    "build_request_context",
    "create_http_client",
    "fetch_with_retry",
]
