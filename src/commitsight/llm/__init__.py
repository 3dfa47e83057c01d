"""Generation providers, prompt rendering, response parsing and batching."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .batcher import CommitBatcher, estimate_commit_tokens, file_priority, truncate_files
from .claude import ClaudeProvider
from .parser import extract_json, parse_analysis_response
from .prompts import SYSTEM_PROMPT, AnalysisRequest
from .provider import AnalysisProvider

if TYPE_CHECKING:
    from commitsight.settings import Settings


def _claude(settings: Settings) -> AnalysisProvider:
    _, api_key = settings.require_credentials()
    return ClaudeProvider(
        api_key,
        model=settings.llm_model,
        max_tokens=settings.llm_max_tokens,
        max_context_tokens=settings.llm_context_tokens,
    )


PROVIDERS = {"claude": _claude}


def create_provider(settings: Settings) -> AnalysisProvider:
    """Build the provider named by ``settings.llm_provider``."""

    return PROVIDERS[settings.llm_provider](settings)


__all__ = [
    "PROVIDERS",
    "SYSTEM_PROMPT",
    "AnalysisProvider",
    "AnalysisRequest",
    "ClaudeProvider",
    "CommitBatcher",
    "create_provider",
    "estimate_commit_tokens",
    "extract_json",
    "file_priority",
    "parse_analysis_response",
    "truncate_files",
]
