"""Anthropic Claude analysis provider."""

from __future__ import annotations

from typing import TYPE_CHECKING

import anthropic
from loguru import logger

from commitsight.errors import LLMAPIError, LLMRateLimitedError
from commitsight.llm.parser import parse_analysis_response
from commitsight.llm.prompts import SYSTEM_PROMPT

if TYPE_CHECKING:
    from commitsight.llm.prompts import AnalysisRequest
    from commitsight.models.analysis import AnalysisResult

DEFAULT_MODEL = "claude-sonnet-4-20250514"
CONTEXT_WINDOW_TOKENS = 200_000


class ClaudeProvider:
    name = "Claude"

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 4096,
        max_context_tokens: int = CONTEXT_WINDOW_TOKENS,
        timeout: float = 120.0,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self.max_context_tokens = max_context_tokens
        self._client = client or anthropic.AsyncAnthropic(api_key=api_key, timeout=timeout)

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        logger.debug("Sending ~{} tokens to {}", request.estimate_tokens(), self.name)
        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": request.to_prompt()}],
            )
        except anthropic.RateLimitError as exc:
            raise LLMRateLimitedError(f"Claude rate limit: {exc}") from exc
        except anthropic.APIError as exc:
            raise LLMAPIError(f"Claude API error: {exc}") from exc

        text = "".join(block.text for block in response.content if getattr(block, "type", None) == "text")
        if not text:
            raise LLMAPIError("Empty response from Claude")
        return parse_analysis_response(text)
