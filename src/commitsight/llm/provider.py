"""Interface implemented by text-generation back-ends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from commitsight.llm.prompts import AnalysisRequest
    from commitsight.models.analysis import AnalysisResult


@runtime_checkable
class AnalysisProvider(Protocol):
    """A generation back-end able to analyze one batch of commits."""

    @property
    def name(self) -> str: ...

    @property
    def max_context_tokens(self) -> int: ...

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult: ...
