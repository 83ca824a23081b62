"""AI request collaborator interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from quickchoice_core.llm.models import LLMResponse


@runtime_checkable
class AIRequester(Protocol):
    """Issues one completion request. Failures raise a single error with a readable message."""

    async def request(
        self,
        api_key: str,
        model: str,
        system_prompt: str,
        user_prompt: str,
    ) -> LLMResponse: ...
