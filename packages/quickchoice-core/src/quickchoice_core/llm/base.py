"""Abstract LLM interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from quickchoice_core.llm.models import LLMConfig, LLMResponse


class LLMProvider(ABC):
    """Provider-agnostic one-shot chat completion."""

    name: str = "llm"

    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    @abstractmethod
    async def generate(self, system: str, user: str) -> LLMResponse:
        """Generate a complete response for one system + user prompt pair."""
        ...
