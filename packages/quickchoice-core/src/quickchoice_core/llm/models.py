"""Request and response models shared by the provider adapters."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class LLMError(Exception):
    """A provider SDK call failed; ``retryable`` marks rate limits and timeouts."""

    def __init__(
        self, provider: str, operation: str, cause: Exception, retryable: bool = False
    ) -> None:
        self.provider = provider
        self.operation = operation
        self.retryable = retryable
        super().__init__(f"{provider} {operation} failed: {cause}")
        self.__cause__ = cause


class LLMConfig(BaseModel):
    """Everything one adapter needs to build its async client."""

    provider: Literal["anthropic", "openai"]
    model: str
    max_tokens: int = Field(default=4096, gt=0)
    temperature: float = 0.3
    api_key: str | None = None
    timeout: float = 60.0
    max_retries: int = 2


class TokenUsage(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total(self) -> int:
        return self.input_tokens + self.output_tokens


class LLMResponse(BaseModel):
    """Completion text for an AI assistant step."""

    content: str
    usage: TokenUsage = Field(default_factory=TokenUsage)
    model: str
