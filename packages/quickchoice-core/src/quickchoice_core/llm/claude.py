"""Anthropic Claude adapter."""

from __future__ import annotations

from anthropic import APIError, AsyncAnthropic, RateLimitError

from quickchoice_core.llm.base import LLMProvider
from quickchoice_core.llm.models import LLMConfig, LLMError, LLMResponse, TokenUsage


class ClaudeProvider(LLMProvider):
    """Claude adapter using the Anthropic async SDK."""

    name = "Anthropic"

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = AsyncAnthropic(
            api_key=config.api_key,  # falls back to ANTHROPIC_API_KEY env var
            timeout=config.timeout,
            max_retries=config.max_retries,
        )

    async def generate(self, system: str, user: str) -> LLMResponse:
        try:
            message = await self._client.messages.create(
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                system=system,
                messages=[{"role": "user", "content": user}],
            )
        except APIError as e:
            raise LLMError(
                "claude", "generate", e, retryable=isinstance(e, RateLimitError)
            ) from e
        if not message.content or not hasattr(message.content[0], "text"):
            raise LLMError("claude", "generate", ValueError("No text content in Claude response"))
        return LLMResponse(
            content=message.content[0].text,
            usage=TokenUsage(
                input_tokens=message.usage.input_tokens,
                output_tokens=message.usage.output_tokens,
            ),
            model=message.model,
        )
