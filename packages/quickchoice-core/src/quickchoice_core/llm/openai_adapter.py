"""OpenAI chat completions adapter."""

from __future__ import annotations

from openai import APIError, AsyncOpenAI, RateLimitError

from quickchoice_core.llm.base import LLMProvider
from quickchoice_core.llm.models import LLMConfig, LLMError, LLMResponse, TokenUsage


class OpenAIProvider(LLMProvider):
    """OpenAI adapter using the async SDK."""

    name = "OpenAI"

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = AsyncOpenAI(
            api_key=config.api_key,  # falls back to OPENAI_API_KEY env var
            timeout=config.timeout,
            max_retries=config.max_retries,
        )

    async def generate(self, system: str, user: str) -> LLMResponse:
        try:
            response = await self._client.chat.completions.create(
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            )
        except APIError as e:
            raise LLMError(
                "openai", "generate", e, retryable=isinstance(e, RateLimitError)
            ) from e
        if not response.choices:
            raise LLMError("openai", "generate", ValueError("No choices in OpenAI response"))
        choice = response.choices[0]
        usage = response.usage
        return LLMResponse(
            content=choice.message.content or "",
            usage=TokenUsage(
                input_tokens=usage.prompt_tokens if usage else 0,
                output_tokens=usage.completion_tokens if usage else 0,
            ),
            model=response.model,
        )
