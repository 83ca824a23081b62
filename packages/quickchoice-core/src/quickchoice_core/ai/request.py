"""AI request collaborator backed by the LLM provider adapters."""

from __future__ import annotations

import logging

from quickchoice_core.config import LLMSettings
from quickchoice_core.errors import ExternalRequestError
from quickchoice_core.llm import LLMConfig, LLMError, LLMResponse, create_llm_provider

logger = logging.getLogger(__name__)


class ProviderRequester:
    """Sends one system + user prompt pair to the configured provider."""

    def __init__(self, settings: LLMSettings) -> None:
        self.settings = settings

    async def request(
        self,
        api_key: str,
        model: str,
        system_prompt: str,
        user_prompt: str,
    ) -> LLMResponse:
        provider = create_llm_provider(
            LLMConfig(
                provider=self.settings.provider,
                model=model,
                api_key=api_key,
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                timeout=self.settings.timeout,
                max_retries=self.settings.max_retries,
            )
        )
        try:
            return await provider.generate(system_prompt, user_prompt)
        except LLMError as e:
            logger.warning("%s request failed: %s", provider.name, e)
            raise ExternalRequestError(
                f"Error while making request to {provider.name} API: {e}"
            ) from e
