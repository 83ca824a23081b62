"""LLM provider abstraction layer."""

import os

from quickchoice_core.config.models import LLMSettings
from quickchoice_core.llm.base import LLMProvider
from quickchoice_core.llm.claude import ClaudeProvider
from quickchoice_core.llm.models import LLMConfig, LLMError, LLMResponse, TokenUsage
from quickchoice_core.llm.openai_adapter import OpenAIProvider

_PROVIDER_MAP: dict[str, type[LLMProvider]] = {
    "anthropic": ClaudeProvider,
    "openai": OpenAIProvider,
}


def create_llm_provider(config: LLMConfig) -> LLMProvider:
    """Instantiate the adapter registered for ``config.provider``."""
    cls = _PROVIDER_MAP.get(config.provider)
    if cls is None:
        raise ValueError(
            f"Unsupported LLM provider: {config.provider!r}. "
            f"Supported: {', '.join(_PROVIDER_MAP)}"
        )
    return cls(config)


def resolve_api_key(settings: LLMSettings) -> str:
    """Read the API key from the env var named in settings.api_key_env."""
    api_key = os.environ.get(settings.api_key_env)
    if not api_key:
        raise ValueError(
            f"Missing API key: set environment variable {settings.api_key_env!r}"
        )
    return api_key


__all__ = [
    "ClaudeProvider",
    "LLMConfig",
    "LLMError",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "TokenUsage",
    "create_llm_provider",
    "resolve_api_key",
]
