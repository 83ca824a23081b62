"""Tests for the LLM provider adapters and the AI requester."""

from __future__ import annotations

import os
from unittest.mock import AsyncMock, MagicMock, Mock, patch

import pytest
from anthropic import APIError as AnthropicAPIError
from anthropic import RateLimitError as AnthropicRateLimitError
from openai import APIError as OpenAIAPIError

from quickchoice_core.ai import ProviderRequester
from quickchoice_core.config.models import LLMSettings
from quickchoice_core.errors import ExternalRequestError
from quickchoice_core.llm import (
    ClaudeProvider,
    LLMConfig,
    LLMError,
    LLMResponse,
    OpenAIProvider,
    TokenUsage,
    create_llm_provider,
    resolve_api_key,
)


class TestCreateProvider:
    def test_anthropic(self):
        provider = create_llm_provider(LLMConfig(provider="anthropic", model="m", api_key="k"))
        assert isinstance(provider, ClaudeProvider)
        assert provider.name == "Anthropic"

    def test_openai(self):
        provider = create_llm_provider(LLMConfig(provider="openai", model="m", api_key="k"))
        assert isinstance(provider, OpenAIProvider)
        assert provider.name == "OpenAI"

    def test_unsupported(self):
        config = LLMConfig.model_construct(provider="gemini", model="m")
        with pytest.raises(ValueError, match="Unsupported LLM provider"):
            create_llm_provider(config)


class TestResolveApiKey:
    @patch.dict(os.environ, {"MY_KEY": "secret"}, clear=True)
    def test_reads_named_env_var(self):
        assert resolve_api_key(LLMSettings(api_key_env="MY_KEY")) == "secret"

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_key(self):
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            resolve_api_key(LLMSettings())


def test_usage_total_and_default():
    assert TokenUsage(input_tokens=3, output_tokens=4).total == 7
    assert LLMResponse(content="x", model="m").usage.total == 0


# ── Adapters ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_claude_generate_returns_response():
    provider = ClaudeProvider(LLMConfig(provider="anthropic", model="claude-test", api_key="k"))
    message = MagicMock()
    message.content = [MagicMock(text="answer")]
    message.usage.input_tokens = 3
    message.usage.output_tokens = 4
    message.model = "claude-test"

    with patch.object(provider._client.messages, "create", AsyncMock(return_value=message)) as create:
        result = await provider.generate("sys", "user")

    assert result == LLMResponse(
        content="answer", usage=TokenUsage(input_tokens=3, output_tokens=4), model="claude-test"
    )
    kwargs = create.await_args.kwargs
    assert kwargs["system"] == "sys"
    assert kwargs["messages"] == [{"role": "user", "content": "user"}]


@pytest.mark.asyncio
async def test_claude_provider_wraps_api_error():
    provider = ClaudeProvider(LLMConfig(provider="anthropic", model="test", api_key="test"))

    with patch.object(
        provider._client.messages,
        "create",
        side_effect=AnthropicAPIError(message="test error", request=Mock(), body=None),
    ):
        with pytest.raises(LLMError) as exc_info:
            await provider.generate("system", "user")

    assert exc_info.value.provider == "claude"
    assert not exc_info.value.retryable
    assert isinstance(exc_info.value.__cause__, AnthropicAPIError)


@pytest.mark.asyncio
async def test_claude_provider_marks_rate_limit_retryable():
    provider = ClaudeProvider(LLMConfig(provider="anthropic", model="test", api_key="test"))

    with patch.object(
        provider._client.messages,
        "create",
        side_effect=AnthropicRateLimitError(message="rate limit", response=Mock(), body=None),
    ):
        with pytest.raises(LLMError) as exc_info:
            await provider.generate("system", "user")

    assert exc_info.value.retryable


@pytest.mark.asyncio
async def test_openai_generate_returns_response():
    provider = OpenAIProvider(LLMConfig(provider="openai", model="gpt-test", api_key="k"))
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = "answer"
    response.usage.prompt_tokens = 5
    response.usage.completion_tokens = 6
    response.model = "gpt-test"

    with patch.object(
        provider._client.chat.completions, "create", AsyncMock(return_value=response)
    ) as create:
        result = await provider.generate("sys", "user")

    assert result.content == "answer"
    assert result.usage.output_tokens == 6
    assert create.await_args.kwargs["messages"][0] == {"role": "system", "content": "sys"}


@pytest.mark.asyncio
async def test_openai_provider_wraps_api_error():
    provider = OpenAIProvider(LLMConfig(provider="openai", model="test", api_key="test"))

    with patch.object(
        provider._client.chat.completions,
        "create",
        side_effect=OpenAIAPIError(message="test error", request=Mock(), body=None),
    ):
        with pytest.raises(LLMError) as exc_info:
            await provider.generate("system", "user")

    assert exc_info.value.provider == "openai"


@pytest.mark.asyncio
async def test_openai_provider_empty_choices():
    provider = OpenAIProvider(LLMConfig(provider="openai", model="test", api_key="test"))
    response = MagicMock()
    response.choices = []

    with patch.object(provider._client.chat.completions, "create", AsyncMock(return_value=response)):
        with pytest.raises(LLMError, match="No choices"):
            await provider.generate("system", "user")


# ── ProviderRequester ───────────────────────────────────────────────


class TestProviderRequester:
    @pytest.mark.asyncio
    async def test_passes_settings_to_provider(self):
        provider = MagicMock(name="provider")
        provider.generate = AsyncMock(
            return_value=LLMResponse(
                content="ok", usage=TokenUsage(input_tokens=1, output_tokens=1), model="m"
            )
        )
        settings = LLMSettings(provider="anthropic", max_tokens=128, timeout=5)

        with patch(
            "quickchoice_core.ai.request.create_llm_provider", return_value=provider
        ) as factory:
            result = await ProviderRequester(settings).request("key", "model-x", "sys", "user")

        assert result.content == "ok"
        config = factory.call_args.args[0]
        assert (config.provider, config.model, config.api_key) == ("anthropic", "model-x", "key")
        assert config.max_tokens == 128
        provider.generate.assert_awaited_once_with("sys", "user")

    @pytest.mark.asyncio
    async def test_wraps_llm_error(self):
        provider = MagicMock(name="provider")
        provider.name = "OpenAI"
        provider.generate = AsyncMock(
            side_effect=LLMError("openai", "generate", RuntimeError("boom"))
        )

        with patch("quickchoice_core.ai.request.create_llm_provider", return_value=provider):
            with pytest.raises(ExternalRequestError, match="Error while making request to OpenAI API"):
                await ProviderRequester(LLMSettings()).request("key", "m", "sys", "user")
