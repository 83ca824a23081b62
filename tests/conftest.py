"""Shared test fixtures for QuickChoice."""

import logging

import pytest
from unittest.mock import AsyncMock, MagicMock

from quickchoice_core.choices import (
    CaptureChoice,
    InsertAfter,
    MacroChoice,
    MultiChoice,
    TemplateChoice,
    WaitCommand,
)
from quickchoice_core.config.models import AISettings, QuickChoiceConfig
from quickchoice_core.interfaces import HostServices
from quickchoice_core.llm.models import LLMResponse, TokenUsage
from quickchoice_core.registrar import InMemoryCommandRegistry
from quickchoice_core.store import SettingsStore
from quickchoice_core.vault import FilesystemVault


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI callback reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def vault(tmp_path):
    root = tmp_path / "vault"
    root.mkdir()
    return FilesystemVault(root)


@pytest.fixture
def registry():
    return InMemoryCommandRegistry()


@pytest.fixture
def suggester():
    mock = MagicMock(name="Suggester")
    mock.suggest = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def prompter():
    mock = MagicMock(name="Prompter")
    mock.ask = AsyncMock(return_value="typed value")
    return mock


@pytest.fixture
def notice():
    return MagicMock(name="Notice")


@pytest.fixture
def notices(notice):
    factory = MagicMock(name="NoticeFactory")
    factory.show.return_value = notice
    return factory


@pytest.fixture
def requester():
    mock = MagicMock(name="AIRequester")
    mock.request = AsyncMock(
        return_value=LLMResponse(
            content="Line one\nLine two",
            usage=TokenUsage(input_tokens=12, output_tokens=8),
            model="test-model",
        )
    )
    return mock


@pytest.fixture
def host(vault, registry, suggester, prompter, notices, requester):
    return HostServices(
        vault=vault,
        commands=registry,
        suggester=suggester,
        prompter=prompter,
        notices=notices,
        requester=requester,
    )


@pytest.fixture
def sample_choices():
    """Two top-level choices plus a Multi holding a nested Multi."""
    return [
        TemplateChoice(id="tpl", name="Daily", template_path="templates/daily.md", command=True),
        MultiChoice(
            id="multi",
            name="Inbox",
            command=True,
            choices=[
                CaptureChoice(id="cap", name="Log", capture_to="inbox.md", command=True),
                MultiChoice(
                    id="inner",
                    name="Deep",
                    choices=[
                        CaptureChoice(
                            id="deep-cap",
                            name="Log",
                            capture_to="deep.md",
                            insert_after=InsertAfter(enabled=True, after="## Log"),
                        ),
                    ],
                ),
            ],
        ),
        MacroChoice(id="macro", name="Pause", commands=[WaitCommand(id="w1", time=0)]),
    ]


@pytest.fixture
def sample_config(sample_choices):
    return QuickChoiceConfig(
        choices=sample_choices,
        ai=AISettings(progress_interval_ms=5, notice_dismiss_seconds=0),
    )


@pytest.fixture
def store(sample_config):
    return SettingsStore(sample_config)
