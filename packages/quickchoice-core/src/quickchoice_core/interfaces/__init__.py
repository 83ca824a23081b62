"""Interfaces for the host collaborators QuickChoice drives."""

from quickchoice_core.interfaces.ai import AIRequester
from quickchoice_core.interfaces.commands import CommandCallback, CommandRegistry
from quickchoice_core.interfaces.host import HostServices
from quickchoice_core.interfaces.notice import Notice, NoticeFactory
from quickchoice_core.interfaces.suggester import Prompter, SuggestOption, Suggester
from quickchoice_core.interfaces.vault import DocumentStore, VaultFile

__all__ = [
    "AIRequester",
    "CommandCallback",
    "CommandRegistry",
    "DocumentStore",
    "HostServices",
    "Notice",
    "NoticeFactory",
    "Prompter",
    "SuggestOption",
    "Suggester",
    "VaultFile",
]
