"""Bundle of host collaborators handed to the engines."""

from __future__ import annotations

from dataclasses import dataclass

from quickchoice_core.interfaces.ai import AIRequester
from quickchoice_core.interfaces.commands import CommandRegistry
from quickchoice_core.interfaces.notice import NoticeFactory
from quickchoice_core.interfaces.suggester import Prompter, Suggester
from quickchoice_core.interfaces.vault import DocumentStore


@dataclass
class HostServices:
    vault: DocumentStore
    commands: CommandRegistry
    suggester: Suggester
    prompter: Prompter
    notices: NoticeFactory
    requester: AIRequester
