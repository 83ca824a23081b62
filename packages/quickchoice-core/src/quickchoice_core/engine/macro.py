"""Sequential execution of a macro's commands."""

from __future__ import annotations

import asyncio
import importlib.util
import inspect
import logging
import re
import types
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from quickchoice_core.ai import run_ai_assistant
from quickchoice_core.ai.assistant import dismiss_later
from quickchoice_core.choices import (
    AIAssistantCommand,
    ChoiceCommand,
    Command,
    HostCommand,
    MacroChoice,
    UserScriptCommand,
    WaitCommand,
    get_choice_by_id,
)
from quickchoice_core.config import QuickChoiceConfig
from quickchoice_core.errors import InvalidArgumentError, NotFoundError, QuickChoiceError
from quickchoice_core.interfaces.host import HostServices
from quickchoice_core.interfaces.vault import DocumentStore
from quickchoice_core.vault import normalize_path

if TYPE_CHECKING:
    from quickchoice_core.engine.executor import ChoiceExecutor

logger = logging.getLogger(__name__)


class MacroRunReport(BaseModel):
    """Outcome of one macro run."""

    macro: str
    completed: list[str] = Field(default_factory=list)
    failed: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.failed is None


class NestedMacroError(QuickChoiceError):
    """Raised by a Choice step whose target macro stopped on a failure."""


@dataclass
class ScriptContext:
    """Argument handed to a user script's ``entry`` function.

    Scripts may read and add to ``variables``; later steps see the changes.
    """

    variables: dict[str, str]
    settings: dict[str, Any]
    host: HostServices
    config: QuickChoiceConfig
    extra: dict[str, Any] = field(default_factory=dict)


def load_user_script(vault: DocumentStore, path: str) -> types.ModuleType:
    """Import a vault script as a fresh module; it is not added to ``sys.modules``."""
    if not vault.exists(path):
        raise NotFoundError(f"User script {path} not found")
    name = "quickchoice_user_script_" + re.sub(r"\W", "_", normalize_path(path))
    spec = importlib.util.spec_from_file_location(name, vault.resolve(path))
    if spec is None or spec.loader is None:
        raise InvalidArgumentError(f"User script {path} is not a Python file")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class MacroEngine:
    """Runs commands strictly in list order, awaiting each one.

    The first step that raises stops the macro: the failure is logged,
    shown as a transient notice and recorded in the returned report. It is
    never propagated to the caller.
    """

    def __init__(self, macro: MacroChoice, executor: ChoiceExecutor) -> None:
        self.macro = macro
        self.executor = executor

    @property
    def host(self) -> HostServices:
        return self.executor.host

    @property
    def variables(self) -> dict[str, str]:
        return self.executor.variables

    async def run(self) -> MacroRunReport:
        report = MacroRunReport(macro=self.macro.name)
        logger.info("Running macro %r (%d steps)", self.macro.name, len(self.macro.commands))

        for command in self.macro.commands:
            try:
                await self._execute_command(command)
            except Exception as exc:
                logger.error(
                    "Macro %r stopped at %s step %r: %s",
                    self.macro.name,
                    command.type,
                    command.name or command.id,
                    exc,
                )
                report.failed = command.id
                report.error = str(exc)
                # AI steps already put the failure on their own notice.
                if not isinstance(command, AIAssistantCommand):
                    self._notify_failure(exc)
                break
            report.completed.append(command.id)

        return report

    def _notify_failure(self, exc: Exception) -> None:
        notice = self.host.notices.show(f"Macro {self.macro.name} failed: {exc}")
        dismiss_later(notice, self.executor.config.ai.notice_dismiss_seconds)

    async def _execute_command(self, command: Command) -> None:
        if isinstance(command, ChoiceCommand):
            await self._run_choice(command)
        elif isinstance(command, UserScriptCommand):
            await self._run_user_script(command)
        elif isinstance(command, AIAssistantCommand):
            await self._run_ai_assistant(command)
        elif isinstance(command, WaitCommand):
            await asyncio.sleep(command.time / 1000)
        elif isinstance(command, HostCommand):
            await self.host.commands.execute(command.command_id)
        else:
            raise InvalidArgumentError(f"Unknown command type: {command.type}")

    async def _run_choice(self, command: ChoiceCommand) -> None:
        choice = get_choice_by_id(self.executor.config.choices, command.choice_id)
        result = await self.executor.execute(choice)
        if isinstance(result, MacroRunReport) and not result.ok:
            raise NestedMacroError(f"Macro {result.macro} failed: {result.error}")

    async def _run_user_script(self, command: UserScriptCommand) -> None:
        module = load_user_script(self.host.vault, command.path)
        entry = getattr(module, "entry", None)
        if not callable(entry):
            raise InvalidArgumentError(f"User script {command.path} has no entry function")

        context = ScriptContext(
            variables=self.variables,
            settings=dict(command.settings),
            host=self.host,
            config=self.executor.config,
        )
        result = entry(context)
        if inspect.isawaitable(result):
            await result

    async def _run_ai_assistant(self, command: AIAssistantCommand) -> None:
        config = self.executor.config
        variables = await run_ai_assistant(
            command,
            self.executor.formatter.format,
            self.host,
            config.llm,
            config.ai,
        )
        self.variables.update(variables)
