"""Dispatches a choice to the engine for its type."""

from __future__ import annotations

import logging
from collections.abc import Callable

from quickchoice_core.choices import (
    CaptureChoice,
    Choice,
    MacroChoice,
    MultiChoice,
    TemplateChoice,
)
from quickchoice_core.config import QuickChoiceConfig
from quickchoice_core.engine.capture import CaptureChoiceEngine
from quickchoice_core.engine.formatter import Formatter
from quickchoice_core.engine.macro import MacroEngine, MacroRunReport
from quickchoice_core.engine.template import TemplateChoiceEngine
from quickchoice_core.errors import InvalidArgumentError
from quickchoice_core.interfaces.host import HostServices
from quickchoice_core.interfaces.suggester import SuggestOption
from quickchoice_core.interfaces.vault import VaultFile

logger = logging.getLogger(__name__)


class ChoiceExecutor:
    """Runs one choice against the host.

    Settings are read through ``config_provider`` when the executor is
    created; nothing is kept between executors. ``variables`` is shared by
    every choice run through the same executor (a macro and the choices it
    calls).
    """

    def __init__(
        self,
        host: HostServices,
        config_provider: Callable[[], QuickChoiceConfig],
        variables: dict[str, str] | None = None,
    ) -> None:
        self.host = host
        self.config = config_provider()
        self.variables: dict[str, str] = variables if variables is not None else {}
        self.formatter = Formatter(host.prompter, self.variables)

    async def execute(self, choice: Choice) -> VaultFile | MacroRunReport | None:
        logger.debug("Executing %s choice %r", choice.type, choice.name)
        if isinstance(choice, MultiChoice):
            return await self._execute_multi(choice)
        if isinstance(choice, TemplateChoice):
            return await TemplateChoiceEngine(
                choice, self.host.vault, self.formatter, self.config.template_folder_path
            ).run()
        if isinstance(choice, CaptureChoice):
            return await CaptureChoiceEngine(choice, self.host.vault, self.formatter).run()
        if isinstance(choice, MacroChoice):
            return await MacroEngine(choice, self).run()
        raise InvalidArgumentError(f"Unknown choice type: {choice.type}")

    async def _execute_multi(self, choice: MultiChoice) -> VaultFile | MacroRunReport | None:
        if not choice.choices:
            logger.info("Multi choice %r has no children", choice.name)
            return None
        picked = await self.host.suggester.suggest(
            [SuggestOption(label=child.name, value=child.id) for child in choice.choices]
        )
        if picked is None:
            logger.debug("Selection cancelled in %r", choice.name)
            return None
        child = next((c for c in choice.choices if c.id == picked), None)
        if child is None:
            raise InvalidArgumentError(f"{picked!r} is not a child of {choice.name!r}")
        return await self.execute(child)
