"""Application lifecycle: settings store, command registration, startup macros."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from quickchoice_core.choices import (
    Choice,
    MacroChoice,
    find_choice,
    get_choice_by_id,
    iter_choices,
    remove_choice,
)
from quickchoice_core.config import QuickChoiceConfig
from quickchoice_core.engine import ChoiceExecutor, MacroRunReport, run_startup_macros
from quickchoice_core.errors import ChoiceNotFoundError
from quickchoice_core.interfaces.host import HostServices
from quickchoice_core.interfaces.suggester import SuggestOption
from quickchoice_core.interfaces.vault import VaultFile
from quickchoice_core.registrar import CommandRegistrar
from quickchoice_core.store import SettingsStore, persist_to

logger = logging.getLogger(__name__)

RUN_COMMAND_ID = "run"


class QuickChoice:
    """Wires the store, the registrar and the executor to a host.

    ``start()`` must be awaited before commands are invoked; ``stop()``
    releases every subscription made by ``start()``.
    """

    def __init__(
        self,
        host: HostServices,
        config: QuickChoiceConfig,
        settings_path: str | Path | None = None,
    ) -> None:
        self.host = host
        self.store = SettingsStore(config)
        self.settings_path = Path(settings_path) if settings_path else None
        self.registrar = CommandRegistrar(host.commands, self.store, self.new_executor)
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def settings(self) -> QuickChoiceConfig:
        return self.store.get_state()

    def new_executor(self, variables: dict[str, str] | None = None) -> ChoiceExecutor:
        return ChoiceExecutor(self.host, self.store.get_state, variables)

    async def start(self, run_startup: bool = True) -> list[MacroRunReport]:
        logger.info("Loading QuickChoice")
        if self.settings_path is not None:
            self._unsubscribers.append(self.store.subscribe(persist_to(self.settings_path)))
        self.registrar.attach()
        self.host.commands.register(RUN_COMMAND_ID, "Run QuickChoice", self.open_picker)

        if not run_startup:
            return []
        return await run_startup_macros(self.settings.choices, self.new_executor)

    def stop(self) -> None:
        logger.info("Unloading QuickChoice")
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.registrar.detach()
        self.host.commands.unregister(RUN_COMMAND_ID)

    async def open_picker(self) -> VaultFile | MacroRunReport | None:
        """Offer the top-level choices and run the picked one."""
        choices = self.settings.choices
        picked = await self.host.suggester.suggest(
            [SuggestOption(label=c.name, value=c.id) for c in choices]
        )
        if picked is None:
            return None
        return await self.new_executor().execute(get_choice_by_id(choices, picked))

    def get_choice(self, name_or_id: str) -> Choice:
        """Resolve by id first, then by name (first match in tree order)."""
        choices = self.settings.choices
        choice = find_choice("id", name_or_id, choices) or find_choice("name", name_or_id, choices)
        if choice is None:
            raise ChoiceNotFoundError("name", name_or_id)
        return choice

    async def run_choice(
        self,
        name_or_id: str,
        variables: dict[str, str] | None = None,
    ) -> VaultFile | MacroRunReport | None:
        return await self.new_executor(variables).execute(self.get_choice(name_or_id))

    def delete_choice(self, choice_id: str) -> Choice:
        """Remove a choice from the settings and drop its command registration."""
        choice = get_choice_by_id(self.settings.choices, choice_id)
        self.registrar.remove(choice)
        self.store.update(
            lambda state: state.model_copy(
                update={"choices": remove_choice(state.choices, choice_id)}
            )
        )
        logger.info("Deleted choice %r", choice.name)
        return choice

    def startup_macros(self) -> list[MacroChoice]:
        return [
            c for c in iter_choices(self.settings.choices)
            if isinstance(c, MacroChoice) and c.run_on_startup
        ]
