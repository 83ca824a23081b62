"""Keeps host command registrations in step with the choice tree."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from quickchoice_core.choices import Choice, get_choice_by_id, iter_choices
from quickchoice_core.config import QuickChoiceConfig
from quickchoice_core.interfaces.commands import CommandRegistry
from quickchoice_core.store import SettingsStore

if TYPE_CHECKING:
    from quickchoice_core.engine.executor import ChoiceExecutor

logger = logging.getLogger(__name__)

COMMAND_PREFIX = "choice:"


def command_id_for(choice_id: str) -> str:
    return f"{COMMAND_PREFIX}{choice_id}"


class CommandRegistrar:
    """Registers one host command per choice flagged ``command``.

    Synchronization is always a full pass over the current tree; stale ids
    from the previous pass are unregistered explicitly.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        store: SettingsStore,
        executor_factory: Callable[[], ChoiceExecutor],
    ) -> None:
        self._registry = registry
        self._store = store
        self._executor_factory = executor_factory
        self._registered: set[str] = set()
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def registered_ids(self) -> frozenset[str]:
        return frozenset(self._registered)

    def attach(self) -> None:
        """Run a first sync and re-sync on every settings change."""
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self._on_settings_changed)
        self.sync()

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_settings_changed(self, state: QuickChoiceConfig) -> None:
        self.sync(state.choices)

    def sync(self, choices: list[Choice] | None = None) -> None:
        if choices is None:
            choices = self._store.get_state().choices

        wanted = {
            command_id_for(choice.id): choice.name
            for choice in iter_choices(choices)
            if choice.command
        }
        for stale in sorted(self._registered - wanted.keys()):
            self._registry.unregister(stale)
            logger.debug("Unregistered %s", stale)
        for command_id, name in wanted.items():
            self._registry.register(command_id, name, self._make_callback(command_id))
        self._registered = set(wanted)
        logger.debug("Command sync: %d registered", len(wanted))

    def remove(self, choice: Choice) -> None:
        """Drop the registrations of ``choice`` and everything nested under it."""
        for node in iter_choices([choice]):
            command_id = command_id_for(node.id)
            self._registry.unregister(command_id)
            self._registered.discard(command_id)

    def _make_callback(self, command_id: str):
        choice_id = command_id[len(COMMAND_PREFIX):]

        async def _invoke() -> None:
            # Resolved at invocation time so edits made after registration apply.
            choice = get_choice_by_id(self._store.get_state().choices, choice_id)
            await self._executor_factory().execute(choice)

        return _invoke
