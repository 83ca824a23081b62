"""Single-writer settings store with change subscribers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from quickchoice_core.config import QuickChoiceConfig, save_config

logger = logging.getLogger(__name__)

Listener = Callable[[QuickChoiceConfig], None]


class SettingsStore:
    """Owns the current settings value.

    Every mutation goes through ``set_state`` (or ``update``), after which all
    listeners are called synchronously in subscription order. Persistence is
    just one listener (see ``persist_to``).
    """

    def __init__(self, state: QuickChoiceConfig | None = None) -> None:
        self._state = state if state is not None else QuickChoiceConfig()
        self._listeners: list[Listener] = []

    def get_state(self) -> QuickChoiceConfig:
        return self._state

    def set_state(self, state: QuickChoiceConfig) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def update(self, fn: Callable[[QuickChoiceConfig], QuickChoiceConfig]) -> QuickChoiceConfig:
        """Derive the next state from the current one and publish it."""
        state = fn(self._state)
        self.set_state(state)
        return state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


def persist_to(path: str | Path) -> Listener:
    """Build a listener that writes every new state to ``path``."""

    def _save(state: QuickChoiceConfig) -> None:
        dest = save_config(state, path)
        logger.debug("Settings saved to %s", dest)

    return _save
