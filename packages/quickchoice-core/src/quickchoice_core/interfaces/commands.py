"""Host command registry interface."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

CommandCallback = Callable[[], Awaitable[None] | None]


@runtime_checkable
class CommandRegistry(Protocol):
    """Invokable commands keyed by id. Registering an existing id replaces it."""

    def register(self, command_id: str, name: str, callback: CommandCallback) -> None: ...

    def unregister(self, command_id: str) -> None: ...

    async def execute(self, command_id: str) -> None: ...
