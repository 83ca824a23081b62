"""In-process command registry."""

from __future__ import annotations

import inspect
import logging

from pydantic import BaseModel, ConfigDict

from quickchoice_core.errors import NotFoundError
from quickchoice_core.interfaces.commands import CommandCallback

logger = logging.getLogger(__name__)


class RegisteredCommand(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    name: str
    callback: CommandCallback


class InMemoryCommandRegistry:
    """Dict-backed registry; the CLI and tests use it as the host registry."""

    def __init__(self, prefix: str = "quickchoice") -> None:
        self.prefix = prefix
        self._commands: dict[str, RegisteredCommand] = {}

    def _key(self, command_id: str) -> str:
        if command_id.startswith(f"{self.prefix}:"):
            return command_id
        return f"{self.prefix}:{command_id}"

    def register(self, command_id: str, name: str, callback: CommandCallback) -> None:
        key = self._key(command_id)
        if key in self._commands:
            logger.debug("Replacing command %s", key)
        self._commands[key] = RegisteredCommand(id=key, name=name, callback=callback)

    def unregister(self, command_id: str) -> None:
        self._commands.pop(self._key(command_id), None)

    async def execute(self, command_id: str) -> None:
        command = self._commands.get(self._key(command_id))
        if command is None:
            raise NotFoundError(f"Command {command_id} is not registered")
        result = command.callback()
        if inspect.isawaitable(result):
            await result

    def commands(self) -> list[RegisteredCommand]:
        return sorted(self._commands.values(), key=lambda c: c.id)

    def __contains__(self, command_id: object) -> bool:
        return isinstance(command_id, str) and self._key(command_id) in self._commands

    def __len__(self) -> int:
        return len(self._commands)
