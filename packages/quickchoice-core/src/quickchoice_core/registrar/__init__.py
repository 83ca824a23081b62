from quickchoice_core.registrar.memory import InMemoryCommandRegistry, RegisteredCommand
from quickchoice_core.registrar.registrar import COMMAND_PREFIX, CommandRegistrar, command_id_for

__all__ = [
    "COMMAND_PREFIX",
    "CommandRegistrar",
    "InMemoryCommandRegistry",
    "RegisteredCommand",
    "command_id_for",
]
