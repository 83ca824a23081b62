"""QuickChoice Core - choices, captures, templates and AI-assisted macros for Markdown vaults."""

from quickchoice_core.app import QuickChoice
from quickchoice_core.choices import Choice, find_choice, flatten
from quickchoice_core.config import QuickChoiceConfig, load_config
from quickchoice_core.engine import ChoiceExecutor, MacroEngine, MacroRunReport
from quickchoice_core.polling import poll_until_resolved
from quickchoice_core.registrar import CommandRegistrar, InMemoryCommandRegistry
from quickchoice_core.sections import resolve_section_end
from quickchoice_core.store import SettingsStore

__version__ = "0.1.0"

__all__ = [
    "Choice",
    "ChoiceExecutor",
    "CommandRegistrar",
    "InMemoryCommandRegistry",
    "MacroEngine",
    "MacroRunReport",
    "QuickChoice",
    "QuickChoiceConfig",
    "SettingsStore",
    "find_choice",
    "flatten",
    "load_config",
    "poll_until_resolved",
    "resolve_section_end",
]
