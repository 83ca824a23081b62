from quickchoice_core.ui.console import (
    ConsoleNotice,
    ConsoleNotices,
    ConsolePrompter,
    ConsoleSuggester,
)

__all__ = ["ConsoleNotice", "ConsoleNotices", "ConsolePrompter", "ConsoleSuggester"]
