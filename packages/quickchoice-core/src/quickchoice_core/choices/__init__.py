"""Choice tree: models and traversal."""

from quickchoice_core.choices.models import (
    AIAssistantCommand,
    CaptureChoice,
    Choice,
    ChoiceCommand,
    Command,
    HostCommand,
    InsertAfter,
    MacroChoice,
    MultiChoice,
    PromptTemplateSelection,
    TemplateChoice,
    UserScriptCommand,
    WaitCommand,
)
from quickchoice_core.choices.tree import (
    duplicate_ids,
    find_choice,
    flatten,
    get_choice_by_id,
    get_choice_by_name,
    insert_choice,
    iter_choices,
    remove_choice,
    replace_choice,
)

__all__ = [
    "AIAssistantCommand",
    "CaptureChoice",
    "Choice",
    "ChoiceCommand",
    "Command",
    "HostCommand",
    "InsertAfter",
    "MacroChoice",
    "MultiChoice",
    "PromptTemplateSelection",
    "TemplateChoice",
    "UserScriptCommand",
    "WaitCommand",
    "duplicate_ids",
    "find_choice",
    "flatten",
    "get_choice_by_id",
    "get_choice_by_name",
    "insert_choice",
    "iter_choices",
    "remove_choice",
    "replace_choice",
]
