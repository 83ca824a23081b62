"""AI-assisted macro steps."""

from quickchoice_core.ai.assistant import (
    QUOTED_VARIABLE,
    get_target_prompt_template,
    notice_message,
    run_ai_assistant,
    to_block_quote,
)
from quickchoice_core.ai.request import ProviderRequester

__all__ = [
    "QUOTED_VARIABLE",
    "ProviderRequester",
    "get_target_prompt_template",
    "notice_message",
    "run_ai_assistant",
    "to_block_quote",
]
