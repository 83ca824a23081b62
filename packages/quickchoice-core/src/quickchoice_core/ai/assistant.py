"""AI assistant macro step: prompt template -> AI request -> output variables."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from quickchoice_core.choices import AIAssistantCommand, PromptTemplateSelection
from quickchoice_core.config import AISettings, LLMSettings
from quickchoice_core.errors import TemplateNotFoundError
from quickchoice_core.interfaces.host import HostServices
from quickchoice_core.interfaces.notice import Notice
from quickchoice_core.interfaces.suggester import SuggestOption, Suggester
from quickchoice_core.interfaces.vault import DocumentStore, VaultFile
from quickchoice_core.llm import resolve_api_key
from quickchoice_core.polling import poll_until_resolved

logger = logging.getLogger(__name__)

QUOTED_VARIABLE = "quoted"


def notice_message(task: str, message: str = "") -> str:
    return f"Assistant is {task}." + (f"\n\n{message}" if message else "")


def to_block_quote(text: str) -> str:
    """Prefix every line with ``> `` for quote blocks and callouts."""
    return "> " + text.replace("\n", "\n> ")


def dismiss_later(notice: Notice, delay: float) -> None:
    """Hide ``notice`` after ``delay`` seconds on the running loop."""
    if delay <= 0:
        notice.hide()
        return
    asyncio.get_running_loop().call_later(delay, notice.hide)


async def get_target_prompt_template(
    selection: PromptTemplateSelection,
    prompt_templates: list[VaultFile],
    vault: DocumentStore,
    suggester: Suggester,
) -> tuple[str, str]:
    """Return ``(path, content)`` of the prompt template to use.

    With ``selection.enable`` the first template whose path ends with the
    configured name wins; otherwise the user picks one.
    """
    if selection.enable:
        target_path = next(
            (f.path for f in prompt_templates if f.path.endswith(selection.name)), None
        )
    else:
        target_path = await suggester.suggest(
            [SuggestOption(label=f.basename, value=f.path) for f in prompt_templates]
        )

    if not target_path:
        raise TemplateNotFoundError(f"{selection.name or 'Prompt template'} does not exist")
    if not vault.exists(target_path):
        raise TemplateNotFoundError(f"{target_path} is not a file")
    return target_path, vault.read_file(target_path)


async def run_ai_assistant(
    command: AIAssistantCommand,
    format_prompt: Callable[[str], Awaitable[str]],
    host: HostServices,
    llm: LLMSettings,
    ai: AISettings,
) -> dict[str, str]:
    """Run one AI assistant step and return the variables it binds.

    Progress is shown on a notice that is updated with the elapsed time while
    the request is outstanding. On failure the notice shows the error, is
    dismissed after ``ai.notice_dismiss_seconds`` and the error is re-raised.
    """
    notice = host.notices.show(notice_message("starting"))
    request: asyncio.Future | None = None

    try:
        folder = command.prompt_template_folder or ai.prompt_templates_folder
        prompt_templates = [
            f for f in host.vault.files_under_folder(folder) if f.extension == "md"
        ]
        target_key, target_prompt = await get_target_prompt_template(
            command.prompt_template, prompt_templates, host.vault, host.suggester
        )

        notice.set_message(
            notice_message("waiting", "QuickChoice is formatting the prompt template.")
        )
        formatted_prompt = await format_prompt(target_prompt)

        prompting_task = "prompting"
        prompting_msg = f"Using prompt template {target_key}."
        notice.set_message(notice_message(prompting_task, prompting_msg))

        model = command.model or llm.model
        system_prompt = command.system_prompt or ai.default_system_prompt
        request = asyncio.ensure_future(
            host.requester.request(resolve_api_key(llm), model, system_prompt, formatted_prompt)
        )

        time_start = time.monotonic()
        await poll_until_resolved(
            lambda: notice.set_message(
                notice_message(
                    prompting_task,
                    f"{prompting_msg} ({time.monotonic() - time_start:.2f}s)",
                )
            ),
            request,
            ai.progress_interval_ms,
        )
        result = await request  # already settled

        elapsed = time.monotonic() - time_start
        notice.set_message(notice_message("finished", f"Took {elapsed:.2f}s."))
        logger.info(
            "AI assistant finished with %s in %.2fs (%d tokens)",
            target_key,
            elapsed,
            result.usage.total,
        )

        output = result.content
        variables = {
            command.output_variable_name: output,
            QUOTED_VARIABLE: to_block_quote(output),
        }
        dismiss_later(notice, ai.notice_dismiss_seconds)
        return variables
    except Exception as error:
        if request is not None and not request.done():
            request.cancel()
        notice.set_message(notice_message("dead", str(error)))
        dismiss_later(notice, ai.notice_dismiss_seconds)
        raise
