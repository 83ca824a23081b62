"""Rich-based terminal implementations of the notice, picker and prompt collaborators."""

from __future__ import annotations

from rich.console import Console
from rich.prompt import Prompt
from rich.status import Status

from quickchoice_core.interfaces.suggester import SuggestOption


class ConsoleNotice:
    """A spinner line that is updated in place; the last message is printed on hide."""

    def __init__(self, console: Console, message: str) -> None:
        self._console = console
        self._message = message
        self._status: Status | None = console.status(message)
        self._status.start()

    @property
    def message(self) -> str:
        return self._message

    def set_message(self, message: str) -> None:
        self._message = message
        if self._status is not None:
            self._status.update(message)

    def hide(self) -> None:
        if self._status is None:
            return
        self._status.stop()
        self._status = None
        self._console.print(self._message)


class ConsoleNotices:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)
        self._shown: list[ConsoleNotice] = []

    def show(self, message: str) -> ConsoleNotice:
        # one live display per console
        self.close()
        notice = ConsoleNotice(self.console, message)
        self._shown.append(notice)
        return notice

    def close(self) -> None:
        """Hide every notice still on screen."""
        for notice in self._shown:
            notice.hide()
        self._shown.clear()


class ConsoleSuggester:
    """Numbered list picker. An empty answer cancels."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    async def suggest(self, options: list[SuggestOption]) -> str | None:
        if not options:
            return None
        for number, option in enumerate(options, start=1):
            self.console.print(f"  [cyan]{number}[/cyan]  {option.label}")
        answer = Prompt.ask(
            "Pick one",
            choices=[str(n) for n in range(1, len(options) + 1)] + [""],
            default="",
            show_choices=False,
            console=self.console,
        )
        if not answer:
            return None
        return options[int(answer) - 1].value


class ConsolePrompter:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    async def ask(self, header: str, default: str | None = None) -> str | None:
        return Prompt.ask(header, default=default, console=self.console)
