"""Expands ``{{...}}`` tokens in template, path and capture text."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime

from quickchoice_core.errors import QuickChoiceError
from quickchoice_core.interfaces.suggester import Prompter

_VALUE_RE = re.compile(r"{{(?:VALUE|NAME)(?::([^}\n\r]+))?}}", re.IGNORECASE)
_DATE_RE = re.compile(r"{{DATE(?::([^}\n\r]+))?}}", re.IGNORECASE)
_LINEBREAK_RE = re.compile(r"{{LINEBREAK}}", re.IGNORECASE)

DEFAULT_DATE_FORMAT = "%Y-%m-%d"
VALUE_KEY = "value"


class FormatCancelledError(QuickChoiceError):
    """Raised when the user dismisses a value prompt."""


class Formatter:
    """Resolves tokens against shared ``variables``, prompting for missing values.

    Supported tokens (case-insensitive): ``{{VALUE}}``, ``{{NAME}}``,
    ``{{VALUE:<variable>}}``, ``{{DATE}}``, ``{{DATE:<strftime format>}}``
    and ``{{LINEBREAK}}``. A prompted value is stored back into ``variables``
    so the same token is asked once per run.
    """

    def __init__(
        self,
        prompter: Prompter,
        variables: dict[str, str] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.prompter = prompter
        self.variables = variables if variables is not None else {}
        self._clock = clock

    async def format(self, text: str) -> str:
        text = _LINEBREAK_RE.sub("\n", text)
        text = _DATE_RE.sub(self._replace_date, text)
        return await self._replace_values(text)

    def _replace_date(self, match: re.Match) -> str:
        fmt = (match.group(1) or DEFAULT_DATE_FORMAT).strip()
        return self._clock().strftime(fmt)

    async def _replace_values(self, text: str) -> str:
        parts: list[str] = []
        pos = 0
        for match in _VALUE_RE.finditer(text):
            parts.append(text[pos:match.start()])
            name = (match.group(1) or VALUE_KEY).strip()
            parts.append(await self._value_for(name))
            pos = match.end()
        parts.append(text[pos:])
        return "".join(parts)

    async def _value_for(self, name: str) -> str:
        if name in self.variables:
            return self.variables[name]
        header = "Enter value" if name == VALUE_KEY else name
        answer = await self.prompter.ask(header)
        if answer is None:
            raise FormatCancelledError(f"No value given for {header!r}")
        self.variables[name] = answer
        return answer
