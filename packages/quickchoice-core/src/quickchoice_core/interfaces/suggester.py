"""Picker and free-text prompt interfaces."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


class SuggestOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str


@runtime_checkable
class Suggester(Protocol):
    async def suggest(self, options: list[SuggestOption]) -> str | None:
        """Return the picked option's value, or None when the user cancels."""
        ...


@runtime_checkable
class Prompter(Protocol):
    async def ask(self, header: str, default: str | None = None) -> str | None:
        """Ask for free text. None means cancelled."""
        ...
