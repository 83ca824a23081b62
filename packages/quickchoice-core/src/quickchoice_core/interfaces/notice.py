"""Transient user notices."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Notice(Protocol):
    def set_message(self, message: str) -> None: ...

    def hide(self) -> None: ...


@runtime_checkable
class NoticeFactory(Protocol):
    def show(self, message: str) -> Notice: ...
