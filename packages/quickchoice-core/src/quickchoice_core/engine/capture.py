"""Capture choices: add formatted text to an existing (or new) note."""

from __future__ import annotations

import logging

from quickchoice_core.choices import CaptureChoice, InsertAfter
from quickchoice_core.engine.formatter import Formatter
from quickchoice_core.engine.template import with_md_extension
from quickchoice_core.errors import NotFoundError, TargetNotFoundError
from quickchoice_core.interfaces.vault import DocumentStore, VaultFile
from quickchoice_core.sections import resolve_section_end
from quickchoice_core.vault import normalize_path

logger = logging.getLogger(__name__)


def find_target_line(lines: list[str], target: str) -> int:
    """Index of the first line containing ``target`` (ignoring surrounding whitespace), or -1."""
    needle = target.strip()
    for index, line in enumerate(lines):
        if needle and needle in line:
            return index
    return -1


def insert_after_target(body: str, text: str, target: str, options: InsertAfter) -> str:
    """Insert ``text`` after the target line, or after the end of its section."""
    lines = body.split("\n")
    position = find_target_line(lines, target)

    if position == -1:
        if not options.create_if_not_found:
            raise TargetNotFoundError(f"Unable to find insert-after line {target!r} in file")
        if options.create_if_not_found_location == "top":
            lines.insert(0, target)
            position = 0
        elif body == "":
            lines = [target]
            position = 0
        else:
            # the created line goes before a trailing newline, not over it
            position = len(lines) - 1 if lines[-1] == "" else len(lines)
            lines.insert(position, target)

    if options.insert_at_end:
        position = resolve_section_end(lines, position, options.consider_subsections)

    lines.insert(position + 1, text)
    return "\n".join(lines)


def append_text(body: str, text: str) -> str:
    if not body or body.endswith("\n"):
        return body + text
    return f"{body}\n{text}"


def prepend_text(body: str, text: str) -> str:
    return f"{text}\n{body}" if body else text


class CaptureChoiceEngine:
    def __init__(self, choice: CaptureChoice, vault: DocumentStore, formatter: Formatter) -> None:
        self.choice = choice
        self.vault = vault
        self.formatter = formatter

    async def run(self) -> VaultFile:
        path = with_md_extension(normalize_path(await self.formatter.format(self.choice.capture_to)))
        text = await self.formatter.format(self.choice.format)

        if not self.vault.exists(path):
            if not self.choice.create_file_if_missing:
                raise NotFoundError(f"Capture target {path} does not exist")
            if self.choice.insert_after.enabled:
                target = await self.formatter.format(self.choice.insert_after.after)
                body = insert_after_target(target, text, target, self.choice.insert_after)
            else:
                body = text
            logger.info("Creating %s for capture %r", path, self.choice.name)
            return self.vault.write_file(path, body)

        body = self.vault.read_file(path)
        if self.choice.insert_after.enabled:
            target = await self.formatter.format(self.choice.insert_after.after)
            body = insert_after_target(body, text, target, self.choice.insert_after)
        elif self.choice.prepend:
            body = prepend_text(body, text)
        else:
            body = append_text(body, text)

        logger.info("Captured into %s", path)
        return self.vault.write_file(path, body)
