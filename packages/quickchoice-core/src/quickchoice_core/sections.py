"""Markdown section boundaries over a flat list of lines."""

from __future__ import annotations

import re
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from quickchoice_core.errors import InvalidArgumentError

_HEADING_RE = re.compile(r"^(#+)\s+(\S.*)$")


class Heading(BaseModel):
    """A Markdown heading found at a given line."""

    model_config = ConfigDict(frozen=True)

    line: int
    level: int
    text: str


def heading_level(line: str) -> int | None:
    """Return the heading level of ``line``, or None for non-heading lines."""
    match = _HEADING_RE.match(line)
    if match is None:
        return None
    return len(match.group(1))


def parse_headings(lines: Sequence[str]) -> list[Heading]:
    """Collect every heading in document order."""
    headings: list[Heading] = []
    for index, line in enumerate(lines):
        match = _HEADING_RE.match(line)
        if match:
            headings.append(
                Heading(line=index, level=len(match.group(1)), text=match.group(2).strip())
            )
    return headings


def _is_blank(line: str) -> bool:
    return line.strip() == ""


def resolve_section_end(
    lines: Sequence[str],
    target_line: int,
    consider_subsections: bool = False,
) -> int:
    """Return the index of the last line of the section at ``target_line``.

    When the target is a heading of level L, the section runs until the next
    heading of level <= L (``consider_subsections``) or of any level, and
    trailing blank lines are not part of it. A heading whose body holds only
    blank lines keeps the single line right after it.

    When the target is not a heading, the section is the contiguous block of
    content lines starting at the target, ending before the next blank line
    or heading.
    """
    if not 0 <= target_line < len(lines):
        raise InvalidArgumentError(
            f"Target line {target_line} is out of bounds for a document of {len(lines)} lines."
        )

    target_level = heading_level(lines[target_line])

    if target_level is None:
        end = target_line
        for index in range(target_line + 1, len(lines)):
            line = lines[index]
            if _is_blank(line) or heading_level(line) is not None:
                break
            end = index
        return end

    boundary = len(lines)
    for index in range(target_line + 1, len(lines)):
        level = heading_level(lines[index])
        if level is None:
            continue
        if not consider_subsections or level <= target_level:
            boundary = index
            break

    for index in range(boundary - 1, target_line, -1):
        if not _is_blank(lines[index]):
            return index

    # Only blank lines between the heading and its boundary.
    if target_line + 1 < boundary:
        return target_line + 1
    return target_line
