"""Template choices: create a note from a template file."""

from __future__ import annotations

import logging
import re

from quickchoice_core.choices import TemplateChoice
from quickchoice_core.engine.formatter import Formatter
from quickchoice_core.errors import TemplateNotFoundError
from quickchoice_core.interfaces.vault import DocumentStore, VaultFile
from quickchoice_core.vault import normalize_path

logger = logging.getLogger(__name__)

_TRAILING_NUMBER_RE = re.compile(r"^(.*?)(\d*)(\.md)$")


def with_md_extension(path: str) -> str:
    return path if path.endswith(".md") else f"{path}.md"


def increment_file_name(path: str) -> str:
    """``note.md`` -> ``note1.md``, ``note7.md`` -> ``note8.md``."""
    match = _TRAILING_NUMBER_RE.match(path)
    if match is None:
        return f"{path}1"
    stem, number, ext = match.groups()
    return f"{stem}{int(number) + 1 if number else 1}{ext}"


class TemplateChoiceEngine:
    def __init__(
        self,
        choice: TemplateChoice,
        vault: DocumentStore,
        formatter: Formatter,
        template_folder: str = "",
    ) -> None:
        self.choice = choice
        self.vault = vault
        self.formatter = formatter
        self.template_folder = normalize_path(template_folder)

    def _resolve_template(self) -> str:
        """Look the template up as given, then inside the template folder."""
        path = with_md_extension(normalize_path(self.choice.template_path))
        candidates = [path]
        if self.template_folder and not path.startswith(self.template_folder + "/"):
            candidates.append(f"{self.template_folder}/{path}")
        for candidate in candidates:
            if self.vault.exists(candidate):
                return candidate
        raise TemplateNotFoundError(f"Template {path} does not exist")

    async def run(self) -> VaultFile | None:
        template_path = self._resolve_template()
        content = await self.formatter.format(self.vault.read_file(template_path))
        file_name = await self.formatter.format(self.choice.file_name_format)
        folder = normalize_path(await self.formatter.format(self.choice.folder))
        target = with_md_extension(normalize_path(f"{folder}/{file_name}" if folder else file_name))

        if self.vault.exists(target):
            behavior = self.choice.file_exists_behavior
            if behavior == "skip":
                logger.info("%s already exists, skipping", target)
                return None
            if behavior == "increment":
                while self.vault.exists(target):
                    target = increment_file_name(target)
            elif behavior == "append":
                content = self.vault.read_file(target) + content
            elif behavior == "prepend":
                content = content + self.vault.read_file(target)
            # overwrite: write content as-is

        created = self.vault.write_file(target, content)
        logger.info("Template %r written to %s", self.choice.name, created.path)
        return created
