"""A plain directory used as the document store."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from quickchoice_core.errors import ExternalRequestError, InvalidArgumentError, NotFoundError
from quickchoice_core.interfaces.vault import VaultFile

logger = logging.getLogger(__name__)

_IGNORED_DIRS = {".git", ".obsidian", ".trash", "__pycache__"}


def normalize_path(path: str) -> str:
    """Vault-relative POSIX path without leading slashes or ``.`` segments."""
    parts = [p for p in PurePosixPath(path.replace("\\", "/")).parts if p not in ("/", ".")]
    return "/".join(parts)


class FilesystemVault:
    """Reads and writes notes under ``root``. Paths outside the root are rejected."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def resolve(self, path: str) -> Path:
        rel = normalize_path(path)
        if not rel:
            raise InvalidArgumentError("Empty vault path")
        full = self.root / rel
        if not full.resolve().is_relative_to(self.root.resolve()):
            raise InvalidArgumentError(f"Path escapes the vault: {path}")
        return full

    def list_files(self) -> list[VaultFile]:
        files = []
        for full in sorted(self.root.rglob("*")):
            rel = full.relative_to(self.root)
            if not full.is_file() or _IGNORED_DIRS.intersection(rel.parts):
                continue
            files.append(VaultFile(path=rel.as_posix()))
        return files

    def files_under_folder(self, folder: str) -> list[VaultFile]:
        prefix = normalize_path(folder)
        if not prefix:
            return self.list_files()
        return [f for f in self.list_files() if f.path.startswith(prefix + "/")]

    def exists(self, path: str) -> bool:
        return self.resolve(path).is_file()

    def read_file(self, path: str) -> str:
        full = self.resolve(path)
        if not full.is_file():
            raise NotFoundError(f"{path} is not a file")
        try:
            return full.read_text(encoding="utf-8")
        except OSError as e:
            raise ExternalRequestError(f"Could not read {path}: {e}") from e

    def write_file(self, path: str, content: str) -> VaultFile:
        full = self.resolve(path)
        try:
            full.parent.mkdir(parents=True, exist_ok=True)
            full.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ExternalRequestError(f"Could not write {path}: {e}") from e
        logger.debug("Wrote %s (%d chars)", full, len(content))
        return VaultFile(path=normalize_path(path))
