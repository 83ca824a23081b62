"""Document store interface and file reference model."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


class VaultFile(BaseModel):
    """A file in the document store, addressed by its vault-relative POSIX path."""

    model_config = ConfigDict(frozen=True)

    path: str

    @property
    def basename(self) -> str:
        return PurePosixPath(self.path).stem

    @property
    def extension(self) -> str:
        return PurePosixPath(self.path).suffix.lstrip(".")


@runtime_checkable
class DocumentStore(Protocol):
    """Read/write access to the host's notes."""

    def list_files(self) -> list[VaultFile]: ...

    def files_under_folder(self, folder: str) -> list[VaultFile]: ...

    def resolve(self, path: str) -> Path: ...

    def exists(self, path: str) -> bool: ...

    def read_file(self, path: str) -> str: ...

    def write_file(self, path: str, content: str) -> VaultFile: ...
