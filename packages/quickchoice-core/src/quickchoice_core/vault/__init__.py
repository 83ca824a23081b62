from quickchoice_core.vault.filesystem import FilesystemVault, normalize_path

__all__ = ["FilesystemVault", "normalize_path"]
