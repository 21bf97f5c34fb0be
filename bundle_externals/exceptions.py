"""Exceptions raised by the externals calculator."""

from __future__ import annotations

from pathlib import Path


class ExternalsError(Exception):
    """Base exception for all externals calculation errors."""


class FilesystemError(ExternalsError):
    """Raised when the manifest search cannot read the directory tree."""

    def __init__(self, dirname: str | Path, reason: str):
        self.dirname = Path(dirname)
        self.reason = reason
        super().__init__(f"Cannot search {self.dirname} for manifests: {reason}")


class ManifestReadError(ExternalsError):
    """Raised when a manifest is missing, unreadable or malformed."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read manifest {self.path}: {reason}")


class InvalidCatalogError(ExternalsError):
    """Raised when the host module catalog does not have the expected shape."""
