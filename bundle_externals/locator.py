"""Locate package.json manifests below an entry point's directory."""

from __future__ import annotations

import os
from pathlib import Path

import structlog

from bundle_externals.exceptions import FilesystemError

log = structlog.get_logger("bundle_externals.engine")

MANIFEST_NAME = "package.json"


def entry_dirname(entry_path: str | os.PathLike[str]) -> Path:
    """Return the directory containing the program's entry file."""
    return Path(entry_path).parent


def list_manifests(dirname: str | os.PathLike[str]) -> list[Path]:
    """List every manifest that may declare dependencies for *dirname*.

    The first entry is always ``dirname/package.json``, whether or not it
    exists; a missing file is reported later by the extractor. It is
    followed by every manifest found in the subdirectories of *dirname*,
    ``node_modules`` trees included. Directories are walked in sorted order
    and symlinked directories are not followed.

    Raises ``FilesystemError`` if any directory of the tree cannot be read.
    """
    root = Path(dirname)
    paths = [root / MANIFEST_NAME]

    def _on_error(exc: OSError) -> None:
        raise FilesystemError(exc.filename or root, exc.strerror or str(exc)) from exc

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames.sort()
        if dirpath != str(root) and MANIFEST_NAME in filenames:
            paths.append(Path(dirpath) / MANIFEST_NAME)

    log.debug("locator.found", dirname=root, nested=len(paths) - 1)
    return paths
