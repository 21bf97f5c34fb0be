"""Shared pytest fixtures for bundle-externals tests."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def write_manifest(tmp_path: Path):
    """Write a package.json below *tmp_path* and return its path.

    ``write_manifest({"lodash": "^4.0.0"}, "sub")`` writes
    ``tmp_path/sub/package.json`` with that ``dependencies`` member; pass
    ``dependencies=None`` to leave the member out.
    """

    def _write(dependencies: dict | None = None, subdir: str = "", **extra) -> Path:
        directory = tmp_path / subdir if subdir else tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        data: dict = {"name": directory.name, "version": "1.0.0", **extra}
        if dependencies is not None:
            data["dependencies"] = dependencies
        path = directory / "package.json"
        path.write_text(json.dumps(data))
        return path

    return _write
