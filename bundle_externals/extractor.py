"""Read the runtime ``dependencies`` declared by package.json manifests."""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Sequence
from pathlib import Path

import structlog

from bundle_externals.exceptions import ManifestReadError
from bundle_externals.models import DependencyDeclaration

log = structlog.get_logger("bundle_externals.engine")

_DEFAULT_READ_CONCURRENCY = 16


def _env_int(key: str, default: int) -> int:
    return int(os.environ.get(key, default))


def extract_dependencies(path: str | os.PathLike[str]) -> list[DependencyDeclaration]:
    """Parse one manifest and return its ``dependencies`` in document order.

    The file is parsed as JSON data only. A missing ``dependencies`` member,
    or a falsy one such as ``null`` or ``false``, yields an empty list; a ``null`` version range
    is kept as ``""`` and later read as ``*``.

    Raises ``ManifestReadError`` if the file is missing, unreadable, not
    JSON, or not shaped like a manifest.
    """
    path = Path(path)
    try:
        # utf-8-sig: editors on Windows like to prepend a BOM
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        reason = getattr(exc, "strerror", None) or str(exc)
        raise ManifestReadError(path, reason) from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestReadError(path, f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestReadError(path, f"expected a JSON object, got {type(data).__name__}")

    dependencies = data.get("dependencies")
    # false, "", 0 and null all mean "no dependencies"
    if not dependencies:
        return []
    if not isinstance(dependencies, dict):
        raise ManifestReadError(
            path, f"'dependencies' must be an object, got {type(dependencies).__name__}"
        )

    found: list[DependencyDeclaration] = []
    for name, spec in dependencies.items():
        if spec is None:
            spec = ""
        elif not isinstance(spec, str):
            raise ManifestReadError(
                path, f"version range for '{name}' must be a string, got {type(spec).__name__}"
            )
        found.append(DependencyDeclaration(name=name, spec=spec, source=path))
    return found


async def extract_all(
    paths: Sequence[str | os.PathLike[str]],
    *,
    concurrency: int | None = None,
) -> list[DependencyDeclaration]:
    """Extract every manifest concurrently and flatten the results in input order.

    Reads run on worker threads, at most *concurrency* at a time (default
    from ``BUNDLE_EXTERNALS_READ_CONCURRENCY``). The first failing read
    cancels the rest and its ``ManifestReadError`` propagates; no partial
    result is returned.
    """
    limit = (
        concurrency
        if concurrency is not None
        else _env_int("BUNDLE_EXTERNALS_READ_CONCURRENCY", _DEFAULT_READ_CONCURRENCY)
    )
    if limit < 1:
        raise ValueError(f"read concurrency must be at least 1, got {limit}")

    sem = asyncio.Semaphore(limit)

    async def _extract_one(path: str | os.PathLike[str]) -> list[DependencyDeclaration]:
        async with sem:
            try:
                return await asyncio.to_thread(extract_dependencies, path)
            except ManifestReadError as exc:
                log.error("extractor.failed", path=exc.path, error=exc.reason)
                raise

    tasks = [asyncio.ensure_future(_extract_one(p)) for p in paths]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        # Drain so that sibling failures are not reported as unretrieved.
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    return [dep for deps in results for dep in deps]
