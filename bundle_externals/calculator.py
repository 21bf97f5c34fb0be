"""ExternalsCalculator: locate manifests, extract dependencies, classify."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Mapping
from typing import Any

import structlog

from bundle_externals.catalog import CatalogProvider, ModuleCatalog
from bundle_externals.classifier import classify
from bundle_externals.extractor import extract_all
from bundle_externals.locator import entry_dirname, list_manifests
from bundle_externals.models import ClassificationResult

log = structlog.get_logger("bundle_externals.engine")


async def calculate_externals(
    entry_path: str | os.PathLike[str],
    catalog: ModuleCatalog | Mapping[str, Any],
    *,
    concurrency: int | None = None,
) -> ClassificationResult:
    """Classify the dependencies of the program at *entry_path*.

    Only the entry file's directory is used. Either a complete
    :class:`ClassificationResult` is returned or the first error raised
    by any stage propagates unchanged.
    """
    dirname = entry_dirname(entry_path)
    # Locating is a synchronous directory walk; keep it off the event loop.
    paths = await asyncio.to_thread(list_manifests, dirname)
    declarations = await extract_all(paths, concurrency=concurrency)
    result = classify(declarations, catalog)

    log.info(
        "calculator.done",
        dirname=dirname,
        manifests=len(paths),
        declarations=len(declarations),
        externals=len(result.externals),
        bundled=len(result.bundled),
    )
    return result


def calculate_externals_sync(
    entry_path: str | os.PathLike[str],
    catalog: ModuleCatalog | Mapping[str, Any],
    *,
    concurrency: int | None = None,
) -> ClassificationResult:
    """Blocking wrapper around :func:`calculate_externals`."""
    return asyncio.run(calculate_externals(entry_path, catalog, concurrency=concurrency))


class ExternalsCalculator:
    """Integrated mode: load the host catalog from a provider, then classify."""

    def __init__(self, provider: CatalogProvider, *, concurrency: int | None = None) -> None:
        self._provider = provider
        self._concurrency = concurrency

    async def run(self, entry_path: str | os.PathLike[str]) -> ClassificationResult:
        """Full pipeline: load catalog -> locate -> extract -> classify.

        The catalog is loaded before the filesystem is touched, so a
        provider failure surfaces without reading any manifest.
        """
        catalog = await self._provider.load()
        return await calculate_externals(entry_path, catalog, concurrency=self._concurrency)
