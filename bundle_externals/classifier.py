"""Classify declared dependencies as externals or bundled."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

import semantic_version
import structlog

from bundle_externals.catalog import ModuleCatalog
from bundle_externals.exceptions import InvalidCatalogError
from bundle_externals.models import BundledModule, ClassificationResult, DependencyDeclaration

log = structlog.get_logger("bundle_externals.engine")

ANY_VERSION = "*"


# Whitespace between an operator and its version ("^ 1.2.0", ">= 4.0.0").
_OPERATOR_GAP = re.compile(r"(~>|~|\^|<=|>=|<|>|=)\s+")
# "1.2.3-" / "1.2.3+" with nothing after the separator.
_DANGLING_SEPARATOR = re.compile(r"[0-9xX*][-+](?=\s|\||$)")


def _normalize_range(spec: str) -> str:
    """Rewrite npm range spellings that NpmSpec does not parse itself."""
    spec = re.sub(r"\s+", " ", spec.strip())
    spec = _OPERATOR_GAP.sub(r"\1", spec)
    return spec.replace("~>", "~")


def satisfies(version: str, spec: str) -> bool:
    """Return True if *version* falls inside the npm range *spec*.

    Unparsable versions or ranges never match; they are not errors. As in
    npm, a host version may carry a single leading ``v``.
    """
    version = version.strip()
    if version.startswith("v"):
        version = version[1:]
    spec = _normalize_range(spec)
    if _DANGLING_SEPARATOR.search(spec):
        return False
    try:
        return semantic_version.NpmSpec(spec).match(semantic_version.Version(version))
    except ValueError:
        return False


def classify(
    declarations: Iterable[DependencyDeclaration],
    catalog: ModuleCatalog | Mapping[str, Any],
) -> ClassificationResult:
    """Split *declarations* into externals and bundled modules.

    Native modules are externals up front. A declaration becomes external
    only when the host's default (first-listed) version satisfies its
    range; otherwise it is recorded as bundled, the last such declaration
    winning. Externals are never removed, so a name satisfied by one
    manifest and unsatisfied by another ends up in both maps.
    """
    if not isinstance(catalog, (ModuleCatalog, Mapping)):
        raise InvalidCatalogError(
            f"catalog must be a ModuleCatalog or mapping, got {type(catalog).__name__}"
        )
    catalog = ModuleCatalog.from_mapping(catalog)

    result = ClassificationResult(externals={name: True for name in sorted(catalog.native)})

    for dep in declarations:
        spec = dep.spec or ANY_VERSION
        available = catalog.installed.get(dep.name)
        default_version = catalog.default_version(dep.name)

        if default_version is not None and satisfies(default_version, spec):
            result.externals[dep.name] = True
        else:
            log.debug(
                "classifier.bundled",
                module=dep.name,
                spec=spec,
                default_version=default_version,
                source=dep.source,
            )
            result.bundled[dep.name] = BundledModule(available=available, spec=spec)

    return result
