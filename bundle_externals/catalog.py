"""Host module catalog: what the target runtime already provides."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from bundle_externals.exceptions import InvalidCatalogError


@dataclass(frozen=True)
class ModuleCatalog:
    """Native module names plus the installed versions of every other module.

    ``installed[name][0]`` is the default version the host serves for an
    unscoped ``require(name)``.
    """

    native: frozenset[str] = field(default_factory=frozenset)
    installed: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def default_version(self, name: str) -> str | None:
        available = self.installed.get(name)
        return available[0] if available else None

    @classmethod
    def from_mapping(cls, data: Any) -> ModuleCatalog:
        """Validate a raw ``{"native": ..., "installed": ...}`` mapping.

        ``native`` may be an iterable of names or a mapping of name to a
        truthy flag. ``installed`` maps names to a sequence of version
        strings, default first.

        Raises ``InvalidCatalogError`` on any other shape.
        """
        if isinstance(data, ModuleCatalog):
            return data
        if not isinstance(data, Mapping):
            raise InvalidCatalogError(
                f"catalog must be a mapping, got {type(data).__name__}"
            )
        if "native" not in data or "installed" not in data:
            raise InvalidCatalogError("catalog must have 'native' and 'installed' keys")

        return cls(
            native=_parse_native(data["native"]),
            installed=_parse_installed(data["installed"]),
        )


def _parse_native(raw: Any) -> frozenset[str]:
    if isinstance(raw, Mapping):
        names: Iterable[Any] = [name for name, flag in raw.items() if flag]
    elif isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        raise InvalidCatalogError(
            f"catalog 'native' must be a collection of names, got {type(raw).__name__}"
        )
    else:
        names = raw

    names = list(names)
    bad = [name for name in names if not isinstance(name, str)]
    if bad:
        raise InvalidCatalogError(f"catalog 'native' has non-string names: {bad!r}")
    return frozenset(names)


def _parse_installed(raw: Any) -> dict[str, tuple[str, ...]]:
    if not isinstance(raw, Mapping):
        raise InvalidCatalogError(
            f"catalog 'installed' must be a mapping, got {type(raw).__name__}"
        )

    installed: dict[str, tuple[str, ...]] = {}
    for name, versions in raw.items():
        if not isinstance(name, str):
            raise InvalidCatalogError(f"catalog 'installed' has non-string name {name!r}")
        if isinstance(versions, (str, bytes)) or not isinstance(versions, Iterable):
            raise InvalidCatalogError(
                f"catalog versions for '{name}' must be a sequence of strings"
            )
        versions = tuple(versions)
        if not all(isinstance(v, str) for v in versions):
            raise InvalidCatalogError(f"catalog versions for '{name}' must be strings")
        installed[name] = versions
    return installed


@runtime_checkable
class CatalogProvider(Protocol):
    """Interface for whatever knows the host runtime's module registry."""

    async def load(self) -> ModuleCatalog: ...


class StaticCatalogProvider:
    """Provider backed by a fixed table, e.g. a snapshot checked into the repo."""

    def __init__(self, catalog: ModuleCatalog | Mapping[str, Any]) -> None:
        self._catalog = ModuleCatalog.from_mapping(catalog)

    async def load(self) -> ModuleCatalog:
        return self._catalog
