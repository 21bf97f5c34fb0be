"""Data models for the externals calculator."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class DependencyDeclaration:
    """A single ``dependencies`` entry read from a manifest."""

    name: str
    spec: str
    source: Path | None = None


@dataclass(frozen=True)
class BundledModule:
    """Why a dependency has to travel with the package."""

    available: tuple[str, ...] | None
    spec: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "available": list(self.available) if self.available is not None else None,
            "spec": self.spec,
        }


@dataclass
class ClassificationResult:
    """Partition of declared dependencies into externals and bundled.

    A name can appear in both maps: externals are only ever added, while
    bundled entries are overwritten by the last unsatisfied declaration.
    """

    externals: dict[str, bool] = field(default_factory=dict)
    bundled: dict[str, BundledModule] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-ready form handed to the packaging step."""
        return {
            "externals": dict(self.externals),
            "bundled": {name: mod.to_dict() for name, mod in self.bundled.items()},
        }
