"""Bundle-Externals: decide which dependencies a hosted runtime already provides."""

__version__ = "0.1.0"

from bundle_externals.calculator import (
    ExternalsCalculator,
    calculate_externals,
    calculate_externals_sync,
)
from bundle_externals.catalog import CatalogProvider, ModuleCatalog, StaticCatalogProvider
from bundle_externals.classifier import classify, satisfies
from bundle_externals.core.logging import setup_logging
from bundle_externals.exceptions import (
    ExternalsError,
    FilesystemError,
    InvalidCatalogError,
    ManifestReadError,
)
from bundle_externals.extractor import extract_all, extract_dependencies
from bundle_externals.locator import entry_dirname, list_manifests
from bundle_externals.models import BundledModule, ClassificationResult, DependencyDeclaration

__all__ = [
    "BundledModule",
    "CatalogProvider",
    "ClassificationResult",
    "DependencyDeclaration",
    "ExternalsCalculator",
    "ExternalsError",
    "FilesystemError",
    "InvalidCatalogError",
    "ManifestReadError",
    "ModuleCatalog",
    "StaticCatalogProvider",
    "calculate_externals",
    "calculate_externals_sync",
    "classify",
    "entry_dirname",
    "extract_all",
    "extract_dependencies",
    "list_manifests",
    "satisfies",
    "setup_logging",
]
