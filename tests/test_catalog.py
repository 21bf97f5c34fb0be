"""Tests for ModuleCatalog validation and catalog providers."""

from __future__ import annotations

import pytest

from bundle_externals.catalog import CatalogProvider, ModuleCatalog, StaticCatalogProvider
from bundle_externals.exceptions import InvalidCatalogError


class TestFromMapping:
    def test_list_of_natives(self):
        catalog = ModuleCatalog.from_mapping({"native": ["fs", "path"], "installed": {}})
        assert catalog.native == frozenset({"fs", "path"})

    def test_native_flag_mapping(self):
        """The host registry reports natives as ``{name: true}``."""
        catalog = ModuleCatalog.from_mapping(
            {"native": {"fs": True, "http": True, "legacy": False}, "installed": {}}
        )
        assert catalog.native == frozenset({"fs", "http"})

    def test_installed_versions_become_tuples(self):
        catalog = ModuleCatalog.from_mapping(
            {"native": [], "installed": {"lodash": ["4.17.0", "3.10.1"]}}
        )
        assert catalog.installed == {"lodash": ("4.17.0", "3.10.1")}

    def test_catalog_passes_through(self):
        catalog = ModuleCatalog(native=frozenset({"fs"}))
        assert ModuleCatalog.from_mapping(catalog) is catalog

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            [],
            {"native": []},
            {"installed": {}},
            {"native": "fs", "installed": {}},
            {"native": 3, "installed": {}},
            {"native": [1], "installed": {}},
            {"native": [["fs"]], "installed": {}},
            {"native": [], "installed": []},
            {"native": [], "installed": {"lodash": "4.17.0"}},
            {"native": [], "installed": {"lodash": [4]}},
            {"native": [], "installed": {"lodash": None}},
        ],
    )
    def test_rejects_malformed(self, raw):
        with pytest.raises(InvalidCatalogError):
            ModuleCatalog.from_mapping(raw)


class TestDefaultVersion:
    def test_first_listed(self):
        catalog = ModuleCatalog(installed={"lodash": ("4.17.0", "3.10.1")})
        assert catalog.default_version("lodash") == "4.17.0"

    def test_unknown_or_empty(self):
        catalog = ModuleCatalog(installed={"empty": ()})
        assert catalog.default_version("empty") is None
        assert catalog.default_version("missing") is None


class TestStaticCatalogProvider:
    @pytest.mark.asyncio
    async def test_load(self):
        provider = StaticCatalogProvider({"native": ["fs"], "installed": {"a": ["1.0.0"]}})
        catalog = await provider.load()
        assert catalog.native == frozenset({"fs"})
        assert catalog.default_version("a") == "1.0.0"

    def test_satisfies_protocol(self):
        provider = StaticCatalogProvider(ModuleCatalog())
        assert isinstance(provider, CatalogProvider)

    def test_validates_eagerly(self):
        with pytest.raises(InvalidCatalogError):
            StaticCatalogProvider({"native": []})
