"""Tests for the built-in codemod catalog."""

from codemend.core.catalog import AVATAR_19, MEMOIZE_ONE_5, CatalogEntry, CatalogRegistry


class TestCatalogRegistry:
    def test_builtin_entries_registered(self):
        names = [entry.name for entry in CatalogRegistry.list_entries()]
        assert "memoize-one@5.0.0" in names
        assert "@atlaskit/avatar@19.0.0" in names
        assert "@atlaskit/textarea@4.0.0" in names
        assert "@atlaskit/tag@11.0.0" in names
        assert names == sorted(names)

    def test_get(self):
        assert CatalogRegistry.get("memoize-one@5.0.0") is MEMOIZE_ONE_5
        assert CatalogRegistry.get("memoize-one@99.0.0") is None

    def test_for_package(self):
        assert CatalogRegistry.for_package("@atlaskit/avatar") == [AVATAR_19]

    def test_rules_target_their_package(self):
        for entry in CatalogRegistry.list_entries():
            assert entry.rules
            assert all(rule.module == entry.package for rule in entry.rules)

    def test_entry_name(self):
        entry = CatalogEntry(package="pkg", version="1.0.0", description="", rules=())
        assert entry.name == "pkg@1.0.0"
