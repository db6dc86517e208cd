"""Tests for import binding resolution."""

from codemend.core.codemod import BindingKind, SourceTree, has_import_declaration, resolve


DEFAULT_IMPORT = """\
import memoize from 'memoize-one';
"""

ALIASED_IMPORTS = """\
import Avatar, { AvatarItem as Item, Skeleton } from '@atlaskit/avatar';
import { default as Face } from '@atlaskit/avatar';
import * as avatar from '@atlaskit/avatar';
import Other from 'other';
"""

REIMPORT = """\
import memoize from 'memoize-one';
import memo from 'memoize-one';
"""

SIDE_EFFECT_IMPORT = """\
import 'memoize-one';
"""

TYPE_ONLY_IMPORT = """\
import type Memoize from 'memoize-one';
import { type EqualityFn, default as memoize } from 'memoize-one';
"""

STRING_EXPORT_NAME = """\
import { "AvatarItem" as Item } from '@atlaskit/avatar';
"""

NO_IMPORT = """\
const memoize = require('memoize-one');
"""


class TestResolve:
    def test_default_import(self):
        resolved = resolve(SourceTree.from_text(DEFAULT_IMPORT), "memoize-one")
        assert resolved.present
        assert resolved.default_local == "memoize"
        assert resolved.bindings[0].kind is BindingKind.DEFAULT

    def test_absent_module(self):
        resolved = resolve(SourceTree.from_text(NO_IMPORT), "memoize-one")
        assert not resolved.present
        assert resolved.default_local is None
        assert resolved.bindings == ()

    def test_named_alias_resolves_by_exported_name(self):
        resolved = resolve(SourceTree.from_text(ALIASED_IMPORTS), "@atlaskit/avatar")
        assert resolved.named_local("AvatarItem") == "Item"
        assert resolved.named_local("Skeleton") == "Skeleton"
        assert resolved.named_local("Item") is None

    def test_default_as_alias_counts_as_default(self):
        resolved = resolve(SourceTree.from_text(ALIASED_IMPORTS), "@atlaskit/avatar")
        assert resolved.default_locals() == ("Avatar", "Face")

    def test_namespace_import(self):
        resolved = resolve(SourceTree.from_text(ALIASED_IMPORTS), "@atlaskit/avatar")
        namespaces = [b.local_name for b in resolved.bindings if b.kind is BindingKind.NAMESPACE]
        assert namespaces == ["avatar"]

    def test_other_modules_ignored(self):
        resolved = resolve(SourceTree.from_text(ALIASED_IMPORTS), "@atlaskit/avatar")
        assert "Other" not in [b.local_name for b in resolved.bindings]

    def test_reimport_enumerates_all_names(self):
        resolved = resolve(SourceTree.from_text(REIMPORT), "memoize-one")
        assert resolved.default_locals() == ("memoize", "memo")
        assert resolved.locals_for("default") == ("memoize", "memo")

    def test_side_effect_import_is_present_without_bindings(self):
        resolved = resolve(SourceTree.from_text(SIDE_EFFECT_IMPORT), "memoize-one")
        assert resolved.present
        assert resolved.bindings == ()

    def test_type_only_imports_bind_nothing(self):
        resolved = resolve(SourceTree.from_text(TYPE_ONLY_IMPORT, "typescript"), "memoize-one")
        assert resolved.present
        assert resolved.default_locals() == ("memoize",)
        assert resolved.named_local("EqualityFn") is None

    def test_string_export_name(self):
        resolved = resolve(SourceTree.from_text(STRING_EXPORT_NAME), "@atlaskit/avatar")
        assert resolved.named_local("AvatarItem") == "Item"

    def test_has_import_declaration(self):
        tree = SourceTree.from_text(DEFAULT_IMPORT)
        assert has_import_declaration(tree, "memoize-one")
        assert not has_import_declaration(tree, "memoize")
