"""Import binding resolution.

Finds every local name a file binds to a given module, honouring
aliases (``import {X as Y}``), re-imports and ``default`` re-naming.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import tree_sitter

from .nodes import code_children
from .tree import SourceTree

logger = logging.getLogger(__name__)

DEFAULT_EXPORT = "default"


class BindingKind(Enum):
    """How a local name is bound to a module."""
    DEFAULT = "default"
    NAMED = "named"
    NAMESPACE = "namespace"


@dataclass(frozen=True)
class ImportBinding:
    module_name: str
    local_name: str
    kind: BindingKind
    exported_name: Optional[str] = None  # NAMED only


@dataclass(frozen=True)
class ResolvedImports:
    """All bindings of one module in one file.

    ``present`` is True for any import declaration of the module, even
    one that binds nothing (``import 'm'``) or only types.
    """

    module_name: str
    present: bool
    bindings: Tuple[ImportBinding, ...] = ()

    def default_locals(self) -> Tuple[str, ...]:
        return tuple(b.local_name for b in self.bindings if b.kind is BindingKind.DEFAULT)

    def named_locals(self, exported_name: str) -> Tuple[str, ...]:
        if exported_name == DEFAULT_EXPORT:
            return self.default_locals()
        return tuple(
            b.local_name
            for b in self.bindings
            if b.kind is BindingKind.NAMED and b.exported_name == exported_name
        )

    @property
    def default_local(self) -> Optional[str]:
        names = self.default_locals()
        return names[0] if names else None

    def named_local(self, exported_name: str) -> Optional[str]:
        names = self.named_locals(exported_name)
        return names[0] if names else None

    def locals_for(self, export: str) -> Tuple[str, ...]:
        """Local names for ``export``; ``"default"`` selects the default export."""
        return self.named_locals(export)


def string_value(tree: SourceTree, node: tree_sitter.Node) -> str:
    """Contents of a string literal without its quotes."""
    return tree.text(node)[1:-1]


def _is_type_only(node: tree_sitter.Node) -> bool:
    return any(not child.is_named and child.type in ("type", "typeof") for child in node.children)


def import_statements(tree: SourceTree, module_name: str) -> List[tree_sitter.Node]:
    """Top-level import declarations whose source is ``module_name``."""
    statements = []
    for statement in code_children(tree.root):
        if statement.type != "import_statement":
            continue
        source = statement.child_by_field_name("source")
        if source is not None and string_value(tree, source) == module_name:
            statements.append(statement)
    return statements


def has_import_declaration(tree: SourceTree, module_name: str) -> bool:
    return bool(import_statements(tree, module_name))


def statement_bindings(
    tree: SourceTree,
    statement: tree_sitter.Node,
    include_type_only: bool = False,
) -> List[ImportBinding]:
    """Bindings introduced by one import statement.

    Type-only imports bind no runtime value and are skipped unless
    ``include_type_only`` is set.
    """
    bindings: List[ImportBinding] = []
    source = statement.child_by_field_name("source")
    module_name = string_value(tree, source) if source is not None else ""
    if _is_type_only(statement) and not include_type_only:
        return bindings
    for clause in code_children(statement):
        if clause.type != "import_clause":
            continue
        for part in code_children(clause):
            if part.type == "identifier":
                bindings.append(ImportBinding(module_name, tree.text(part), BindingKind.DEFAULT))
            elif part.type == "namespace_import":
                for name in code_children(part):
                    bindings.append(ImportBinding(module_name, tree.text(name), BindingKind.NAMESPACE))
            elif part.type == "named_imports":
                for specifier in code_children(part):
                    if specifier.type != "import_specifier":
                        continue
                    if _is_type_only(specifier) and not include_type_only:
                        continue
                    name = specifier.child_by_field_name("name")
                    alias = specifier.child_by_field_name("alias")
                    exported = string_value(tree, name) if name.type == "string" else tree.text(name)
                    local = tree.text(alias if alias is not None else name)
                    if exported == DEFAULT_EXPORT:
                        bindings.append(ImportBinding(module_name, local, BindingKind.DEFAULT))
                    else:
                        bindings.append(ImportBinding(module_name, local, BindingKind.NAMED, exported))
    return bindings


def resolve(tree: SourceTree, module_name: str) -> ResolvedImports:
    """Resolve every local binding of ``module_name`` in ``tree``."""
    statements = import_statements(tree, module_name)
    if not statements:
        return ResolvedImports(module_name=module_name, present=False)

    bindings: List[ImportBinding] = []
    for statement in statements:
        bindings.extend(statement_bindings(tree, statement))

    logger.debug(f"Resolved {module_name}: {[b.local_name for b in bindings]}")
    return ResolvedImports(module_name=module_name, present=True, bindings=tuple(bindings))
