"""Lexical scope analysis.

Answers one question for the matcher: does this identifier refer to a
module-level import, or is it shadowed by a closer declaration?
Declarations considered:

- parameters of functions, arrows and methods (including destructuring)
- ``var`` declarations, hoisted to the enclosing function or program
- ``let`` / ``const`` / ``class`` / ``function`` declarations, scoped to
  their block
- ``for`` / ``for...in`` / ``for...of`` heads and ``catch`` parameters
- the name of a named function expression, inside that function
"""

import logging
from typing import Dict, FrozenSet, Iterator, Optional, Set

import tree_sitter

from .bindings import statement_bindings
from .nodes import code_children
from .tree import SourceTree

logger = logging.getLogger(__name__)

FUNCTION_SCOPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
    "method_definition",
})
NAMED_FUNCTION_EXPRESSIONS = frozenset({"function_expression", "function", "generator_function"})
BLOCK_SCOPES = frozenset({"program", "statement_block", "switch_body", "class_static_block"})
SCOPE_TYPES = FUNCTION_SCOPES | BLOCK_SCOPES | {"for_statement", "for_in_statement", "catch_clause"}

_BLOCK_DECLARATIONS = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "abstract_class_declaration",
})


def pattern_names(tree: SourceTree, node: Optional[tree_sitter.Node]) -> Iterator[str]:
    """Yield the names bound by a binding pattern or parameter list."""
    if node is None:
        return
    node_type = node.type
    if node_type in ("identifier", "shorthand_property_identifier_pattern"):
        yield tree.text(node)
    elif node_type == "pair_pattern":
        yield from pattern_names(tree, node.child_by_field_name("value"))
    elif node_type in ("assignment_pattern", "object_assignment_pattern"):
        yield from pattern_names(tree, node.child_by_field_name("left"))
    elif node_type in ("required_parameter", "optional_parameter"):
        yield from pattern_names(tree, node.child_by_field_name("pattern"))
    elif node_type in ("object_pattern", "array_pattern", "rest_pattern", "formal_parameters"):
        for child in code_children(node):
            yield from pattern_names(tree, child)


def declarator_names(tree: SourceTree, declaration: tree_sitter.Node) -> Iterator[str]:
    for declarator in code_children(declaration):
        if declarator.type == "variable_declarator":
            yield from pattern_names(tree, declarator.child_by_field_name("name"))


class ScopeAnalyzer:
    """Resolves identifiers to the scope that declares them.

    Declaration sets are computed lazily and cached per scope node, for
    the lifetime of one transform.
    """

    def __init__(self, tree: SourceTree):
        self._tree = tree
        self._declarations: Dict[int, FrozenSet[str]] = {}
        self._imports: FrozenSet[str] = frozenset(
            binding.local_name
            for statement in code_children(tree.root)
            if statement.type == "import_statement"
            for binding in statement_bindings(tree, statement, include_type_only=True)
        )

    @property
    def imported_names(self) -> FrozenSet[str]:
        return self._imports

    def declaring_scope(self, identifier: tree_sitter.Node) -> Optional[tree_sitter.Node]:
        """Nearest enclosing scope that declares the identifier's name, or None (global)."""
        name = self._tree.text(identifier)
        node = identifier.parent
        while node is not None:
            if node.type in SCOPE_TYPES and name in self.declared_names(node):
                return node
            node = node.parent
        return None

    def refers_to_import(self, identifier: tree_sitter.Node) -> bool:
        scope = self.declaring_scope(identifier)
        return (
            scope is not None
            and scope.type == "program"
            and self._tree.text(identifier) in self._imports
        )

    def is_global(self, identifier: tree_sitter.Node) -> bool:
        return self.declaring_scope(identifier) is None

    def declared_names(self, scope: tree_sitter.Node) -> FrozenSet[str]:
        cached = self._declarations.get(scope.id)
        if cached is None:
            cached = frozenset(self._collect(scope))
            self._declarations[scope.id] = cached
        return cached

    def _collect(self, scope: tree_sitter.Node) -> Set[str]:
        tree = self._tree
        names: Set[str] = set()
        scope_type = scope.type

        if scope_type in BLOCK_SCOPES:
            names.update(self._block_names(scope))
            if scope_type == "program":
                names.update(self._imports)
                names.update(self._hoisted_vars(scope))
        elif scope_type in FUNCTION_SCOPES:
            names.update(pattern_names(tree, scope.child_by_field_name("parameters")))
            names.update(pattern_names(tree, scope.child_by_field_name("parameter")))
            if scope_type in NAMED_FUNCTION_EXPRESSIONS:
                name = scope.child_by_field_name("name")
                if name is not None:
                    names.add(tree.text(name))
            body = scope.child_by_field_name("body")
            if body is not None and body.type == "statement_block":
                names.update(self._hoisted_vars(body))
        elif scope_type == "for_statement":
            initializer = scope.child_by_field_name("initializer")
            if initializer is not None and initializer.type == "lexical_declaration":
                names.update(declarator_names(tree, initializer))
        elif scope_type == "for_in_statement":
            kind = scope.child_by_field_name("kind")
            if kind is not None and kind.type in ("let", "const"):
                names.update(pattern_names(tree, scope.child_by_field_name("left")))
        elif scope_type == "catch_clause":
            names.update(pattern_names(tree, scope.child_by_field_name("parameter")))

        return names

    def _block_names(self, block: tree_sitter.Node) -> Iterator[str]:
        for statement in code_children(block):
            if statement.type == "export_statement":
                statement = statement.child_by_field_name("declaration")
                if statement is None:
                    continue
            if statement.type == "lexical_declaration":
                yield from declarator_names(self._tree, statement)
            elif statement.type in _BLOCK_DECLARATIONS:
                name = statement.child_by_field_name("name")
                if name is not None:
                    yield self._tree.text(name)

    def _hoisted_vars(self, body: tree_sitter.Node) -> Iterator[str]:
        """``var`` names declared anywhere in ``body`` outside nested functions."""
        stack = list(reversed(body.children))
        while stack:
            node = stack.pop()
            if node.type in FUNCTION_SCOPES:
                continue
            if node.type == "variable_declaration":
                yield from declarator_names(self._tree, node)
            elif node.type == "for_in_statement":
                kind = node.child_by_field_name("kind")
                if kind is not None and kind.type == "var":
                    yield from pattern_names(self._tree, node.child_by_field_name("left"))
            stack.extend(reversed(node.children))
