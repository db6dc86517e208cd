"""Node pattern matching.

Matches are resolved by bound identity: the callee or tag identifier
must have the right text *and* resolve, through lexical scope, to the
module-level import. A same-named local variable never matches.
"""

import logging
from typing import Collection, List, Optional

import tree_sitter

from .nodes import is_node_of_type, iter_nodes
from .scope import ScopeAnalyzer
from .tree import MatchSet, NodeLocation, SourceTree

logger = logging.getLogger(__name__)

ELEMENT_TYPES = ("jsx_element", "jsx_self_closing_element")


def opening_element(element: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    """The node carrying an element's tag name and attributes."""
    if element.type == "jsx_self_closing_element":
        return element
    for child in element.children:
        if child.type == "jsx_opening_element":
            return child
    return None


def closing_element(element: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    for child in element.children:
        if child.type == "jsx_closing_element":
            return child
    return None


def element_name(element: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    opening = opening_element(element)
    if opening is None:
        return None
    return opening.child_by_field_name("name")


def _bound(tree: SourceTree, node: Optional[tree_sitter.Node], names: Collection[str], scopes: ScopeAnalyzer) -> bool:
    return (
        is_node_of_type(node, "identifier")
        and tree.text(node) in names
        and scopes.refers_to_import(node)
    )


def find_calls(tree: SourceTree, local_names: Collection[str], scopes: ScopeAnalyzer) -> MatchSet:
    """Call expressions whose callee is bound to one of ``local_names``."""
    if not local_names:
        return ()
    matches: List[NodeLocation] = []
    for call in iter_nodes(tree.root, ("call_expression",)):
        if _bound(tree, call.child_by_field_name("function"), local_names, scopes):
            matches.append(NodeLocation.of(call))
    logger.debug(f"Matched {len(matches)} call(s) of {sorted(local_names)}")
    return tuple(matches)


def find_elements(tree: SourceTree, local_names: Collection[str], scopes: ScopeAnalyzer) -> MatchSet:
    """JSX elements whose tag is bound to one of ``local_names``."""
    if not local_names:
        return ()
    matches: List[NodeLocation] = []
    for element in iter_nodes(tree.root, ELEMENT_TYPES):
        if _bound(tree, element_name(element), local_names, scopes):
            matches.append(NodeLocation.of(element))
    logger.debug(f"Matched {len(matches)} element(s) of {sorted(local_names)}")
    return tuple(matches)
