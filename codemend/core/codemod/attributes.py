"""Attribute location and renaming on matched JSX elements."""

from typing import Optional

import tree_sitter

from .errors import MalformedMatch
from .matcher import opening_element
from .nodes import code_children
from .tree import EditBatch, MatchSet, NodeLocation, SourceTree


def attribute_name(tree: SourceTree, attribute: tree_sitter.Node) -> str:
    children = code_children(attribute)
    return tree.text(children[0]) if children else ""


def attribute_value(attribute: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    """The value node (string, ``{...}`` container or element); None for a bare attribute."""
    children = code_children(attribute)
    return children[1] if len(children) > 1 else None


def find_attributes(tree: SourceTree, element: tree_sitter.Node, name: str) -> MatchSet:
    opening = opening_element(element)
    if opening is None:
        raise MalformedMatch(f"{element.type} has no opening element")
    return tuple(
        NodeLocation.of(child)
        for child in code_children(opening)
        if child.type == "jsx_attribute" and attribute_name(tree, child) == name
    )


def renamed_attribute(tree: SourceTree, attribute: tree_sitter.Node, new_name: str) -> str:
    """Source for ``attribute`` under ``new_name``, value text carried over unchanged."""
    value = attribute_value(attribute)
    return new_name if value is None else f"{new_name}={tree.text(value)}"


def rename_attributes(tree: SourceTree, locations: MatchSet, new_name: str) -> None:
    """Rename every attribute in ``locations`` as one atomic edit."""
    with tree.edit() as batch:
        for location in locations:
            batch.replace(location, renamed_attribute(tree, location.node, new_name))


def rename_attribute(tree: SourceTree, location: NodeLocation, new_name: str) -> None:
    rename_attributes(tree, (location,), new_name)


def remove_attribute(batch: EditBatch, location: NodeLocation) -> None:
    """Delete the attribute together with the whitespace before it."""
    attribute = location.node
    previous = attribute.prev_sibling
    start = previous.end_byte if previous is not None else attribute.start_byte
    batch.delete_range(start, attribute.end_byte)
