"""Small helpers over tree-sitter nodes."""

from typing import Collection, Iterator, Optional, Tuple

import tree_sitter


def is_node_of_type(node: Optional[tree_sitter.Node], node_type: str) -> bool:
    """Check if a node is of a specified type; ``None`` never is."""
    return node is not None and node.type == node_type


def iter_nodes(root: tree_sitter.Node, types: Collection[str]) -> Iterator[tree_sitter.Node]:
    """Yield descendants of ``root`` (inclusive) whose type is in ``types``, in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in types:
            yield node
        stack.extend(reversed(node.children))


def code_children(node: tree_sitter.Node) -> Tuple[tree_sitter.Node, ...]:
    """Named children with comments filtered out."""
    return tuple(child for child in node.named_children if child.type != "comment")


def unwrap_parentheses(node: tree_sitter.Node) -> tree_sitter.Node:
    while node.type == "parenthesized_expression":
        inner = code_children(node)
        if len(inner) != 1:
            break
        node = inner[0]
    return node
