"""Argument shape classification.

Every argument is assigned exactly one shape. ``Unsupported`` is the
catch-all and carries the reason; callers must never treat it as if
its shape were known.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

import tree_sitter

from .nodes import code_children, unwrap_parentheses
from .tree import SourceTree

FUNCTION_LITERAL_TYPES = frozenset({"arrow_function", "function_expression", "function"})


@dataclass(frozen=True)
class FunctionLiteral:
    node: tree_sitter.Node  # the argument as written, parentheses included
    parameters: Tuple[str, ...]
    body: tree_sitter.Node


@dataclass(frozen=True)
class Identifier:
    node: tree_sitter.Node
    name: str


@dataclass(frozen=True)
class Unsupported:
    node: tree_sitter.Node
    reason: str


ArgumentShape = Union[FunctionLiteral, Identifier, Unsupported]


def call_arguments(call: tree_sitter.Node) -> Optional[Tuple[tree_sitter.Node, ...]]:
    """Argument nodes of a call; None for tagged templates."""
    arguments = call.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return None
    return code_children(arguments)


def _parameters(tree: SourceTree, function: tree_sitter.Node) -> Tuple[str, ...]:
    single = function.child_by_field_name("parameter")
    if single is not None:
        return (tree.text(single),)
    parameters = function.child_by_field_name("parameters")
    if parameters is None:
        return ()
    return tuple(tree.text(p) for p in code_children(parameters))


def classify(tree: SourceTree, node: tree_sitter.Node) -> ArgumentShape:
    inner = unwrap_parentheses(node)
    if inner.type in FUNCTION_LITERAL_TYPES:
        body = inner.child_by_field_name("body")
        if body is None:
            return Unsupported(node, f"{inner.type} without a body")
        return FunctionLiteral(node=node, parameters=_parameters(tree, inner), body=body)
    if inner.type == "identifier":
        return Identifier(node=node, name=tree.text(inner))
    return Unsupported(node, f"Cannot classify {inner.type}")
