"""Rewrite synthesis.

Builds replacement code for two migrations:

* equality functions whose convention changes from "called once per
  argument pair" to "called once with both argument lists", and
* a component reference attribute turned into a render function child.

Original expressions are carried over as source text, never re-printed,
so their internal shape is preserved exactly.
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Set

import tree_sitter

from .attributes import attribute_value, find_attributes, remove_attribute
from .classifier import Unsupported, call_arguments, classify
from .config import PrintOptions
from .errors import MalformedMatch, UnsupportedPattern
from .matcher import closing_element, element_name, opening_element
from .nodes import code_children, is_node_of_type, iter_nodes, unwrap_parentheses
from .scope import ScopeAnalyzer
from .tree import NodeLocation, SourceTree

logger = logging.getLogger(__name__)

_NAME_TYPES = ("identifier", "shorthand_property_identifier", "shorthand_property_identifier_pattern")
_STRING_TYPES = ("template_string", "string")

SPREAD_REASON = "Spread arguments hide the equality function"


@dataclass(frozen=True)
class EqualityNames:
    new_args: str = "newArgs"
    last_args: str = "lastArgs"
    equality_fn: str = "__equalityFn"


def fresh_name(base: str, taken: AbstractSet[str]) -> str:
    if base not in taken:
        return base
    suffix = 1
    while f"{base}{suffix}" in taken:
        suffix += 1
    return f"{base}{suffix}"


def identifier_names(tree: SourceTree, node: tree_sitter.Node) -> Set[str]:
    return {tree.text(n) for n in iter_nodes(node, _NAME_TYPES)}


def equality_names(taken: AbstractSet[str]) -> EqualityNames:
    defaults = EqualityNames()
    return EqualityNames(
        new_args=fresh_name(defaults.new_args, taken),
        last_args=fresh_name(defaults.last_args, taken),
        equality_fn=fresh_name(defaults.equality_fn, taken),
    )


def reindent(tree: SourceTree, node: tree_sitter.Node, unit: str) -> str:
    """Source of ``node`` with continuation lines shifted by one indent unit.

    Left verbatim when a string literal spans lines, since shifting
    would change its value.
    """
    text = tree.text(node)
    if "\n" not in text:
        return text
    for literal in iter_nodes(node, _STRING_TYPES):
        if literal.start_point.row != literal.end_point.row:
            return text
    first, *rest = text.split("\n")
    return "\n".join([first] + [unit + line if line.strip() else line for line in rest])


def synthesize_equality_fn(
    original: str,
    names: EqualityNames,
    indent: str,
    options: PrintOptions,
) -> str:
    """Batch-convention wrapper around ``original``.

    The wrapper returns false on a length mismatch, binds ``original`` to
    one name, and reduces the index-aligned pairs with ``every``.
    """
    unit = options.indent_unit
    inner = indent + unit
    new, last, fn = names.new_args, names.last_args, names.equality_fn
    predicate = f"(newArg, index) => {fn}(newArg, {last}[index])"
    reduction = f"return {new}.every({predicate});"
    if len(inner) + len(reduction) > options.wrap_column:
        comma = "," if options.trailing_comma else ""
        reduction = f"return {new}.every(\n{inner}{unit}{predicate}{comma}\n{inner});"
    lines = [
        f"({new}, {last}) => {{",
        f"{inner}if ({new}.length !== {last}.length) {{",
        f"{inner}{unit}return false;",
        f"{inner}}}",
        "",
        f"{inner}const {fn} = {original};",
        f"{inner}{reduction}",
        f"{indent}}}",
    ]
    return "\n".join(lines)


def _is_undefined(tree: SourceTree, node: tree_sitter.Node, scopes: ScopeAnalyzer) -> bool:
    """An explicit global ``undefined`` selects the default equality check."""
    return node.type in ("undefined", "identifier") and tree.text(node) == "undefined" and scopes.is_global(node)


def rewrite_equality_fn(
    tree: SourceTree,
    location: NodeLocation,
    scopes: ScopeAnalyzer,
    options: PrintOptions,
) -> bool:
    """Migrate the call's second argument to the batch convention.

    Returns False when there is no custom equality function to migrate.

    Raises:
        UnsupportedPattern: The argument is neither a function nor an identifier.
    """
    call = location.node
    arguments = call_arguments(call)
    if arguments is None:
        return False
    if any(argument.type == "spread_element" for argument in arguments[:2]):
        raise UnsupportedPattern(SPREAD_REASON, reason=SPREAD_REASON)
    if len(arguments) < 2:
        return False

    comparator = arguments[1]
    if _is_undefined(tree, comparator, scopes):
        return False

    shape = classify(tree, comparator)
    if isinstance(shape, Unsupported):
        raise UnsupportedPattern(shape.reason)

    unit = options.indent_unit
    names = equality_names(identifier_names(tree, comparator))
    replacement = synthesize_equality_fn(
        reindent(tree, comparator, unit),
        names,
        tree.line_indent(comparator),
        options,
    )
    with tree.edit() as batch:
        batch.replace(comparator, replacement)
    logger.debug(f"Wrapped {type(shape).__name__} equality function at line {location.line}")
    return True


def synthesize_render_child(component: str, ref_alias: str, props_name: str) -> str:
    return f"{{({{ ref: {ref_alias}, ...{props_name} }}) => <{component} {{...{props_name}}} />}}"


def component_reference(tree: SourceTree, value: tree_sitter.Node, attribute: str) -> str:
    """Identifier named by ``attribute={Component}``.

    Raises:
        MalformedMatch: The value is not an expression container.
        UnsupportedPattern: The expression is not a capitalised identifier.
    """
    if not is_node_of_type(value, "jsx_expression"):
        raise MalformedMatch(f"Expected {attribute} to hold an expression container, found {value.type}")
    contents = code_children(value)
    if len(contents) != 1:
        raise MalformedMatch(f"Expected {attribute} to hold exactly one expression")
    expression = unwrap_parentheses(contents[0])
    if expression.type != "identifier":
        raise UnsupportedPattern(f"Expected {attribute} to be an identifier, found {expression.type}")
    name = tree.text(expression)
    if not name[:1].isupper():
        # a lowercase JSX tag would render an intrinsic element instead
        raise UnsupportedPattern(f"{name} cannot be used as a JSX tag")
    return name


def rewrite_component_as_render_child(
    tree: SourceTree,
    location: NodeLocation,
    attribute: str,
    ref_alias: str = "_",
    props_name: str = "props",
) -> bool:
    """Move ``attribute={Component}`` into a render function child.

    The element keeps its tag and other attributes; its children are
    replaced by ``{({ ref: _, ...props }) => <Component {...props} />}``.
    Returns False when the element has no such attribute.
    """
    element = location.node
    matches = find_attributes(tree, element, attribute)
    if not matches:
        return False
    if len(matches) > 1:
        raise MalformedMatch(f"Element declares {attribute} {len(matches)} times")

    attribute_location = matches[0]
    value = attribute_value(attribute_location.node)
    if value is None:
        raise MalformedMatch(f"{attribute} has no value")
    component = component_reference(tree, value, attribute)

    taken = {component}
    child = synthesize_render_child(
        component,
        fresh_name(ref_alias, taken),
        fresh_name(props_name, taken),
    )
    opening = opening_element(element)
    tag = tree.text(element_name(element))

    with tree.edit() as batch:
        remove_attribute(batch, attribute_location)
        if element.type == "jsx_self_closing_element":
            last = code_children(opening)[-1]
            batch.replace_range(last.end_byte, element.end_byte, f">{child}</{tag}>")
        else:
            closing = closing_element(element)
            if opening is None or closing is None:
                raise MalformedMatch("Element is missing its opening or closing tag")
            batch.replace_range(opening.end_byte, closing.start_byte, child)
    logger.debug(f"Moved {attribute}={component} into a render child at line {location.line}")
    return True
