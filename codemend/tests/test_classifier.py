"""Tests for argument shape classification."""

import pytest
from codemend.core.codemod import SourceTree
from codemend.core.codemod.classifier import (
    FunctionLiteral,
    Identifier,
    Unsupported,
    call_arguments,
    classify,
)
from codemend.core.codemod.nodes import iter_nodes


def _second_argument(expression: str):
    tree = SourceTree.from_text(f"f(a, {expression});\n")
    call = next(iter_nodes(tree.root, ("call_expression",)))
    return tree, call_arguments(call)[1]


class TestClassify:
    def test_arrow_function(self):
        tree, argument = _second_argument("(x, y) => x === y")
        shape = classify(tree, argument)
        assert isinstance(shape, FunctionLiteral)
        assert shape.parameters == ("x", "y")
        assert tree.text(shape.body) == "x === y"

    def test_single_parameter_arrow(self):
        tree, argument = _second_argument("x => true")
        shape = classify(tree, argument)
        assert isinstance(shape, FunctionLiteral)
        assert shape.parameters == ("x",)

    def test_function_expression(self):
        tree, argument = _second_argument("function isEqual(x, y) { return x === y; }")
        assert isinstance(classify(tree, argument), FunctionLiteral)

    def test_parenthesized_function_keeps_original_node(self):
        tree, argument = _second_argument("((x, y) => x === y)")
        shape = classify(tree, argument)
        assert isinstance(shape, FunctionLiteral)
        assert tree.text(shape.node).startswith("((")

    def test_identifier(self):
        tree, argument = _second_argument("isEqual")
        shape = classify(tree, argument)
        assert isinstance(shape, Identifier)
        assert shape.name == "isEqual"

    @pytest.mark.parametrize("expression", ["{}", "utils.isEqual", "makeEqual()", "'strict'"])
    def test_everything_else_unsupported(self, expression):
        tree, argument = _second_argument(expression)
        shape = classify(tree, argument)
        assert isinstance(shape, Unsupported)
        assert shape.reason


class TestCallArguments:
    def test_comments_skipped(self):
        tree = SourceTree.from_text("f(a, /* note */ b);\n")
        call = next(iter_nodes(tree.root, ("call_expression",)))
        arguments = call_arguments(call)
        assert [tree.text(a) for a in arguments] == ["a", "b"]

    def test_tagged_template_has_no_arguments(self):
        tree = SourceTree.from_text("f`x`;\n")
        call = next(iter_nodes(tree.root, ("call_expression",)))
        assert call_arguments(call) is None
