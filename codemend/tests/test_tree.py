"""Tests for node locations, edit batches and serialization."""

import pytest
from codemend.core.codemod import EditConflict, MalformedMatch, NodeLocation, SourceTree
from codemend.core.codemod.nodes import is_node_of_type, iter_nodes, unwrap_parentheses
from codemend.core.codemod.serializer import render
from codemend.core.codemod.tree import Edit


SOURCE = """\
const a = first(1, 2);
const b = second(3);
"""


def _calls(tree):
    return list(iter_nodes(tree.root, ("call_expression",)))


class TestNodeLocation:
    def test_field_slot(self):
        tree = SourceTree.from_text(SOURCE)
        call = _calls(tree)[0]
        location = NodeLocation.of(call)
        assert location.owner.type == "variable_declarator"
        assert location.slot == "value"
        assert location.node == call
        assert location.line == 1

    def test_index_slot_for_repeated_children(self):
        tree = SourceTree.from_text(SOURCE)
        arguments = _calls(tree)[0].child_by_field_name("arguments")
        second = arguments.named_children[1]
        location = NodeLocation.of(second)
        assert isinstance(location.slot, int)
        assert tree.text(location.node) == "2"

    def test_root_has_no_slot(self):
        tree = SourceTree.from_text(SOURCE)
        with pytest.raises(ValueError):
            NodeLocation.of(tree.root)

    def test_missing_slot_is_malformed(self):
        tree = SourceTree.from_text(SOURCE)
        location = NodeLocation(_calls(tree)[0], 99)
        with pytest.raises(MalformedMatch):
            location.node


class TestNodeHelpers:
    def test_is_node_of_type(self):
        tree = SourceTree.from_text(SOURCE)
        call = _calls(tree)[0]
        assert is_node_of_type(call, "call_expression")
        assert not is_node_of_type(None, "call_expression")

    def test_unwrap_parentheses(self):
        tree = SourceTree.from_text("const a = ((first(1)));\n")
        wrapped = next(iter_nodes(tree.root, ("parenthesized_expression",)))
        assert unwrap_parentheses(wrapped).type == "call_expression"

    def test_iter_nodes_document_order(self):
        tree = SourceTree.from_text(SOURCE)
        assert [tree.text(c.child_by_field_name("function")) for c in _calls(tree)] == ["first", "second"]


class TestEdits:
    def test_overlap_rules(self):
        assert Edit(0, 5, b"").overlaps(Edit(3, 8, b""))
        assert not Edit(0, 5, b"").overlaps(Edit(5, 8, b""))
        assert not Edit(2, 2, b"x").overlaps(Edit(2, 2, b"y"))
        assert Edit(3, 3, b"x").overlaps(Edit(0, 5, b""))
        assert not Edit(5, 5, b"x").overlaps(Edit(0, 5, b""))

    def test_replace_and_render(self):
        tree = SourceTree.from_text(SOURCE)
        first, second = _calls(tree)
        with tree.edit() as batch:
            batch.replace(first, "one()")
        with tree.edit() as batch:
            batch.replace(NodeLocation.of(second), "two()")
        assert render(tree) == "const a = one();\nconst b = two();\n"

    def test_conflicting_batch_is_discarded(self):
        tree = SourceTree.from_text(SOURCE)
        call = _calls(tree)[0]
        with tree.edit() as batch:
            batch.replace(call, "one()")
        with pytest.raises(EditConflict):
            with tree.edit() as batch:
                batch.insert_at(_calls(tree)[1].start_byte, "/* ok */ ")
                batch.replace(call.child_by_field_name("arguments"), "(9)")
        assert len(tree.edits) == 1
        assert render(tree) == "const a = one();\nconst b = second(3);\n"

    def test_failed_block_commits_nothing(self):
        tree = SourceTree.from_text(SOURCE)
        with pytest.raises(RuntimeError):
            with tree.edit() as batch:
                batch.replace(_calls(tree)[0], "one()")
                raise RuntimeError("abort")
        assert not tree.modified
        assert render(tree) == SOURCE

    def test_insertions_keep_commit_order(self):
        tree = SourceTree.from_text(SOURCE)
        with tree.edit() as batch:
            batch.insert_at(0, "// a\n")
        with tree.edit() as batch:
            batch.insert_at(0, "// b\n")
        assert render(tree).startswith("// a\n// b\nconst a")

    def test_line_indent(self):
        tree = SourceTree.from_text("function f() {\n    return g(1);\n}\n")
        call = _calls(tree)[0]
        assert tree.line_indent(call) == "    "


class TestPrologue:
    @pytest.mark.parametrize("dialect", ["javascript", "typescript", "tsx"])
    def test_comments_go_below_hashbang(self, dialect):
        source = "#!/usr/bin/env node\nconst a = 1;\n"
        tree = SourceTree.from_text(source, dialect)
        assert tree.prologue_offset() == len("#!/usr/bin/env node\n")
        tree.prepend("/* note */\n")
        assert render(tree) == "#!/usr/bin/env node\n/* note */\nconst a = 1;\n"

    def test_hashbang_without_newline(self):
        tree = SourceTree.from_text("#!/usr/bin/env node", "javascript")
        tree.prepend("/* note */\n")
        assert render(tree) == "#!/usr/bin/env node\n/* note */\n"

    def test_comments_go_first_without_hashbang(self):
        tree = SourceTree.from_text(SOURCE)
        assert tree.prologue_offset() == 0
