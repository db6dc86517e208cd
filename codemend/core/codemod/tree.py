"""Source tree, node locations and edit batches.

tree-sitter trees are immutable, so mutation is recorded as byte-range
edits against the original source and applied once by the serializer.
Every match is therefore computed against the untouched tree, and edits
from one occurrence never disturb the locations of another.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

import tree_sitter

from ..ast_parser import parse_source
from .errors import EditConflict, MalformedMatch, ParseFailure
from .nodes import is_node_of_type

logger = logging.getLogger(__name__)

Slot = Union[str, int]


@dataclass(frozen=True)
class NodeLocation:
    """A node addressed by its owning node and slot.

    ``slot`` is a field name when the field holds a single child,
    otherwise the child index within ``owner.children``.
    """

    owner: tree_sitter.Node
    slot: Slot

    @classmethod
    def of(cls, node: tree_sitter.Node) -> "NodeLocation":
        parent = node.parent
        if parent is None:
            raise ValueError("The root node has no owning slot")
        for index, child in enumerate(parent.children):
            if child == node:
                field_name = parent.field_name_for_child(index)
                if field_name and len(parent.children_by_field_name(field_name)) == 1:
                    return cls(parent, field_name)
                return cls(parent, index)
        raise MalformedMatch(f"Node {node.type} not found among its parent's children")

    @property
    def node(self) -> tree_sitter.Node:
        if isinstance(self.slot, str):
            child = self.owner.child_by_field_name(self.slot)
        elif 0 <= self.slot < self.owner.child_count:
            child = self.owner.children[self.slot]
        else:
            child = None
        if child is None:
            raise MalformedMatch(f"{self.owner.type} has no child in slot {self.slot!r}")
        return child

    @property
    def line(self) -> int:
        return self.node.start_point.row + 1


MatchSet = Tuple[NodeLocation, ...]


@dataclass(frozen=True)
class Edit:
    """Replace ``source[start:end]`` with ``text``. ``start == end`` inserts."""

    start: int
    end: int
    text: bytes

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end

    def overlaps(self, other: "Edit") -> bool:
        if self.is_insertion and other.is_insertion:
            return False
        if self.is_insertion:
            return other.start < self.start < other.end
        if other.is_insertion:
            return self.start < other.start < self.end
        return self.start < other.end and other.start < self.end


class EditBatch:
    """Edits for one occurrence, committed together or not at all."""

    def __init__(self, tree: "SourceTree"):
        self._tree = tree
        self.edits: List[Edit] = []

    def replace(self, target: Union[NodeLocation, tree_sitter.Node], text: str) -> None:
        node = target.node if isinstance(target, NodeLocation) else target
        self.replace_range(node.start_byte, node.end_byte, text)

    def replace_range(self, start: int, end: int, text: str) -> None:
        if not 0 <= start <= end <= len(self._tree.source):
            raise MalformedMatch(f"Invalid edit range {start}..{end}")
        self.edits.append(Edit(start, end, text.encode("utf-8")))

    def delete_range(self, start: int, end: int) -> None:
        self.replace_range(start, end, "")

    def insert_at(self, offset: int, text: str) -> None:
        self.replace_range(offset, offset, text)


class SourceTree:
    """The whole-file structure one transform owns.

    Constructed from text, edited through :meth:`edit`, rendered by
    :func:`codemend.core.codemod.serializer.render`, then discarded.
    """

    def __init__(self, source: bytes, tree: tree_sitter.Tree, dialect: str):
        self.source = source
        self.tree = tree
        self.dialect = dialect
        self._edits: List[Edit] = []
        self._prologue: List[str] = []

    @classmethod
    def from_text(cls, source_text: str, dialect: str = "tsx") -> "SourceTree":
        """Parse ``source_text``; raise :class:`ParseFailure` on syntax errors."""
        parsed = parse_source(source_text, dialect)
        if parsed.has_errors:
            first = parsed.errors[0]
            raise ParseFailure(first.message, line=first.line, column=first.column)
        return cls(parsed.source, parsed.tree, parsed.dialect)

    @property
    def root(self) -> tree_sitter.Node:
        return self.tree.root_node

    @property
    def edits(self) -> Tuple[Edit, ...]:
        return tuple(self._edits)

    @property
    def prologue(self) -> Tuple[str, ...]:
        return tuple(self._prologue)

    @property
    def modified(self) -> bool:
        return bool(self._edits or self._prologue)

    def text(self, node: Optional[tree_sitter.Node]) -> str:
        if node is None:
            return ""
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def contains(self, text: str) -> bool:
        return text.encode("utf-8") in self.source

    def line_indent(self, node: tree_sitter.Node) -> str:
        """Leading whitespace of the line on which ``node`` starts."""
        line_start = self.source.rfind(b"\n", 0, node.start_byte) + 1
        end = line_start
        while end < len(self.source) and self.source[end:end + 1] in (b" ", b"\t"):
            end += 1
        return self.source[line_start:end].decode("utf-8")

    def prologue_offset(self) -> int:
        """Byte offset where file-level comments are inserted."""
        first = self.root.children[0] if self.root.child_count else None
        if is_node_of_type(first, "hash_bang_line"):
            newline = self.source.find(b"\n", first.end_byte)
            return len(self.source) if newline == -1 else newline + 1
        return 0

    @contextmanager
    def edit(self) -> Iterator[EditBatch]:
        """Collect one occurrence's edits and commit them atomically.

        If the block raises, nothing is committed. Overlap with an
        already committed edit raises :class:`EditConflict`.
        """
        batch = EditBatch(self)
        yield batch
        self._commit(batch.edits)

    def prepend(self, text: str) -> None:
        self._prologue.append(text)

    def _commit(self, edits: List[Edit]) -> None:
        for index, new in enumerate(edits):
            for existing in self._edits + edits[:index]:
                if new.overlaps(existing):
                    raise EditConflict(
                        f"Edit {new.start}..{new.end} overlaps edit {existing.start}..{existing.end}"
                    )
        self._edits.extend(edits)
        logger.debug(f"Committed {len(edits)} edit(s); {len(self._edits)} pending")
