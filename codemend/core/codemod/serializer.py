"""Render a SourceTree back to text.

Untouched regions are copied byte for byte, so formatting outside the
edited ranges is preserved exactly.
"""

from typing import Iterable, List, Sequence

from .tree import Edit, SourceTree


def apply_edits(source: bytes, edits: Iterable[Edit]) -> bytes:
    """Apply non-overlapping edits to ``source``.

    Insertions at the same offset keep their commit order and come
    before a replacement starting at that offset.
    """
    ordered = sorted(
        enumerate(edits),
        key=lambda item: (item[1].start, not item[1].is_insertion, item[0]),
    )
    chunks: List[bytes] = []
    cursor = 0
    for _, edit in ordered:
        chunks.append(source[cursor:edit.start])
        chunks.append(edit.text)
        cursor = max(cursor, edit.end)
    chunks.append(source[cursor:])
    return b"".join(chunks)


def prologue_edit(tree: SourceTree, comments: Sequence[str]) -> List[Edit]:
    if not comments:
        return []
    offset = tree.prologue_offset()
    text = "".join(comments)
    if offset and not tree.source[:offset].endswith(b"\n"):
        text = "\n" + text
    return [Edit(offset, offset, text.encode("utf-8"))]


def render(tree: SourceTree) -> str:
    """Serialize the tree with its pending edits and prologue comments."""
    edits = prologue_edit(tree, tree.prologue) + list(tree.edits)
    return apply_edits(tree.source, edits).decode("utf-8")
