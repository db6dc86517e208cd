"""AST Parser data models.

Defines the data structures handed from the parser layer to the
codemod kernel. These are pure data containers with no parsing logic.
"""

from dataclasses import dataclass, field
from typing import List

import tree_sitter


@dataclass
class ParseError:
    """An error encountered during parsing."""

    line: int  # 1-based
    column: int  # 0-based
    message: str
    severity: str = "error"  # "warning" | "error"


@dataclass
class ParsedSource:
    """Complete parse output for a single file.

    Holds the tree-sitter tree together with the exact bytes it was
    parsed from, so byte offsets on every node index into ``source``.
    """

    dialect: str  # "javascript" | "typescript" | "tsx"
    source: bytes
    tree: tree_sitter.Tree
    line_count: int = 0
    errors: List[ParseError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(e.severity == "error" for e in self.errors)
