"""Base interface for dialect-specific parsers.

Defines the Strategy pattern base class that all dialect parsers implement.
Shared parsing logic lives here; grammar selection is delegated.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterator, List

import tree_sitter

from .models import ParseError, ParsedSource

logger = logging.getLogger(__name__)


class BaseDialectParser(ABC):
    """Abstract base for dialect-specific tree-sitter parsers.

    Subclasses implement:
    - get_dialect(): returns dialect name string
    - get_tree_sitter_language(): returns tree-sitter Language object
    """

    @abstractmethod
    def get_dialect(self) -> str:
        """Return the dialect identifier (e.g., 'javascript', 'tsx')."""
        ...

    @abstractmethod
    def get_tree_sitter_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this dialect."""
        ...

    def parse_source(self, source_text: str) -> ParsedSource:
        """Parse source code string into a ParsedSource.

        A fresh ``tree_sitter.Parser`` is created per call, so one parser
        strategy can serve several files concurrently.

        Args:
            source_text: Source code as string

        Returns:
            ParsedSource with the tree and any syntax errors found
        """
        source_bytes = source_text.encode("utf-8")
        line_count = source_text.count("\n") + (1 if source_text and not source_text.endswith("\n") else 0)

        parser = tree_sitter.Parser(self.get_tree_sitter_language())
        tree = parser.parse(source_bytes)

        errors: List[ParseError] = []
        if tree.root_node.has_error:
            errors = [self._to_parse_error(node) for node in self._iter_error_nodes(tree.root_node)]
            logger.debug(f"{self.get_dialect()} parse reported {len(errors)} syntax error(s)")

        return ParsedSource(
            dialect=self.get_dialect(),
            source=source_bytes,
            tree=tree,
            line_count=line_count,
            errors=errors,
        )

    @staticmethod
    def _iter_error_nodes(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
        """Yield ERROR and MISSING nodes in document order.

        Only subtrees flagged ``has_error`` are descended into.
        """
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                yield node
                continue
            stack.extend(child for child in reversed(node.children) if child.has_error or child.is_missing)

    @staticmethod
    def _to_parse_error(node: tree_sitter.Node) -> ParseError:
        if node.is_missing:
            message = f"Missing '{node.type}'"
        else:
            message = "Unexpected syntax"
        return ParseError(
            line=node.start_point.row + 1,
            column=node.start_point.column,
            message=message,
        )
