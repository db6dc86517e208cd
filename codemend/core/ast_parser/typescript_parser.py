"""TypeScript parsers using tree-sitter.

tree-sitter-typescript ships two grammars: plain TypeScript, where
``<T>expr`` is a type assertion, and TSX, where it is a JSX element.
Each gets its own dialect.
"""

import tree_sitter
import tree_sitter_typescript

from .base import BaseDialectParser

_TS_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_typescript())
_TSX_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_tsx())


class TypeScriptParser(BaseDialectParser):
    """tree-sitter based TypeScript parser (no JSX)."""

    def get_dialect(self) -> str:
        return "typescript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TS_LANGUAGE


class TsxParser(BaseDialectParser):
    """tree-sitter based TSX parser (TypeScript + JSX)."""

    def get_dialect(self) -> str:
        return "tsx"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TSX_LANGUAGE
