"""JavaScript parser using tree-sitter.

The JavaScript grammar accepts JSX, so ``.js`` and ``.jsx`` sources
share this dialect.
"""

import tree_sitter
import tree_sitter_javascript

from .base import BaseDialectParser

_JS_LANGUAGE = tree_sitter.Language(tree_sitter_javascript.language())


class JavaScriptParser(BaseDialectParser):
    """tree-sitter based JavaScript (+ JSX) parser."""

    def get_dialect(self) -> str:
        return "javascript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _JS_LANGUAGE
