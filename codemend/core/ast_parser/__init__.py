"""CodeMend AST Parser: tree-sitter based parsing for JS/TS dialects.

Public API:
    parse_source(source, dialect) → ParsedSource
    detect_dialect(file_path) → str | None
"""

from .models import ParseError, ParsedSource
from .utils import DIALECTS, detect_dialect, get_parser, is_supported_file, should_skip_directory

__all__ = [
    "parse_source",
    "detect_dialect",
    "get_parser",
    "is_supported_file",
    "should_skip_directory",
    "DIALECTS",
    "ParseError",
    "ParsedSource",
]


def parse_source(source_text: str, dialect: str = "tsx") -> ParsedSource:
    """Parse source code string into a ParsedSource.

    Args:
        source_text: Source code as string
        dialect: Dialect identifier; one of ``DIALECTS``

    Returns:
        ParsedSource containing the tree and any syntax errors
    """
    parser = get_parser(dialect)
    return parser.parse_source(source_text)
