"""AST Parser utilities.

Dialect detection, parser registry, and file-walking helpers.
"""

import os
from typing import Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .base import BaseDialectParser

DIALECTS = ("javascript", "typescript", "tsx")

# Extension → dialect mapping
SUPPORTED_EXTENSIONS: Dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

# Directories to skip during file walking
SKIP_DIRECTORIES = frozenset({
    "node_modules",
    "bower_components",
    ".git",
    ".hg",
    "dist",
    "build",
    "coverage",
    "out",
    ".next",
    ".cache",
    "__pycache__",
})

# Parser registry, lazy-loaded to avoid loading every grammar at startup
_parser_registry: Dict[str, "BaseDialectParser"] = {}


def detect_dialect(file_path: str) -> Optional[str]:
    """Detect parser dialect from file extension.

    Declaration files (``.d.ts``) carry no call sites and are reported
    as unsupported.

    Args:
        file_path: Path to the source file

    Returns:
        Dialect identifier string or None if unsupported
    """
    if file_path.lower().endswith(".d.ts"):
        return None
    _, ext = os.path.splitext(file_path)
    return SUPPORTED_EXTENSIONS.get(ext.lower())


def get_parser(dialect: str) -> "BaseDialectParser":
    """Get a parser instance for the given dialect.

    Args:
        dialect: Dialect identifier (e.g., "tsx")

    Returns:
        Parser instance

    Raises:
        ValueError: If dialect is not supported
    """
    if dialect not in _parser_registry:
        if dialect == "javascript":
            from .javascript_parser import JavaScriptParser
            _parser_registry["javascript"] = JavaScriptParser()
        elif dialect == "typescript":
            from .typescript_parser import TypeScriptParser
            _parser_registry["typescript"] = TypeScriptParser()
        elif dialect == "tsx":
            from .typescript_parser import TsxParser
            _parser_registry["tsx"] = TsxParser()
        else:
            raise ValueError(
                f"Unsupported dialect: {dialect}. "
                f"Supported: {list(DIALECTS)}"
            )

    return _parser_registry[dialect]


def should_skip_directory(dir_name: str) -> bool:
    """Check if a directory should be skipped during file walking.

    Args:
        dir_name: Directory name (not full path)

    Returns:
        True if directory should be skipped
    """
    return dir_name in SKIP_DIRECTORIES or dir_name.startswith(".")


def is_supported_file(file_path: str) -> bool:
    """Check if a file has a supported extension."""
    return detect_dialect(file_path) is not None
