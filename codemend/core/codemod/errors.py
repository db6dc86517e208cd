"""Codemod error taxonomy.

``ParseFailure`` propagates to the caller. ``UnsupportedPattern`` and
``MalformedMatch`` are recovered per occurrence by the engine: the
occurrence is left untouched and a diagnostic comment is emitted.
"""

from typing import Optional


class CodemodError(Exception):
    """Base class for all codemod errors."""


class ParseFailure(CodemodError):
    """Input could not be parsed under the requested dialect."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} at line {line}, column {column}"
        super().__init__(message)


class UnsupportedPattern(CodemodError):
    """A matched occurrence's sub-expression has no known shape.

    ``reason``, when given, is specific enough to show in the diagnostic
    instead of the rule's generic reason.
    """

    def __init__(self, message: str, reason: Optional[str] = None):
        self.reason = reason
        super().__init__(message)


class MalformedMatch(CodemodError):
    """An expected child is absent where the matcher assumed it would exist."""


class EditConflict(MalformedMatch):
    """An occurrence's edits overlap edits already committed to the tree."""


class RuleConfigError(CodemodError):
    """A rule file could not be read or failed validation."""
