"""Diagnostic comments for occurrences that cannot be migrated.

Each report prepends one block comment to the file and touches nothing
else. Within one transform, a message already reported is not repeated,
and a comment already present in the source is not added again, so
re-running a codemod over its own output is a no-op.
"""

import logging
from typing import List, Optional, Tuple

from .tree import SourceTree

logger = logging.getLogger(__name__)

DIAGNOSTIC_PREFIX = "TODO: (@hypermod)"


def format_unable_to_migrate(subject: str, reason: Optional[str] = None) -> str:
    message = f"Unable to migrate {subject}."
    if reason:
        message = f"{message}\n{reason}"
    return message


def render_comment(message: str) -> str:
    body = message.replace("*/", "*\\/")
    return f"/* {DIAGNOSTIC_PREFIX} {body} */"


class DiagnosticReporter:
    """Collects diagnostics for one file transform."""

    def __init__(self):
        self._messages: List[str] = []

    @property
    def messages(self) -> Tuple[str, ...]:
        return tuple(self._messages)

    def report(self, tree: SourceTree, message: str) -> bool:
        """Prepend a diagnostic comment; return False if it was already there."""
        comment = render_comment(message)
        if message in self._messages or tree.contains(comment):
            logger.debug(f"Diagnostic already present: {message!r}")
            return False
        self._messages.append(message)
        tree.prepend(comment + "\n")
        return True
