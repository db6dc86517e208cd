"""Structural codemod kernel.

Public API:
    transform(source, rules, dialect, options) → TransformResult
    load_rules(path) → tuple of RewriteRule
"""

from .bindings import BindingKind, ImportBinding, ResolvedImports, has_import_declaration, resolve
from .config import (
    CallMatch,
    ComponentAsRenderChild,
    ElementMatch,
    PrintOptions,
    RenameAttribute,
    RewriteRule,
    WrapEqualityFn,
    load_rules,
    parse_rules,
)
from .diagnostics import DIAGNOSTIC_PREFIX, DiagnosticReporter, format_unable_to_migrate
from .engine import OccurrenceState, Outcome, TransformResult, transform
from .errors import (
    CodemodError,
    EditConflict,
    MalformedMatch,
    ParseFailure,
    RuleConfigError,
    UnsupportedPattern,
)
from .tree import NodeLocation, SourceTree

__all__ = [
    "transform",
    "load_rules",
    "parse_rules",
    "resolve",
    "has_import_declaration",
    "BindingKind",
    "ImportBinding",
    "ResolvedImports",
    "CallMatch",
    "ElementMatch",
    "RenameAttribute",
    "WrapEqualityFn",
    "ComponentAsRenderChild",
    "RewriteRule",
    "PrintOptions",
    "DIAGNOSTIC_PREFIX",
    "DiagnosticReporter",
    "format_unable_to_migrate",
    "OccurrenceState",
    "Outcome",
    "TransformResult",
    "CodemodError",
    "ParseFailure",
    "UnsupportedPattern",
    "MalformedMatch",
    "EditConflict",
    "RuleConfigError",
    "NodeLocation",
    "SourceTree",
]
