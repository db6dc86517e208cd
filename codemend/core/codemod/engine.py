"""Codemod engine.

Runs a set of rewrite rules over one file:

    parse → resolve bindings → match (frozen) → per occurrence:
    classify → rewrite or report → serialize

Each call owns its tree, matches and diagnostics; nothing is shared
between files, so callers may transform files concurrently.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Type

from .attributes import find_attributes, rename_attributes
from .bindings import ResolvedImports, resolve
from .config import (
    CallMatch,
    ComponentAsRenderChild,
    PrintOptions,
    RenameAttribute,
    RewriteRule,
    WrapEqualityFn,
)
from .diagnostics import DiagnosticReporter, format_unable_to_migrate
from .errors import EditConflict, MalformedMatch, UnsupportedPattern
from .matcher import find_calls, find_elements
from .scope import ScopeAnalyzer
from .serializer import render
from .synthesizer import rewrite_component_as_render_child, rewrite_equality_fn
from .tree import NodeLocation, SourceTree

logger = logging.getLogger(__name__)

OVERLAP_REASON = "It overlaps another rewrite in this file"


class OccurrenceState(Enum):
    """Terminal state of one matched occurrence."""
    REWRITTEN = "rewritten"
    REPORTED = "reported"
    SKIPPED = "skipped"  # matched, but nothing to migrate


@dataclass
class Outcome:
    rule: str
    line: int
    state: OccurrenceState
    detail: Optional[str] = None


@dataclass
class TransformResult:
    source: str
    output: str
    outcomes: List[Outcome] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.output != self.source

    def count(self, state: OccurrenceState) -> int:
        return Counter(o.state for o in self.outcomes)[state]


@dataclass
class _Context:
    tree: SourceTree
    scopes: ScopeAnalyzer
    options: PrintOptions


Handler = Callable[[_Context, NodeLocation, object], bool]


def _rename(context: _Context, location: NodeLocation, strategy: RenameAttribute) -> bool:
    attributes = find_attributes(context.tree, location.node, strategy.old)
    if attributes:
        rename_attributes(context.tree, attributes, strategy.new)
    return bool(attributes)


def _wrap_equality_fn(context: _Context, location: NodeLocation, strategy: WrapEqualityFn) -> bool:
    return rewrite_equality_fn(context.tree, location, context.scopes, context.options)


def _render_child(context: _Context, location: NodeLocation, strategy: ComponentAsRenderChild) -> bool:
    return rewrite_component_as_render_child(
        context.tree,
        location,
        strategy.attribute,
        ref_alias=strategy.ref_alias,
        props_name=strategy.props_name,
    )


_HANDLERS: Dict[Type, Handler] = {
    RenameAttribute: _rename,
    WrapEqualityFn: _wrap_equality_fn,
    ComponentAsRenderChild: _render_child,
}


def _diagnostic(rule: RewriteRule, error: Exception) -> str:
    """Diagnostic for one occurrence left unchanged.

    The rule's generic reason covers unsupported shapes; malformed
    matches and specific unsupported cases say what went wrong.
    """
    strategy = rule.strategy
    if isinstance(error, EditConflict):
        reason = OVERLAP_REASON
    elif isinstance(error, MalformedMatch):
        reason = str(error)
    elif isinstance(error, UnsupportedPattern) and error.reason:
        reason = error.reason
    else:
        reason = strategy.reason or str(error)
    return format_unable_to_migrate(strategy.subject or rule.name, reason)


def _apply_rule(
    context: _Context,
    rule: RewriteRule,
    imports: ResolvedImports,
    reporter: DiagnosticReporter,
) -> List[Outcome]:
    local_names = imports.locals_for(rule.match.export)
    if isinstance(rule.match, CallMatch):
        matches = find_calls(context.tree, local_names, context.scopes)
    else:
        matches = find_elements(context.tree, local_names, context.scopes)

    handler = _HANDLERS[type(rule.strategy)]
    outcomes: List[Outcome] = []
    for location in matches:
        line = location.line
        try:
            rewritten = handler(context, location, rule.strategy)
        except (UnsupportedPattern, MalformedMatch) as e:
            logger.warning(f"{rule.name}: leaving occurrence at line {line} unchanged: {e}")
            reporter.report(context.tree, _diagnostic(rule, e))
            outcomes.append(Outcome(rule.name, line, OccurrenceState.REPORTED, str(e)))
            continue
        state = OccurrenceState.REWRITTEN if rewritten else OccurrenceState.SKIPPED
        outcomes.append(Outcome(rule.name, line, state))
    return outcomes


def transform(
    source: str,
    rules: Sequence[RewriteRule],
    dialect: str = "tsx",
    options: Optional[PrintOptions] = None,
) -> TransformResult:
    """Apply ``rules`` to one file's source text.

    Returns the input unchanged when none of the rules' modules is
    imported.

    Raises:
        ParseFailure: The source does not parse under ``dialect``.
    """
    options = options or PrintOptions()
    tree = SourceTree.from_text(source, dialect)

    resolved: Dict[str, ResolvedImports] = {}
    for rule in rules:
        if rule.module not in resolved:
            resolved[rule.module] = resolve(tree, rule.module)

    applicable = [rule for rule in rules if resolved[rule.module].present]
    if not applicable:
        return TransformResult(source=source, output=source)

    context = _Context(tree=tree, scopes=ScopeAnalyzer(tree), options=options)
    reporter = DiagnosticReporter()
    outcomes: List[Outcome] = []
    for rule in applicable:
        outcomes.extend(_apply_rule(context, rule, resolved[rule.module], reporter))

    output = render(tree) if tree.modified else source
    result = TransformResult(
        source=source,
        output=output,
        outcomes=outcomes,
        diagnostics=list(reporter.messages),
    )
    logger.debug(
        f"Transformed {len(outcomes)} occurrence(s): "
        f"{result.count(OccurrenceState.REWRITTEN)} rewritten, "
        f"{result.count(OccurrenceState.REPORTED)} reported"
    )
    return result
