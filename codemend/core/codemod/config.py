"""Rule and print configuration.

Rewrite rules are immutable declarative data: a target module, a match
predicate and a rewrite strategy. They are defined in Python by the
built-in catalog or loaded from YAML rule files such as::

    rules:
      - name: tag-remove-button-label
        module: "@atlaskit/tag"
        match: {kind: element, export: default}
        strategy: {kind: rename-attribute, old: removeButtonText, new: removeButtonLabel}
"""

import logging
from pathlib import Path
from typing import Annotated, List, Literal, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .bindings import DEFAULT_EXPORT
from .errors import RuleConfigError

logger = logging.getLogger(__name__)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ── Print options ────────────────────────────────────────────────────


class PrintOptions(_Frozen):
    """Formatting preferences passed through to synthesized code.

    ``quote`` is carried for rule authors and printers that emit string
    literals. The built-in rewrites copy existing literals verbatim and
    generate none, so it does not change their output.
    """
    quote: Literal["single", "double", "auto"] = Field(
        "single", description="Quote style for generated string literals (pass-through)"
    )
    trailing_comma: bool = Field(True, description="Add trailing commas to broken argument lists")
    tab_width: int = Field(2, ge=1, le=16, description="Spaces per indent level")
    use_tabs: bool = Field(False, description="Indent with tabs instead of spaces")
    wrap_column: int = Field(100, ge=20, description="Maximum line width for synthesized lines")

    @property
    def indent_unit(self) -> str:
        return "\t" if self.use_tabs else " " * self.tab_width


# ── Match predicates ─────────────────────────────────────────────────


class CallMatch(_Frozen):
    """Call expressions whose callee is bound to ``export`` of the module."""
    kind: Literal["call"] = "call"
    export: str = Field(DEFAULT_EXPORT, min_length=1)


class ElementMatch(_Frozen):
    """JSX elements whose tag is bound to ``export`` of the module."""
    kind: Literal["element"] = "element"
    export: str = Field(DEFAULT_EXPORT, min_length=1)


MatchPredicate = Annotated[Union[CallMatch, ElementMatch], Field(discriminator="kind")]


# ── Rewrite strategies ───────────────────────────────────────────────


class RenameAttribute(_Frozen):
    kind: Literal["rename-attribute"] = "rename-attribute"
    old: str = Field(..., min_length=1)
    new: str = Field(..., min_length=1)
    subject: str = ""
    reason: str = ""


class WrapEqualityFn(_Frozen):
    kind: Literal["wrap-equality-fn"] = "wrap-equality-fn"
    subject: str = "custom equality function"
    reason: str = "Expected a function or an identifier"


class ComponentAsRenderChild(_Frozen):
    kind: Literal["component-as-render-child"] = "component-as-render-child"
    attribute: str = Field("component", min_length=1)
    ref_alias: str = Field("_", min_length=1)
    props_name: str = Field("props", min_length=1)
    subject: str = "component prop"
    reason: str = "Expected the component prop to be an identifier"


RewriteStrategy = Annotated[
    Union[RenameAttribute, WrapEqualityFn, ComponentAsRenderChild],
    Field(discriminator="kind"),
]

_CALL_STRATEGIES = (WrapEqualityFn,)
_ELEMENT_STRATEGIES = (RenameAttribute, ComponentAsRenderChild)


class RewriteRule(_Frozen):
    """One migration step for one module."""
    name: str = Field(..., min_length=1)
    module: str = Field(..., min_length=1, description="Import source, e.g. 'memoize-one'")
    match: MatchPredicate
    strategy: RewriteStrategy

    @model_validator(mode="after")
    def _strategy_fits_match(self) -> "RewriteRule":
        allowed = _CALL_STRATEGIES if isinstance(self.match, CallMatch) else _ELEMENT_STRATEGIES
        if not isinstance(self.strategy, allowed):
            raise ValueError(f"Strategy {self.strategy.kind} cannot rewrite {self.match.kind} matches")
        return self


class RuleFile(_Frozen):
    rules: List[RewriteRule] = Field(default_factory=list)


def parse_rules(data: object, origin: str = "<data>") -> Tuple[RewriteRule, ...]:
    try:
        rule_file = RuleFile.model_validate(data if data is not None else {})
    except ValidationError as e:
        raise RuleConfigError(f"Invalid rule configuration in {origin}: {e}") from e
    return tuple(rule_file.rules)


def load_rules(path: Union[str, Path]) -> Tuple[RewriteRule, ...]:
    """Load and validate a YAML rule file.

    Raises:
        RuleConfigError: The file is missing, is not YAML, or fails validation.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise RuleConfigError(f"Cannot read rule file {path}: {e}") from e

    rules = parse_rules(data, str(path))
    logger.info(f"Loaded {len(rules)} rule(s) from {path}")
    return rules
