"""memoize-one codemods."""

from ..codemod.config import CallMatch, RewriteRule, WrapEqualityFn
from .registry import CatalogEntry

# 4.x calls the equality function once per argument pair;
# 5.x calls it once with both argument arrays.
MEMOIZE_ONE_5 = CatalogEntry(
    package="memoize-one",
    version="5.0.0",
    description="Wrap per-argument equality functions in the array-based 5.x signature",
    rules=(
        RewriteRule(
            name="memoize-one-equality-fn",
            module="memoize-one",
            match=CallMatch(),
            strategy=WrapEqualityFn(
                subject="memoize-one custom equality function",
                reason="Expected a function or an identifier",
            ),
        ),
    ),
)
