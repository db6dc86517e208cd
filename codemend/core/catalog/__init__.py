"""Built-in codemod catalog.

All built-in entries are registered on import. The
:class:`CatalogRegistry` is the single entry point for callers to
discover and use them.
"""

from .registry import CatalogEntry, CatalogRegistry

# ── Register built-in entries ────────────────────────────────────────

from .atlaskit import AVATAR_19, TAG_11, TEXTAREA_4
from .memoize_one import MEMOIZE_ONE_5

CatalogRegistry.register(MEMOIZE_ONE_5)
CatalogRegistry.register(AVATAR_19)
CatalogRegistry.register(TEXTAREA_4)
CatalogRegistry.register(TAG_11)

__all__ = [
    "AVATAR_19",
    "CatalogEntry",
    "CatalogRegistry",
    "MEMOIZE_ONE_5",
    "TAG_11",
    "TEXTAREA_4",
]
