"""Codemod catalog registry.

Simple dict-based registry. All built-in entries are registered at
import time via ``catalog/__init__.py``. No plugin discovery, no entry
points: the catalog ships with the package.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..codemod.config import RewriteRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogEntry:
    """The rules migrating one package to one version."""

    package: str
    version: str
    description: str
    rules: Tuple[RewriteRule, ...]

    @property
    def name(self) -> str:
        """Registry key, e.g. ``"memoize-one@5.0.0"``."""
        return f"{self.package}@{self.version}"


class CatalogRegistry:
    """Registry for codemod catalog entries.

    Class-level store so callers can use ``CatalogRegistry.get(...)``
    without holding an instance.
    """

    _entries: Dict[str, CatalogEntry] = {}

    @classmethod
    def register(cls, entry: CatalogEntry) -> None:
        """Register a catalog entry."""
        cls._entries[entry.name] = entry
        logger.debug("Registered codemod: %s (%d rule(s))", entry.name, len(entry.rules))

    @classmethod
    def get(cls, name: str) -> Optional[CatalogEntry]:
        """Get an entry by ``package@version``. Returns ``None`` if not found."""
        return cls._entries.get(name)

    @classmethod
    def for_package(cls, package: str) -> List[CatalogEntry]:
        return [entry for entry in cls._entries.values() if entry.package == package]

    @classmethod
    def list_entries(cls) -> List[CatalogEntry]:
        return sorted(cls._entries.values(), key=lambda entry: entry.name)
