"""Registry of named iterator profiles."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from tabletkeeper.models import IteratorSetting

logger = logging.getLogger(__name__)


class IteratorProfileRegistry:
    """Named, ordered lists of iterator settings.

    Lookups return copies, so callers never share a list with the registry.
    Entries are replaced as a whole under a lock; reads need no locking.
    """

    def __init__(self, profiles: Mapping[str, Iterable[IteratorSetting]] | None = None) -> None:
        self._lock = threading.Lock()
        self._profiles: dict[str, list[IteratorSetting]] = {}
        for name, iterators in (profiles or {}).items():
            self.register(name, iterators)

    @classmethod
    def from_config(cls, data: Mapping[str, list[dict[str, Any]]]) -> IteratorProfileRegistry:
        """Create a registry from the ``iterator_profiles`` configuration section.

        Args:
            data: Profile name mapped to a list of iterator setting mappings.

        Returns:
            A populated registry.

        Raises:
            ValueError: If an iterator setting is incomplete.
        """
        registry = cls()
        for name, entries in (data or {}).items():
            registry.register(name, [IteratorSetting.from_dict(entry) for entry in entries or []])
        logger.debug("Loaded %d iterator profile(s)", len(registry))
        return registry

    def register(self, name: str, iterators: Iterable[IteratorSetting]) -> None:
        """Add or replace a profile."""
        snapshot = list(iterators)
        with self._lock:
            self._profiles[name] = snapshot

    def lookup(self, name: str) -> list[IteratorSetting] | None:
        """Return a copy of the named profile's iterators, or None if unknown."""
        iterators = self._profiles.get(name)
        if iterators is None:
            return None
        return list(iterators)

    def names(self) -> list[str]:
        return sorted(self._profiles)

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)
