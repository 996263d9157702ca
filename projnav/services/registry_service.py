"""Persistent, access-ordered registry of known projects."""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Callable

from ..ledger import JsonLedger
from ..lru import BoundedOrderedMap
from ..items import ProjectEntry

logger = logging.getLogger(__name__)


class RegistryState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    DIRTY = "dirty"


class ProjectRegistry:
    """Project name to root path, most recently touched first.

    The ledger stores entries newest-first. Mutations never suspend, so
    callers interleaving on an event loop always observe whole updates.
    """

    def __init__(
        self,
        ledger_path: Path | str,
        *,
        capacity: int = 100,
        path_exists: Callable[[str], bool] = os.path.exists,
        on_drop: Callable[[str], object] | None = None,
    ) -> None:
        self._ledger = JsonLedger(ledger_path)
        self._projects: BoundedOrderedMap[str, str] = BoundedOrderedMap(capacity)
        self._path_exists = path_exists
        self._on_drop = on_drop
        self.state = RegistryState.UNINITIALIZED

    @property
    def ledger_path(self) -> Path:
        return self._ledger.path

    def __len__(self) -> int:
        return len(self._projects)

    def __contains__(self, name: object) -> bool:
        return name in self._projects

    def load(self) -> bool:
        """Reload from disk when the ledger changed; return True if rebuilt."""

        payload, changed = self._ledger.read()
        if not changed:
            if self.state is RegistryState.UNINITIALIZED:
                self.state = RegistryState.LOADED
            return False
        self._projects.clear()
        for name, root in reversed(list(payload.items())):
            if isinstance(name, str) and isinstance(root, str):
                self._projects.set(name, root)
        self.state = RegistryState.LOADED
        logger.debug("Loaded %d project(s) from %s", len(self._projects), self.ledger_path)
        return True

    def has(self, name: str) -> bool:
        return self._projects.has(name)

    def get(self, name: str) -> str | None:
        return self._projects.peek(name)

    def touch(self, name: str, root_path: str) -> None:
        evicted = self._projects.set(name, root_path)
        if evicted is not None:
            logger.info("Evicting project %s: registry is full", evicted)
            self._dropped(evicted)
        self.state = RegistryState.DIRTY
        self.save()

    def remove(self, name: str) -> bool:
        removed = self._projects.delete(name)
        if removed:
            self.state = RegistryState.DIRTY
        return removed

    def reconcile(self) -> list[str]:
        """Drop entries whose root is not absolute or no longer exists."""

        stale: list[str] = []
        for name, root in self._projects.items():
            if not os.path.isabs(root) or not self._path_exists(root):
                logger.info("Removing project %s: %s no longer exists", name, root)
                self._projects.delete(name)
                stale.append(name)
        if stale:
            self.state = RegistryState.DIRTY
        for name in stale:
            self._dropped(name)
        return stale

    def _dropped(self, name: str) -> None:
        if self._on_drop is not None:
            self._on_drop(name)

    def persist(self) -> bool:
        written = self._ledger.write(dict(self._projects.items()))
        self.state = RegistryState.LOADED
        return written

    def save(self) -> bool:
        self.reconcile()
        return self.persist()

    def names(self) -> list[str]:
        return self._projects.keys()

    def roots(self) -> list[str]:
        return self._projects.values()

    def entries(self) -> list[ProjectEntry]:
        return [ProjectEntry(name, root) for name, root in self._projects.items()]
