"""Persistence of per-project recently used files."""

from __future__ import annotations

import logging
from pathlib import Path

from ..ledger import JsonLedger
from ..ranking import RecencyCache

logger = logging.getLogger(__name__)


class RecentHistoryLedger:
    """Owns one RecencyCache per project name and the ledger they persist to."""

    def __init__(self, ledger_path: Path | str, *, capacity: int = 100) -> None:
        self._ledger = JsonLedger(ledger_path)
        self._capacity = capacity
        self._caches: dict[str, RecencyCache[str]] = {}

    @property
    def ledger_path(self) -> Path:
        return self._ledger.path

    def __contains__(self, name: object) -> bool:
        return name in self._caches

    def load(self) -> bool:
        payload, changed = self._ledger.read()
        if not changed:
            return False
        caches: dict[str, RecencyCache[str]] = {}
        for name, paths in payload.items():
            if not isinstance(paths, list):
                logger.debug("Skipping malformed history for %s", name)
                continue
            caches[name] = RecencyCache(
                self._capacity,
                (path for path in paths if isinstance(path, str)),
            )
        self._caches = caches
        return True

    def cache_for(self, name: str) -> RecencyCache[str] | None:
        return self._caches.get(name)

    def record(self, name: str, path: str) -> None:
        cache = self._caches.get(name)
        if cache is None:
            cache = RecencyCache(self._capacity)
            self._caches[name] = cache
        cache.put(path)

    def forget(self, name: str) -> bool:
        return self._caches.pop(name, None) is not None

    def persist(self) -> bool:
        payload = {name: cache.keys() for name, cache in self._caches.items()}
        return self._ledger.write(payload)

    def projects(self) -> list[str]:
        return list(self._caches)
