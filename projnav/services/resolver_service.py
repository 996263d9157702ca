"""Infer the project that owns an arbitrary path."""

from __future__ import annotations

import logging
import os
from typing import Iterable

from ..host import Host
from ..items import is_dir_type, project_name_for
from ..lru import FileItemCache
from ..utils import apply_path_aliases, is_within, strip_trailing_separator
from .registry_service import ProjectRegistry

logger = logging.getLogger(__name__)


class ProjectResolver:
    """Resolve a path to its project root, cheapest source first.

    1. the file item cache,
    2. the host's open workspace folders,
    3. registered projects, most recently touched first,
    4. the closest ancestor directory holding a marker file.

    Tiers run strictly in sequence; the first hit wins.
    """

    def __init__(
        self,
        host: Host,
        registry: ProjectRegistry,
        file_cache: FileItemCache,
        *,
        marker_file_names: Iterable[str] = (),
        path_aliases: dict[str, str] | None = None,
        home_dir: str | None = None,
    ) -> None:
        self._host = host
        self._registry = registry
        self._file_cache = file_cache
        self.marker_file_names = frozenset(marker_file_names)
        self._path_aliases = dict(path_aliases or {})
        self._home_dir = home_dir if home_dir is not None else os.path.expanduser("~")

    def normalize(self, path: str) -> str:
        """Apply path aliases and drop any trailing separator."""
        return strip_trailing_separator(apply_path_aliases(path, self._path_aliases))

    async def resolve(self, file_path: str) -> str | None:
        path = self.normalize(file_path)

        cached = self._file_cache.get(path)
        if cached is not None and cached.owning_projects:
            return cached.owning_projects[0]

        folder = await self._host.get_workspace_folder(path)
        if folder:
            return folder

        for root in self._registry.roots():
            if path == root or is_within(path, root):
                return root

        return await self._find_marker_root(path)

    async def _find_marker_root(self, path: str) -> str | None:
        file_type = await self._host.stat(path)
        directory = path if is_dir_type(file_type) else os.path.dirname(path)
        while True:
            if os.path.dirname(directory) == directory or directory == self._home_dir:
                return None
            entries = await self._host.read_directory(directory)
            if any(name in self.marker_file_names for name, _ in entries):
                return directory
            directory = os.path.dirname(directory)

    async def try_add_project(self, file_path: str) -> str | None:
        """Resolve *file_path* and register its project; None when nothing matched."""

        root = await self.resolve(file_path)
        if root is None:
            logger.debug("Failed to detect a project for %s", file_path)
            return None
        self._registry.touch(project_name_for(root), root)
        return root
