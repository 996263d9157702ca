"""Navigation session: the single owner of caches, registry and history."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from .config import Config
from .host import Host
from .items import FileDescriptor, ProjectEntry, project_name_for, require_absolute
from .lru import FileItemCache
from .services.browser_service import BrowseMode, DirectoryBrowser
from .services.history_service import RecentHistoryLedger
from .services.registry_service import ProjectRegistry
from .services.resolver_service import ProjectResolver
from .utils import merge_patterns, read_ignore_lines

logger = logging.getLogger(__name__)


class NavigationSession:
    """Everything the navigation UI talks to, created at start and closed at the end."""

    def __init__(self, config: Config, host: Host, *, home_dir: str | None = None) -> None:
        self.config = config
        self.host = host
        self.file_cache = FileItemCache(config.file_cache_size)
        self.registry = ProjectRegistry(
            config.resolved_project_list_file(),
            capacity=config.max_projects,
            on_drop=self._forget_history,
        )
        self.history = RecentHistoryLedger(
            config.resolved_recent_history_file(),
            capacity=config.max_recent_files,
        )
        self.resolver = ProjectResolver(
            host,
            self.registry,
            self.file_cache,
            marker_file_names=config.marker_file_names,
            path_aliases=config.path_alias_mappings,
            home_dir=home_dir,
        )

    def start(self) -> "NavigationSession":
        self.registry.load()
        self.history.load()
        return self

    def close(self) -> None:
        self.registry.save()
        self.history.persist()

    def __enter__(self) -> "NavigationSession":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Collaborator interface

    async def resolve_project(self, path: str) -> str | None:
        return await self.resolver.resolve(path)

    async def try_add_project(self, path: str) -> str | None:
        self.registry.load()
        return await self.resolver.try_add_project(path)

    def register_project_access(self, name: str, root: str) -> None:
        self.registry.touch(name, self.resolver.normalize(root))

    def record_file_access(self, project_name: str, file_path: str) -> None:
        self.history.load()
        self.history.record(project_name, self.resolver.normalize(file_path))
        self.history.persist()

    def _forget_history(self, name: str) -> None:
        self.history.load()
        if self.history.forget(name):
            self.history.persist()

    def build_exclude_patterns(
        self, root: str, extra: Iterable[str] | None = None
    ) -> tuple[str, ...]:
        ignore_lines: list[str] = []
        for ignore_name in self.config.project_ignore_file_names:
            ignore_file = Path(root) / ignore_name
            if ignore_file.is_file():
                ignore_lines.extend(read_ignore_lines(ignore_file))
        return merge_patterns(self.config.project_exclude_globs, ignore_lines, extra)

    async def list_project_files(
        self, root: str, exclude_patterns: Sequence[str] | None = None
    ) -> list[FileDescriptor]:
        root = self.resolver.normalize(require_absolute(root))
        patterns = self.build_exclude_patterns(root, exclude_patterns)
        paths = await self.host.find_files(root, patterns)
        items = [self.file_cache.attach(path, root) for path in paths]
        ranks = self.history.cache_for(project_name_for(root))
        if ranks is None:
            return items
        return ranks.sort(items, key=lambda item: item.abs_path)

    async def current_project_files(
        self, path: str, exclude_patterns: Sequence[str] | None = None
    ) -> list[FileDescriptor] | None:
        root = await self.resolve_project(path)
        if root is None:
            return None
        return await self.list_project_files(root, exclude_patterns)

    # Host events

    def _is_ledger(self, path: str) -> bool:
        return path in (str(self.registry.ledger_path), str(self.history.ledger_path))

    async def on_file_opened(self, path: str) -> str | None:
        if self._is_ledger(path):
            return None
        root = await self.try_add_project(path)
        if root is not None:
            self.record_file_access(project_name_for(root), path)
        return root

    async def on_workspace_folders_added(self, folders: Sequence[str]) -> list[str]:
        roots: list[str] = []
        for folder in folders:
            root = await self.try_add_project(folder)
            if root is not None:
                roots.append(root)
        return roots

    # Project list actions

    def projects(self) -> list[ProjectEntry]:
        self.registry.load()
        return self.registry.entries()

    def add_project(self, directory: str) -> ProjectEntry:
        root = self.resolver.normalize(require_absolute(directory))
        entry = ProjectEntry(project_name_for(root), root)
        self.registry.load()
        self.registry.touch(entry.name, entry.root_path)
        return entry

    def remove_project(self, name: str) -> bool:
        self.registry.load()
        removed = self.registry.remove(name)
        if removed:
            self.registry.save()
            self._forget_history(name)
        return removed

    def open_project(self, name: str) -> str | None:
        root = self.registry.get(name)
        if root is None:
            return None
        self.host.add_workspace_folder(root)
        return root

    def workspace_projects(self) -> list[ProjectEntry]:
        return [
            ProjectEntry(project_name_for(folder), folder)
            for folder in self.host.workspace_folders()
        ]

    def remove_project_from_workspace(self, root: str) -> bool:
        return self.host.remove_workspace_folder(root)

    def browser(self, mode: BrowseMode = BrowseMode.BROWSE) -> DirectoryBrowser:
        return DirectoryBrowser(
            self.host,
            mode=mode,
            filter_patterns=self.config.filter_file_patterns,
            on_add_project=self.add_project,
        )
