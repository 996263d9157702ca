"""Directory browsing shared by plain navigation and project selection."""

from __future__ import annotations

import os
from enum import Enum
from typing import Callable, Sequence

from ..host import Host
from ..items import FileDescriptor, InvalidPathError, is_dir_type
from ..text import Messages
from ..utils import compile_filter_patterns, directory_sort_key, is_hidden_name


class BrowseMode(str, Enum):
    BROWSE = "browse"
    ADD_PROJECT = "add-project"


class DirectoryBrowser:
    """Stateful directory listing with hidden-entry and pattern filters."""

    def __init__(
        self,
        host: Host,
        *,
        mode: BrowseMode = BrowseMode.BROWSE,
        filter_patterns: Sequence[str] = (),
        on_add_project: Callable[[str], object] | None = None,
    ) -> None:
        self._host = host
        self.mode = mode
        self._filters = compile_filter_patterns(filter_patterns)
        self.hide_dot_files = True
        self.filter_files = bool(self._filters)
        self.current_dir: str | None = None
        self.items: list[FileDescriptor] = []
        self._on_add_project = on_add_project

    async def open(self, directory: str) -> list[FileDescriptor]:
        if not os.path.isabs(directory):
            raise InvalidPathError(Messages.ERROR_PATH_NOT_ABSOLUTE.format(path=directory))
        if not is_dir_type(await self._host.stat(directory)):
            raise NotADirectoryError(Messages.ERROR_NOT_A_DIRECTORY.format(path=directory))
        entries = await self._host.read_directory(directory)
        if self.mode is BrowseMode.ADD_PROJECT:
            entries = [entry for entry in entries if is_dir_type(entry[1])]
        entries.sort(key=directory_sort_key)
        self.items = [
            FileDescriptor(os.path.join(directory, name), file_type)
            for name, file_type in entries
        ]
        self.current_dir = directory
        return self.visible_items()

    def is_visible(self, item: FileDescriptor) -> bool:
        name = item.display_name
        if self.hide_dot_files and is_hidden_name(name):
            return False
        if self.filter_files and any(pattern.search(name) for pattern in self._filters):
            return False
        return True

    def visible_items(self) -> list[FileDescriptor]:
        return [item for item in self.items if self.is_visible(item)]

    def toggle_hidden(self) -> list[FileDescriptor]:
        self.hide_dot_files = not self.hide_dot_files
        return self.visible_items()

    def toggle_filter(self) -> list[FileDescriptor]:
        self.filter_files = not self.filter_files
        return self.visible_items()

    async def go_up(self) -> list[FileDescriptor]:
        if self.current_dir is None:
            return []
        return await self.open(os.path.dirname(self.current_dir))

    async def accept(self, path: str) -> list[FileDescriptor] | None:
        """Enter *path* if it is a directory, otherwise open it and return None."""

        if is_dir_type(await self._host.stat(path)):
            return await self.open(path)
        await self._host.open_file(path)
        return None

    def confirm_add_project(self, path: str) -> object:
        if self.mode is not BrowseMode.ADD_PROJECT or self._on_add_project is None:
            raise RuntimeError(Messages.ERROR_ADD_PROJECT_MODE)
        return self._on_add_project(path)
