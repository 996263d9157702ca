"""The editor host collaborator and a local-filesystem implementation of it."""

from __future__ import annotations

import asyncio
import os
import stat as stat_module
import subprocess
from typing import Protocol, Sequence

from rich.console import Console
from rich.markup import escape

from .items import FileType
from .text import Messages, Styles
from .utils import collect_project_files, is_within, strip_trailing_separator


class Host(Protocol):
    async def read_directory(self, directory: str) -> list[tuple[str, FileType]]: ...

    async def stat(self, path: str) -> FileType: ...

    async def find_files(self, root: str, exclude_patterns: Sequence[str]) -> list[str]: ...

    async def get_workspace_folder(self, path: str) -> str | None: ...

    def workspace_folders(self) -> list[str]: ...

    def add_workspace_folder(self, root: str) -> None: ...

    def remove_workspace_folder(self, root: str) -> bool: ...

    async def open_file(self, path: str) -> None: ...

    def notify(self, message: str, level: str = "info") -> None: ...


def _file_type_of(path: str) -> FileType:
    info = os.lstat(path)
    file_type = FileType.UNKNOWN
    if stat_module.S_ISLNK(info.st_mode):
        file_type |= FileType.SYMLINK
        try:
            info = os.stat(path)
        except FileNotFoundError:
            return file_type
    if stat_module.S_ISDIR(info.st_mode):
        file_type |= FileType.DIRECTORY
    elif stat_module.S_ISREG(info.st_mode):
        file_type |= FileType.FILE
    return file_type


def _read_directory(directory: str) -> list[tuple[str, FileType]]:
    with os.scandir(directory) as entries:
        names = [entry.name for entry in entries]
    return [(name, _file_type_of(os.path.join(directory, name))) for name in names]


_STYLE_BY_LEVEL = {"error": Styles.ERROR, "warning": Styles.WARNING, "info": Styles.INFO}


class LocalHost:
    """Host backed by the local filesystem and the user's editor."""

    def __init__(
        self,
        workspace_folders: Sequence[str] | None = None,
        *,
        console: Console | None = None,
        editor_command: Sequence[str] | None = None,
    ) -> None:
        self._folders: list[str] = []
        for folder in workspace_folders or ():
            self.add_workspace_folder(folder)
        self._console = console or Console(stderr=True)
        self._editor_command = tuple(editor_command) if editor_command else None

    async def read_directory(self, directory: str) -> list[tuple[str, FileType]]:
        return await asyncio.to_thread(_read_directory, directory)

    async def stat(self, path: str) -> FileType:
        return await asyncio.to_thread(_file_type_of, path)

    async def find_files(self, root: str, exclude_patterns: Sequence[str]) -> list[str]:
        return await asyncio.to_thread(collect_project_files, root, tuple(exclude_patterns))

    async def get_workspace_folder(self, path: str) -> str | None:
        matches = [
            folder for folder in self._folders if path == folder or is_within(path, folder)
        ]
        if not matches:
            return None
        return max(matches, key=len)

    def workspace_folders(self) -> list[str]:
        return list(self._folders)

    def add_workspace_folder(self, root: str) -> None:
        root = strip_trailing_separator(root)
        if root not in self._folders:
            self._folders.append(root)

    def remove_workspace_folder(self, root: str) -> bool:
        root = strip_trailing_separator(root)
        if root in self._folders:
            self._folders.remove(root)
            return True
        return False

    async def open_file(self, path: str) -> None:
        command = self._editor_command
        if command is None:
            from .services.system_service import resolve_editor_command

            resolved = resolve_editor_command()
            if not resolved:
                raise RuntimeError(Messages.ERROR_EDITOR_NOT_FOUND)
            command = tuple(resolved)
        await asyncio.to_thread(subprocess.run, [*command, path], check=True)

    def notify(self, message: str, level: str = "info") -> None:
        style = _STYLE_BY_LEVEL.get(level, Styles.INFO)
        self._console.print(f"[{style}]{escape(message)}[/{style}]")
