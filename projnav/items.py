"""Value types shared by the registry, the resolver and the file listings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import IntFlag

from .text import Messages


class ProjnavError(ValueError):
    """Raised when projnav input is invalid."""


class InvalidPathError(ProjnavError):
    """Raised when an absolute path is required but a relative one was given."""


class FileType(IntFlag):
    UNKNOWN = 0
    FILE = 1
    DIRECTORY = 2
    SYMLINK = 64


def is_dir_type(file_type: FileType) -> bool:
    return (file_type & FileType.DIRECTORY) == FileType.DIRECTORY


def require_absolute(path: str) -> str:
    if not os.path.isabs(path):
        raise InvalidPathError(Messages.ERROR_PATH_NOT_ABSOLUTE.format(path=path))
    return path


def project_name_for(root: str) -> str:
    """Return the registry name for *root* (its basename)."""
    return os.path.basename(root.rstrip(os.sep)) or root


@dataclass(frozen=True)
class ProjectEntry:
    name: str
    root_path: str


@dataclass(eq=False)
class FileDescriptor:
    """A file known to belong to one or more project roots."""

    abs_path: str
    file_type: FileType = FileType.FILE
    owning_projects: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        require_absolute(self.abs_path)

    @property
    def display_name(self) -> str:
        return os.path.basename(self.abs_path)

    @property
    def icon(self) -> str:
        if self.file_type == FileType.DIRECTORY | FileType.SYMLINK:
            return "symlink-directory"
        if self.file_type == FileType.FILE | FileType.SYMLINK:
            return "symlink-file"
        if is_dir_type(self.file_type):
            return "folder"
        return "file"

    @property
    def relative_label(self) -> str:
        if not self.owning_projects:
            return self.abs_path
        return os.path.relpath(self.abs_path, self.owning_projects[0])

    @property
    def is_dir(self) -> bool:
        return is_dir_type(self.file_type)

    def add_project(self, root: str) -> None:
        if root not in self.owning_projects:
            self.owning_projects.append(root)
