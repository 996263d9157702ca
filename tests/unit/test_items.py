from __future__ import annotations

import os

import pytest

from projnav.items import (
    FileDescriptor,
    FileType,
    InvalidPathError,
    ProjnavError,
    is_dir_type,
    project_name_for,
)


def test_descriptor_requires_absolute_path():
    with pytest.raises(InvalidPathError):
        FileDescriptor("src/main.py")
    assert issubclass(InvalidPathError, ProjnavError)
    assert issubclass(InvalidPathError, ValueError)


def test_descriptor_labels(tmp_path):
    root = str(tmp_path)
    item = FileDescriptor(os.path.join(root, "src", "main.py"))

    assert item.display_name == "main.py"
    assert item.relative_label == item.abs_path
    item.add_project(root)
    item.add_project(root)
    assert item.owning_projects == [root]
    assert item.relative_label == os.path.join("src", "main.py")


def test_descriptor_icons():
    assert FileDescriptor("/a", FileType.DIRECTORY).icon == "folder"
    assert FileDescriptor("/a", FileType.DIRECTORY | FileType.SYMLINK).icon == "symlink-directory"
    assert FileDescriptor("/a", FileType.FILE | FileType.SYMLINK).icon == "symlink-file"
    assert FileDescriptor("/a", FileType.FILE).icon == "file"


def test_is_dir_type_accepts_symlinked_directories():
    assert is_dir_type(FileType.DIRECTORY | FileType.SYMLINK)
    assert not is_dir_type(FileType.FILE | FileType.SYMLINK)


def test_project_name_for_uses_basename():
    assert project_name_for("/home/me/src/app") == "app"
    assert project_name_for("/home/me/src/app/") == "app"
    assert project_name_for("/") == "/"
