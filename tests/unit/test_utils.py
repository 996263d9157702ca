from __future__ import annotations

from pathlib import Path

import pytest

import projnav.utils as utils
from projnav.items import FileType


def test_resolve_directory_validates(tmp_path):
    with pytest.raises(FileNotFoundError):
        utils.resolve_directory(tmp_path / "missing")

    file_path = tmp_path / "file.txt"
    file_path.write_text("x", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        utils.resolve_directory(file_path)

    assert utils.resolve_directory(tmp_path) == tmp_path.resolve()


def test_apply_path_aliases_prefers_longest_prefix():
    aliases = {"/mnt": "/data", "/mnt/work": "/home/me/work"}

    assert utils.apply_path_aliases("/mnt/work/app/x.py", aliases) == "/home/me/work/app/x.py"
    assert utils.apply_path_aliases("/mnt/other/x.py", aliases) == "/data/other/x.py"
    assert utils.apply_path_aliases("/mnt/work", aliases) == "/home/me/work"
    assert utils.apply_path_aliases("/mntx/file", aliases) == "/mntx/file"
    assert utils.apply_path_aliases("/mnt/x", None) == "/mnt/x"


def test_is_within_uses_separator_boundary():
    assert utils.is_within("/a/b/c.txt", "/a/b")
    assert utils.is_within("/a/b/c.txt", "/a/b/")
    assert not utils.is_within("/a/bc/d.txt", "/a/b")
    assert not utils.is_within("/a/b", "/a/b")


def test_read_ignore_lines_collects_literal_patterns(tmp_path):
    ignore = tmp_path / ".gitignore"
    ignore.write_text("# comment\n\n  build/  \n*.log\n", encoding="utf-8")

    assert utils.read_ignore_lines(ignore) == ["build/", "*.log"]
    assert utils.read_ignore_lines(tmp_path / "missing") == []


def test_merge_patterns_dedupes_in_order():
    assert utils.merge_patterns(["a", " b "], None, ["a", "", "c"]) == ("a", "b", "c")


def test_collect_project_files_prunes_excluded(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "build").mkdir()
    (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
    for rel in ("src/a.py", "src/debug.log", "build/out.bin", "node_modules/pkg/x.js", "README.md"):
        (tmp_path / rel).write_text("x", encoding="utf-8")

    files = utils.collect_project_files(tmp_path, ["build/", "*.log", "**/node_modules"])

    assert files == [str(tmp_path / "README.md"), str(tmp_path / "src" / "a.py")]


def test_collect_project_files_requires_directory(tmp_path):
    with pytest.raises(NotADirectoryError):
        utils.collect_project_files(tmp_path / "missing")


def test_directory_sort_key_orders_dirs_then_dotfiles():
    entries = [
        ("b.txt", FileType.FILE),
        (".hidden", FileType.FILE),
        ("src", FileType.DIRECTORY),
        (".git", FileType.DIRECTORY),
        ("a.txt", FileType.FILE),
    ]

    assert [name for name, _ in sorted(entries, key=utils.directory_sort_key)] == [
        ".git",
        "src",
        ".hidden",
        "a.txt",
        "b.txt",
    ]


def test_format_path_relative_to_base():
    assert utils.format_path("/a/b/c.txt", "/a") == "./b/c.txt"
    assert utils.format_path("/x/c.txt", "/a") == "/x/c.txt"
    assert utils.format_path("/x/c.txt") == "/x/c.txt"
