"""Utility helpers for filesystem access and path handling."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from .items import FileType, is_dir_type


def resolve_directory(path: Path | str) -> Path:
    """Resolve and validate a user supplied directory path."""
    dir_path = Path(path).expanduser().resolve()
    if not dir_path.exists():
        raise FileNotFoundError(f"Directory does not exist: {dir_path}")
    if not dir_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {dir_path}")
    return dir_path


def apply_path_aliases(path: str, aliases: Mapping[str, str] | None) -> str:
    """Rewrite the longest matching alias prefix of *path*."""

    if not aliases:
        return path
    for source in sorted(aliases, key=len, reverse=True):
        prefix = strip_trailing_separator(source)
        if path == prefix:
            return aliases[source]
        guard = prefix if prefix.endswith(os.sep) else prefix + os.sep
        if path.startswith(guard):
            target = strip_trailing_separator(aliases[source])
            return os.path.join(target, path[len(guard):])
    return path


def with_trailing_separator(path: str) -> str:
    return path if path.endswith(os.sep) else path + os.sep


def strip_trailing_separator(path: str) -> str:
    return path.rstrip(os.sep) or os.sep


def is_within(path: str, root: str) -> bool:
    """Return True when *path* lives under *root* (``/a/b`` is not under ``/a/bc``)."""
    return path.startswith(with_trailing_separator(root))


def read_ignore_lines(path: Path) -> list[str]:
    """Return the literal pattern lines of an ignore file, skipping blanks and comments."""
    try:
        raw = path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError:
        return []
    lines: list[str] = []
    for line in raw:
        token = line.strip()
        if not token or token.startswith("#"):
            continue
        lines.append(token)
    return lines


def merge_patterns(*groups: Iterable[str] | None) -> tuple[str, ...]:
    """Concatenate pattern groups, dropping blanks and duplicates but keeping order."""

    merged: list[str] = []
    seen: set[str] = set()
    for group in groups:
        for raw in group or ():
            token = (raw or "").strip()
            if token and token not in seen:
                seen.add(token)
                merged.append(token)
    return tuple(merged)


def build_exclude_spec(patterns: Sequence[str]):
    from pathspec.gitignore import GitIgnoreSpec

    return GitIgnoreSpec.from_lines(list(patterns))


def is_excluded_path(spec, rel_path: str, *, is_dir: bool = False) -> bool:
    if not rel_path:
        return False
    candidate = f"{rel_path}/" if is_dir and not rel_path.endswith("/") else rel_path
    return spec.match_file(candidate)


def _relative_posix(path: Path, root: Path) -> str:
    rel = path.relative_to(root)
    if rel == Path("."):
        return ""
    return rel.as_posix()


def collect_project_files(root: Path | str, exclude_patterns: Sequence[str] = ()) -> list[str]:
    """Collect absolute file paths under *root*, pruning excluded directories."""

    directory = Path(root)
    if not directory.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {directory}")
    spec = build_exclude_spec(exclude_patterns)
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(directory, topdown=True):
        current_dir = Path(dirpath)
        kept: list[str] = []
        for dirname in sorted(dirnames):
            rel_child = _relative_posix(current_dir / dirname, directory)
            if is_excluded_path(spec, rel_child, is_dir=True):
                continue
            kept.append(dirname)
        dirnames[:] = kept
        for filename in sorted(filenames):
            candidate = current_dir / filename
            if is_excluded_path(spec, _relative_posix(candidate, directory)):
                continue
            files.append(str(candidate))
    return files


def directory_sort_key(entry: tuple[str, FileType]) -> tuple[int, int, str]:
    """Directories first, then dot-entries first within each group, then by name."""
    name, file_type = entry
    return (0 if is_dir_type(file_type) else 1, 0 if name.startswith(".") else 1, name)


def compile_filter_patterns(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    return [re.compile(pattern) for pattern in patterns]


def is_hidden_name(name: str) -> bool:
    return name.startswith(".")


def format_path(path: str, base: str | None = None) -> str:
    """Return a user friendly representation of *path* relative to *base* when possible."""
    if base and is_within(path, base):
        return f"./{Path(os.path.relpath(path, base)).as_posix()}"
    return path
