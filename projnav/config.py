"""Global configuration management for projnav."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from contextlib import contextmanager
from contextvars import ContextVar
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict

from .text import Messages

HOME_DIR = Path(os.path.expanduser("~"))
DEFAULT_CONFIG_DIR = HOME_DIR / ".projnav"
CONFIG_DIR = DEFAULT_CONFIG_DIR
CONFIG_FILE = CONFIG_DIR / "config.json"
_CONFIG_DIR_OVERRIDE: ContextVar[Path | None] = ContextVar(
    "projnav_config_dir_override",
    default=None,
)
PROJECT_LIST_FILENAME = ".project-manager.json"
RECENT_HISTORY_FILENAME = ".project-manager-rank.json"
DEFAULT_MARKER_FILES: tuple[str, ...] = (
    ".git",
    ".hg",
    ".svn",
    ".projnav",
    "pyproject.toml",
    "setup.py",
    "package.json",
    "Cargo.toml",
    "go.mod",
    "pom.xml",
    "build.gradle",
    "CMakeLists.txt",
    "Makefile",
)
DEFAULT_EXCLUDE_GLOBS: tuple[str, ...] = (
    "**/.git",
    "**/.hg",
    "**/.svn",
    "**/node_modules",
    "**/__pycache__",
    "**/.DS_Store",
)
DEFAULT_IGNORE_FILES: tuple[str, ...] = (".gitignore",)
DEFAULT_FILTER_PATTERNS: tuple[str, ...] = (r"\.pyc$", r"^__pycache__$", r"^\.DS_Store$")
DEFAULT_MAX_PROJECTS = 100
DEFAULT_MAX_RECENT_FILES = 100
DEFAULT_FILE_CACHE_SIZE = 200


@dataclass
class Config:
    marker_file_names: list[str] = field(default_factory=lambda: list(DEFAULT_MARKER_FILES))
    project_exclude_globs: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_GLOBS))
    project_ignore_file_names: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_FILES))
    filter_file_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_FILTER_PATTERNS))
    path_alias_mappings: dict[str, str] = field(default_factory=dict)
    project_list_file: Path | None = None
    recent_history_file: Path | None = None
    max_projects: int = DEFAULT_MAX_PROJECTS
    max_recent_files: int = DEFAULT_MAX_RECENT_FILES
    file_cache_size: int = DEFAULT_FILE_CACHE_SIZE

    def resolved_project_list_file(self) -> Path:
        return self.project_list_file or HOME_DIR / PROJECT_LIST_FILENAME

    def resolved_recent_history_file(self) -> Path:
        return self.recent_history_file or HOME_DIR / RECENT_HISTORY_FILENAME


def _resolve_config_dir() -> Path:
    override = _CONFIG_DIR_OVERRIDE.get()
    return override if override is not None else CONFIG_DIR


def _resolve_config_file() -> Path:
    override = _CONFIG_DIR_OVERRIDE.get()
    if override is not None:
        return override / "config.json"
    return CONFIG_FILE


def config_file_path() -> Path:
    return _resolve_config_file()


@contextmanager
def config_dir_context(path: Path | str | None):
    """Temporarily override the config directory for the current context."""

    if path is None:
        yield
        return
    dir_path = Path(path).expanduser().resolve()
    if dir_path.exists() and not dir_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {dir_path}")
    token = _CONFIG_DIR_OVERRIDE.set(dir_path)
    try:
        yield
    finally:
        _CONFIG_DIR_OVERRIDE.reset(token)


def load_config() -> Config:
    config_file = _resolve_config_file()
    if not config_file.exists():
        return Config()
    raw = json.loads(config_file.read_text(encoding="utf-8"))
    return config_from_json(raw)


def save_config(config: Config) -> None:
    config_dir = _resolve_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    data: Dict[str, Any] = {
        "marker_file_names": list(config.marker_file_names),
        "project_exclude_globs": list(config.project_exclude_globs),
        "project_ignore_file_names": list(config.project_ignore_file_names),
        "filter_file_patterns": list(config.filter_file_patterns),
        "path_alias_mappings": dict(config.path_alias_mappings),
        "max_projects": config.max_projects,
        "max_recent_files": config.max_recent_files,
        "file_cache_size": config.file_cache_size,
    }
    if config.project_list_file is not None:
        data["project_list_file"] = str(config.project_list_file)
    if config.recent_history_file is not None:
        data["recent_history_file"] = str(config.recent_history_file)
    config_file = _resolve_config_file()
    config_file.write_text(
        json.dumps(data, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


def config_from_json(payload: str | Mapping[str, object]) -> Config:
    """Return a Config from a JSON string or mapping without saving it."""
    data = _coerce_config_payload(payload)
    config = Config()
    _apply_config_payload(config, data)
    return config


def add_marker_files(names: list[str]) -> Config:
    config = load_config()
    for name in names:
        clean = name.strip()
        if clean and clean not in config.marker_file_names:
            config.marker_file_names.append(clean)
    save_config(config)
    return config


def remove_marker_files(names: list[str]) -> Config:
    config = load_config()
    dropped = {name.strip() for name in names}
    config.marker_file_names = [
        name for name in config.marker_file_names if name not in dropped
    ]
    save_config(config)
    return config


def set_path_aliases(raw_pairs: list[str], *, clear: bool = False) -> Config:
    config = load_config()
    if clear:
        config.path_alias_mappings = {}
    for raw in raw_pairs:
        source, target = parse_alias(raw)
        config.path_alias_mappings[source] = target
    save_config(config)
    return config


def parse_alias(raw: str) -> tuple[str, str]:
    source, sep, target = raw.partition("=")
    source = source.strip()
    target = target.strip()
    if not sep or not source or not target:
        raise ValueError(Messages.ERROR_ALIAS_INVALID.format(value=raw))
    return source, target


def _coerce_config_payload(payload: str | Mapping[str, object]) -> Mapping[str, object]:
    if isinstance(payload, str):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ValueError(Messages.ERROR_CONFIG_JSON_INVALID) from exc
    elif isinstance(payload, Mapping):
        data = dict(payload)
    else:
        raise ValueError(Messages.ERROR_CONFIG_JSON_INVALID)
    if not isinstance(data, Mapping):
        raise ValueError(Messages.ERROR_CONFIG_JSON_INVALID)
    return data


def _apply_config_payload(config: Config, payload: Mapping[str, object]) -> None:
    for list_field in (
        "marker_file_names",
        "project_exclude_globs",
        "project_ignore_file_names",
        "filter_file_patterns",
    ):
        if list_field in payload:
            setattr(config, list_field, _coerce_str_list(payload[list_field], list_field))
    if "path_alias_mappings" in payload:
        config.path_alias_mappings = _coerce_str_mapping(
            payload["path_alias_mappings"], "path_alias_mappings"
        )
    if "project_list_file" in payload:
        config.project_list_file = _coerce_optional_path(
            payload["project_list_file"], "project_list_file"
        )
    if "recent_history_file" in payload:
        config.recent_history_file = _coerce_optional_path(
            payload["recent_history_file"], "recent_history_file"
        )
    if "max_projects" in payload:
        config.max_projects = _coerce_positive_int(
            payload["max_projects"], "max_projects", DEFAULT_MAX_PROJECTS
        )
    if "max_recent_files" in payload:
        config.max_recent_files = _coerce_positive_int(
            payload["max_recent_files"], "max_recent_files", DEFAULT_MAX_RECENT_FILES
        )
    if "file_cache_size" in payload:
        config.file_cache_size = _coerce_positive_int(
            payload["file_cache_size"], "file_cache_size", DEFAULT_FILE_CACHE_SIZE
        )


def _coerce_str_list(value: object, field: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
    cleaned: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
        token = item.strip()
        if token and token not in cleaned:
            cleaned.append(token)
    return cleaned


def _coerce_str_mapping(value: object, field: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
    mapping: dict[str, str] = {}
    for key, target in value.items():
        if not isinstance(key, str) or not isinstance(target, str):
            raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
        if key.strip() and target.strip():
            mapping[key.strip()] = target.strip()
    return mapping


def _coerce_optional_path(value: object, field: str) -> Path | None:
    if value is None:
        return None
    if isinstance(value, str):
        cleaned = value.strip()
        return Path(cleaned).expanduser() if cleaned else None
    raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))


def _coerce_positive_int(value: object, field: str, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
        value = int(value)
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return default
        try:
            value = int(cleaned)
        except ValueError as exc:
            raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field)) from exc
    if not isinstance(value, int) or value <= 0:
        raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
    return value
