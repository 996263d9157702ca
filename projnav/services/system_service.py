"""Logic helpers for diagnostics and editor discovery."""

from __future__ import annotations

import json
import os
import shlex
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from ..text import Messages

EDITOR_FALLBACKS = ("nano", "vi", "notepad", "notepad.exe")


@dataclass
class DoctorCheckResult:
    """Result of a single doctor check."""

    name: str
    passed: bool
    message: str
    detail: str | None = None


def check_config_exists() -> DoctorCheckResult:
    """Check if the config file exists and parses."""
    from ..config import config_file_path

    config_file = config_file_path()
    if not config_file.exists():
        return DoctorCheckResult(
            name="Config",
            passed=True,
            message=Messages.DOCTOR_CONFIG_DEFAULT,
            detail=str(config_file),
        )
    try:
        json.loads(config_file.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
        return DoctorCheckResult(
            name="Config",
            passed=False,
            message=Messages.DOCTOR_CONFIG_INVALID.format(path=config_file),
            detail=str(exc),
        )
    return DoctorCheckResult(
        name="Config",
        passed=True,
        message=Messages.DOCTOR_CONFIG_EXISTS.format(path=config_file),
    )


def check_ledger(name: str, path: Path) -> DoctorCheckResult:
    """Check that a ledger file is a JSON object in a writable directory."""
    if not path.exists():
        parent = path.parent
        if parent.exists() and not os.access(parent, os.W_OK):
            return DoctorCheckResult(
                name=name,
                passed=False,
                message=Messages.DOCTOR_LEDGER_NOT_WRITABLE.format(path=path),
            )
        return DoctorCheckResult(
            name=name,
            passed=True,
            message=Messages.DOCTOR_LEDGER_MISSING.format(path=path),
        )
    try:
        payload = json.loads(path.read_text(encoding="utf-8") or "{}")
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
        return DoctorCheckResult(
            name=name,
            passed=False,
            message=Messages.DOCTOR_LEDGER_INVALID.format(path=path),
            detail=str(exc),
        )
    if not isinstance(payload, dict):
        return DoctorCheckResult(
            name=name,
            passed=False,
            message=Messages.DOCTOR_LEDGER_INVALID.format(path=path),
        )
    if not os.access(path, os.W_OK):
        return DoctorCheckResult(
            name=name,
            passed=False,
            message=Messages.DOCTOR_LEDGER_NOT_WRITABLE.format(path=path),
        )
    count = len(payload)
    return DoctorCheckResult(
        name=name,
        passed=True,
        message=Messages.DOCTOR_LEDGER_OK.format(
            path=path, count=count, plural="y" if count == 1 else "ies"
        ),
    )


def check_markers(marker_file_names: Sequence[str]) -> DoctorCheckResult:
    count = len(marker_file_names)
    if not count:
        return DoctorCheckResult(
            name="Markers",
            passed=False,
            message=Messages.DOCTOR_MARKERS_EMPTY,
        )
    return DoctorCheckResult(
        name="Markers",
        passed=True,
        message=Messages.DOCTOR_MARKERS_OK.format(count=count, plural="" if count == 1 else "s"),
        detail=", ".join(marker_file_names),
    )


def run_all_doctor_checks(
    *,
    project_list_file: Path,
    recent_history_file: Path,
    marker_file_names: Sequence[str],
) -> list[DoctorCheckResult]:
    """Run all doctor checks and return results."""
    return [
        check_config_exists(),
        check_ledger("Project list", project_list_file),
        check_ledger("Recent history", recent_history_file),
        check_markers(marker_file_names),
    ]


def resolve_editor_command() -> Optional[Sequence[str]]:
    """Return the preferred editor command as a tokenized sequence."""

    for env_var in ("VISUAL", "EDITOR"):
        value = os.environ.get(env_var)
        if value:
            return tuple(shlex.split(value))

    for candidate in EDITOR_FALLBACKS:
        path = shutil.which(candidate)
        if path:
            return (path,)

    return None
