"""Rich renderables for project and file listings."""

from __future__ import annotations

import sys
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .items import FileDescriptor, ProjectEntry
from .text import Messages, Styles
from .utils import format_path

_UNICODE_ICONS = {
    "folder": "\U0001F4C1",
    "symlink-directory": "↪\U0001F4C1",
    "symlink-file": "↪",
    "file": "\U0001F4C4",
}
_ASCII_ICONS = {
    "folder": "d",
    "symlink-directory": "l",
    "symlink-file": "l",
    "file": "-",
}


def _encoding_supports(text: str, encoding: str | None) -> bool:
    if not encoding:
        return False
    try:
        text.encode(encoding)
    except (LookupError, UnicodeEncodeError):
        return False
    return True


def supports_unicode_output(console: Console | None = None) -> bool:
    sample = "✓✗\U0001F4C1"
    if console is not None and _encoding_supports(sample, console.encoding):
        return True
    return _encoding_supports(sample, sys.stdout.encoding)


def format_status_icon(passed: bool, console: Console | None = None) -> str:
    if supports_unicode_output(console):
        return "[green]✓[/green]" if passed else "[red]✗[/red]"
    return "[green]OK[/green]" if passed else "[red]X[/red]"


def format_item_icon(item: FileDescriptor, console: Console | None = None) -> str:
    icons = _UNICODE_ICONS if supports_unicode_output(console) else _ASCII_ICONS
    return icons[item.icon]


def build_projects_table(entries: Sequence[ProjectEntry]) -> Table:
    table = Table(
        title=Messages.TABLE_PROJECTS_TITLE,
        title_style=Styles.TITLE,
        show_header=True,
        header_style=Styles.TABLE_HEADER,
    )
    table.add_column(Messages.TABLE_HEADER_INDEX, justify="right")
    table.add_column(Messages.TABLE_HEADER_NAME)
    table.add_column(Messages.TABLE_HEADER_ROOT, overflow="fold")
    for idx, entry in enumerate(entries, start=1):
        table.add_row(str(idx), escape(entry.name), escape(entry.root_path))
    return table


def build_files_table(
    items: Sequence[FileDescriptor],
    root: str,
    console: Console | None = None,
) -> Table:
    """Table of *items* in the given order, paths shown relative to *root*."""

    table = Table(show_header=True, header_style=Styles.TABLE_HEADER)
    table.add_column(Messages.TABLE_HEADER_INDEX, justify="right")
    table.add_column("")
    table.add_column(Messages.TABLE_HEADER_FILE)
    table.add_column(Messages.TABLE_HEADER_PATH, overflow="fold")
    for idx, item in enumerate(items, start=1):
        table.add_row(
            str(idx),
            format_item_icon(item, console),
            escape(item.display_name),
            escape(format_path(item.abs_path, root)),
        )
    return table
