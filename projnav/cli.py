"""Command line interface for projnav."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Sequence

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__, config as config_module
from .config import (
    add_marker_files,
    load_config,
    remove_marker_files,
    set_path_aliases,
)
from .host import LocalHost
from .items import FileDescriptor, ProjectEntry, ProjnavError, project_name_for
from .ledger import JsonLedger
from .output import build_files_table, build_projects_table, format_status_icon
from .services.browser_service import BrowseMode
from .services.system_service import resolve_editor_command, run_all_doctor_checks
from .session import NavigationSession
from .text import Messages, Styles
from .utils import resolve_directory

console = Console()

app = typer.Typer(
    help=Messages.APP_HELP,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"projnav v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help=Messages.HELP_VERBOSE),
    config_dir: Path | None = typer.Option(
        None,
        "--config-dir",
        envvar="PROJNAV_CONFIG_DIR",
        help=Messages.HELP_CONFIG_DIR,
    ),
) -> None:
    """Global Typer callback for shared options."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s:%(name)s:%(message)s",
        )
    try:
        ctx.with_resource(config_module.config_dir_context(config_dir))
    except NotADirectoryError as exc:
        raise _fail(str(exc)) from exc
    return None


def _styled(text: str, style: str) -> str:
    return f"[{style}]{escape(text)}[/{style}]"


def _fail(message: str) -> typer.Exit:
    console.print(_styled(message, Styles.ERROR))
    return typer.Exit(code=1)


def _absolute(path: Path | str) -> str:
    return os.path.abspath(os.path.expanduser(str(path)))


def _open_session(workspace: Sequence[Path] | None = None) -> NavigationSession:
    try:
        config = load_config()
        host = LocalHost([_absolute(folder) for folder in workspace or ()])
        return NavigationSession(config, host).start()
    except (ValueError, OSError) as exc:
        raise _fail(str(exc)) from exc


@app.command()
def resolve(
    path: Path = typer.Argument(Path("."), help=Messages.HELP_RESOLVE_PATH),
    workspace: list[Path] | None = typer.Option(
        None,
        "--workspace",
        "-w",
        help=Messages.HELP_WORKSPACE,
    ),
    register: bool = typer.Option(False, "--register", "-r", help=Messages.HELP_REGISTER),
) -> None:
    """Print the root of the project owning PATH."""
    session = _open_session(workspace)
    target = _absolute(path)
    resolver = session.try_add_project if register else session.resolve_project
    try:
        root = asyncio.run(resolver(target))
    except OSError as exc:
        raise _fail(str(exc)) from exc
    if root is None:
        raise _fail(Messages.ERROR_PROJECT_NOT_INFERRED.format(path=target))
    typer.echo(root)


@app.command()
def add(
    path: Path = typer.Argument(Path("."), help=Messages.HELP_ADD_PATH),
    infer: bool = typer.Option(False, "--infer", help=Messages.HELP_ADD_INFER),
) -> None:
    """Register a project."""
    session = _open_session()
    target = _absolute(path)
    try:
        if infer:
            root = asyncio.run(session.try_add_project(target))
            if root is None:
                raise _fail(Messages.ERROR_PROJECT_NOT_INFERRED.format(path=target))
            entry = ProjectEntry(project_name_for(root), root)
        else:
            resolve_directory(target)
            entry = session.browser(BrowseMode.ADD_PROJECT).confirm_add_project(target)
    except (ProjnavError, OSError) as exc:
        raise _fail(str(exc)) from exc
    console.print(
        _styled(Messages.INFO_PROJECT_ADDED.format(name=entry.name, path=entry.root_path), Styles.SUCCESS)
    )


@app.command()
def remove(name: str = typer.Argument(..., help=Messages.HELP_REMOVE_NAME)) -> None:
    """Forget a registered project."""
    session = _open_session()
    if not session.remove_project(name):
        raise _fail(Messages.ERROR_PROJECT_UNKNOWN.format(name=name))
    console.print(_styled(Messages.INFO_PROJECT_REMOVED.format(name=name), Styles.SUCCESS))


@app.command("list")
def list_projects() -> None:
    """Show registered projects, most recently used first."""
    session = _open_session()
    entries = session.projects()
    if not entries:
        console.print(_styled(Messages.INFO_NO_PROJECTS, Styles.INFO))
        return
    console.print(build_projects_table(entries))


@app.command()
def files(
    project: str | None = typer.Argument(None, help=Messages.HELP_FILES_PROJECT),
    from_path: Path | None = typer.Option(None, "--from", help=Messages.HELP_FILES_FROM),
    exclude_patterns: list[str] | None = typer.Option(
        None,
        "--exclude-pattern",
        help=Messages.HELP_EXCLUDE_PATTERNS,
    ),
    porcelain: bool = typer.Option(False, "--porcelain", help="Print one absolute path per line."),
) -> None:
    """List project files, most recently used first."""
    session = _open_session()
    try:
        if project is not None:
            root = session.registry.get(project)
            if root is None:
                raise _fail(Messages.ERROR_PROJECT_UNKNOWN.format(name=project))
        else:
            target = _absolute(from_path or Path("."))
            root = asyncio.run(session.resolve_project(target))
            if root is None:
                raise _fail(Messages.ERROR_PROJECT_NOT_INFERRED.format(path=target))
        items = asyncio.run(session.list_project_files(root, exclude_patterns))
    except (ProjnavError, OSError) as exc:
        raise _fail(str(exc)) from exc
    if porcelain:
        for item in items:
            typer.echo(item.abs_path)
        return
    if not items:
        console.print(_styled(Messages.INFO_NO_FILES.format(path=root), Styles.INFO))
        return
    _render_files(items, root)


@app.command("open")
def open_file(
    path: Path = typer.Argument(..., help=Messages.HELP_OPEN_PATH),
    no_editor: bool = typer.Option(False, "--no-editor", help=Messages.HELP_OPEN_NO_EDITOR),
) -> None:
    """Open a file and remember it for its project."""
    session = _open_session()
    target = _absolute(path)
    try:
        root = asyncio.run(session.on_file_opened(target))
    except (ProjnavError, OSError) as exc:
        raise _fail(str(exc)) from exc
    if root is None:
        session.host.notify(Messages.INFO_ACCESS_UNOWNED.format(path=target), level="warning")
    else:
        console.print(
            _styled(
                Messages.INFO_ACCESS_RECORDED.format(path=target, name=os.path.basename(root)),
                Styles.INFO,
            )
        )
    if no_editor:
        return
    try:
        asyncio.run(session.host.open_file(target))
    except RuntimeError as exc:
        raise _fail(str(exc)) from exc
    except subprocess.CalledProcessError as exc:
        raise _fail(Messages.ERROR_EDITOR_FAILED.format(code=exc.returncode)) from exc


@app.command()
def browse(
    path: Path = typer.Argument(Path("."), help=Messages.HELP_BROWSE_PATH),
    show_all: bool = typer.Option(False, "--all", "-a", help=Messages.HELP_BROWSE_ALL),
    no_filter: bool = typer.Option(False, "--no-filter", help=Messages.HELP_BROWSE_NO_FILTER),
    dirs_only: bool = typer.Option(False, "--dirs", "-d", help=Messages.HELP_BROWSE_DIRS),
) -> None:
    """List a directory the way the navigation picker shows it."""
    session = _open_session()
    browser = session.browser(BrowseMode.ADD_PROJECT if dirs_only else BrowseMode.BROWSE)
    target = _absolute(path)
    try:
        items = asyncio.run(browser.open(target))
    except (ProjnavError, OSError) as exc:
        raise _fail(str(exc)) from exc
    if show_all:
        items = browser.toggle_hidden()
    if no_filter and browser.filter_files:
        items = browser.toggle_filter()
    if not items:
        console.print(_styled(Messages.INFO_EMPTY_DIRECTORY.format(path=target), Styles.INFO))
        return
    for item in items:
        suffix = "/" if item.is_dir else ""
        typer.echo(f"{item.display_name}{suffix}")


@app.command()
def edit() -> None:
    """Open the project list in your editor."""
    try:
        config = load_config()
        ledger = JsonLedger(config.resolved_project_list_file())
        ledger.ensure_exists()
    except (ValueError, OSError) as exc:
        raise _fail(str(exc)) from exc
    _launch_editor(ledger.path)


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help=Messages.HELP_SHOW_CONFIG),
    add_marker: list[str] | None = typer.Option(None, "--add-marker", help=Messages.HELP_ADD_MARKER),
    remove_marker: list[str] | None = typer.Option(
        None, "--remove-marker", help=Messages.HELP_REMOVE_MARKER
    ),
    set_alias: list[str] | None = typer.Option(None, "--set-alias", help=Messages.HELP_SET_ALIAS),
    clear_aliases: bool = typer.Option(False, "--clear-aliases", help=Messages.HELP_CLEAR_ALIASES),
    edit_config: bool = typer.Option(False, "--edit", help=Messages.HELP_EDIT_CONFIG),
) -> None:
    """Manage projnav configuration."""
    if edit_config:
        _launch_editor(_ensure_config_file())
        return
    changed = False
    try:
        if add_marker:
            add_marker_files(add_marker)
            changed = True
        if remove_marker:
            remove_marker_files(remove_marker)
            changed = True
        if set_alias or clear_aliases:
            set_path_aliases(set_alias or [], clear=clear_aliases)
            changed = True
        cfg = load_config()
    except (ValueError, OSError) as exc:
        raise _fail(str(exc)) from exc
    if changed:
        console.print(
            _styled(Messages.INFO_CONFIG_SAVED.format(path=config_module.config_file_path()), Styles.SUCCESS)
        )
    if show or not changed:
        console.print(
            _styled(
                Messages.INFO_CONFIG_SUMMARY.format(
                    markers=", ".join(cfg.marker_file_names) or "-",
                    excludes=", ".join(cfg.project_exclude_globs) or "-",
                    ignore_files=", ".join(cfg.project_ignore_file_names) or "-",
                    filters=", ".join(cfg.filter_file_patterns) or "-",
                    aliases=", ".join(f"{k}={v}" for k, v in cfg.path_alias_mappings.items()) or "-",
                    project_list=cfg.resolved_project_list_file(),
                    recent_history=cfg.resolved_recent_history_file(),
                ),
                Styles.INFO,
            )
        )


@app.command()
def doctor() -> None:
    """Run diagnostic checks for projnav configuration and ledgers."""
    console.print(_styled(Messages.DOCTOR_TITLE.format(version=__version__), Styles.TITLE))
    console.print()
    try:
        cfg = load_config()
    except (json.JSONDecodeError, ValueError, OSError, UnicodeDecodeError):
        cfg = config_module.Config()
    results = run_all_doctor_checks(
        project_list_file=cfg.resolved_project_list_file(),
        recent_history_file=cfg.resolved_recent_history_file(),
        marker_file_names=cfg.marker_file_names,
    )
    has_failure = False
    for result in results:
        icon = format_status_icon(result.passed, console=console)
        if not result.passed:
            has_failure = True
        console.print(f"  {icon} [bold]{result.name}:[/bold] {escape(result.message)}")
        if result.detail:
            console.print(f"      [dim]{escape(result.detail)}[/dim]")
    console.print()
    if has_failure:
        console.print(_styled(Messages.DOCTOR_SOME_FAILED, Styles.WARNING))
        raise typer.Exit(code=1)
    console.print(_styled(Messages.DOCTOR_ALL_PASSED, Styles.SUCCESS))


def _render_files(items: Sequence[FileDescriptor], root: str) -> None:
    console.print(_styled(os.path.basename(root) or root, Styles.TITLE))
    console.print(build_files_table(items, root, console=console))


def run(argv: list[str] | None = None) -> None:
    """Entry point wrapper allowing optional argument override."""
    if argv is None:
        app()
    else:
        app(args=list(argv))


def _format_command(parts: Sequence[str]) -> str:
    return " ".join(shlex.quote(part) for part in parts)


def _ensure_config_file() -> Path:
    config_path = config_module.config_file_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    if not config_path.exists():
        config_path.write_text("{}\n", encoding="utf-8")
    return config_path


def _launch_editor(path: Path) -> None:
    command = resolve_editor_command()
    if not command:
        raise _fail(Messages.ERROR_EDITOR_NOT_FOUND)
    cmd_list = list(command)
    console.print(
        _styled(
            Messages.INFO_EDITING.format(path=path, editor=_format_command(cmd_list)),
            Styles.INFO,
        )
    )
    try:
        subprocess.run(cmd_list + [str(path)], check=True)
    except FileNotFoundError as exc:
        raise _fail(str(exc)) from exc
    except subprocess.CalledProcessError as exc:
        raise _fail(Messages.ERROR_EDITOR_FAILED.format(code=exc.returncode)) from exc
