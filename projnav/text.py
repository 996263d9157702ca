"""Centralized user-facing text for the projnav CLI."""

from __future__ import annotations

class Styles:
    ERROR = "red"
    WARNING = "yellow"
    SUCCESS = "green"
    INFO = "dim"
    TITLE = "bold cyan"
    TABLE_HEADER = "bold magenta"


class Messages:
    APP_HELP = "projnav – infer, remember and rank the projects you work in."
    HELP_VERBOSE = "Emit diagnostic logging to stderr."
    HELP_CONFIG_DIR = "Read config.json from this directory instead of ~/.projnav."
    HELP_RESOLVE_PATH = "File or directory whose owning project should be inferred."
    HELP_WORKSPACE = "Treat this directory as an open workspace folder (repeatable)."
    HELP_REGISTER = "Register the inferred project in the project list."
    HELP_ADD_PATH = "Directory to register as a project."
    HELP_ADD_INFER = "Infer the project root from PATH instead of registering PATH itself."
    HELP_REMOVE_NAME = "Name of the project to forget."
    HELP_FILES_PROJECT = "Project name; defaults to the project owning the current directory."
    HELP_FILES_FROM = "Infer the project from this path instead of a project name."
    HELP_EXCLUDE_PATTERNS = "Extra gitwildmatch pattern to exclude (repeatable)."
    HELP_OPEN_PATH = "File to open and record as recently used."
    HELP_OPEN_NO_EDITOR = "Only record the access; do not launch an editor."
    HELP_BROWSE_PATH = "Directory to list."
    HELP_BROWSE_ALL = "Show dot-entries."
    HELP_BROWSE_NO_FILTER = "Do not hide entries matching the configured filter patterns."
    HELP_BROWSE_DIRS = "Only list directories (project selection mode)."
    HELP_SHOW_CONFIG = "Show current configuration."
    HELP_ADD_MARKER = "Add a marker file name that identifies a project root (repeatable)."
    HELP_REMOVE_MARKER = "Remove a marker file name (repeatable)."
    HELP_SET_ALIAS = "Rewrite a path prefix before lookups, as SOURCE=TARGET (repeatable)."
    HELP_CLEAR_ALIASES = "Remove all path alias mappings."
    HELP_EDIT_CONFIG = "Open the config file in your editor."

    ERROR_PATH_NOT_ABSOLUTE = "Path is not absolute: {path}"
    ERROR_NOT_A_DIRECTORY = "{path} is not an absolute path to a directory"
    ERROR_PROJECT_NOT_INFERRED = "Cannot infer a project for {path}."
    ERROR_PROJECT_UNKNOWN = "No project named {name}."
    ERROR_LEDGER_INVALID = "Ledger {path} must contain a JSON object."
    ERROR_CONFIG_JSON_INVALID = "Config JSON must be an object."
    ERROR_CONFIG_VALUE_INVALID = "Invalid config value for {field}."
    ERROR_ALIAS_INVALID = "Alias must look like SOURCE=TARGET: {value}"
    ERROR_CAPACITY = "{name} must be greater than 0"
    ERROR_EDITOR_NOT_FOUND = "No editor found. Set $VISUAL or $EDITOR."
    ERROR_EDITOR_FAILED = "Editor exited with code {code}."
    ERROR_ADD_PROJECT_MODE = "Projects can only be confirmed while selecting a project."

    INFO_PROJECT_ADDED = "Project {name} added ({path})."
    INFO_PROJECT_REMOVED = "Project {name} removed."
    INFO_NO_PROJECTS = "No projects registered yet."
    INFO_NO_FILES = "No files found in {path}."
    INFO_EMPTY_DIRECTORY = "Nothing to show in {path}."
    INFO_ACCESS_RECORDED = "Recorded {path} for project {name}."
    INFO_ACCESS_UNOWNED = "{path} does not belong to a known project; nothing recorded."
    INFO_CONFIG_SAVED = "Configuration saved to {path}."
    INFO_CONFIG_SUMMARY = (
        "Marker files: {markers}\n"
        "Exclude globs: {excludes}\n"
        "Ignore files: {ignore_files}\n"
        "Filter patterns: {filters}\n"
        "Path aliases: {aliases}\n"
        "Project list: {project_list}\n"
        "Recent history: {recent_history}"
    )
    INFO_EDITING = "Opening {path} with {editor}..."

    TABLE_PROJECTS_TITLE = "Known projects (most recent first)"
    TABLE_HEADER_INDEX = "#"
    TABLE_HEADER_NAME = "Project"
    TABLE_HEADER_ROOT = "Root"
    TABLE_HEADER_FILE = "File"
    TABLE_HEADER_PATH = "Path"

    DOCTOR_TITLE = "projnav v{version} doctor"
    DOCTOR_CONFIG_EXISTS = "Config found at {path}."
    DOCTOR_CONFIG_DEFAULT = "Using default configuration."
    DOCTOR_CONFIG_INVALID = "Config at {path} is not valid JSON."
    DOCTOR_LEDGER_OK = "{path} holds {count} entr{plural}."
    DOCTOR_LEDGER_MISSING = "{path} will be created on first use."
    DOCTOR_LEDGER_INVALID = "{path} is not a JSON object."
    DOCTOR_LEDGER_NOT_WRITABLE = "Cannot write to {path}."
    DOCTOR_MARKERS_OK = "{count} marker file name{plural} configured."
    DOCTOR_MARKERS_EMPTY = "No marker files configured; only known projects will resolve."
    DOCTOR_ALL_PASSED = "All checks passed."
    DOCTOR_SOME_FAILED = "Some checks failed."
