"""projnav package initialization."""

from __future__ import annotations

from .config import Config, load_config
from .host import Host, LocalHost
from .items import FileDescriptor, FileType, InvalidPathError, ProjectEntry, ProjnavError
from .lru import BoundedOrderedMap, FileItemCache
from .ranking import RecencyCache
from .services.history_service import RecentHistoryLedger
from .services.registry_service import ProjectRegistry
from .services.resolver_service import ProjectResolver
from .session import NavigationSession

__all__ = [
    "__version__",
    "BoundedOrderedMap",
    "Config",
    "FileDescriptor",
    "FileItemCache",
    "FileType",
    "Host",
    "InvalidPathError",
    "LocalHost",
    "NavigationSession",
    "ProjectEntry",
    "ProjectRegistry",
    "ProjectResolver",
    "ProjnavError",
    "RecencyCache",
    "RecentHistoryLedger",
    "get_version",
    "load_config",
]

__version__ = "0.3.0"


def get_version() -> str:
    """Return the current package version."""
    return __version__
