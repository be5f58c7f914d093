"""pymirror - keep a backup directory tree in sync with a master tree."""

from .exceptions import DuplicatePathError, ListingError, PyMirrorError
from .sync import (
    FileRecord,
    SyncConfigError,
    SyncEngine,
    SyncMethod,
    SyncOutcome,
    SyncPair,
    SyncProgressTracker,
)
from .utils import format_percent, format_size

__all__ = [
    "SyncEngine",
    "SyncMethod",
    "SyncOutcome",
    "SyncPair",
    "SyncProgressTracker",
    "FileRecord",
    "PyMirrorError",
    "ListingError",
    "DuplicatePathError",
    "SyncConfigError",
    "format_percent",
    "format_size",
]
