"""Sync engine for pymirror - one-way single and mirror synchronization."""

from .comparator import FileComparator, SyncPlan
from .config import (
    DEFAULT_CONFIG_FILE_NAME,
    SyncConfigError,
    load_sync_pair_from_xml,
    load_sync_pairs,
    load_sync_pairs_from_json,
)
from .engine import SyncEngine, SyncOutcome
from .modes import SyncMethod
from .operations import SyncOperations
from .pair import SyncPair
from .progress import SyncProgressEvent, SyncProgressInfo, SyncProgressTracker
from .scanner import DirectoryScanner, FileRecord, RepositoryRoot
from .space import SpaceGuard

__all__ = [
    "SyncEngine",
    "SyncOutcome",
    "SyncMethod",
    "SyncPair",
    "SyncPlan",
    "SyncOperations",
    "SyncConfigError",
    "DEFAULT_CONFIG_FILE_NAME",
    "load_sync_pairs",
    "load_sync_pair_from_xml",
    "load_sync_pairs_from_json",
    "DirectoryScanner",
    "FileComparator",
    "FileRecord",
    "RepositoryRoot",
    "SpaceGuard",
    "SyncProgressEvent",
    "SyncProgressInfo",
    "SyncProgressTracker",
]
