"""Per-file progress notifications for sync runs.

The engine reports every copy and delete through a SyncProgressTracker.
Presentation layers (console output, progress bars, log files) register
callables on the tracker; the engine itself never formats anything for
the user.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .scanner import FileRecord

FileCallback = Callable[[FileRecord, int, int, bool], None]
"""Signature of the per-file slots: (file, index, total, success)"""


class SyncProgressEvent(str, Enum):
    """Points in the per-file loop where the tracker is notified."""

    BEFORE_COPY = "before_copy"
    AFTER_COPY = "after_copy"
    BEFORE_DELETE = "before_delete"
    AFTER_DELETE = "after_delete"


@dataclass
class SyncProgressInfo:
    """Payload of a single progress notification."""

    event: SyncProgressEvent
    file: FileRecord
    index: int
    """1-based count of successful operations, including the current file
    for BEFORE_* events and excluding it after a failure"""
    total: int
    success: bool


class SyncProgressTracker:
    """Dispatches per-file progress notifications.

    Examples:
        >>> tracker = SyncProgressTracker(
        ...     before_copy=lambda f, i, t, s: print(f"{f.path} {i} of {t}"),
        ...     after_copy=lambda f, i, t, s: print("Copied!" if s else "Error"),
        ... )
    """

    def __init__(
        self,
        before_copy: Optional[FileCallback] = None,
        after_copy: Optional[FileCallback] = None,
        before_delete: Optional[FileCallback] = None,
        after_delete: Optional[FileCallback] = None,
        callback: Optional[Callable[[SyncProgressInfo], None]] = None,
    ):
        """Initialize tracker.

        Args:
            before_copy: Called before each file copy
            after_copy: Called after each file copy
            before_delete: Called before each file deletion
            after_delete: Called after each file deletion
            callback: Called with a SyncProgressInfo for every event
        """
        self.before_copy = before_copy
        self.after_copy = after_copy
        self.before_delete = before_delete
        self.after_delete = after_delete
        self.callback = callback

    def _slot(self, event: SyncProgressEvent) -> Optional[FileCallback]:
        return getattr(self, event.value)

    def notify(
        self,
        event: SyncProgressEvent,
        file: FileRecord,
        index: int,
        total: int,
        success: bool = True,
    ) -> None:
        """Fire the slot registered for ``event`` and the generic callback."""
        slot = self._slot(event)
        if slot is not None:
            slot(file, index, total, success)
        if self.callback is not None:
            self.callback(
                SyncProgressInfo(
                    event=event, file=file, index=index, total=total, success=success
                )
            )
