"""CLI progress display for sync operations.

This module provides Rich-based progress displays and plain line output
that plug into the SyncProgressTracker of the sync engine.
"""

from typing import Optional

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from .output import OutputFormatter
from .sync.progress import SyncProgressTracker
from .sync.scanner import FileRecord
from .utils import format_percent


class SyncProgressDisplay:
    """Rich-based progress display for sync operations.

    Shows one bar for copies and, when there are deletions, one for
    deletions. Bars advance after each file whether or not it succeeded;
    failures are counted in ``failed``.
    """

    def __init__(self, files_to_copy: int, files_to_delete: int = 0) -> None:
        """Initialize the progress display.

        Args:
            files_to_copy: Number of files that will be copied
            files_to_delete: Number of files that will be deleted
        """
        self.files_to_copy = files_to_copy
        self.files_to_delete = files_to_delete
        self.failed = 0
        self._progress: Optional[Progress] = None
        self._copy_task: Optional[TaskID] = None
        self._delete_task: Optional[TaskID] = None

    def create_tracker(self) -> SyncProgressTracker:
        """Create a SyncProgressTracker that updates this display.

        Returns:
            A configured SyncProgressTracker
        """
        return SyncProgressTracker(
            before_copy=self._before_copy,
            after_copy=self._after_copy,
            before_delete=self._before_delete,
            after_delete=self._after_delete,
        )

    def _before_copy(self, file: FileRecord, index: int, total: int, _: bool) -> None:
        if self._progress is not None and self._copy_task is not None:
            self._progress.update(
                self._copy_task, current_file=file.relative_path
            )

    def _after_copy(
        self, file: FileRecord, index: int, total: int, success: bool
    ) -> None:
        if not success:
            self.failed += 1
        if self._progress is not None and self._copy_task is not None:
            self._progress.update(self._copy_task, advance=1)

    def _before_delete(
        self, file: FileRecord, index: int, total: int, _: bool
    ) -> None:
        if self._progress is not None and self._delete_task is not None:
            self._progress.update(
                self._delete_task, current_file=file.relative_path
            )

    def _after_delete(
        self, file: FileRecord, index: int, total: int, success: bool
    ) -> None:
        if not success:
            self.failed += 1
        if self._progress is not None and self._delete_task is not None:
            self._progress.update(self._delete_task, advance=1)

    def __enter__(self) -> "SyncProgressDisplay":
        """Enter context manager - start progress display."""
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TextColumn("[cyan]{task.fields[current_file]}"),
            TimeElapsedColumn(),
            refresh_per_second=4,
        )
        self._progress.__enter__()

        self._copy_task = self._progress.add_task(
            "Copying", total=self.files_to_copy, current_file=""
        )
        if self.files_to_delete:
            self._delete_task = self._progress.add_task(
                "Deleting", total=self.files_to_delete, current_file=""
            )

        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager - stop progress display."""
        if self._progress is not None:
            for task in (self._copy_task, self._delete_task):
                if task is not None:
                    self._progress.update(task, current_file="")
            self._progress.__exit__(exc_type, exc_val, exc_tb)
            self._progress = None
            self._copy_task = None
            self._delete_task = None


def create_line_tracker(out: OutputFormatter) -> SyncProgressTracker:
    """Create a tracker that prints one line per processed file.

    Lines look like ``docs/a.txt 3 of 10 (30.00%) - Copied!``. The counter
    is the one announced before the operation started.
    """
    pending: dict[str, str] = {}

    def announce(file: FileRecord, index: int, total: int, _: bool) -> None:
        pending[file.relative_path] = (
            f"{file.relative_path} {index} of {total} "
            f"({format_percent(index, total)})"
        )

    def finish(file: FileRecord, done: str) -> None:
        out.info(f"{pending.pop(file.relative_path, file.relative_path)} - {done}")

    def after_copy(file: FileRecord, index: int, total: int, success: bool) -> None:
        finish(file, "Copied!" if success else "Error")

    def after_delete(
        file: FileRecord, index: int, total: int, success: bool
    ) -> None:
        finish(file, "Deleted!" if success else "Error")

    return SyncProgressTracker(
        before_copy=announce,
        after_copy=after_copy,
        before_delete=announce,
        after_delete=after_delete,
    )
