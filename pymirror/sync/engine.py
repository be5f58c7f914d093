"""Core sync engine for executing sync operations."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .comparator import FileComparator, SyncPlan
from .modes import SyncMethod
from .operations import SyncOperations
from .pair import SyncPair
from .progress import SyncProgressEvent, SyncProgressTracker
from .scanner import DirectoryScanner, FileRecord, RepositoryRoot
from .space import SpaceGuard

logger = logging.getLogger(__name__)

SOURCE_MISSING_MESSAGE = "Source repository does not exist!"
DESTINATION_MISSING_MESSAGE = "Destination repository does not exist!"
NOT_ENOUGH_SPACE_MESSAGE = "There is not enough free space on destination disk!"
INVALID_METHOD_MESSAGE = "Invalid sync method!"


@dataclass
class SyncOutcome:
    """Result of a sync run."""

    success: bool
    """True if no precondition and no per-file operation failed"""

    message: str
    """Error lines followed by the copied/deleted count summary"""

    copied: int = 0
    deleted: int = 0
    errors: list[str] = field(default_factory=list)


class SyncEngine:
    """Reconciles a destination repository with a source repository.

    Examples:
        >>> engine = SyncEngine("/data/master", "/mnt/backup", SyncMethod.MIRROR)
        >>> print(len(engine.get_files_to_copy()), "files to copy")
        >>> outcome = engine.run()
        >>> print(outcome.message)
    """

    def __init__(
        self,
        source: Union[str, Path],
        destination: Union[str, Path],
        method: SyncMethod = SyncMethod.SINGLE,
        tracker: Optional[SyncProgressTracker] = None,
        scanner: Optional[DirectoryScanner] = None,
    ):
        """Initialize sync engine.

        Args:
            source: Source ("master") repository path
            destination: Destination ("backup") repository path
            method: Sync method to run
            tracker: Progress tracker notified for every file
            scanner: Directory scanner used to list both repositories
        """
        self.source_root = RepositoryRoot.from_path(source)
        self.destination_root = RepositoryRoot.from_path(destination)
        self.method = method
        self.tracker = tracker or SyncProgressTracker()
        self.scanner = scanner or DirectoryScanner()
        self.comparator = FileComparator()
        self.operations = SyncOperations()

    @classmethod
    def from_pair(
        cls, pair: SyncPair, tracker: Optional[SyncProgressTracker] = None
    ) -> "SyncEngine":
        """Create an engine for a configured sync pair."""
        return cls(pair.source, pair.destination, pair.method, tracker=tracker)

    @property
    def is_source_valid(self) -> bool:
        return self.source_root.exists

    @property
    def is_destination_valid(self) -> bool:
        return self.destination_root.exists

    def plan(self) -> SyncPlan:
        """Scan both repositories and classify their files.

        Both trees are walked again on every call. If either repository
        does not exist the plan is empty.

        Raises:
            ListingError: If either tree cannot be listed completely
        """
        if not self.is_source_valid or not self.is_destination_valid:
            return SyncPlan()

        scan_start = time.time()
        source_files = self.scanner.scan_local(self.source_root.path)
        destination_files = self.scanner.scan_local(self.destination_root.path)
        logger.debug(
            f"Scanned {len(source_files)} source and {len(destination_files)} "
            f"destination file(s) in {time.time() - scan_start:.2f}s"
        )
        return self.comparator.compare(source_files, destination_files)

    def get_files_to_copy(self) -> list[FileRecord]:
        """Files that the next run would copy to the destination."""
        return self.plan().files_to_copy

    def get_files_to_delete(self) -> list[FileRecord]:
        """Destination files that have no counterpart in the source."""
        return self.plan().files_to_delete

    def has_enough_space(self, total_bytes: int) -> bool:
        """Check the destination volume for ``total_bytes`` of pending copies."""
        return SpaceGuard(self.destination_root.path).has_enough_space(total_bytes)

    def run(self) -> SyncOutcome:
        """Check preconditions and run the selected sync method.

        No file is touched unless every precondition holds.

        Returns:
            SyncOutcome of the run

        Raises:
            ListingError: If either tree cannot be listed completely
        """
        if not self.is_source_valid:
            logger.debug(f"Source repository missing: {self.source_root}")
            return SyncOutcome(success=False, message=SOURCE_MISSING_MESSAGE)
        if not self.is_destination_valid:
            logger.debug(f"Destination repository missing: {self.destination_root}")
            return SyncOutcome(success=False, message=DESTINATION_MISSING_MESSAGE)

        plan = self.plan()

        if not self.has_enough_space(plan.total_copy_size):
            return SyncOutcome(success=False, message=NOT_ENOUGH_SPACE_MESSAGE)

        logger.debug(
            f"Running {getattr(self.method, 'value', self.method)} sync: "
            f"{len(plan.files_to_copy)} to copy, "
            f"{len(plan.files_to_delete)} to delete"
        )
        if self.method == SyncMethod.SINGLE:
            return self.single_sync(plan.files_to_copy)
        elif self.method == SyncMethod.MIRROR:
            return self.mirror_sync(plan.files_to_copy, plan.files_to_delete)
        else:
            return SyncOutcome(success=False, message=INVALID_METHOD_MESSAGE)

    def single_sync(self, files_to_copy: list[FileRecord]) -> SyncOutcome:
        """Copy new and newer files to the destination.

        Failed copies are recorded and do not stop the loop. The index
        passed to the tracker counts successful copies only.

        Args:
            files_to_copy: Files to copy, in order

        Returns:
            SyncOutcome whose message ends with "<N> Files copied!"
        """
        errors: list[str] = []
        total = len(files_to_copy)
        index = 0

        for record in files_to_copy:
            index += 1
            self.tracker.notify(SyncProgressEvent.BEFORE_COPY, record, index, total)

            target = self.destination_root.path / record.relative_path
            copied = True
            try:
                copy_start = time.time()
                self.operations.copy_file(record, target)
                logger.debug(
                    f"Copied {record.relative_path} in {time.time() - copy_start:.2f}s"
                )
            except OSError as e:
                logger.warning(f"Failed to copy {record.relative_path}: {e}")
                errors.append(f"Error copying {record.relative_path}, reason: {e}")
                copied = False
                index -= 1

            self.tracker.notify(
                SyncProgressEvent.AFTER_COPY, record, index, total, copied
            )

        lines = errors + [f"{index} Files copied!"]
        return SyncOutcome(
            success=not errors,
            message="\n".join(lines),
            copied=index,
            errors=errors,
        )

    def mirror_sync(
        self, files_to_copy: list[FileRecord], files_to_delete: list[FileRecord]
    ) -> SyncOutcome:
        """Copy like single_sync, then delete extra files and empty folders.

        Args:
            files_to_copy: Files to copy, in order
            files_to_delete: Destination files to delete, in order

        Returns:
            SyncOutcome combining the copy summary, delete errors and
            "<M> Files deleted!"
        """
        copy_outcome = self.single_sync(files_to_copy)

        errors: list[str] = []
        total = len(files_to_delete)
        index = 0

        for record in files_to_delete:
            index += 1
            self.tracker.notify(SyncProgressEvent.BEFORE_DELETE, record, index, total)

            deleted = True
            try:
                self.operations.delete_file(record)
                logger.debug(f"Deleted {record.relative_path}")
            except OSError as e:
                logger.warning(f"Failed to delete {record.relative_path}: {e}")
                errors.append(f"Error deleting {record.relative_path}, reason: {e}")
                deleted = False
                index -= 1

            self.tracker.notify(
                SyncProgressEvent.AFTER_DELETE, record, index, total, deleted
            )

        errors.extend(
            self.operations.prune_empty_directories(self.destination_root.path)
        )

        lines = [copy_outcome.message] + errors + [f"{index} Files deleted!"]
        return SyncOutcome(
            success=copy_outcome.success and not errors,
            message="\n".join(lines),
            copied=copy_outcome.copied,
            deleted=index,
            errors=copy_outcome.errors + errors,
        )
