"""File comparison logic for sync operations."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..exceptions import DuplicatePathError
from .scanner import FileRecord


@dataclass
class SyncPlan:
    """Files that a sync run would copy and delete."""

    files_to_copy: list[FileRecord] = field(default_factory=list)
    """Source files that are new or newer than their destination copy"""

    files_to_delete: list[FileRecord] = field(default_factory=list)
    """Destination files with no counterpart in the source"""

    @property
    def total_copy_size(self) -> int:
        """Total size in bytes of the files to copy."""
        return sum(f.size for f in self.files_to_copy)

    @property
    def is_empty(self) -> bool:
        return not self.files_to_copy and not self.files_to_delete


class FileComparator:
    """Compares source and destination listings to classify files.

    Both operations are pure functions of the two listings: no I/O and no
    mutation of the inputs. Files are matched by relative path.
    """

    @staticmethod
    def index_by_relative_path(files: Iterable[FileRecord]) -> dict[str, FileRecord]:
        """Build a relative path lookup for a listing.

        Args:
            files: Listing to index

        Returns:
            Dictionary mapping relative_path to FileRecord

        Raises:
            DuplicatePathError: If two records share a relative path
        """
        index: dict[str, FileRecord] = {}
        for record in files:
            if record.relative_path in index:
                raise DuplicatePathError(record.relative_path)
            index[record.relative_path] = record
        return index

    def compute_copy_set(
        self, source: list[FileRecord], destination: list[FileRecord]
    ) -> list[FileRecord]:
        """Determine which source files must be copied.

        A source file is copied when the destination has no file with the
        same relative path, or when the source file is strictly newer.
        Equal modification times are never copied.

        Args:
            source: Listing of the source repository
            destination: Listing of the destination repository

        Returns:
            Files to copy, in source listing order
        """
        self.index_by_relative_path(source)
        dest_index = self.index_by_relative_path(destination)

        files_to_copy: list[FileRecord] = []
        for record in source:
            dest_record = dest_index.get(record.relative_path)
            if dest_record is None or record.mtime > dest_record.mtime:
                files_to_copy.append(record)
        return files_to_copy

    def compute_delete_set(
        self, source: list[FileRecord], destination: list[FileRecord]
    ) -> list[FileRecord]:
        """Determine which destination files have no source counterpart.

        Args:
            source: Listing of the source repository
            destination: Listing of the destination repository

        Returns:
            Files to delete, in destination listing order
        """
        source_index = self.index_by_relative_path(source)
        self.index_by_relative_path(destination)

        return [
            record for record in destination if record.relative_path not in source_index
        ]

    def compare(
        self, source: list[FileRecord], destination: list[FileRecord]
    ) -> SyncPlan:
        """Classify both listings at once."""
        return SyncPlan(
            files_to_copy=self.compute_copy_set(source, destination),
            files_to_delete=self.compute_delete_set(source, destination),
        )
