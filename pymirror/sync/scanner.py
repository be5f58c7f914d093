"""Directory scanning utilities for sync operations."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..exceptions import ListingError

logger = logging.getLogger(__name__)


@dataclass
class FileRecord:
    """Represents one file discovered under a repository root."""

    path: Path
    """Absolute path to the file"""

    relative_path: str
    """Path relative to the root (forward slashes on every platform)"""

    directory: Path
    """Absolute path of the containing directory"""

    mtime: float
    """Last modification time (Unix timestamp)"""

    size: int
    """File size in bytes"""

    @classmethod
    def from_path(cls, file_path: Path, base_path: Path) -> "FileRecord":
        """Create FileRecord from a path.

        Args:
            file_path: Absolute path to the file
            base_path: Base path for calculating relative paths

        Returns:
            FileRecord instance
        """
        stat = file_path.stat()
        # Use as_posix() to ensure forward slashes on all platforms
        relative_path = file_path.relative_to(base_path).as_posix()

        return cls(
            path=file_path,
            relative_path=relative_path,
            directory=file_path.parent,
            mtime=stat.st_mtime,
            size=stat.st_size,
        )


@dataclass(frozen=True)
class RepositoryRoot:
    """A repository directory (source or destination).

    Existence is checked against the filesystem on every access so a root
    that disappears or appears between calls is never reported stale.
    """

    path: Path

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "RepositoryRoot":
        return cls(path=Path(path).expanduser().absolute())

    @property
    def exists(self) -> bool:
        return self.path.is_dir()

    def __str__(self) -> str:
        return str(self.path)


class DirectoryScanner:
    """Scans directories and builds file lists.

    Examples:
        >>> scanner = DirectoryScanner()
        >>> files = scanner.scan_local(Path("/backup/master"))
        >>> for f in files:
        ...     print(f.relative_path, f.size)
    """

    def __init__(self, follow_symlinks: bool = False):
        """Initialize directory scanner.

        Args:
            follow_symlinks: Whether to descend into symlinked directories.
                Symlinked files are always listed.
        """
        self.follow_symlinks = follow_symlinks

    def scan_local(
        self, directory: Path, base_path: Optional[Path] = None
    ) -> list[FileRecord]:
        """Recursively scan a local directory.

        Entries are visited in sorted order so the resulting listing is
        deterministic. A root that does not exist yields an empty list.

        Args:
            directory: Directory to scan
            base_path: Base path for calculating relative paths (defaults to directory)

        Returns:
            List of FileRecord objects

        Raises:
            ListingError: If any part of the tree cannot be read
        """
        if base_path is None:
            base_path = directory
            if not directory.is_dir():
                logger.debug(f"Root does not exist, nothing to scan: {directory}")
                return []

        files: list[FileRecord] = []

        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            raise ListingError(
                f"Cannot list directory {directory}: {e}", path=directory
            ) from e

        for item in entries:
            try:
                if item.is_dir():
                    if item.is_symlink() and not self.follow_symlinks:
                        logger.debug(f"Not following symlinked directory: {item}")
                        continue
                    # Recursively scan subdirectories
                    files.extend(self.scan_local(item, base_path))
                elif item.is_file():
                    files.append(FileRecord.from_path(item, base_path))
            except OSError as e:
                raise ListingError(f"Cannot read {item}: {e}", path=item) from e

        return files
