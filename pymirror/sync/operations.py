"""File operations used by the sync strategies."""

import logging
import shutil
from pathlib import Path

from .scanner import FileRecord

logger = logging.getLogger(__name__)


class SyncOperations:
    """Copy, delete and cleanup operations on local repositories.

    Every method performs one blocking filesystem call (or a short walk for
    pruning) and lets ``OSError`` propagate so the caller can record the
    failure and move on to the next file.
    """

    def ensure_directory(self, directory: Path) -> None:
        """Create a destination directory if it does not exist yet.

        Args:
            directory: Directory that must exist
        """
        if not directory.is_dir():
            logger.debug(f"Creating directory {directory}")
            directory.mkdir(parents=True, exist_ok=True)

    def copy_file(self, record: FileRecord, target: Path) -> Path:
        """Copy a source file to the destination, overwriting any existing file.

        File metadata (including the modification time) is preserved so the
        copy compares as up to date on the next run.

        Args:
            record: Source file to copy
            target: Destination path for the file

        Returns:
            Path of the copied file
        """
        self.ensure_directory(target.parent)
        shutil.copy2(record.path, target)
        return target

    def delete_file(self, record: FileRecord) -> None:
        """Delete a destination file.

        Args:
            record: Destination file to delete
        """
        record.path.unlink()

    def prune_empty_directories(self, root: Path) -> list[str]:
        """Remove empty directories below ``root``, innermost first.

        A directory whose only contents are empty directories is removed
        as well, since its children are removed before it is checked.
        ``root`` itself is kept. Directories that cannot be listed or
        removed are reported and skipped, and pruning continues with the
        next sibling.

        Args:
            root: Repository root to clean

        Returns:
            Error lines for directories that could not be removed
        """
        errors: list[str] = []
        self._prune(root, root, errors)
        return errors

    def _prune(self, directory: Path, root: Path, errors: list[str]) -> bool:
        """Prune below ``directory``; return False if it could not be listed."""
        try:
            children = sorted(directory.iterdir())
        except OSError as e:
            self._record_prune_error(directory, root, e, errors)
            return False

        for child in children:
            if not child.is_dir() or child.is_symlink():
                continue
            if not self._prune(child, root, errors):
                continue
            try:
                if any(child.iterdir()):
                    continue
                child.rmdir()
                logger.debug(f"Removed empty directory {child}")
            except OSError as e:
                self._record_prune_error(child, root, e, errors)
        return True

    @staticmethod
    def _record_prune_error(
        directory: Path, root: Path, error: OSError, errors: list[str]
    ) -> None:
        relative = directory.relative_to(root).as_posix()
        logger.warning(f"Cannot remove directory {relative}: {error}")
        errors.append(f"Error removing directory {relative}, reason: {error}")
