"""Free space check for the destination volume."""

import logging
import shutil
from pathlib import Path

from ..utils import RESERVE_MARGIN

logger = logging.getLogger(__name__)


class SpaceGuard:
    """Checks that the destination volume can take the pending copies.

    The check is advisory: it runs once before copying starts and other
    processes may still fill the disk during the run.
    """

    def __init__(self, destination: Path, reserve_margin: int = RESERVE_MARGIN):
        """Initialize space guard.

        Args:
            destination: Destination repository path (any path on the volume)
            reserve_margin: Safety buffer in bytes (default: 10 MiB)
        """
        self.destination = destination
        self.reserve_margin = reserve_margin

    def free_space(self) -> int:
        """Free bytes on the volume that holds the destination.

        Returns 0 when the volume cannot be resolved.
        """
        try:
            return shutil.disk_usage(self.destination).free
        except OSError as e:
            logger.warning(
                "Cannot determine free space for %s: %s", self.destination, e
            )
            return 0

    def has_enough_space(self, total_bytes: int) -> bool:
        """Check whether ``total_bytes`` can be copied to the destination.

        Args:
            total_bytes: Total size of the files to copy

        Returns:
            True if free space >= total_bytes - reserve_margin
        """
        free = self.free_space()
        enough = free >= total_bytes - self.reserve_margin
        logger.debug(
            "Space check: free=%d, needed=%d, margin=%d, ok=%s",
            free,
            total_bytes,
            self.reserve_margin,
            enough,
        )
        return enough
