"""Utility functions for pymirror."""

# =============================================================================
# Constants for sync operations
# =============================================================================

# Slack granted by the destination free-space check (10 MiB)
RESERVE_MARGIN: int = 10 * 1024 * 1024


# =============================================================================
# Size formatting utilities
# =============================================================================


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "256 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f} MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f} GB"


# =============================================================================
# Progress formatting utilities
# =============================================================================


def format_percent(index: int, total: int) -> str:
    """Format a running file counter as a percentage.

    Args:
        index: Number of files processed so far
        total: Total number of files

    Returns:
        Percentage string with two decimals (e.g., "50.00%")

    Examples:
        >>> format_percent(1, 2)
        '50.00%'
        >>> format_percent(0, 0)
        '0.00%'
    """
    if total <= 0:
        return "0.00%"
    return f"{index / total * 100:.2f}%"
