"""Exceptions raised by pymirror."""

from pathlib import Path
from typing import Optional


class PyMirrorError(Exception):
    """Base exception for all pymirror errors."""


class ListingError(PyMirrorError):
    """A directory tree could not be listed completely.

    A partial listing would produce wrong copy and delete sets, so the
    scanner raises this instead of skipping unreadable entries.
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class DuplicatePathError(PyMirrorError):
    """Two files in one listing share the same relative path."""

    def __init__(self, relative_path: str):
        super().__init__(f"Duplicate relative path in listing: {relative_path}")
        self.relative_path = relative_path
