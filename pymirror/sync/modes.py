"""Sync methods supported by the engine."""

from enum import Enum
from typing import Union


class SyncMethod(str, Enum):
    """How the destination repository is kept in line with the source."""

    SINGLE = "single"
    """Copy new and newer files to the destination, never delete"""

    MIRROR = "mirror"
    """Copy like SINGLE, then delete destination-only files and empty folders"""

    @property
    def allows_delete(self) -> bool:
        """Whether this method removes files from the destination."""
        return self == SyncMethod.MIRROR

    @classmethod
    def from_code(cls, value: Union[int, str]) -> "SyncMethod":
        """Resolve a method from its integer configuration code.

        Args:
            value: 1 or 2, as int or numeric string

        Returns:
            Matching SyncMethod

        Raises:
            ValueError: If the code is unknown
        """
        try:
            code = int(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid sync method code: {value!r}") from None

        for method, method_code in _METHOD_CODES.items():
            if method_code == code:
                return method
        raise ValueError(f"Invalid sync method code: {value!r}")

    @classmethod
    def from_string(cls, value: str) -> "SyncMethod":
        """Parse a method name, abbreviation or integer code.

        Examples:
            >>> SyncMethod.from_string("mirror")
            <SyncMethod.MIRROR: 'mirror'>
            >>> SyncMethod.from_string("s")
            <SyncMethod.SINGLE: 'single'>
            >>> SyncMethod.from_string("2")
            <SyncMethod.MIRROR: 'mirror'>
        """
        normalized = str(value).strip().lower()
        if normalized.isdigit():
            return cls.from_code(normalized)

        abbreviations = {"s": cls.SINGLE, "m": cls.MIRROR}
        if normalized in abbreviations:
            return abbreviations[normalized]

        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Invalid sync method: {value!r}. Valid methods: {valid}"
            ) from None


_METHOD_CODES = {
    SyncMethod.SINGLE: 1,
    SyncMethod.MIRROR: 2,
}
