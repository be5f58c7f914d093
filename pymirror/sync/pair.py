"""Sync pair definition: one source repository mirrored into one destination."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from .modes import SyncMethod


@dataclass
class SyncPair:
    """A source/destination repository pair and the method used to sync it."""

    source: Path
    destination: Path
    method: SyncMethod = SyncMethod.SINGLE
    alias: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.source, Path):
            self.source = Path(self.source)
        if not isinstance(self.destination, Path):
            self.destination = Path(self.destination)
        if not isinstance(self.method, SyncMethod):
            self.method = SyncMethod.from_string(str(self.method))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncPair":
        """Create a sync pair from a configuration dictionary.

        Args:
            data: Dictionary with "source", "destination" and optional
                "method" (name or integer code) and "alias" keys

        Returns:
            SyncPair instance

        Raises:
            ValueError: If required fields are missing or the method is invalid
        """
        missing = [key for key in ("source", "destination") if not data.get(key)]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")

        method: Union[SyncMethod, str] = SyncMethod.SINGLE
        if data.get("method") is not None:
            method = SyncMethod.from_string(str(data["method"]))

        return cls(
            source=Path(data["source"]),
            destination=Path(data["destination"]),
            method=method,
            alias=data.get("alias"),
        )

    def __str__(self) -> str:
        name = f"{self.alias}: " if self.alias else ""
        return f"{name}{self.source} -> {self.destination} ({self.method.value})"
