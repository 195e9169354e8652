"""Key-value storage abstractions for persisted application state."""

from dataclasses import dataclass
from typing import Protocol

from photoshoot.domain.errors import StorageQuotaExceededError


class KeyValueStorage(Protocol):
    """Storage interface for string values under named keys."""

    def get(self, key: str) -> str | None:
        """Return the stored value if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    def remove(self, key: str) -> None:
        """Delete a stored value if present."""


@dataclass
class InMemoryStorage(KeyValueStorage):
    """In-memory storage with an optional total size quota."""

    _values: dict[str, str]
    quota_bytes: int | None

    def __init__(self, quota_bytes: int | None = None) -> None:
        self._values = {}
        self.quota_bytes = quota_bytes

    def get(self, key: str) -> str | None:
        """Return the stored value if present."""
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value unless it pushes the total past the quota."""
        if self.quota_bytes is not None:
            others = sum(
                stored_size(k, v) for k, v in self._values.items() if k != key
            )
            if others + stored_size(key, value) > self.quota_bytes:
                raise StorageQuotaExceededError(
                    f"Storing {key!r} would exceed the {self.quota_bytes} byte quota"
                )
        self._values[key] = value

    def remove(self, key: str) -> None:
        """Delete a stored value if present."""
        self._values.pop(key, None)


def stored_size(key: str, value: str) -> int:
    """Size a key/value pair the way browsers count storage usage."""
    return (len(key) + len(value)) * 2
