"""File-backed key-value storage."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from photoshoot.domain.errors import StorageQuotaExceededError
from photoshoot.services.storage import KeyValueStorage, stored_size


@dataclass
class JsonFileStorage(KeyValueStorage):
    """Stores each key as a UTF-8 file inside a directory."""

    directory: Path
    quota_bytes: int | None = None

    @classmethod
    def create(
        cls, directory: str | Path, quota_bytes: int | None = None
    ) -> "JsonFileStorage":
        """Create a storage rooted at ``directory``, creating it if needed."""
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)
        return cls(directory=path, quota_bytes=quota_bytes)

    def get(self, key: str) -> str | None:
        """Return the file contents for ``key`` if the file exists."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Atomically replace the file for ``key``."""
        if self.quota_bytes is not None and stored_size(key, value) > self.quota_bytes:
            raise StorageQuotaExceededError(
                f"Storing {key!r} would exceed the {self.quota_bytes} byte quota"
            )
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        """Delete the file for ``key`` if present."""
        self._path(key).unlink(missing_ok=True)

    def _path(self, key: str) -> Path:
        safe = "".join(ch if ch.isalnum() or ch in "-_." else "_" for ch in key)
        return self.directory / f"{safe}.json"
