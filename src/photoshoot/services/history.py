"""Bounded, persisted history of completed photo shoots."""

import json
import logging
from dataclasses import dataclass, field

from pydantic import TypeAdapter, ValidationError

from photoshoot.domain.errors import PersistenceError
from photoshoot.domain.photoshoot import PhotoShootSession
from photoshoot.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)

HISTORY_KEY = "photoShootHistory"
HISTORY_LIMIT = 10

_SESSIONS = TypeAdapter(list[PhotoShootSession])


@dataclass
class HistoryStore:
    """Newest-first list of sessions mirrored into key-value storage."""

    storage: KeyValueStorage
    key: str = HISTORY_KEY
    limit: int = HISTORY_LIMIT
    _sessions: list[PhotoShootSession] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self._sessions = self._load()

    def list_sessions(self) -> tuple[PhotoShootSession, ...]:
        """Return the stored sessions, newest first."""
        return tuple(self._sessions)

    def get(self, session_id: str) -> PhotoShootSession | None:
        """Return a session by id, if present."""
        for session in self._sessions:
            if session.id == session_id:
                return session
        return None

    def add(self, session: PhotoShootSession) -> None:
        """Prepend a session, keeping only the most recent ``limit`` entries."""
        self._save([session, *self._sessions][: self.limit])

    def remove(self, session_id: str) -> None:
        """Drop the session with the given id; unknown ids are ignored."""
        self._save([s for s in self._sessions if s.id != session_id])

    def clear(self) -> None:
        """Remove every session."""
        self._save([])

    def _load(self) -> list[PhotoShootSession]:
        try:
            raw = self.storage.get(self.key)
        except Exception:
            logger.exception("Failed to read history from storage")
            return []
        if raw is None:
            return []
        try:
            sessions = _SESSIONS.validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable history stored under %s", self.key)
            try:
                self.storage.remove(self.key)
            except Exception:
                logger.exception("Failed to remove unreadable history from storage")
            return []
        return sessions[: self.limit]

    def _save(self, sessions: list[PhotoShootSession]) -> None:
        self._sessions = sessions
        payload = json.dumps(
            _SESSIONS.dump_python(sessions, mode="json", by_alias=True),
            ensure_ascii=False,
        )
        try:
            self.storage.set(self.key, payload)
        except Exception as exc:
            logger.exception("Failed to save history to storage")
            raise PersistenceError(
                "Could not save the session to history. "
                "The storage may be full."
            ) from exc
