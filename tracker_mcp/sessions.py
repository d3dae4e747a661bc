# tracker_mcp/sessions.py
"""Protocol session storage.

The store is a plain key-value collaborator; concurrent writers to one
session id are its concern, not the adapter layer's.
"""

import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .config import Config


class SessionStore(ABC):

    @abstractmethod
    def exists(self, session_id: str) -> bool:
        pass

    @abstractmethod
    def read(self, session_id: str) -> Optional[bytes]:
        """Session payload, or None when absent or expired."""
        pass

    @abstractmethod
    def write(self, session_id: str, data: bytes) -> bool:
        pass

    @abstractmethod
    def destroy(self, session_id: str) -> bool:
        pass

    @abstractmethod
    def garbage_collect(self) -> list[str]:
        """Remove expired sessions and return their ids."""
        pass


class InMemorySessionStore(SessionStore):
    """Process-local store; a write refreshes the session's TTL."""

    def __init__(self, ttl: Optional[int] = None, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl if ttl is not None else Config.SESSION_TTL
        self._clock = clock
        self._sessions: dict[str, tuple[bytes, float]] = {}
        self._lock = threading.Lock()

    def _expired(self, written_at: float) -> bool:
        return self._clock() - written_at > self.ttl

    def exists(self, session_id: str) -> bool:
        return self.read(session_id) is not None

    def read(self, session_id: str) -> Optional[bytes]:
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            data, written_at = entry
            if self._expired(written_at):
                del self._sessions[session_id]
                return None
            return data

    def write(self, session_id: str, data: bytes) -> bool:
        with self._lock:
            self._sessions[session_id] = (data, self._clock())
        return True

    def destroy(self, session_id: str) -> bool:
        with self._lock:
            self._sessions.pop(session_id, None)
        return True

    def garbage_collect(self) -> list[str]:
        with self._lock:
            expired = [sid for sid, (_, written_at) in self._sessions.items() if self._expired(written_at)]
            for sid in expired:
                del self._sessions[sid]
        return expired
