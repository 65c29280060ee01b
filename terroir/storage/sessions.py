"""Process-wide data store and in-memory session registry.

Sessions live only as long as the process; nothing is persisted.
"""

from __future__ import annotations

import logging
import uuid

from terroir.state.session import QuizSession
from terroir.state.store import JoinedDataStore

logger = logging.getLogger(__name__)

# Lazy store — created on first use so imports never trigger a fetch.
_store: JoinedDataStore | None = None


class SessionRegistry:
    def __init__(self):
        self._sessions: dict[str, QuizSession] = {}

    def create(self, store: JoinedDataStore) -> tuple[str, QuizSession]:
        session_id = uuid.uuid4().hex
        session = QuizSession(store)
        self._sessions[session_id] = session
        logger.info("Opened session %s", session_id)
        return session_id, session

    def get(self, session_id: str) -> QuizSession | None:
        return self._sessions.get(session_id)

    def drop(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def clear(self) -> int:
        count = len(self._sessions)
        self._sessions.clear()
        return count

    def __len__(self) -> int:
        return len(self._sessions)


_registry = SessionRegistry()


def get_store() -> JoinedDataStore:
    """FastAPI dependency returning the shared data store."""
    global _store
    if _store is None:
        _store = JoinedDataStore()
    return _store


def get_registry() -> SessionRegistry:
    """FastAPI dependency returning the session registry."""
    return _registry
