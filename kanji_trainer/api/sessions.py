"""Registry of practice sessions served over HTTP."""

from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator

from ..library import ReferenceLibrary
from ..session import PracticeSession

_logger = logging.getLogger(__name__)


class UnknownSession(KeyError):
    """No session is registered under the given id."""


class SessionRegistry:
    """Thread-safe map of session id to PracticeSession.

    Stroke events for a session must be applied one at a time; ``use``
    holds the registry lock for the duration of a request's work on a
    session.
    """

    def __init__(self, library: ReferenceLibrary):
        self.library = library
        self._sessions: Dict[str, PracticeSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, character: int = 0) -> str:
        session = PracticeSession(self.library, character=character)
        session_id = uuid.uuid4().hex
        with self._lock:
            self._sessions[session_id] = session
        _logger.info("Created session %s on character %d", session_id, character)
        return session_id

    @contextmanager
    def use(self, session_id: str) -> Iterator[PracticeSession]:
        with self._lock:
            try:
                session = self._sessions[session_id]
            except KeyError:
                raise UnknownSession(session_id) from None
            yield session

    def remove(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise UnknownSession(session_id)
        _logger.info("Removed session %s", session_id)
