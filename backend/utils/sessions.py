# backend/utils/sessions.py
import secrets
import threading
import time
from datetime import timedelta
from typing import Callable, Dict, Optional, Tuple

from fastapi import Depends, Request

from config import settings
from models.users import UserRole
from utils.exceptions import UnauthorizedError
from utils.principal import Principal

# Keys stored in a session, all values kept as plain strings
SESSION_USER_ID = "user_id"
SESSION_USERNAME = "username"
SESSION_USER_ROLE = "user_role"


class SessionStore:
    """Server-side, in-memory session storage keyed by an opaque cookie value.

    Sessions expire after ``idle_timeout`` without access; there is no other expiry
    and nothing is signed, the cookie is only a lookup key.
    """

    def __init__(self, idle_timeout: timedelta, clock: Callable[[], float] = time.monotonic):
        self.idle_timeout = idle_timeout.total_seconds()
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, Tuple[float, Dict[str, object]]] = {}

    def create(self) -> str:
        session_id = secrets.token_urlsafe(32)
        now = self._clock()
        with self._lock:
            self._sweep(now)
            self._sessions[session_id] = (now, {})
        return session_id

    def _sweep(self, now: float) -> None:
        # Caller holds the lock
        stale = [sid for sid, (last_seen, _) in self._sessions.items() if now - last_seen > self.idle_timeout]
        for sid in stale:
            del self._sessions[sid]

    def get(self, session_id: Optional[str]) -> Optional[Dict[str, object]]:
        """Return the session data and refresh its idle timer, or None if unknown/expired."""
        if not session_id:
            return None
        now = self._clock()
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            last_seen, data = entry
            if now - last_seen > self.idle_timeout:
                del self._sessions[session_id]
                return None
            self._sessions[session_id] = (now, data)
            return data

    def set(self, session_id: str, **values) -> None:
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                raise KeyError(session_id)
            entry[1].update(values)

    def increment(self, session_id: str, key: str) -> int:
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                raise KeyError(session_id)
            data = entry[1]
            data[key] = int(data.get(key, 0)) + 1
            return data[key]

    def clear(self, session_id: Optional[str]) -> None:
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is not None:
                entry[1].clear()

    def destroy(self, session_id: Optional[str]) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


def build_session_store(conf=settings) -> SessionStore:
    return SessionStore(idle_timeout=timedelta(minutes=conf.SESSION_IDLE_TIMEOUT_MINUTES))


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def session_id_from(request: Request) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


class SessionAuthenticator:
    """Presentation strategy: identity comes from the server-side session only."""

    def __init__(self, store: SessionStore):
        self.store = store

    def authenticate(self, request: Request) -> Optional[Principal]:
        data = self.store.get(session_id_from(request))
        if not data or SESSION_USER_ID not in data:
            return None
        try:
            return Principal(
                id=int(data[SESSION_USER_ID]),
                username=str(data[SESSION_USERNAME]),
                role=UserRole(data[SESSION_USER_ROLE]),
            )
        except (KeyError, ValueError):
            return None


def get_session_principal(request: Request, store: SessionStore = Depends(get_session_store)) -> Principal:
    principal = SessionAuthenticator(store).authenticate(request)
    if principal is None:
        raise UnauthorizedError("Please sign in to continue")
    return principal
