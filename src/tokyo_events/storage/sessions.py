"""Server-side session registry.

Session tokens are signed JWTs held by the client (see
`tokyo_events.auth.session`). Each token carries a session id that must
also be registered here to be accepted, so logging out revokes the token
even before it expires.
"""

from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class SessionRecord:
    """A live session."""

    session_id: str
    user_id: int
    created_at: datetime
    expires_at: datetime

    @property
    def is_expired(self) -> bool:
        return datetime.now(timezone.utc) >= self.expires_at


class SessionRegistry:
    """In-memory map of live session ids to user ids."""

    def __init__(self) -> None:
        self._sessions: dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, user_id: int, expires_at: datetime) -> SessionRecord:
        """Register a new session for a user."""
        record = SessionRecord(
            session_id=secrets.token_urlsafe(24),
            user_id=user_id,
            created_at=datetime.now(timezone.utc),
            expires_at=expires_at,
        )
        with self._lock:
            self._prune_locked()
            self._sessions[record.session_id] = record
        return record

    def get(self, session_id: str) -> SessionRecord | None:
        """Get a live session, or None if unknown or expired."""
        with self._lock:
            record = self._sessions.get(session_id)
            if record is None:
                return None
            if record.is_expired:
                del self._sessions[session_id]
                return None
            return record

    def revoke(self, session_id: str) -> bool:
        """Revoke a session.

        Returns:
            True if the session was live
        """
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def _prune_locked(self) -> None:
        expired = [sid for sid, record in self._sessions.items() if record.is_expired]
        for sid in expired:
            del self._sessions[sid]
