"""Login sessions for the dashboard.

A Session is issued at login and handed explicitly to whatever needs it
(HTTP clients for the bearer token, views for the role). It stops being
valid at logout or when it expires. There is no server-side credential
check: any non-empty email and password are accepted.
"""

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Optional

ROLES = ("admin", "employee")


@dataclass
class Session:
    user_id: str
    email: str
    name: str
    role: str
    issued_at: datetime
    expires_at: datetime
    token: str = field(default_factory=lambda: secrets.token_urlsafe(24))
    revoked: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now()
        return not self.revoked and now < self.expires_at

    def invalidate(self) -> None:
        self.revoked = True


def issue_session(
    email: str,
    password: str,
    role: str,
    ttl: timedelta = timedelta(hours=8),
    now: Optional[datetime] = None,
) -> Session:
    """Create a session for a login attempt. Raises ValueError on bad input."""
    if not email or not password:
        raise ValueError("Email and password are required")
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role!r}")
    now = now or datetime.now()
    return Session(
        user_id=email.lower(),
        email=email,
        name="Admin User" if role == "admin" else "Employee User",
        role=role,
        issued_at=now,
        expires_at=now + ttl,
    )


class SessionStore:
    """In-memory token -> Session map owned by the web app."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    def add(self, session: Session, now: Optional[datetime] = None) -> str:
        """Store a session, dropping any that have expired or been revoked."""
        self.prune(now)
        self._sessions[session.token] = session
        return session.token

    def get(self, token: Optional[str], now: Optional[datetime] = None) -> Optional[Session]:
        """Return the live session for a token, dropping it if expired."""
        if not token:
            return None
        session = self._sessions.get(token)
        if session is None:
            return None
        if not session.is_valid(now):
            del self._sessions[token]
            return None
        return session

    def prune(self, now: Optional[datetime] = None) -> int:
        """Remove sessions that are no longer valid. Returns how many were removed."""
        stale = [token for token, s in self._sessions.items() if not s.is_valid(now)]
        for token in stale:
            del self._sessions[token]
        return len(stale)

    def revoke(self, token: Optional[str]) -> None:
        session = self._sessions.pop(token, None) if token else None
        if session is not None:
            session.invalidate()

    def __len__(self) -> int:
        return len(self._sessions)
