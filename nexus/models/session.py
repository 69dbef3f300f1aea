from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Session:
    """Authenticated user session handed to the API client explicitly"""
    user_id: str
    token: Optional[str] = None
    role: str = "student"
    name: str = ""
    expires_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and not self.is_expired()

    def is_expired(self) -> bool:
        """Check if session is expired"""
        if self.expires_at is None:
            return False
        return _utcnow() > self.expires_at

    def clear(self):
        """Drop the token after the server rejects it"""
        self.token = None

    def auth_headers(self) -> dict:
        if not self.is_authenticated:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def __repr__(self):
        return f"<Session user={self.user_id} role={self.role} authenticated={self.is_authenticated}>"
