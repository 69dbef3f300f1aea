"""
Notification Center - transient user-facing notices (toasts)

Notices are non-fatal: posting one never raises, and each notice is
mirrored to the package logger.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, List, Optional

from nexus.core.config import settings
from nexus.core.logging_config import logger


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass
class Notification:
    kind: NotificationKind
    message: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:9])
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_expired(self, ttl_seconds: int, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now - self.created_at > timedelta(seconds=ttl_seconds)


class NotificationCenter:
    """Collects notices for the UI layer to display and dismiss"""

    def __init__(self, ttl_seconds: Optional[int] = None,
                 listener: Optional[Callable[[Notification], None]] = None):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.NOTIFICATION_TTL_SECONDS
        self._listener = listener
        self._items: List[Notification] = []

    def notify(self, kind: NotificationKind, message: str) -> Notification:
        notification = Notification(kind=NotificationKind(kind), message=message)
        self.prune(notification.created_at)
        self._items.append(notification)

        if notification.kind == NotificationKind.ERROR:
            logger.warning(f"[Notify] {message}")
        else:
            logger.info(f"[Notify] {message}")

        if self._listener is not None:
            try:
                self._listener(notification)
            except Exception as e:
                logger.log_error_with_context(e, context="notification listener")

        return notification

    def success(self, message: str) -> Notification:
        return self.notify(NotificationKind.SUCCESS, message)

    def error(self, message: str) -> Notification:
        return self.notify(NotificationKind.ERROR, message)

    def info(self, message: str) -> Notification:
        return self.notify(NotificationKind.INFO, message)

    def dismiss(self, notification_id: str) -> None:
        self._items = [n for n in self._items if n.id != notification_id]

    def prune(self, now: Optional[datetime] = None) -> int:
        """Drop notices past their display window; returns how many were dropped"""
        kept = [n for n in self._items if not n.is_expired(self.ttl_seconds, now)]
        dropped = len(self._items) - len(kept)
        self._items = kept
        return dropped

    def active(self, now: Optional[datetime] = None) -> List[Notification]:
        """Notices still inside their display window"""
        self.prune(now)
        return list(self._items)

    def drain(self) -> List[Notification]:
        """Return and clear every pending notice"""
        items, self._items = self._items, []
        return items

    def __len__(self) -> int:
        return len(self._items)
