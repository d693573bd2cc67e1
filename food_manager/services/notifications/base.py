"""
Transient Notifications

User-facing success/error messages that dismiss themselves after a fixed
time (5 seconds by default). Every error, whether raised by local
validation or by the server, goes through the same channel and looks the
same.

Only the most recent notification is current; showing a new one replaces
it. Nothing is persisted.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Notification:
    """A single message with its display lifetime."""
    message: str
    kind: NotificationType
    created_at: float
    ttl_seconds: float

    @property
    def expires_at(self) -> float:
        return self.created_at + self.ttl_seconds

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at

    @property
    def icon(self) -> str:
        return "✓" if self.kind == NotificationType.SUCCESS else "✕"

    def render(self) -> str:
        return f"{self.icon} {self.message}"


@dataclass
class NotificationCenter:
    """
    Holds the current notification and a history of everything shown.

    Attributes:
        ttl_seconds: Lifetime of each notification
        clock: Returns the current time in seconds (injectable for tests)
    """
    ttl_seconds: float = 5.0
    clock: Callable[[], float] = time.monotonic
    history: list[Notification] = field(default_factory=list)
    _current: Optional[Notification] = field(default=None, repr=False)

    def show(self, message: str, kind: NotificationType) -> Notification:
        notification = Notification(
            message=message,
            kind=NotificationType(kind),
            created_at=self.clock(),
            ttl_seconds=self.ttl_seconds,
        )
        self._current = notification
        self.history.append(notification)
        return notification

    def success(self, message: str) -> Notification:
        return self.show(message, NotificationType.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.show(message, NotificationType.ERROR)

    @property
    def current(self) -> Optional[Notification]:
        """The live notification, or None once it has expired or been dismissed."""
        if self._current is not None and self._current.is_expired(self.clock()):
            self._current = None
        return self._current

    def dismiss(self) -> None:
        self._current = None
