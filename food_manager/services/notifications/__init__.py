"""
Notification module.

Exports the transient notification center used by the application
coordinator.
"""

from food_manager.services.notifications.base import (
    Notification,
    NotificationCenter,
    NotificationType,
)

__all__ = [
    "Notification",
    "NotificationCenter",
    "NotificationType",
]
