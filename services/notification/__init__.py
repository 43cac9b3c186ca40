"""
Notification channels.
"""

from services.notification.base import NotificationChannel
from services.notification.telegram import TelegramNotifier

__all__ = ["NotificationChannel", "TelegramNotifier"]
