"""
Notification service - fans a message out to every enabled channel.
Delivery failures are logged and never propagate to the run.
"""
from typing import List, Optional

import aiohttp

from core.exceptions import NotificationException
from core.logger import get_logger
from models.credentials import TelegramCredentials
from services.notification.base import NotificationChannel
from services.notification.telegram import TelegramNotifier

logger = get_logger(__name__)


class NotificationService:
    """
    Unified notification service that delegates to channel implementations.
    """

    def __init__(self, channels: Optional[List[NotificationChannel]] = None):
        self.channels = channels or []

    @classmethod
    def from_credentials(cls, telegram: Optional[TelegramCredentials]) -> "NotificationService":
        channels: List[NotificationChannel] = []
        if telegram:
            channels.append(TelegramNotifier(telegram))
        return cls(channels)

    def is_enabled(self) -> bool:
        return any(channel.is_enabled() for channel in self.channels)

    async def notify(self, session: Optional[aiohttp.ClientSession], message: str) -> bool:
        """
        Returns True if at least one channel delivered the message.
        """
        delivered = False
        for channel in self.channels:
            if not channel.is_enabled():
                continue
            try:
                if await channel.send_message(session, message):
                    delivered = True
                    logger.debug(f"[NOTIFIER] Delivered via {channel.channel_name}")
            except NotificationException as e:
                logger.error(f"[NOTIFIER] {channel.channel_name} delivery failed: {e}")
        return delivered
