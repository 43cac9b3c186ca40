"""
Notification System - Strategy Pattern Implementation

This module defines the abstract interface for notification channels.
"""
from abc import ABC, abstractmethod
from typing import Optional

import aiohttp


class NotificationChannel(ABC):
    """
    Abstract base class for notification channels (Strategy Pattern).

    New channels can be added without modifying NotificationService.

    Usage:
        class SlackChannel(NotificationChannel):
            async def send_message(self, session, text):
                # Slack-specific implementation
                pass
    """

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Returns the name of this notification channel (e.g., 'telegram')."""
        pass

    @abstractmethod
    async def send_message(self, session: Optional[aiohttp.ClientSession], text: str) -> bool:
        """
        Send a plain-text message through this channel.

        Returns:
            True if delivered

        Raises:
            NotificationException: when delivery fails for good
        """
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        """
        Check if this channel is enabled (has required configuration).
        """
        pass
