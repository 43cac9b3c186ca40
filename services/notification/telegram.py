"""
Telegram notification channel.
"""
import asyncio
from typing import Dict, Optional

import aiohttp

from core import constants
from core.config import settings
from core.exceptions import TelegramAPIException
from core.logger import get_logger
from models.credentials import TelegramCredentials
from services.notification.base import NotificationChannel

logger = get_logger(__name__)


class TelegramNotifier(NotificationChannel):
    """Handles all Telegram-specific notification logic."""

    def __init__(
        self,
        credentials: Optional[TelegramCredentials] = None,
        retries: Optional[int] = None,
        retry_delay: float = constants.NOTIFY_RETRY_DELAY,
    ):
        self.credentials = credentials
        self.retries = retries or settings.NOTIFY_RETRIES
        self.retry_delay = retry_delay

    @property
    def channel_name(self) -> str:
        return "telegram"

    def is_enabled(self) -> bool:
        return self.credentials is not None

    @staticmethod
    async def _read_json(resp: aiohttp.ClientResponse, method: str) -> Dict:
        """Decodes a Telegram reply, which must be a JSON object."""
        try:
            body = await resp.json(content_type=None)
        except ValueError as e:
            raise TelegramAPIException(
                f"Telegram API {method} returned invalid JSON", {"status": resp.status, "error": str(e)}
            ) from e
        if not isinstance(body, dict):
            raise TelegramAPIException(
                f"Telegram API {method} returned an unexpected body", {"status": resp.status, "body": repr(body)[:200]}
            )
        return body

    async def _send_telegram_api(
        self,
        session: aiohttp.ClientSession,
        method: str,
        payload: dict,
    ) -> Dict:
        """
        Sends a Telegram API request with rate limit handling (429).

        Raises:
            TelegramAPIException: non-retryable status or retries exhausted
        """
        url = f"{constants.TELEGRAM_API_BASE}/bot{self.credentials.token}/{method}"
        last_error = None

        for attempt in range(self.retries):
            try:
                async with session.post(url, json=payload) as resp:
                    if resp.status == 200:
                        return await self._read_json(resp, method)
                    if resp.status == 429:
                        resp_json = await self._read_json(resp, method)
                        parameters = resp_json.get("parameters")
                        retry_after = parameters.get("retry_after", 5) if isinstance(parameters, dict) else 5
                        if not isinstance(retry_after, (int, float)):
                            retry_after = 5
                        logger.warning(
                            f"[NOTIFIER] Telegram 429 (Too Many Requests). Waiting {retry_after}s..."
                        )
                        last_error = "rate limited"
                        await asyncio.sleep(retry_after + 1)
                        continue
                    raise TelegramAPIException(
                        f"Telegram API {method} failed",
                        {"status": resp.status, "body": (await resp.text())[:200]},
                    )
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = str(e) or type(e).__name__
                logger.warning(f"[NOTIFIER] Telegram API request error: {last_error}")
                if attempt < self.retries - 1:
                    await asyncio.sleep(self.retry_delay)

        raise TelegramAPIException(
            f"Telegram API {method} failed after {self.retries} attempts",
            {"error": last_error},
        )

    async def send_message(self, session: aiohttp.ClientSession, text: str) -> bool:
        if not self.is_enabled():
            return False

        payload = {
            "chat_id": self.credentials.chat_id,
            "text": text,
            "disable_web_page_preview": True,
        }
        result = await self._send_telegram_api(session, "sendMessage", payload)
        if not result.get("ok", False):
            raise TelegramAPIException(
                "Telegram rejected the message", {"description": result.get("description")}
            )
        return True
