import asyncio
from typing import Optional

import aiohttp

from core.config import settings
from core.exceptions import FetchFailedException
from core.logger import get_logger

logger = get_logger(__name__)


class PageFetcher:
    """
    Handles network operations for fetching watched documents.
    """

    def __init__(
        self,
        total_timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        self.timeout = aiohttp.ClientTimeout(
            total=total_timeout or settings.FETCH_TIMEOUT,
            connect=connect_timeout or settings.CONNECT_TIMEOUT,
        )
        self.headers = {
            "User-Agent": user_agent or settings.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        }

    async def create_session(self) -> aiohttp.ClientSession:
        """Creates and returns a new aiohttp session."""
        connector = aiohttp.TCPConnector(limit=10, limit_per_host=5)
        return aiohttp.ClientSession(
            timeout=self.timeout,
            connector=connector,
            headers=self.headers,
        )

    async def fetch_url(self, session: aiohttp.ClientSession, url: str) -> str:
        """
        Fetches URL content. Any non-2xx status is a failure.

        Raises:
            FetchFailedException: transport error, timeout or bad status
        """
        try:
            async with session.get(url, timeout=self.timeout) as resp:
                resp.raise_for_status()
                return await resp.text()
        except asyncio.TimeoutError as e:
            raise FetchFailedException(f"Timeout fetching {url}", {"url": url}) from e
        except aiohttp.ClientResponseError as e:
            raise FetchFailedException(
                f"Bad status fetching {url}", {"url": url, "status": e.status}
            ) from e
        except aiohttp.ClientError as e:
            raise FetchFailedException(
                f"HTTP error fetching {url}", {"url": url, "error": str(e)}
            ) from e
        except (UnicodeDecodeError, LookupError) as e:
            raise FetchFailedException(
                f"Undecodable response from {url}", {"url": url, "error": str(e)}
            ) from e
