"""
Protocol-based interfaces for Dependency Injection.
The change detector only talks to these, so tests can swap in in-memory fakes.
"""
from typing import Optional, Protocol, runtime_checkable

import aiohttp


@runtime_checkable
class IContentFetcher(Protocol):
    """Interface for document retrieval."""

    async def fetch_url(self, session: Optional[aiohttp.ClientSession], url: str) -> str:
        """Returns the response body. Raises FetchFailedException on failure."""
        ...


@runtime_checkable
class IContentExtractor(Protocol):
    """Interface for sub-region extraction."""

    def extract(self, html: str, rule: str) -> str:
        """Returns the concatenated text of every match. Raises ParseFailedException."""
        ...


@runtime_checkable
class INotifier(Protocol):
    """Interface for change notifications."""

    def is_enabled(self) -> bool:
        """Checks if at least one channel can deliver messages."""
        ...

    async def notify(self, session: Optional[aiohttp.ClientSession], message: str) -> bool:
        """Delivers a message. Returns True on success; never raises."""
        ...
