import itertools
import json
import re
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import pytest

from core.exceptions import FetchFailedException
from services.components.target_resolver import TargetResolver

CACHE_BUST_RE = re.compile(r"[?&]nocache=[^&#]*")


# =============================================================================
# In-memory collaborators
# =============================================================================


class FakeFetcher:
    """Serves canned HTML per address; an Exception value is raised instead."""

    def __init__(self, pages: Optional[Dict[str, Union[str, Exception]]] = None):
        self.pages = dict(pages or {})
        self.requested: List[str] = []

    async def fetch_url(self, session, url: str) -> str:
        self.requested.append(url)
        address = CACHE_BUST_RE.sub("", url)
        page = self.pages.get(address)
        if page is None:
            raise FetchFailedException(f"Bad status fetching {url}", {"url": url, "status": 404})
        if isinstance(page, Exception):
            raise page
        return page


class FakeNotifier:
    def __init__(self, enabled: bool = True, succeed: bool = True):
        self.enabled = enabled
        self.succeed = succeed
        self.messages: List[str] = []

    def is_enabled(self) -> bool:
        return self.enabled

    async def notify(self, session, message: str) -> bool:
        self.messages.append(message)
        return self.succeed


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def fake_notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def make_notifier() -> Callable[..., FakeNotifier]:
    return FakeNotifier


@pytest.fixture
def token_generator() -> Callable[[], str]:
    """Deterministic cache-busting tokens: "1", "2", ..."""
    counter = itertools.count(1)
    return lambda: str(next(counter))


@pytest.fixture
def make_key() -> Callable[[str, str], str]:
    return TargetResolver.encode


@pytest.fixture
def store_file(tmp_path) -> Callable[[Dict[str, str]], Path]:
    """Writes a fingerprint store file and returns its path."""

    def _write(hashes: Dict[str, str], name: str = "hashes.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(hashes, indent=4), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def read_store() -> Callable[[Path], Dict[str, str]]:
    def _read(path: Path) -> Dict[str, str]:
        return json.loads(path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def docs_html() -> Callable[[str], str]:
    """Builds a page whose `.content` block holds the given text."""

    def _page(text: str) -> str:
        return f"""
        <html>
        <head><title>API Docs</title></head>
        <body>
            <nav>Home | Docs</nav>
            <div class="content">{text}</div>
            <footer>Last rendered at 12:00:01</footer>
        </body>
        </html>
        """

    return _page
