"""
Unit tests for PageFetcher.
"""
import asyncio
from unittest.mock import AsyncMock, Mock

import aiohttp
import pytest

from core.exceptions import FetchFailedException
from services.scraper.fetcher import PageFetcher


def _mock_session(response=None, get_side_effect=None):
    mock_session = AsyncMock()
    # session.get() returns a context manager, not a coroutine directly
    mock_session.get = Mock(side_effect=get_side_effect)
    mock_session.get.return_value.__aenter__ = AsyncMock(return_value=response)
    mock_session.get.return_value.__aexit__ = AsyncMock(return_value=None)
    return mock_session


class TestPageFetcher:
    """Test suite for PageFetcher"""

    @pytest.fixture
    def fetcher(self):
        return PageFetcher(total_timeout=5, connect_timeout=2)

    @pytest.mark.asyncio
    async def test_fetch_url_success(self, fetcher):
        mock_response = AsyncMock()
        mock_response.status = 200
        mock_response.raise_for_status = Mock()
        mock_response.text = AsyncMock(return_value="<html>Test</html>")
        session = _mock_session(mock_response)

        html = await fetcher.fetch_url(session, "https://ex.com/docs?nocache=1")

        assert html == "<html>Test</html>"
        session.get.assert_called_once()
        assert session.get.call_args.args[0] == "https://ex.com/docs?nocache=1"

    @pytest.mark.asyncio
    async def test_fetch_url_404(self, fetcher):
        mock_response = AsyncMock()
        mock_response.status = 404
        # raise_for_status is synchronous
        mock_response.raise_for_status = Mock(
            side_effect=aiohttp.ClientResponseError(
                request_info=Mock(),
                history=(),
                status=404,
                message="Not Found",
                headers={},
            )
        )
        session = _mock_session(mock_response)

        with pytest.raises(FetchFailedException) as exc_info:
            await fetcher.fetch_url(session, "https://ex.com/docs")
        assert exc_info.value.details["status"] == 404

    @pytest.mark.asyncio
    async def test_fetch_url_timeout(self, fetcher):
        session = _mock_session(get_side_effect=asyncio.TimeoutError())

        with pytest.raises(FetchFailedException):
            await fetcher.fetch_url(session, "https://ex.com/docs")

    @pytest.mark.asyncio
    async def test_fetch_url_connection_error(self, fetcher):
        session = _mock_session(get_side_effect=aiohttp.ClientConnectionError("refused"))

        with pytest.raises(FetchFailedException) as exc_info:
            await fetcher.fetch_url(session, "https://ex.com/docs")
        assert "refused" in str(exc_info.value)

    def test_timeout_configuration(self, fetcher):
        assert fetcher.timeout.total == 5
        assert fetcher.timeout.connect == 2
        assert "User-Agent" in fetcher.headers
