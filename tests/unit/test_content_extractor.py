"""
Unit tests for ContentExtractor.
"""
import pytest

from core.exceptions import ParseFailedException
from services.scraper.parser import ContentExtractor


class TestContentExtractor:
    """Test suite for ContentExtractor"""

    @pytest.fixture
    def extractor(self):
        return ContentExtractor()

    @pytest.fixture
    def sample_html(self):
        return (
            "<html><body>"
            '<div class="content">First</div>'
            "<p>ignored</p>"
            '<div class="content">Second <b>bold</b></div>'
            "</body></html>"
        )

    def test_concatenates_matches_in_document_order(self, extractor, sample_html):
        assert extractor.extract(sample_html, ".content") == "FirstSecond bold"

    def test_no_match_yields_empty_block(self, extractor, sample_html):
        assert extractor.extract(sample_html, ".does-not-exist") == ""

    def test_preserves_newlines(self, extractor):
        html = '<div id="main">line one\nline two\n</div>'
        assert extractor.extract(html, "#main") == "line one\nline two\n"

    def test_excludes_text_outside_selection(self, extractor, docs_html):
        block = extractor.extract(docs_html("Hello"), ".content")
        assert block == "Hello"
        assert "Last rendered" not in block

    def test_invalid_selector_is_parse_failure(self, extractor, sample_html):
        with pytest.raises(ParseFailedException):
            extractor.extract(sample_html, "div[[")

    def test_empty_document(self, extractor):
        assert extractor.extract("", ".content") == ""
