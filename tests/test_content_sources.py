"""Tests for content source loading functionality."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import requests

from term_injector.content_sources import (
    ContentExtractionError,
    extract_main_content,
    fetch_url_content,
    is_url,
    load_content,
    load_html_file,
)


class TestExtractMainContent:
    """Tests for main content extraction."""

    def test_main_element_used(self, sample_html_page: str):
        markup = extract_main_content(sample_html_page)

        assert "<h1>A Guide to Better Writing</h1>" in markup
        assert "Navigation content" not in markup
        assert "Footer content" not in markup
        assert "tracking" not in markup

    def test_content_div_fallback(self):
        html = '<html><body><div class="sidebar">Side</div><div class="post-content"><p>Body</p></div></body></html>'
        assert extract_main_content(html) == "<p>Body</p>"


class TestFetchUrlContent:
    """Tests for URL content fetching."""

    def test_invalid_url(self):
        """Test that invalid URLs raise errors."""
        with pytest.raises(ContentExtractionError, match="Invalid URL"):
            fetch_url_content("not-a-url")

    @patch("term_injector.content_sources.requests.get")
    def test_fetch_url_extracts_content(self, mock_get, sample_html_page: str):
        """Test that the main content markup is returned."""
        mock_response = Mock()
        mock_response.text = sample_html_page
        mock_response.raise_for_status = Mock()
        mock_get.return_value = mock_response

        markup = fetch_url_content("https://example.com/page")

        assert "important skill" in markup
        assert "Navigation content" not in markup

    @patch("term_injector.content_sources.requests.get")
    def test_fetch_failure(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(ContentExtractionError, match="Failed to fetch URL"):
            fetch_url_content("https://example.com/page")

    @patch("term_injector.content_sources.requests.get")
    def test_empty_page(self, mock_get):
        mock_response = Mock()
        mock_response.text = "<html><body></body></html>"
        mock_response.raise_for_status = Mock()
        mock_get.return_value = mock_response

        with pytest.raises(ContentExtractionError, match="No content found"):
            fetch_url_content("https://example.com/empty")


class TestLoadHtmlFile:
    """Tests for local file loading."""

    def test_fragment_returned_as_is(self, tmp_path: Path):
        path = tmp_path / "fragment.html"
        path.write_text("<p>Just a fragment.</p>", encoding="utf-8")

        assert load_html_file(path) == "<p>Just a fragment.</p>"

    def test_full_document_reduced(self, tmp_path: Path, sample_html_page: str):
        path = tmp_path / "page.html"
        path.write_text(sample_html_page, encoding="utf-8")

        markup = load_html_file(path)
        assert markup.startswith("<h1>")
        assert "Footer content" not in markup

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ContentExtractionError, match="File not found"):
            load_html_file(tmp_path / "missing.html")


class TestLoadContent:
    """Tests for the generic load_content function."""

    @pytest.mark.parametrize("source,expected", [
        ("https://example.com", True),
        ("http://example.com/post", True),
        ("article.html", False),
        ("ftp://example.com/file", False),
    ])
    def test_is_url(self, source, expected):
        assert is_url(source) is expected

    @patch("term_injector.content_sources.requests.get")
    def test_load_content_url(self, mock_get, sample_html_page: str):
        mock_response = Mock()
        mock_response.text = sample_html_page
        mock_response.raise_for_status = Mock()
        mock_get.return_value = mock_response

        assert "important skill" in load_content("https://example.com/page")

    def test_load_content_file(self, tmp_path: Path):
        path = tmp_path / "fragment.html"
        path.write_text("<p>Local.</p>", encoding="utf-8")

        assert load_content(str(path)) == "<p>Local.</p>"
