"""
Content loading from files and URLs.

The injector works on content markup. This module reads it from:
- Local HTML files
- Web URLs (fetched with requests, main content container extracted
  with BeautifulSoup)
"""

import logging
import re
from pathlib import Path
from typing import Union
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Default headers for web requests
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

# Page chrome that never counts as content
NON_CONTENT_TAGS = ["script", "style", "nav", "footer", "aside", "noscript", "header"]


class ContentExtractionError(Exception):
    """Raised when content extraction fails."""
    pass


def is_url(source: str) -> bool:
    """Check whether a source string is an http(s) URL."""
    parsed = urlparse(source)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def extract_main_content(html: str) -> str:
    """
    Extract the inner markup of a page's main content container.

    Looks for main, article, a content-like div, then body. Page chrome
    (navigation, footer, scripts) is removed first.

    Args:
        html: Full page HTML.

    Returns:
        Inner markup of the content container.
    """
    soup = BeautifulSoup(html, "lxml")

    for tag in soup.find_all(NON_CONTENT_TAGS):
        tag.decompose()

    container = (
        soup.find("main")
        or soup.find("article")
        or soup.find("div", class_=re.compile(r"content|post|entry|article|body", re.I))
        or soup.find("div", id=re.compile(r"content|post|entry|article|main", re.I))
        or soup.body
        or soup
    )
    return container.decode_contents().strip()


def fetch_url_content(url: str, timeout: int = 30) -> str:
    """
    Fetch a page and return its main content markup.

    Args:
        url: Page URL.
        timeout: Request timeout in seconds.

    Returns:
        Inner markup of the page's main content container.

    Raises:
        ContentExtractionError: If the page cannot be fetched or is empty.
    """
    if not is_url(url):
        raise ContentExtractionError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, headers=DEFAULT_HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ContentExtractionError(f"Failed to fetch URL {url}: {e}")

    markup = extract_main_content(response.text)
    if not markup:
        raise ContentExtractionError(f"No content found at {url}")

    logger.info(f"Fetched {len(markup)} characters of content from {url}")
    return markup


def load_html_file(file_path: Union[str, Path]) -> str:
    """
    Read content markup from a local file.

    Full documents are reduced to their body markup; fragments are
    returned as they are.

    Raises:
        ContentExtractionError: If the file is missing or unreadable.
    """
    path = Path(file_path)

    if not path.exists():
        raise ContentExtractionError(f"File not found: {file_path}")

    try:
        markup = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ContentExtractionError(f"Failed to read {file_path}: {e}")

    if re.search(r"<html[\s>]|<body[\s>]", markup, re.I):
        markup = extract_main_content(markup)
    return markup


def load_content(source: str) -> str:
    """
    Load content markup from a URL or a local file path.

    Raises:
        ContentExtractionError: If the content cannot be loaded.
    """
    if is_url(source):
        return fetch_url_content(source)
    return load_html_file(source)
