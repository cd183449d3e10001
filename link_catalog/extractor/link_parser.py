# extractor/link_parser.py

# Pull absolute URLs out of README text.
# Markdown wraps links in parentheses and prose puts punctuation after them,
# so trailing ",;.)" are stripped before deduplication.

import re
from typing import List
from urllib.parse import urljoin, urlparse

URL_PATTERN = re.compile(r"https?://[^\s)]+")
TRAILING_PUNCTUATION = ",;.)"


def clean_url(url: str) -> str:
    """Remove trailing punctuation left over from prose/markdown formatting."""
    return url.rstrip(TRAILING_PUNCTUATION)


def extract_links(text: str) -> List[str]:
    """
    Return every http(s) URL in the text, cleaned, deduplicated, in first-seen order.
    """
    if not text:
        return []
    seen = set()
    links = []
    for match in URL_PATTERN.findall(text):
        url = clean_url(match)
        # "https://" followed only by punctuation
        if not URL_PATTERN.fullmatch(url):
            continue
        if url not in seen:
            seen.add(url)
            links.append(url)
    return links


def hostname(url: str) -> str:
    """
    Lowercased host of a URL without port, e.g. 'https://Example.com:8080/a' -> 'example.com'.
    Returns '' for strings urlparse cannot split.
    """
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def absolute_url(link: str, base_url: str) -> str:
    """
    Convert relative URL to absolute.
    Example: '/og.png' -> 'https://example.com/og.png'
    """
    return urljoin(base_url, link)
