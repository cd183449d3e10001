# metadata/content_extractor.py

# Best-effort preview data from a fetched page:
# Title
# Preview image
# Description
# Each field has an ordered list of strategies, the first non-empty match wins.

import re
from typing import Callable, Dict, List, Optional

from bs4 import BeautifulSoup

Strategy = Callable[[BeautifulSoup], Optional[str]]


def meta_content(**attrs) -> Strategy:
    """Strategy reading the content attribute of the first <meta> matching attrs (case-insensitive)."""
    patterns = {k: re.compile(f"^{re.escape(v)}$", re.IGNORECASE) for k, v in attrs.items()}

    def strategy(soup: BeautifulSoup) -> Optional[str]:
        tag = soup.find("meta", attrs=patterns)
        if tag and tag.get("content"):
            return tag["content"]
        return None
    return strategy


def title_tag(soup: BeautifulSoup) -> Optional[str]:
    if soup.title and soup.title.string:
        return soup.title.string
    return None


TITLE_STRATEGIES: List[Strategy] = [
    meta_content(property="og:title"),
    meta_content(name="og:title"),
    title_tag,
]

IMAGE_STRATEGIES: List[Strategy] = [
    meta_content(property="og:image"),
    meta_content(name="og:image"),
]

DESCRIPTION_STRATEGIES: List[Strategy] = [
    meta_content(property="og:description"),
    meta_content(name="og:description"),
    meta_content(name="description"),
]


def first_match(soup: BeautifulSoup, strategies: List[Strategy]) -> Optional[str]:
    for strategy in strategies:
        value = strategy(soup)
        if value and value.strip():
            return " ".join(value.split())
    return None


def extract_preview(html: str) -> Dict[str, Optional[str]]:
    """
    Extract title, image and description from raw HTML.
    Missing fields are None; the caller decides on fallbacks.
    """
    if not html:
        return {"title": None, "image": None, "description": None}
    soup = BeautifulSoup(html, "html.parser")
    return {
        "title": first_match(soup, TITLE_STRATEGIES),
        "image": first_match(soup, IMAGE_STRATEGIES),
        "description": first_match(soup, DESCRIPTION_STRATEGIES),
    }
