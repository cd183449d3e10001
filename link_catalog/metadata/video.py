# metadata/video.py

# Video links (YouTube) are recognised by host.
# The thumbnail is derived from the video id, only title/author need a request.

import re
from typing import Optional

from config import (
    OEMBED_URL,
    THUMBNAIL_URL_TEMPLATE,
    VIDEO_HOSTS,
    VIDEO_PLACEHOLDER_TITLE,
    WATCH_URL_TEMPLATE,
)
from link_catalog.errors import FetchError
from link_catalog.extractor.link_parser import hostname
from link_catalog.storage.models import Link, VIDEO
from utils.helpers import utc_now_iso
from utils.logger import setup_logger

logger = setup_logger("link_catalog.metadata.video")

VIDEO_ID_PATTERNS = [
    re.compile(r"youtube\.com/watch\?(?:[^#\s]*&)?v=([A-Za-z0-9_-]{11})"),
    re.compile(r"youtu\.be/([A-Za-z0-9_-]{11})"),
    re.compile(r"youtube\.com/embed/([A-Za-z0-9_-]{11})"),
    re.compile(r"youtube\.com/shorts/([A-Za-z0-9_-]{11})"),
]


def is_video_url(url: str) -> bool:
    host = hostname(url)
    if host in VIDEO_HOSTS:
        return True
    return host.endswith(".youtube.com")


def extract_video_id(url: str) -> Optional[str]:
    """
    Return the 11-character video id from watch/short-link/embed/shorts URLs, else None.
    """
    for pattern in VIDEO_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def thumbnail_url(video_id: str) -> str:
    return THUMBNAIL_URL_TEMPLATE.format(video_id=video_id)


async def fetch_video_metadata(url: str, fetcher) -> Optional[Link]:
    """
    Build a video Link. Returns None only when no video id can be extracted;
    oEmbed failures fall back to the placeholder title without an author.
    """
    video_id = extract_video_id(url)
    if not video_id:
        logger.warning(f"⏭  No video id in {url}, skipping")
        return None

    title = VIDEO_PLACEHOLDER_TITLE
    author = None
    try:
        response = await fetcher.get(
            OEMBED_URL,
            params={"url": WATCH_URL_TEMPLATE.format(video_id=video_id), "format": "json"},
        )
        data = response.json()
        if not isinstance(data, dict):
            raise FetchError(OEMBED_URL, "oEmbed response is not an object", response.status)
        title = _text(data.get("title")) or VIDEO_PLACEHOLDER_TITLE
        author = _text(data.get("author_name")) or None
    except FetchError as e:
        logger.warning(f"oEmbed lookup failed for {video_id}: {e}")

    return Link(
        url=url,
        type=VIDEO,
        title=title,
        thumbnail=thumbnail_url(video_id),
        author=author,
        fetched_at=utc_now_iso(),
    )
