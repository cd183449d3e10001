# metadata/resolver.py

# Turn one URL into a catalog Link:
# video hosts -> oEmbed title/author + derived thumbnail (see video.py)
# anything else -> page fetch + preview tags, hostname as the fallback title

from typing import Optional

from bs4.exceptions import ParserRejectedMarkup

from link_catalog.errors import FetchError
from link_catalog.extractor.link_parser import absolute_url, hostname
from link_catalog.metadata.content_extractor import extract_preview
from link_catalog.metadata.video import fetch_video_metadata, is_video_url
from link_catalog.storage.models import Link, VIDEO, WEBSITE
from utils.helpers import utc_now_iso
from utils.logger import setup_logger

logger = setup_logger("link_catalog.metadata")


def classify(url: str) -> str:
    return VIDEO if is_video_url(url) else WEBSITE


def fallback_title(url: str) -> str:
    return hostname(url) or url


async def fetch_website_metadata(url: str, fetcher) -> Link:
    """
    Always returns a Link so the URL counts as handled and is not refetched on
    every run; a failed fetch just leaves image/description empty.
    """
    preview = {"title": None, "image": None, "description": None}
    try:
        response = await fetcher.get(url)
        if not response.ok:
            logger.debug(f"{url} answered HTTP {response.status}, parsing body anyway")
        preview = extract_preview(response.text)
    except FetchError as e:
        logger.warning(f"Page fetch failed for {url}: {e}")
    except ParserRejectedMarkup as e:
        logger.warning(f"Unparsable page at {url}: {e}")

    image = preview["image"]
    return Link(
        url=url,
        type=WEBSITE,
        title=preview["title"] or fallback_title(url),
        image=absolute_url(image, url) if image else None,
        description=preview["description"] or "",
        fetched_at=utc_now_iso(),
    )


async def resolve_metadata(url: str, fetcher) -> Optional[Link]:
    """
    Resolve metadata for a single URL.
    Returns None only for video URLs without a usable video id.
    """
    if classify(url) == VIDEO:
        return await fetch_video_metadata(url, fetcher)
    return await fetch_website_metadata(url, fetcher)
