# link_catalog/reconciler.py

"""
Metadata pass: bring the catalog in line with the links currently in the README.

1. extract links from the README text
2. prune catalog entries whose URL left the README
3. queue the links the catalog has never seen
4. resolve them one by one with a single ResolverWorker
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from config import RESOLVE_DELAY_SECONDS
from link_catalog.extractor.link_parser import extract_links
from link_catalog.extractor.queue_manager import ResolveQueue
from link_catalog.metadata.resolver_worker import ResolverWorker
from link_catalog.storage.catalog_store import Catalog
from link_catalog.storage.models import Link
from utils.logger import setup_logger

logger = setup_logger("link_catalog.reconciler")

CatalogCallback = Callable[[Catalog], Awaitable[None]]


@dataclass
class ReconcileSummary:
    extracted: int = 0
    added: int = 0
    skipped: int = 0
    removed: int = 0


async def reconcile(
    document_text: str,
    catalog: Catalog,
    fetcher,
    delay: float = RESOLVE_DELAY_SECONDS,
    on_update: Optional[CatalogCallback] = None,
) -> tuple[Catalog, ReconcileSummary]:
    """
    Update `catalog` in place from the README text and return it with a summary.
    Known URLs are never re-resolved; `on_update` runs after every inserted link.
    """
    summary = ReconcileSummary()
    links = extract_links(document_text)
    summary.extracted = len(links)
    current = set(links)

    stale = [url for url in catalog if url not in current]
    for url in stale:
        del catalog[url]
        logger.info(f"🗑  Removed (no longer in README): {url}")
    summary.removed = len(stale)

    new_links = [url for url in links if url not in catalog]
    logger.info(f"Found {len(links)} links, {len(new_links)} new")

    async def handle_result(url: str, link: Optional[Link]):
        if link is None:
            summary.skipped += 1
            return
        catalog[url] = link
        summary.added += 1
        logger.info(f"✅ {link.type}: {link.title}")
        if on_update is not None:
            await on_update(catalog)

    if new_links:
        url_queue = ResolveQueue()
        url_queue.add_urls(new_links)
        url_queue.add_sentinel()
        worker = ResolverWorker(url_queue, fetcher, handle_result, delay=delay)
        await asyncio.create_task(worker.run())

    return catalog, summary
