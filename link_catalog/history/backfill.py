# history/backfill.py

"""
Dates pass: fill in `addedAt` for catalog entries that do not have one yet.

Entries that already carry a date are skipped without touching the GitHub
API. The catalog is saved after every entry, so a run cut short by rate
limits keeps everything resolved so far.
"""

from dataclasses import dataclass

from config import REVISION_DELAY_SECONDS, URL_DELAY_SECONDS
from link_catalog.history.date_resolver import resolve_added_date
from link_catalog.storage.catalog_store import load_catalog, save_catalog
from link_catalog.storage.models import Link
from utils.helpers import polite_delay
from utils.logger import setup_logger

logger = setup_logger("link_catalog.backfill")


@dataclass
class BackfillSummary:
    processed: int = 0
    skipped: int = 0
    resolved: int = 0
    approximated: int = 0

    @property
    def fetched(self) -> int:
        return self.resolved + self.approximated


def needs_date(link: Link, force: bool = False, retry_approximate: bool = False) -> bool:
    if force or not link.has_added_at:
        return True
    return retry_approximate and link.added_at_approximate


async def backfill_added_dates(
    catalog_path: str,
    history,
    force: bool = False,
    retry_approximate: bool = False,
    url_delay: float = URL_DELAY_SECONDS,
    revision_delay: float = REVISION_DELAY_SECONDS,
) -> BackfillSummary:
    """
    Resolve and persist `addedAt` for every entry that needs it.
    Raises CatalogNotFoundError when there is no catalog to work on.
    """
    catalog = await load_catalog(catalog_path, required=True)
    summary = BackfillSummary()
    urls = list(catalog)

    for url in urls:
        summary.processed += 1
        link = catalog[url]
        prefix = f"[{summary.processed}/{len(urls)}]"

        if not needs_date(link, force=force, retry_approximate=retry_approximate):
            summary.skipped += 1
            logger.info(f"{prefix} ⏭  Skipping (already has date): {url[:50]}...")
            continue

        logger.info(f"{prefix} Processing link:")
        resolution = await resolve_added_date(url, history, delay=revision_delay)
        if resolution.found:
            link.set_added_at(resolution.added_at)
            summary.resolved += 1
        else:
            # existing dates are kept, only empty entries get "now"
            if not link.has_added_at:
                link.set_added_at(resolution.added_at, approximate=True)
            summary.approximated += 1

        await save_catalog(catalog_path, catalog)
        await polite_delay(url_delay)

    logger.info(
        f"✅ Complete! Processed: {summary.processed}, skipped: {summary.skipped}, "
        f"fetched from git: {summary.fetched} ({summary.approximated} approximate)"
    )
    return summary
