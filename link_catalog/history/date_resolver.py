# history/date_resolver.py

# When was a URL first added to the README?
# Walk one page of the file's commits oldest-first and return the author date
# of the first commit whose diff adds a line containing the URL.
# Fall back to "now" when the history cannot be read or the URL is not in it.

from dataclasses import dataclass

from config import REVISION_DELAY_SECONDS
from link_catalog.errors import FetchError
from utils.helpers import polite_delay, utc_now_iso
from utils.logger import setup_logger

logger = setup_logger("link_catalog.history")


@dataclass
class DateResolution:
    added_at: str
    found: bool
    sha: str | None = None


def patch_adds(patch: str, url: str) -> bool:
    """True if an added line (not the +++ file header) of the patch contains url."""
    for line in patch.splitlines():
        if line.startswith("+") and not line.startswith("+++") and url in line:
            return True
    return False


async def resolve_added_date(url: str, history, delay: float = REVISION_DELAY_SECONDS) -> DateResolution:
    logger.info(f"  Looking up git history for: {url[:60]}...")

    try:
        revisions = await history.list_revisions()
    except FetchError as e:
        logger.warning(f"    ✗ Error: {e}")
        return DateResolution(added_at=utc_now_iso(), found=False)

    # delivered newest-first, scanned oldest-first
    for revision in reversed(revisions):
        try:
            files = await history.changed_files(revision.sha)
        except FetchError as e:
            logger.debug(f"    Skipping {revision.sha[:7]}: {e}")
            files = []
        finally:
            await polite_delay(delay)

        for changed in files:
            if changed.filename == history.path and patch_adds(changed.patch, url):
                logger.info(f"    ✓ Found! Added on {revision.authored_at.split('T')[0]}")
                return DateResolution(added_at=revision.authored_at, found=True, sha=revision.sha)

    logger.info("    ⚠ Not found in recent history, using current date")
    return DateResolution(added_at=utc_now_iso(), found=False)
