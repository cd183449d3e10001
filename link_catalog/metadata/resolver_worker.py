# metadata/resolver_worker.py

# Pulling a URL from the queue
# Resolving its metadata (via resolver)
# Handing the result to the reconciler callback
# Pausing a fixed delay before the next URL

from typing import Awaitable, Callable, Optional

from config import RESOLVE_DELAY_SECONDS
from link_catalog.extractor.queue_manager import ResolveQueue
from link_catalog.metadata.resolver import resolve_metadata
from link_catalog.storage.models import Link
from utils.helpers import polite_delay
from utils.logger import setup_logger

logger = setup_logger("link_catalog.worker")

ResultHandler = Callable[[str, Optional[Link]], Awaitable[None]]


class ResolverWorker:
    """
    The only consumer of a ResolveQueue. Resolutions run one after another
    in queue order, with a fixed pause after each one.
    """

    def __init__(self, url_queue: ResolveQueue, fetcher, on_result: ResultHandler,
                 delay: float = RESOLVE_DELAY_SECONDS):
        self.url_queue = url_queue
        self.fetcher = fetcher
        self.on_result = on_result
        self.delay = delay
        self.resolved = 0

    async def run(self):
        """Run worker loop until shutdown sentinel received"""
        while True:
            url = await self.url_queue.get_url()
            if url is None:  # Sentinel for shutdown
                self.url_queue.task_done()
                break
            try:
                self.resolved += 1
                logger.info(f"[{self.resolved}] Resolving: {url}")
                link = await resolve_metadata(url, self.fetcher)
                await self.on_result(url, link)
                await polite_delay(self.delay)
            finally:
                self.url_queue.task_done()

        logger.info(f"Resolver finished ({self.resolved} links)")
