# extractor/queue_manager.py

# URLs waiting for metadata resolution
# Avoiding duplicates within one run
# Shutdown sentinel for the single resolver worker

import asyncio
from typing import Iterable, Optional


class ResolveQueue:
    def __init__(self):
        self.queue = asyncio.Queue()
        self.enqueued = set()

    def add_url(self, url: str) -> bool:
        """Enqueue a URL once per run. Returns False if it was already queued."""
        if url in self.enqueued:
            return False
        self.queue.put_nowait(url)
        self.enqueued.add(url)
        return True

    def add_urls(self, urls: Iterable[str]) -> int:
        return sum(1 for url in urls if self.add_url(url))

    def add_sentinel(self):
        """Enqueue a sentinel (None) so the worker stops after the pending URLs."""
        self.queue.put_nowait(None)

    async def get_url(self) -> Optional[str]:
        """Get the next URL, or None once the sentinel is reached"""
        return await self.queue.get()

    def task_done(self):
        self.queue.task_done()


# self.queue → URLs to resolve, consumed strictly in insertion order.
# self.enqueued → guarantees each URL is resolved at most once per run.
# add_sentinel → the worker exits when it dequeues None.
