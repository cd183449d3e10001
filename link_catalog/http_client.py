# link_catalog/http_client.py

"""
The purpose of this module is:
Create and manage a single aiohttp session per run
Reuse it for README, GitHub API, oEmbed and page requests
Turn transport failures into FetchError so callers can fall back
"""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import aiohttp

from config import HTTP_TIMEOUT_SECONDS, USER_AGENT
from link_catalog.errors import FetchError
from utils.logger import setup_logger

logger = setup_logger("link_catalog.http")


@dataclass
class HttpResponse:
    url: str
    status: int
    text: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """Decode the body as JSON; malformed bodies raise FetchError."""
        try:
            return json.loads(self.text)
        except ValueError as e:
            raise FetchError(self.url, f"invalid JSON body ({e})", self.status) from e

    def raise_for_status(self) -> "HttpResponse":
        if not self.ok:
            raise FetchError(self.url, f"HTTP {self.status}", self.status)
        return self


class HttpFetcher:
    """
    Thin GET-only client. The session is launched lazily and shared
    across every request of a run; call close() when the run is done.
    """

    def __init__(self, timeout: float = HTTP_TIMEOUT_SECONDS, user_agent: str = USER_AGENT):
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = {"User-Agent": user_agent}
        self._session: Optional[aiohttp.ClientSession] = None

    async def get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    async def get(self, url: str, params: Optional[Dict[str, str]] = None,
                  headers: Optional[Dict[str, str]] = None) -> HttpResponse:
        session = await self.get_session()
        try:
            async with session.get(url, params=params, headers=headers) as resp:
                text = await resp.text(errors="replace")
                logger.debug(f"GET {resp.url} -> {resp.status}")
                return HttpResponse(
                    url=url,
                    status=resp.status,
                    text=text,
                    headers={k.lower(): v for k, v in resp.headers.items()},
                )
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError, ValueError) as e:
            raise FetchError(url, f"{type(e).__name__}: {e}") from e

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
