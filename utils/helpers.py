# utils/helpers.py
# Small helpers for pacing and timestamps.

import asyncio
import datetime

async def polite_delay(seconds: float):
    """
    Sleep for a fixed delay between outbound requests.
    A non-positive delay returns immediately (tests run with 0).
    """
    if seconds > 0:
        await asyncio.sleep(seconds)
    return seconds


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with a trailing Z."""
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
