import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

HOST_INTERVAL = 2.5


class HostRateLimiter:
    """
    Enforces a minimum gap between requests to the same host.

    One instance lives for one pipeline run and is shared by every enrichment
    task. The check-and-update for a host happens under that host's lock, so
    two tasks can't both see the host as idle. Other hosts are unaffected.
    """

    def __init__(
        self,
        min_interval: float = HOST_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request: Dict[str, float] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    @staticmethod
    def host_of(url: str) -> str:
        return urlparse(url).netloc.lower() or "unknown-host"

    async def wait(self, url: str) -> None:
        host = self.host_of(url)
        lock = self._locks.setdefault(host, asyncio.Lock())
        async with lock:
            last = self._last_request.get(host)
            if last is not None:
                remaining = self.min_interval - (self._clock() - last)
                if remaining > 0:
                    logger.debug(f"Waiting {remaining:.2f}s before hitting {host} again")
                    await self._sleep(remaining)
            self._last_request[host] = self._clock()
