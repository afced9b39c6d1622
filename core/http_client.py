import logging
import random
import httpx
from typing import Any, Dict, Optional
from fake_useragent import UserAgent

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0
HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
JSON_ACCEPT = "application/json"


class HTTPClient:
    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        ua = UserAgent()
        # Small pool picked once per run, rotated per request
        self.user_agents = [ua.chrome, ua.firefox, ua.safari, ua.edge]
        self.client = client or httpx.AsyncClient(http2=False, follow_redirects=True)

    def _get_headers(self, accept: str = HTML_ACCEPT):
        return {
            "User-Agent": random.choice(self.user_agents),
            "Accept": accept,
            "Accept-Language": "en-US,en;q=0.5",
            "DNT": "1",
            "Upgrade-Insecure-Requests": "1",
        }

    async def _get(self, url: str, accept: str, params: Optional[Dict[str, str]], timeout: float) -> httpx.Response:
        try:
            response = await self.client.get(
                url, headers=self._get_headers(accept), params=params, timeout=timeout
            )
            response.raise_for_status()
            return response
        except httpx.HTTPError as e:
            logger.debug(f"Failed to fetch {url}: {e}")
            raise

    async def fetch(self, url: str, timeout: float = DEFAULT_TIMEOUT, params: Optional[Dict[str, str]] = None) -> str:
        """
        Fetches the body of a URL with a rotated User-Agent.
        Raises httpx.HTTPError on network errors, timeouts and non-2xx statuses.
        There are no retries; callers decide how to degrade.
        """
        response = await self._get(url, HTML_ACCEPT, params, timeout)
        logger.debug(f"Fetched {url} ({response.status_code})")
        return response.text

    async def fetch_bytes(self, url: str, timeout: float = DEFAULT_TIMEOUT) -> bytes:
        """Raw body, for parsers that sniff the encoding themselves (XML prolog)."""
        response = await self._get(url, HTML_ACCEPT, None, timeout)
        return response.content

    async def fetch_json(self, url: str, timeout: float = DEFAULT_TIMEOUT, params: Optional[Dict[str, str]] = None) -> Any:
        """Like fetch, but decodes JSON. A malformed body raises ValueError."""
        response = await self._get(url, JSON_ACCEPT, params, timeout)
        return response.json()

    async def close(self):
        await self.client.aclose()
