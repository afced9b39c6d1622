import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, List, Optional, Sequence

import feedparser

from core.errors import FeedError
from core.http_client import HTTPClient
from core.identity import make_id
from core.models import Article, FeedSource
from core.text import clean_text, extract_img_from_html

logger = logging.getLogger(__name__)

MAX_PER_FEED = 15
FEED_TIMEOUT = 10.0


def _first_url(items: Any, *keys: str) -> Optional[str]:
    """First non-empty value of any of `keys` in a list of feedparser dicts."""
    if not items:
        return None
    if isinstance(items, dict):
        items = [items]
    for item in items:
        for key in keys:
            value = item.get(key)
            if value:
                return value
    return None


def extract_image(entry) -> Optional[str]:
    """
    Resolve an item's image: media:content, media:thumbnail, enclosure,
    itunes:image, then the first <img> in the item's HTML.
    """
    image = (
        _first_url(entry.get("media_content"), "url")
        or _first_url(entry.get("media_thumbnail"), "url")
        or _first_url(entry.get("enclosures"), "href", "url")
        or _first_url(entry.get("image"), "href", "url")
        or _first_url(entry.get("itunes_image"), "href")
    )
    if image:
        return image

    content = entry.get("content")
    html = content[0].get("value", "") if content else ""
    return extract_img_from_html(html or entry.get("summary", ""))


def parse_published(entry, now: datetime) -> datetime:
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if parsed:
        try:
            return datetime(*parsed[:6], tzinfo=timezone.utc)
        except (TypeError, ValueError):
            pass

    raw = entry.get("published") or entry.get("updated")
    if raw:
        try:
            published_at = parsedate_to_datetime(raw)
            if published_at.tzinfo is None:
                published_at = published_at.replace(tzinfo=timezone.utc)
            return published_at
        except (TypeError, ValueError):
            logger.warning(f"Could not parse date: {raw}")

    return now


def parse_entry(entry, source: FeedSource, now: datetime) -> Optional[Article]:
    """Map one feed item to an Article. Items without a title are dropped."""
    title = clean_text(entry.get("title"))
    if not title:
        return None

    content = entry.get("content")
    raw_summary = entry.get("summary") or (content[0].get("value") if content else "")
    url = entry.get("link") or ""

    return Article(
        id=make_id(url, title),
        title=title,
        summary=clean_text(raw_summary),
        url=url,
        source=source.source,
        category=source.category,
        published_at=parse_published(entry, now),
        language=source.language or "en",
        image=extract_image(entry),
    )


class FeedFetcher:
    def __init__(self, http_client: HTTPClient, max_per_feed: int = MAX_PER_FEED, timeout: float = FEED_TIMEOUT):
        self.http_client = http_client
        self.max_per_feed = max_per_feed
        self.timeout = timeout

    async def fetch_feed(self, source: FeedSource) -> List[Article]:
        content = await self.http_client.fetch_bytes(source.url, timeout=self.timeout)
        feed = feedparser.parse(content)
        if feed.get("bozo") and not feed.entries:
            raise FeedError(f"Unparseable feed {source.url}: {feed.get('bozo_exception')}")

        now = datetime.now(timezone.utc)
        articles = []
        for entry in feed.entries[:self.max_per_feed]:
            try:
                article = parse_entry(entry, source, now)
            except Exception as e:
                logger.error(f"Error parsing entry from {source.source}: {e}")
                continue
            if article:
                articles.append(article)

        logger.info(f"{source.source}: fetched {len(feed.entries)} items, kept {len(articles)}")
        return articles

    async def fetch_all(self, sources: Sequence[FeedSource]) -> List[Article]:
        """Fetch every source in turn. A failing source is logged and skipped."""
        all_articles = []
        for source in sources:
            logger.info(f"Fetching: {source.source}")
            try:
                all_articles.extend(await self.fetch_feed(source))
            except Exception as e:
                logger.error(f"{source.source} FAILED: {e}")
        return all_articles
