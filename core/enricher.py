import asyncio
import logging
from typing import List, Optional, Sequence

from core.extract import ExtractionStrategy, default_strategies, extract_content, extract_meta_image, parse_html
from core.http_client import HTTPClient
from core.models import Article
from core.rate_limit import HostRateLimiter
from core.text import clean_text

logger = logging.getLogger(__name__)


class ContentEnricher:
    def __init__(
        self,
        http_client: HTTPClient,
        rate_limiter: HostRateLimiter,
        strategies: Optional[Sequence[ExtractionStrategy]] = None,
        max_concurrency: int = 2,
        min_summary_length: int = 50,
        max_summary_length: int = 3000,
        min_extracted_length: int = 20,
        timeout: float = 15.0,
    ):
        self.http_client = http_client
        self.rate_limiter = rate_limiter
        self.strategies = list(strategies) if strategies is not None else default_strategies()
        self.min_summary_length = min_summary_length
        self.max_summary_length = max_summary_length
        self.min_extracted_length = min_extracted_length
        self.timeout = timeout
        self._semaphore = asyncio.Semaphore(max_concurrency)

    def needs_enrichment(self, article: Article) -> bool:
        return bool(article.url) and len(article.summary) < self.min_summary_length

    async def enrich_article(self, article: Article) -> Article:
        """
        Fetch the article page and replace a too-short summary with the
        extracted body text. Any failure leaves the article untouched.
        """
        async with self._semaphore:
            await self.rate_limiter.wait(article.url)
            try:
                html = await self.http_client.fetch(article.url, timeout=self.timeout)
            except Exception as e:
                logger.warning(f"Failed to enrich article {article.url}: {e}")
                return article

        try:
            soup = parse_html(html)
            text, strategy = extract_content(soup, self.strategies)
            summary = clean_text(text)[:self.max_summary_length]
            if len(summary) <= self.min_extracted_length:
                logger.debug(f"No usable content for {article.url}")
                return article

            article.summary = summary
            if not article.image:
                article.image = extract_meta_image(soup)
            logger.info(f"Enriched '{article.title[:50]}' via {strategy} ({len(summary)} chars)")
        except Exception as e:
            logger.warning(f"Failed to extract content from {article.url}: {e}")
        return article

    async def enrich_all(self, articles: List[Article]) -> List[Article]:
        candidates = [a for a in articles if self.needs_enrichment(a)]
        if not candidates:
            return articles

        logger.info(f"Enriching {len(candidates)} articles with short summaries...")
        await asyncio.gather(*(self.enrich_article(a) for a in candidates))
        return articles
