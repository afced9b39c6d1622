import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from core.config import Settings
from core.dedup import deduplicate_articles
from core.enricher import ContentEnricher
from core.export import write_json_snapshot
from core.extract import default_strategies
from core.fetcher import FeedFetcher
from core.http_client import HTTPClient
from core.models import FeedSource
from core.persist import persist_articles
from core.rate_limit import HostRateLimiter
from core.store import ArticleStore
from core.translator import GoogleTranslateProvider, MyMemoryProvider, TranslationProvider, Translator

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    fetched: int = 0
    unique: int = 0
    translated: int = 0
    translation_fallbacks: int = 0
    persisted: int = 0
    meta: Dict = field(default_factory=dict)
    exported: List[str] = field(default_factory=list)


def build_providers(http: HTTPClient, settings: Settings) -> List[TranslationProvider]:
    providers: List[TranslationProvider] = [
        GoogleTranslateProvider(http, timeout=settings.translate_timeout),
        MyMemoryProvider(http, timeout=settings.translate_timeout),
    ]
    if settings.gemini_api_key:
        from core.gemini import GeminiProvider
        providers.append(GeminiProvider(settings.gemini_api_key, model=settings.gemini_model))
    return providers


def build_translator(http: HTTPClient, settings: Settings) -> Translator:
    return Translator(
        build_providers(http, settings),
        max_concurrency=settings.translate_concurrency,
        stagger_delay=settings.translate_stagger,
    )


async def run_pipeline(
    settings: Settings,
    store: ArticleStore,
    http: HTTPClient,
    sources: Sequence[FeedSource],
    translator: Optional[Translator] = None,
) -> RunSummary:
    """
    One full run: fetch, dedup, enrich, translate, merge into the store.
    Only StoreError (or a bug) escapes; everything upstream degrades per article.
    """
    summary = RunSummary()

    # 1. Fetch
    fetcher = FeedFetcher(http, max_per_feed=settings.max_per_feed, timeout=settings.feed_timeout)
    raw = await fetcher.fetch_all(sources)
    summary.fetched = len(raw)
    logger.info(f"Total fetched: {len(raw)} articles")

    # 2. Deduplicate
    articles = deduplicate_articles(raw)
    summary.unique = len(articles)
    logger.info(f"After dedup: {len(articles)} unique articles")

    # 3. Enrich short summaries
    if settings.enable_enrichment:
        enricher = ContentEnricher(
            http,
            HostRateLimiter(settings.enrich_host_interval),
            strategies=default_strategies(settings.enrich_use_readability),
            max_concurrency=settings.enrich_concurrency,
            min_summary_length=settings.enrich_min_summary,
            max_summary_length=settings.enrich_max_chars,
            timeout=settings.page_timeout,
        )
        articles = await enricher.enrich_all(articles)

    # 4. Translate
    translator = translator or build_translator(http, settings)
    articles = await translator.translate_all(articles)
    summary.translated = sum(1 for a in articles if a.translated)
    summary.translation_fallbacks = translator.fallbacks

    # 5. Merge and persist
    result = persist_articles(
        store,
        articles,
        max_total=settings.max_total,
        max_per_category=settings.max_per_category,
        feeds_count=len(sources),
    )
    summary.persisted = len(result.articles)
    summary.meta = result.meta

    if settings.export_dir:
        summary.exported = write_json_snapshot(
            settings.export_dir, result.articles, result.views, result.meta, max_export=settings.max_export
        )

    return summary
