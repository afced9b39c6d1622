import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from core.models import Article
from core.store import ArticleStore

logger = logging.getLogger(__name__)

MAX_TOTAL = 500
MAX_PER_CATEGORY = 50


@dataclass
class PersistResult:
    articles: List[Article]
    meta: Dict[str, Any]
    views: Dict[str, List[Article]]


def sort_newest_first(articles: List[Article]) -> List[Article]:
    return sorted(articles, key=lambda a: a.published_at, reverse=True)


def merge_articles(existing: List[Article], new: List[Article], max_total: int = MAX_TOTAL) -> List[Article]:
    """
    Overlay the new batch on the existing collection by id, then keep the
    newest `max_total`. Existing articles absent from the batch are kept as-is.
    """
    merged: Dict[str, Article] = {a.id: a for a in existing}
    for article in new:
        merged[article.id] = article
    return sort_newest_first(list(merged.values()))[:max_total]


def _distinct(values) -> List[str]:
    return list(dict.fromkeys(v for v in values if v))


def build_meta(articles: List[Article], feeds_count: Optional[int] = None, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    meta = {
        "last_updated": now.isoformat(),
        "total_articles": len(articles),
        "categories": _distinct(a.category for a in articles),
        "sources": _distinct(a.source for a in articles),
    }
    if feeds_count is not None:
        meta["feeds_count"] = feeds_count
    return meta


def build_category_views(articles: List[Article], max_per_category: int = MAX_PER_CATEGORY) -> Dict[str, List[Article]]:
    views: Dict[str, List[Article]] = {}
    for article in sort_newest_first(articles):
        items = views.setdefault(article.category, [])
        if len(items) < max_per_category:
            items.append(article)
    return views


def persist_articles(
    store: ArticleStore,
    articles: List[Article],
    max_total: int = MAX_TOTAL,
    max_per_category: int = MAX_PER_CATEGORY,
    feeds_count: Optional[int] = None,
) -> PersistResult:
    """
    Read-merge-sort-truncate against the store, then commit the collection,
    the derived views and the meta record in one write. StoreError propagates
    to the caller and leaves the previous state in place.
    """
    existing = store.read_all()
    logger.info(f"Existing collection: {len(existing)} articles")

    merged = merge_articles(existing, articles, max_total)
    views = build_category_views(merged, max_per_category)
    meta = build_meta(merged, feeds_count)
    store.commit(merged, views, meta)

    logger.info(f"Persisted {len(merged)} articles across {len(views)} categories")
    return PersistResult(articles=merged, meta=meta, views=views)
