import logging
from typing import List

from core.models import Article

logger = logging.getLogger(__name__)


def deduplicate_articles(articles: List[Article]) -> List[Article]:
    """Keep the first article seen for each id, preserving order."""
    seen = set()
    unique = []
    for article in articles:
        if article.id in seen:
            logger.debug(f"Duplicate article skipped: {article.title}")
            continue
        seen.add(article.id)
        unique.append(article)
    return unique
