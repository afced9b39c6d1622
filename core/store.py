import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import sqlite_utils
from sqlite_utils.db import NotFoundError

from core.errors import StoreError
from core.models import Article

logger = logging.getLogger(__name__)

META_KEY = "info"


class ArticleStore(ABC):
    """
    What the merge step needs from a persistence backend. Whole-collection
    replacement must be atomic from a reader's point of view.
    """

    @abstractmethod
    def read_all(self) -> List[Article]:
        pass

    @abstractmethod
    def replace_all(self, articles: List[Article]) -> None:
        pass

    @abstractmethod
    def read_meta(self) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def write_meta(self, meta: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def write_views(self, views: Dict[str, List[Article]]) -> None:
        """Replace the per-category views."""
        pass

    @abstractmethod
    def commit(self, articles: List[Article], views: Dict[str, List[Article]], meta: Dict[str, Any]) -> None:
        """Replace articles, views and meta together. Either all three land or none do."""
        pass


class SqliteStore(ArticleStore):
    def __init__(self, db_path: str = "news.db", db: Optional[sqlite_utils.Database] = None):
        """
        Row-per-article store on SQLite.

        Args:
            db_path: Path to SQLite database file
            db: An already open database (tests pass an in-memory one)
        """
        self.db_path = db_path
        try:
            self.db = db if db is not None else sqlite_utils.Database(db_path)
            self.init_db()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open database {db_path}: {e}") from e
        if db is None:
            logger.info(f"SQLite store ready: {db_path}")

    def init_db(self):
        self.db["news"].create({
            "id": str,
            "title": str,
            "summary": str,
            "title_te": str,
            "summary_te": str,
            "url": str,
            "image": str,
            "published_at": str,  # ISO string, UTC
            "source": str,
            "category": str,
            "language": str,
            "translated": int,  # 0 or 1
        }, pk="id", if_not_exists=True)
        self.db["meta"].create({"key": str, "value": str}, pk="key", if_not_exists=True)
        self.db["category_views"].create({
            "category": str,
            "count": int,
            "articles": str,  # JSON list
        }, pk="category", if_not_exists=True)

    def read_all(self) -> List[Article]:
        try:
            rows = list(self.db["news"].rows_where(order_by="published_at desc"))
        except sqlite3.Error as e:
            raise StoreError(f"Error reading articles: {e}") from e
        return [Article.from_dict(row) for row in rows]

    def _news_rows(self, articles: List[Article]) -> List[Dict[str, Any]]:
        rows = []
        for article in articles:
            row = article.to_dict()
            row["translated"] = int(article.translated)
            rows.append(row)
        return rows

    def replace_all(self, articles: List[Article]) -> None:
        # Readers see either the old collection or the new one
        try:
            with self.db.atomic():
                self.db["news"].delete_where()
                self.db["news"].insert_all(self._news_rows(articles), pk="id")
        except sqlite3.Error as e:
            raise StoreError(f"Error replacing articles: {e}") from e

    def read_meta(self) -> Optional[Dict[str, Any]]:
        try:
            row = self.db["meta"].get(META_KEY)
        except NotFoundError:
            return None
        except sqlite3.Error as e:
            raise StoreError(f"Error reading meta: {e}") from e
        return json.loads(row["value"])

    def write_meta(self, meta: Dict[str, Any]) -> None:
        try:
            with self.db.atomic():
                self.db["meta"].upsert({"key": META_KEY, "value": json.dumps(meta, ensure_ascii=False)}, pk="key")
        except sqlite3.Error as e:
            raise StoreError(f"Error writing meta: {e}") from e

    def read_view(self, category: str) -> List[Article]:
        try:
            row = self.db["category_views"].get(category)
        except NotFoundError:
            return []
        return [Article.from_dict(item) for item in json.loads(row["articles"])]

    def write_views(self, views: Dict[str, List[Article]]) -> None:
        rows = [
            {
                "category": category,
                "count": len(items),
                "articles": json.dumps([a.to_dict() for a in items], ensure_ascii=False),
            }
            for category, items in views.items()
        ]
        try:
            with self.db.atomic():
                self.db["category_views"].delete_where()
                self.db["category_views"].insert_all(rows, pk="category")
        except sqlite3.Error as e:
            raise StoreError(f"Error writing category views: {e}") from e

    def commit(self, articles: List[Article], views: Dict[str, List[Article]], meta: Dict[str, Any]) -> None:
        # The nested writes become savepoints of this one transaction
        try:
            with self.db.atomic():
                self.replace_all(articles)
                self.write_views(views)
                self.write_meta(meta)
        except sqlite3.Error as e:
            raise StoreError(f"Error committing run: {e}") from e


def open_store(settings) -> ArticleStore:
    """Build the backend named by settings.store_backend."""
    backend = settings.store_backend.lower()
    if backend == "sqlite":
        return SqliteStore(settings.sqlite_path)
    if backend == "firebase":
        from core.firebase_store import FirebaseStore
        return FirebaseStore(settings.firebase_credentials, settings.firebase_database_url)
    raise StoreError(f"Unknown store backend: {settings.store_backend}")
