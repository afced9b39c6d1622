import json
import logging
from typing import Any, Callable, Dict, List, Optional

import firebase_admin
from firebase_admin import credentials, db

from core.errors import StoreError
from core.models import Article
from core.store import ArticleStore

logger = logging.getLogger(__name__)

NEWS_PATH = "news"
META_PATH = "meta/info"
VIEWS_PATH = "categories"


class FirebaseStore(ArticleStore):
    """
    Realtime Database backend. A run is committed with one multi-path
    update() on the root, which the database applies atomically.
    """

    def __init__(
        self,
        credentials_path: Optional[str] = None,
        database_url: Optional[str] = None,
        reference: Optional[Callable[[str], Any]] = None,
    ):
        if reference is None:
            self._init_app(credentials_path, database_url)
            reference = db.reference
        self._reference = reference

    @staticmethod
    def _init_app(credentials_path: Optional[str], database_url: Optional[str]):
        if firebase_admin._apps:
            return
        if not credentials_path:
            raise StoreError("FIREBASE_CREDENTIALS is not set")
        try:
            with open(credentials_path, encoding="utf-8") as f:
                service_account = json.load(f)
            project_id = service_account.get("project_id")
            if not project_id:
                raise StoreError("Firebase credentials missing project_id")
            url = database_url or f"https://{project_id}-default-rtdb.firebaseio.com"
            firebase_admin.initialize_app(credentials.Certificate(service_account), {"databaseURL": url})
        except (OSError, ValueError) as e:
            raise StoreError(f"Firebase init failed: {e}") from e
        logger.info("Firebase Realtime Database initialized")

    def read_all(self) -> List[Article]:
        try:
            snapshot = self._reference(NEWS_PATH).get() or {}
        except Exception as e:
            raise StoreError(f"Error reading {NEWS_PATH}: {e}") from e
        return [Article.from_dict(item) for item in snapshot.values()]

    def replace_all(self, articles: List[Article]) -> None:
        try:
            self._reference(NEWS_PATH).set({a.id: a.to_dict() for a in articles})
        except Exception as e:
            raise StoreError(f"Firebase push failed: {e}") from e
        logger.info(f"Pushed to Firebase. Now tracking {len(articles)} total articles.")

    def read_meta(self) -> Optional[Dict[str, Any]]:
        try:
            return self._reference(META_PATH).get()
        except Exception as e:
            raise StoreError(f"Error reading {META_PATH}: {e}") from e

    def write_meta(self, meta: Dict[str, Any]) -> None:
        try:
            self._reference(META_PATH).set(meta)
        except Exception as e:
            raise StoreError(f"Meta push failed: {e}") from e



    def _views_payload(self, views: Dict[str, List[Article]]) -> Dict[str, Any]:
        return {category: [a.to_dict() for a in items] for category, items in views.items()}

    def write_views(self, views: Dict[str, List[Article]]) -> None:
        try:
            self._reference(VIEWS_PATH).set(self._views_payload(views))
        except Exception as e:
            raise StoreError(f"Category views push failed: {e}") from e

    def commit(self, articles: List[Article], views: Dict[str, List[Article]], meta: Dict[str, Any]) -> None:
        # Multi-path update: the database applies all three paths or none
        update = {
            NEWS_PATH: {a.id: a.to_dict() for a in articles},
            VIEWS_PATH: self._views_payload(views),
            META_PATH: meta,
        }
        try:
            self._reference("/").update(update)
        except Exception as e:
            raise StoreError(f"Firebase push failed: {e}") from e
        logger.info(f"Pushed to Firebase. Now tracking {len(articles)} total articles.")
