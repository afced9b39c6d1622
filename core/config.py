import os
from dataclasses import dataclass
from typing import Optional


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


@dataclass
class Settings:
    max_per_feed: int = 15
    max_total: int = 500
    max_per_category: int = 50
    max_export: int = 100

    feed_timeout: float = 10.0
    page_timeout: float = 15.0
    translate_timeout: float = 8.0

    enable_enrichment: bool = True
    enrich_use_readability: bool = False
    enrich_min_summary: int = 50
    enrich_max_chars: int = 3000
    enrich_host_interval: float = 2.5
    enrich_concurrency: int = 2

    translate_concurrency: int = 3
    translate_stagger: float = 0.15

    store_backend: str = "sqlite"
    sqlite_path: str = "news.db"
    firebase_credentials: Optional[str] = None
    firebase_database_url: Optional[str] = None

    export_dir: Optional[str] = None
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash-lite"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment. Call load_dotenv() first to pick up a .env file."""
        return cls(
            max_per_feed=_env_int("MAX_PER_FEED", cls.max_per_feed),
            max_total=_env_int("MAX_TOTAL", cls.max_total),
            max_per_category=_env_int("MAX_PER_CATEGORY", cls.max_per_category),
            max_export=_env_int("MAX_EXPORT", cls.max_export),
            feed_timeout=_env_float("FEED_TIMEOUT", cls.feed_timeout),
            page_timeout=_env_float("PAGE_TIMEOUT", cls.page_timeout),
            translate_timeout=_env_float("TRANSLATE_TIMEOUT", cls.translate_timeout),
            enable_enrichment=_env_bool("ENABLE_ENRICHMENT", "true"),
            enrich_use_readability=_env_bool("ENRICH_USE_READABILITY", "false"),
            enrich_min_summary=_env_int("ENRICH_MIN_SUMMARY", cls.enrich_min_summary),
            enrich_max_chars=_env_int("ENRICH_MAX_CHARS", cls.enrich_max_chars),
            enrich_host_interval=_env_float("ENRICH_HOST_INTERVAL", cls.enrich_host_interval),
            enrich_concurrency=_env_int("ENRICH_CONCURRENCY", cls.enrich_concurrency),
            translate_concurrency=_env_int("TRANSLATE_CONCURRENCY", cls.translate_concurrency),
            translate_stagger=_env_float("TRANSLATE_STAGGER", cls.translate_stagger),
            store_backend=os.getenv("STORE_BACKEND", cls.store_backend),
            sqlite_path=os.getenv("SQLITE_PATH", cls.sqlite_path),
            firebase_credentials=os.getenv("FIREBASE_CREDENTIALS"),
            firebase_database_url=os.getenv("FIREBASE_DATABASE_URL"),
            export_dir=os.getenv("EXPORT_DIR") or None,
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", cls.gemini_model),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )
