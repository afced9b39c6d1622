import logging
import asyncio
import sys
from dotenv import load_dotenv

from core.config import Settings
from core.errors import StoreError
from core.http_client import HTTPClient
from core.pipeline import run_pipeline
from core.store import open_store
from feeds.sources import FEEDS


# Load env
load_dotenv()

settings = Settings.from_env()

# Setup logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def main() -> int:
    logger.info("📰 Starting Telugu News Scraper...")
    logger.info(f"Sources: {len(FEEDS)} feeds | Store: {settings.store_backend}")

    http = HTTPClient()
    try:
        store = open_store(settings)
        summary = await run_pipeline(settings, store, http, FEEDS)
    except StoreError as e:
        logger.error(f"💥 Fatal store error: {e}")
        return 1
    finally:
        await http.close()

    logger.info("✅ Scraper finished successfully!")
    logger.info(f"   Fetched: {summary.fetched} | Unique: {summary.unique}")
    logger.info(f"   Translated: {summary.translated} | Fell back: {summary.translation_fallbacks}")
    logger.info(f"   Persisted: {summary.persisted} | Categories: {', '.join(summary.meta.get('categories', []))}")
    if summary.exported:
        logger.info(f"   Exported: {', '.join(summary.exported)}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
