import asyncio
import logging
from typing import Awaitable, Callable, List, Sequence

import httpx

from core.errors import TranslationError
from core.http_client import HTTPClient
from core.models import Article

logger = logging.getLogger(__name__)

TARGET_LANGUAGE = "te"


class TranslationProvider:
    """A single translation backend. Raises TranslationError on any failure."""

    name = "provider"
    max_length = 1000

    async def translate(self, text: str, source: str, target: str = TARGET_LANGUAGE) -> str:
        raise NotImplementedError


class GoogleTranslateProvider(TranslationProvider):
    """Unofficial Google Translate endpoint (no API key)."""

    name = "google"
    URL = "https://translate.googleapis.com/translate_a/single"

    def __init__(self, http_client: HTTPClient, timeout: float = 8.0, max_length: int = 1000):
        self.http_client = http_client
        self.timeout = timeout
        self.max_length = max_length

    async def translate(self, text, source, target=TARGET_LANGUAGE):
        params = {"client": "gtx", "sl": source, "tl": target, "dt": "t", "q": text[:self.max_length]}
        try:
            data = await self.http_client.fetch_json(self.URL, timeout=self.timeout, params=params)
        except (httpx.HTTPError, ValueError) as e:
            raise TranslationError(f"Google Translate request failed: {e}") from e

        # [[["translated", "original", ...], ...], ...]: one entry per sentence
        try:
            translated = "".join(part[0] for part in data[0] if part and part[0])
        except (TypeError, IndexError, KeyError) as e:
            raise TranslationError(f"Malformed Google Translate response: {e}") from e

        if not translated:
            raise TranslationError("Empty response from Google Translate")
        return translated


class MyMemoryProvider(TranslationProvider):
    """MyMemory free API. Stricter length limit and a small daily quota."""

    name = "mymemory"
    URL = "https://api.mymemory.translated.net/get"

    def __init__(self, http_client: HTTPClient, timeout: float = 8.0, max_length: int = 500):
        self.http_client = http_client
        self.timeout = timeout
        self.max_length = max_length

    async def translate(self, text, source, target=TARGET_LANGUAGE):
        params = {"q": text[:self.max_length], "langpair": f"{source}|{target}"}
        try:
            data = await self.http_client.fetch_json(self.URL, timeout=self.timeout, params=params)
        except (httpx.HTTPError, ValueError) as e:
            raise TranslationError(f"MyMemory request failed: {e}") from e

        if not isinstance(data, dict):
            raise TranslationError("Malformed MyMemory response")
        if str(data.get("responseStatus")) != "200":
            raise TranslationError(f"MyMemory returned status {data.get('responseStatus')}")
        response_data = data.get("responseData")
        if not isinstance(response_data, dict):
            raise TranslationError(f"Malformed MyMemory responseData: {response_data!r}")
        translated = response_data.get("translatedText")
        if not translated:
            raise TranslationError("Empty response from MyMemory")
        return translated


class Translator:
    def __init__(
        self,
        providers: Sequence[TranslationProvider],
        max_concurrency: int = 3,
        stagger_delay: float = 0.15,
        max_input_length: int = 1000,
        fallback_delay: float = 0.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if not providers:
            raise ValueError("Translator needs at least one provider")
        self.providers = list(providers)
        self.max_concurrency = max_concurrency
        self.stagger_delay = stagger_delay
        self.max_input_length = max_input_length
        self.fallback_delay = fallback_delay
        self._sleep = sleep
        self.fallbacks = 0  # texts that went untranslated because every provider failed

    async def translate_text(self, text: str, source: str = "en") -> str:
        """
        Translate to Telugu, trying each provider in order.
        Never raises: if every provider fails the truncated source text is returned.
        """
        if not text or not text.strip():
            return ""
        if source == TARGET_LANGUAGE:
            return text

        clean = text.strip()[:self.max_input_length]
        for position, provider in enumerate(self.providers):
            if position > 0 and self.fallback_delay:
                await self._sleep(self.fallback_delay)
            try:
                return await provider.translate(clean, source)
            except TranslationError as e:
                if position + 1 < len(self.providers):
                    logger.warning(f"{e}, trying {self.providers[position + 1].name}...")
                else:
                    logger.warning(str(e))
            except Exception as e:
                logger.exception(f"{provider.name} crashed: {e}")

        logger.error(f"All translators failed for: \"{clean[:50]}...\"")
        self.fallbacks += 1
        return clean

    async def translate_article(self, article: Article) -> Article:
        if article.language == TARGET_LANGUAGE:
            article.title_te = article.title
            article.summary_te = article.summary
            article.translated = False
            return article

        article.title_te, article.summary_te = await asyncio.gather(
            self.translate_text(article.title, article.language),
            self.translate_text(article.summary, article.language),
        )
        # Means "attempted"; title_te == title after a total failure
        article.translated = True
        return article

    async def translate_all(self, articles: List[Article]) -> List[Article]:
        logger.info(f"Translating {len(articles)} articles to Telugu...")
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _run(article: Article, index: int) -> Article:
            if article.language == TARGET_LANGUAGE:
                return await self.translate_article(article)
            # Spread request starts instead of bursting every provider call at once
            if self.stagger_delay:
                await self._sleep(index * self.stagger_delay)
            async with semaphore:
                return await self.translate_article(article)

        translated = await asyncio.gather(*(_run(a, i) for i, a in enumerate(articles)))

        attempted = sum(1 for a in translated if a.translated)
        logger.info(
            f"Translated: {attempted} | Already Telugu: {len(translated) - attempted} | "
            f"Fell back to source text: {self.fallbacks}"
        )
        return list(translated)
