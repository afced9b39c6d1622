import logging
from typing import List, Optional

import google.generativeai as genai

from core.errors import TranslationError
from core.translator import TARGET_LANGUAGE, TranslationProvider

logger = logging.getLogger(__name__)

LANGUAGE_NAMES = {"en": "English", "te": "Telugu", "hi": "Hindi"}

DEFAULT_MODELS = [
    "gemini-2.0-flash-lite",      # high throughput on the free tier
    "gemini-2.5-flash-lite",
    "gemma-3-27b-it",
]


class GeminiProvider(TranslationProvider):
    """
    Last-resort translator backed by Gemini. Only enabled when an API key is
    configured. Tries each model in order before giving up.
    """

    name = "gemini"

    def __init__(self, api_key: str, model: Optional[str] = None, max_length: int = 1000):
        genai.configure(api_key=api_key)
        # Preferred model first, then the defaults as fallbacks
        self.models: List[str] = list(dict.fromkeys(([model] if model else []) + DEFAULT_MODELS))
        self.max_length = max_length
        self._model_cache = {}

    def _model(self, name: str):
        if name not in self._model_cache:
            self._model_cache[name] = genai.GenerativeModel(name)
        return self._model_cache[name]

    async def translate(self, text, source, target=TARGET_LANGUAGE):
        prompt = (
            f"Translate the following {LANGUAGE_NAMES.get(source, source)} news text into "
            f"{LANGUAGE_NAMES.get(target, target)}. Reply with ONLY the translation.\n\n"
            f"{text[:self.max_length]}"
        )

        for model_name in self.models:
            try:
                response = await self._model(model_name).generate_content_async(prompt)
                translated = (response.text or "").strip()
            except Exception as e:
                logger.warning(f"Model {model_name} failed: {str(e)[:100]}")
                continue
            if translated:
                return translated
            logger.warning(f"Model {model_name} returned empty response, trying next...")

        raise TranslationError("All Gemini models failed")
