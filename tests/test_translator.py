"""Tests for core.translator module."""

import asyncio

import httpx
import pytest

from core.errors import TranslationError
from core.translator import GoogleTranslateProvider, MyMemoryProvider, TranslationProvider, Translator


async def _no_sleep(seconds: float) -> None:
    return None


class FakeProvider(TranslationProvider):
    def __init__(self, name: str, result=None, fail: bool = False) -> None:
        self.name = name
        self.result = result
        self.fail = fail
        self.calls = []

    async def translate(self, text, source, target="te"):
        self.calls.append((text, source, target))
        if self.fail:
            raise TranslationError(f"{self.name} down")
        return self.result if self.result is not None else f"{self.name}:{text}"


def _translator(*providers, **kwargs) -> Translator:
    kwargs.setdefault("stagger_delay", 0)
    kwargs.setdefault("sleep", _no_sleep)
    return Translator(list(providers), **kwargs)


class TestGoogleTranslateProvider:
    def test_joins_segments(self, mock_http) -> None:
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json=[[["బడ్జెట్ ", "Budget ", None, None, 10], ["ప్రకటించారు", "announced", None, None, 10]], None, "en"])

        result = asyncio.run(GoogleTranslateProvider(mock_http(handler)).translate("Budget announced", "en"))

        assert result == "బడ్జెట్ ప్రకటించారు"
        assert seen["client"] == "gtx"
        assert seen["sl"] == "en"
        assert seen["tl"] == "te"
        assert seen["q"] == "Budget announced"

    def test_truncates_input(self, mock_http) -> None:
        seen = {}

        def handler(request):
            seen["q"] = request.url.params["q"]
            return httpx.Response(200, json=[[["x", "y"]]])

        asyncio.run(GoogleTranslateProvider(mock_http(handler), max_length=10).translate("a" * 50, "en"))
        assert seen["q"] == "a" * 10

    def test_http_error_raises(self, mock_http) -> None:
        provider = GoogleTranslateProvider(mock_http(lambda r: httpx.Response(429)))
        with pytest.raises(TranslationError):
            asyncio.run(provider.translate("text", "en"))

    def test_timeout_raises(self, mock_http) -> None:
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(TranslationError):
            asyncio.run(GoogleTranslateProvider(mock_http(handler)).translate("text", "en"))

    def test_malformed_payload_raises(self, mock_http) -> None:
        provider = GoogleTranslateProvider(mock_http(lambda r: httpx.Response(200, json={"unexpected": True})))
        with pytest.raises(TranslationError):
            asyncio.run(provider.translate("text", "en"))

    def test_non_json_raises(self, mock_http) -> None:
        provider = GoogleTranslateProvider(mock_http(lambda r: httpx.Response(200, text="<html>captcha</html>")))
        with pytest.raises(TranslationError):
            asyncio.run(provider.translate("text", "en"))

    def test_empty_translation_raises(self, mock_http) -> None:
        provider = GoogleTranslateProvider(mock_http(lambda r: httpx.Response(200, json=[[[None, "text"]]])))
        with pytest.raises(TranslationError):
            asyncio.run(provider.translate("text", "en"))


class TestMyMemoryProvider:
    def test_returns_translated_text(self, mock_http) -> None:
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json={"responseStatus": 200, "responseData": {"translatedText": "వార్తలు"}})

        result = asyncio.run(MyMemoryProvider(mock_http(handler)).translate("news " * 200, "en"))

        assert result == "వార్తలు"
        assert seen["langpair"] == "en|te"
        assert len(seen["q"]) == 500

    def test_bad_status_raises(self, mock_http) -> None:
        provider = MyMemoryProvider(mock_http(lambda r: httpx.Response(
            200, json={"responseStatus": 429, "responseData": {"translatedText": "QUOTA EXCEEDED"}}
        )))
        with pytest.raises(TranslationError):
            asyncio.run(provider.translate("text", "en"))

    def test_missing_text_raises(self, mock_http) -> None:
        provider = MyMemoryProvider(mock_http(lambda r: httpx.Response(200, json={"responseStatus": 200, "responseData": {}})))
        with pytest.raises(TranslationError):
            asyncio.run(provider.translate("text", "en"))

    def test_non_dict_response_data_raises(self, mock_http) -> None:
        provider = MyMemoryProvider(mock_http(lambda r: httpx.Response(200, json={"responseStatus": 200, "responseData": "QUOTA"})))
        with pytest.raises(TranslationError):
            asyncio.run(provider.translate("text", "en"))


class TestTranslateText:
    def test_primary_success(self) -> None:
        primary, secondary = FakeProvider("google"), FakeProvider("mymemory")
        result = asyncio.run(_translator(primary, secondary).translate_text("Hello", "en"))
        assert result == "google:Hello"
        assert secondary.calls == []

    def test_falls_back_to_secondary(self) -> None:
        primary = FakeProvider("google", fail=True)
        secondary = FakeProvider("mymemory", result="నమస్కారం")
        translator = _translator(primary, secondary)

        assert asyncio.run(translator.translate_text("Hello", "en")) == "నమస్కారం"
        assert translator.fallbacks == 0

    def test_all_fail_returns_truncated_source(self) -> None:
        translator = _translator(FakeProvider("google", fail=True), FakeProvider("mymemory", fail=True), max_input_length=5)
        result = asyncio.run(translator.translate_text("  Hello world  ", "en"))
        assert result == "Hello"
        assert translator.fallbacks == 1

    def test_empty_text(self) -> None:
        provider = FakeProvider("google")
        assert asyncio.run(_translator(provider).translate_text("   ", "en")) == ""
        assert provider.calls == []

    def test_telugu_source_passthrough(self) -> None:
        provider = FakeProvider("google")
        assert asyncio.run(_translator(provider).translate_text("వార్త", "te")) == "వార్త"
        assert provider.calls == []

    def test_waits_before_fallback(self) -> None:
        sleeps = []

        async def record(seconds: float) -> None:
            sleeps.append(seconds)

        translator = _translator(FakeProvider("google", fail=True), FakeProvider("mymemory"), sleep=record, fallback_delay=0.5)
        asyncio.run(translator.translate_text("Hello", "en"))
        assert sleeps == [0.5]

    def test_malformed_secondary_falls_back_to_source(self, mock_http) -> None:
        def handler(request):
            if request.url.host == "translate.googleapis.com":
                return httpx.Response(503)
            return httpx.Response(200, json={"responseStatus": 200, "responseData": "QUOTA"})

        http = mock_http(handler)
        translator = _translator(GoogleTranslateProvider(http), MyMemoryProvider(http))

        assert asyncio.run(translator.translate_text("Hello", "en")) == "Hello"
        assert translator.fallbacks == 1

    def test_provider_bug_degrades_to_source(self) -> None:
        class BrokenProvider(TranslationProvider):
            name = "broken"

            async def translate(self, text, source, target="te"):
                raise KeyError("translatedText")

        secondary = FakeProvider("mymemory", result="నమస్కారం")
        assert asyncio.run(_translator(BrokenProvider(), secondary).translate_text("Hello", "en")) == "నమస్కారం"

        translator = _translator(BrokenProvider())
        assert asyncio.run(translator.translate_text("Hello", "en")) == "Hello"
        assert translator.fallbacks == 1


class TestTranslateArticle:
    def test_telugu_article_is_noop(self, make_article) -> None:
        provider = FakeProvider("google")
        article = make_article(title="బడ్జెట్", summary="సారాంశం", language="te")

        result = asyncio.run(_translator(provider).translate_article(article))

        assert result.title_te == "బడ్జెట్"
        assert result.summary_te == "సారాంశం"
        assert result.translated is False
        assert provider.calls == []

    def test_english_article_translated(self, make_article) -> None:
        article = make_article(title="Budget", summary="Details")
        result = asyncio.run(_translator(FakeProvider("google")).translate_article(article))

        assert result.title_te == "google:Budget"
        assert result.summary_te == "google:Details"
        assert result.translated is True

    def test_total_failure_still_marks_attempted(self, make_article) -> None:
        article = make_article(title="Budget", summary="Details")
        result = asyncio.run(_translator(FakeProvider("google", fail=True)).translate_article(article))

        assert result.title_te == "Budget"
        assert result.summary_te == "Details"
        assert result.translated is True

    def test_uses_article_language_as_source(self, make_article) -> None:
        provider = FakeProvider("google")
        asyncio.run(_translator(provider).translate_article(make_article(title="नमस्ते", summary="", language="hi")))
        assert provider.calls == [("नमस्ते", "hi", "te")]


class TestTranslateAll:
    def test_mixed_batch(self, make_article) -> None:
        english = make_article(url="https://a.example/1", title="Budget")
        telugu = make_article(url="https://b.example/2", title="బడ్జెట్", language="te")

        result = asyncio.run(_translator(FakeProvider("google")).translate_all([english, telugu]))

        assert [a.translated for a in result] == [True, False]
        assert result[1].title_te == "బడ్జెట్"

    def test_concurrency_is_capped(self, make_article) -> None:
        in_flight = 0
        peak = 0

        class SlowProvider(TranslationProvider):
            name = "slow"

            async def translate(self, text, source, target="te"):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return text

        articles = [make_article(url=f"https://a.example/{i}", summary="") for i in range(10)]
        asyncio.run(_translator(SlowProvider(), max_concurrency=3).translate_all(articles))

        # Empty summaries skip the provider, so one call per article
        assert peak == 3

    def test_stagger_is_proportional_to_position(self, make_article) -> None:
        sleeps = []

        async def record(seconds: float) -> None:
            sleeps.append(seconds)

        articles = [make_article(url=f"https://a.example/{i}") for i in range(3)]
        translator = Translator([FakeProvider("google")], stagger_delay=0.15, sleep=record)
        asyncio.run(translator.translate_all(articles))

        assert sorted(sleeps) == pytest.approx([0.0, 0.15, 0.30])

    def test_requires_a_provider(self) -> None:
        with pytest.raises(ValueError):
            Translator([])
