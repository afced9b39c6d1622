"""Tests for core.text module."""

from core.text import clean_text, extract_img_from_html


class TestCleanText:
    def test_strips_tags_and_decodes_entities(self) -> None:
        assert clean_text("<b>Hi</b> &amp; bye") == "Hi & bye"

    def test_empty_string(self) -> None:
        assert clean_text("") == ""

    def test_none(self) -> None:
        assert clean_text(None) == ""

    def test_decodes_all_common_entities(self) -> None:
        assert clean_text("&lt;tag&gt; &quot;quoted&quot; it&#39;s") == "<tag> \"quoted\" it's"

    def test_collapses_whitespace_and_trims(self) -> None:
        assert clean_text("  line one\n\n\tline   two  ") == "line one line two"

    def test_encoded_markup_is_not_stripped(self) -> None:
        # Tags are removed before entities are decoded
        assert clean_text("&lt;b&gt;bold&lt;/b&gt;") == "<b>bold</b>"

    def test_preserves_telugu_text(self) -> None:
        assert clean_text("<p>బడ్జెట్  ప్రకటన</p>") == "బడ్జెట్ ప్రకటన"


class TestExtractImgFromHtml:
    def test_returns_first_img_src(self) -> None:
        html = '<p>x</p><img class="a" src="https://img.example/1.jpg"><img src="https://img.example/2.jpg">'
        assert extract_img_from_html(html) == "https://img.example/1.jpg"

    def test_single_quotes_and_uppercase(self) -> None:
        assert extract_img_from_html("<IMG SRC='https://img.example/a.png'>") == "https://img.example/a.png"

    def test_returns_none_without_img(self) -> None:
        assert extract_img_from_html("<p>no image</p>") is None

    def test_returns_none_for_empty(self) -> None:
        assert extract_img_from_html(None) is None
