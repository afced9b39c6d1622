"""
Main-content extraction for article pages.

Extraction walks an ordered list of strategies and keeps the first one that
produces text. New site layouts are supported by adding a strategy (or a
selector pattern) to the list; the enricher never changes.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup
from readability import Document

logger = logging.getLogger(__name__)

MAX_PARAGRAPHS = 15

CONTAINER_PATTERNS = [
    "article-body",
    "articlebody",
    "article-content",
    "article__content",
    "story-body",
    "story-content",
    "story-details",
    "post-content",
    "entry-content",
    "content-body",
    "main-content",
]

META_IMAGE_KEYS = ["og:image", "og:image:url", "twitter:image", "twitter:image:src"]


def _element_text(element) -> str:
    paragraphs = [p.get_text(" ", strip=True) for p in element.find_all(["p", "h2", "h3"])]
    paragraphs = [p for p in paragraphs if p]
    if paragraphs:
        return " ".join(paragraphs)
    return element.get_text(" ", strip=True)


class ExtractionStrategy:
    name = "base"

    def extract(self, soup: BeautifulSoup) -> Optional[str]:
        raise NotImplementedError


class TagStrategy(ExtractionStrategy):
    """Text of the first element with the given tag, e.g. <article>."""

    def __init__(self, tag: str = "article"):
        self.tag = tag
        self.name = f"tag:{tag}"

    def extract(self, soup):
        element = soup.find(self.tag)
        if element is None:
            return None
        return _element_text(element) or None


class ContainerStrategy(ExtractionStrategy):
    """First element whose class or id contains one of the known patterns."""

    name = "container"

    def __init__(self, patterns: Sequence[str] = CONTAINER_PATTERNS):
        self.selectors = []
        for pattern in patterns:
            self.selectors.append(f'[class*="{pattern}"]')
            self.selectors.append(f'[id*="{pattern}"]')

    def extract(self, soup):
        for selector in self.selectors:
            element = soup.select_one(selector)
            if element is None:
                continue
            text = _element_text(element)
            if text:
                logger.debug(f"Matched container {selector}")
                return text
        return None


class ReadabilityStrategy(ExtractionStrategy):
    name = "readability"

    def extract(self, soup):
        summary_html = Document(str(soup)).summary()
        text = BeautifulSoup(summary_html, "lxml").get_text(" ", strip=True)
        return text or None


class ParagraphStrategy(ExtractionStrategy):
    """Last resort: the first few <p> elements on the page."""

    name = "paragraphs"

    def __init__(self, limit: int = MAX_PARAGRAPHS):
        self.limit = limit

    def extract(self, soup):
        paragraphs = [p.get_text(" ", strip=True) for p in soup.find_all("p", limit=self.limit)]
        text = " ".join(p for p in paragraphs if p)
        return text or None


def default_strategies(use_readability: bool = False) -> List[ExtractionStrategy]:
    strategies: List[ExtractionStrategy] = [TagStrategy("article"), ContainerStrategy()]
    if use_readability:
        strategies.append(ReadabilityStrategy())
    strategies.append(ParagraphStrategy())
    return strategies


def parse_html(html: str) -> BeautifulSoup:
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    return soup


def extract_content(soup: BeautifulSoup, strategies: Sequence[ExtractionStrategy]) -> Tuple[str, Optional[str]]:
    """Returns (text, strategy name), or ("", None) when nothing matched."""
    for strategy in strategies:
        try:
            text = strategy.extract(soup)
        except Exception as e:
            logger.warning(f"Extraction strategy {strategy.name} failed: {e}")
            continue
        if text:
            return text, strategy.name
    return "", None


def extract_meta_image(soup: BeautifulSoup) -> Optional[str]:
    """Open Graph / Twitter card image, if the page declares one."""
    for key in META_IMAGE_KEYS:
        tag = soup.find("meta", attrs={"property": key}) or soup.find("meta", attrs={"name": key})
        if tag and tag.get("content"):
            return tag["content"].strip()
    return None
