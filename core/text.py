import re
from typing import Optional

TAG_RE = re.compile(r"<[^>]*>")
WHITESPACE_RE = re.compile(r"\s+")
IMG_SRC_RE = re.compile(r"""<img[^>]+src=["']([^"']+)["']""", re.IGNORECASE)

# Only the entities feeds actually emit; everything else is left as-is
ENTITIES = [
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
]


def clean_text(text: Optional[str]) -> str:
    """Strip markup, decode the common entities and collapse whitespace."""
    if not text:
        return ""
    text = TAG_RE.sub("", text)
    for entity, char in ENTITIES:
        text = text.replace(entity, char)
    return WHITESPACE_RE.sub(" ", text).strip()


def extract_img_from_html(html: Optional[str]) -> Optional[str]:
    if not html:
        return None
    match = IMG_SRC_RE.search(html)
    return match.group(1) if match else None
