from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any
from datetime import datetime, timezone


@dataclass(frozen=True)
class FeedSource:
    url: str
    category: str
    source: str  # Display label shown to readers
    language: str = "en"


@dataclass
class Article:
    id: str  # md5 of url (or title), used for dedup and merge
    title: str
    summary: str
    url: str
    source: str
    category: str
    published_at: datetime
    language: str = "en"
    image: Optional[str] = None
    title_te: str = ""
    summary_te: str = ""
    translated: bool = False  # True once a translation was attempted

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["published_at"] = self.published_at.astimezone(timezone.utc).isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Article":
        """Build an Article from its persisted shape. Unknown keys are ignored."""
        published = data.get("published_at")
        if isinstance(published, str):
            published_at = datetime.fromisoformat(published.replace("Z", "+00:00"))
        elif isinstance(published, datetime):
            published_at = published
        else:
            published_at = datetime.now(timezone.utc)
        if published_at.tzinfo is None:
            published_at = published_at.replace(tzinfo=timezone.utc)

        return cls(
            id=data["id"],
            title=data.get("title") or "",
            summary=data.get("summary") or "",
            url=data.get("url") or "",
            source=data.get("source") or "",
            category=data.get("category") or "",
            published_at=published_at,
            language=data.get("language") or "en",
            image=data.get("image") or None,
            title_te=data.get("title_te") or "",
            summary_te=data.get("summary_te") or "",
            translated=bool(data.get("translated", False)),
        )
